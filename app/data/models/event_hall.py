from sqlalchemy import Column, Integer, String, Boolean, Numeric

from app.data.database import Base


class EventHallModel(Base):
    __tablename__ = "event_halls"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    capacity = Column(Integer, nullable=False)
    price_per_hour = Column(Numeric(10, 2), nullable=False)

    #jedna sala = jedna rezerwacja, flaga a nie licznik
    available = Column(Boolean, nullable=False, default=True)
