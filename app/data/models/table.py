from sqlalchemy import Column, Integer, String, Boolean, Numeric, CheckConstraint

from app.data.database import Base


class TableModel(Base):
    __tablename__ = "tables"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    capacity = Column(Integer, nullable=False)
    ac = Column(Boolean, nullable=False, default=False)
    price_per_hour = Column(Numeric(10, 2), nullable=False)

    available = Column(Integer, nullable=False, default=0)
    booked = Column(Integer, nullable=False, default=0)

    __table_args__ = (CheckConstraint("available >= 0", name="ck_tables_available"),)
