from sqlalchemy import Column, Integer, ForeignKey, String, DateTime, Numeric
from sqlalchemy.orm import relationship
from datetime import datetime, timezone

from app.data.database import Base


class OfferModel(Base):
    __tablename__ = "offers"

    id = Column(Integer, primary_key=True)
    menu_item_id = Column(
        Integer,
        ForeignKey("menu_items.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )

    #kopia z momentu utworzenia oferty
    item_name = Column(String, nullable=False)
    original_price = Column(Numeric(10, 2), nullable=False)
    offer_price = Column(String, nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime(timezone=True), nullable=True)

    menu_item = relationship("MenuItemModel", back_populates="offer")
