#app/data/models/menu_item.py
from sqlalchemy import Column, Integer, String, CheckConstraint
from sqlalchemy.orm import relationship

from app.data.database import Base


class MenuItemModel(Base):
    __tablename__ = "menu_items"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False, index=True)
    category = Column(String, nullable=False)

    #cena moze przyjsc jako tekst z waluta, normalizacja w utils.pricing
    price = Column(String, nullable=False)
    stock = Column(Integer, nullable=False, default=0)
    image = Column(String, nullable=False, default="")

    #usuniecie pozycji usuwa tez jej oferte
    offer = relationship(
        "OfferModel",
        back_populates="menu_item",
        cascade="all, delete-orphan",
        uselist=False,
    )

    __table_args__ = (CheckConstraint("stock >= 0", name="ck_menu_items_stock"),)
