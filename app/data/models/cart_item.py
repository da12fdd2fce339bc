from sqlalchemy import Column, Integer, ForeignKey, Numeric, String, UniqueConstraint
from sqlalchemy.orm import relationship

from app.data.database import Base


class CartItemModel(Base):
    __tablename__ = "cart_items"

    id = Column(Integer, primary_key=True)
    cart_id = Column(Integer, ForeignKey("carts.id", ondelete="CASCADE"), nullable=False)

    resource_id = Column(Integer, nullable=False)
    kind = Column(String(20), nullable=False)  # menu, table, eventhall
    name = Column(String, nullable=False)

    #cena zamrozona przy dodaniu
    price = Column(Numeric(10, 2), nullable=False)
    quantity = Column(Integer, nullable=False)

    cart = relationship("CartModel", back_populates="items")

    __table_args__ = (UniqueConstraint("cart_id", "resource_id", "kind", name="u_cart_resource"),)
