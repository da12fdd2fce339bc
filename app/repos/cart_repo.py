# app/repos/cart_repo.py
from datetime import datetime, timezone

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from app.data.models.cart import CartModel
from app.data.models.cart_item import CartItemModel


class CartRepo:
    """
    Dostep do koszykow. Nie commituje sam, o granicach transakcji decyduje serwis
    (rezerwacja i zapis koszyka musza wejsc w jednym commicie).
    """

    def __init__(self, db: Session):
        self.db = db

    def get_cart_by_email(self, email: str) -> CartModel | None:
        return self.db.execute(
            select(CartModel).where(CartModel.email == email)
        ).scalar_one_or_none()

    def get_stale_carts(self, older_than: datetime) -> list[CartModel]:
        return list(
            self.db.execute(
                select(CartModel).where(CartModel.updated_at < older_than)
            ).scalars().all()
        )

    def create_cart(self, email: str) -> CartModel:
        cart = CartModel(email=email, total=0, version=1)
        self.db.add(cart)
        self.db.flush()
        return cart

    def add_cart_item(self, cart: CartModel, item: CartItemModel) -> None:
        cart.items.append(item)
        self.db.flush()

    def delete_cart_item(self, cart: CartModel, item: CartItemModel) -> None:
        #delete-orphan usuwa wiersz przy flush
        cart.items.remove(item)
        self.db.flush()

    def delete_cart(self, cart: CartModel) -> None:
        self.db.delete(cart)
        self.db.flush()

    def update_cart_version(self, cart_id: int, old_version: int, new_data: dict) -> int:
        #update set version = n+1 where id = x and version = n
        new_data = {"updated_at": datetime.now(timezone.utc), **new_data}
        result = self.db.execute(
            update(CartModel)
            .where(CartModel.id == cart_id, CartModel.version == old_version)
            .values(**new_data)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def refresh(self, cart: CartModel) -> None:
        self.db.refresh(cart)

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
