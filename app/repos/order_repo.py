# app/repos/order_repo.py
from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload
from app.data.models.order import OrderModel


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def add_order(self, order: OrderModel) -> OrderModel:
        #bez commita, zamowienie i usuniecie koszyka ida w jednej transakcji
        self.db.add(order)
        self.db.flush()
        return order

    def list_orders_by_email(self, email: str) -> list[OrderModel]:
        return list(
            self.db.execute(
                select(OrderModel)
                .where(OrderModel.email == email)
                .options(selectinload(OrderModel.items))
                .order_by(OrderModel.created_at, OrderModel.id)
            ).scalars().all()
        )
