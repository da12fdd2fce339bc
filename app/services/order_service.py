# app/services/order_service.py
from decimal import Decimal
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from app.data.models.order import OrderModel
from app.data.models.order_item import OrderItemModel
from app.domain.errors import EmptyCart
from app.repos.cart_repo import CartRepo
from app.repos.order_repo import OrderRepo
from app.services.cart_service import CartService
from app.services.lock_service import LockService
from app.services.notification_service import NotificationService
from app.utils.logging import get_logger

logger = get_logger(__name__)


class OrderService:
    """
    Serwis odpowiedzialny za domene zamowien.
    Zamowienie to niezmienna kopia koszyka, po utworzeniu nikt go nie edytuje.
    """

    def __init__(self, db: Session, lock_service: LockService):
        self.repo = OrderRepo(db)
        self.carts = CartRepo(db)
        self.cart_service = CartService(db, lock_service)
        self.lock_service = lock_service
        self.notification_service = NotificationService()

    def place_order(self, email: str) -> Dict[str, Any]:
        """
        Use Case: zamowienie z koszyka.

        1. Czyta koszyk pod lockiem
        2. Zapisuje snapshot pozycji i total
        3. Usuwa koszyk (rezerwacje przechodza na zamowienie)
        4. Jeden commit, potem powiadomienie (async)

        Blad przed commitem zostawia koszyk razem z rezerwacjami, klient moze ponowic.
        """
        with self.lock_service.cart_lock(email):
            cart = self.carts.get_cart_by_email(email)
            if not cart or not cart.items:
                raise EmptyCart("Koszyk jest pusty")

            try:
                total = sum((i.price * i.quantity for i in cart.items), Decimal("0.00"))

                order = OrderModel(
                    email=email,
                    total=total,
                    items=[
                        OrderItemModel(
                            resource_id=i.resource_id,
                            kind=i.kind,
                            name=i.name,
                            price=i.price,
                            quantity=i.quantity,
                        )
                        for i in cart.items
                    ],
                )
                created_order = self.repo.add_order(order)
                self.cart_service.clear(email)
                self.carts.commit()

            except Exception as e:
                logger.error(f"Blad podczas skladania zamowienia dla {email}: {e}")
                self.carts.rollback()
                raise

        logger.info(f"Order {created_order.id} created for {email}, total {total}")

        # Wyslij powiadomienie asynchronicznie
        self.notification_service.send_order_notification(email, created_order.id)

        return {"message": "Zamowienie zlozone", "order_id": created_order.id}

    def list_orders(self, email: str) -> List[Dict[str, Any]]:
        """
        Use Case: historia zamowien (Query).
        """
        return [
            {
                "id": o.id,
                "email": o.email,
                "items": [
                    {
                        "item_id": i.resource_id,
                        "item_type": i.kind,
                        "name": i.name,
                        "price": i.price,
                        "quantity": i.quantity,
                    }
                    for i in o.items
                ],
                "total": o.total,
                "created_at": o.created_at,
            }
            for o in self.repo.list_orders_by_email(email)
        ]
