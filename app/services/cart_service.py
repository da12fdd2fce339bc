from datetime import datetime, timezone, timedelta
from decimal import Decimal
from typing import Dict, Any
from sqlalchemy.orm import Session
from app.data.models.cart import CartModel
from app.data.models.cart_item import CartItemModel
from app.domain.errors import ConcurrencyConflict, NotFoundError, ValidationError
from app.domain.schemas import ResourceKind
from app.repos.cart_repo import CartRepo
from app.services.inventory_service import InventoryService
from app.services.offer_service import OfferResolver
from app.services.lock_service import LockService
from app.utils.pricing import normalize_price
from app.utils.settings import CART_TTL_SECONDS
from app.utils.logging import get_logger

logger = get_logger(__name__)


def _as_kind(value) -> ResourceKind:
    try:
        return ResourceKind(value)
    except ValueError:
        raise ValidationError(f"Nieprawidlowy typ pozycji: {value}")


class CartService:
    """
    Koszyk per email, kazda zmiana koszyka to tez rezerwacja w magazynie.

    Kolejnosc w kazdej komendzie:
    lock koszyka (redis) -> rezerwacja (warunkowy UPDATE) -> zapis koszyka
    -> optimistic locking na version -> jeden commit.
    Blad w dowolnym kroku = rollback, czyli rezerwacja tez sie cofa.
    """

    def __init__(self, db: Session, lock_service: LockService):
        self.repo = CartRepo(db)
        self.inventory = InventoryService(db)
        self.offers = OfferResolver(db)
        self.lock_service = lock_service

    #query - odczyt
    def get_cart(self, email: str) -> Dict[str, Any]:
        cart = self.repo.get_cart_by_email(email)

        #brak koszyka to pusty koszyk, nie blad
        if not cart:
            return {"items": [], "total_cost": Decimal("0.00")}

        return self._to_dict(cart)

    #commands
    def add_item(
        self,
        email: str,
        kind,
        item_id: int,
        name: str,
        quantity: int,
        price_hint=None,
    ) -> Dict[str, Any]:

        # Walidacje przed jakakolwiek zmiana
        if quantity <= 0:
            raise ValidationError("Ilosc musi byc wieksza niz 0")
        if not name or not name.strip():
            raise ValidationError("Nazwa pozycji jest wymagana")
        kind = _as_kind(kind)

        with self.lock_service.cart_lock(email):
            try:
                resource = self.inventory.get_resource(kind, item_id)
                price = self._effective_price(kind, resource, price_hint)

                # rezerwacja przed pokazaniem pozycji w koszyku
                self.inventory.reserve(kind, item_id, quantity)

                cart = self.repo.get_cart_by_email(email)
                if cart is None:
                    logger.info(f"Tworze nowy koszyk dla {email}")
                    cart = self.repo.create_cart(email)

                existing = self._find_line(cart, item_id, kind)
                if existing:
                    logger.info(
                        f"{kind.value}:{item_id} juz jest w koszyku {email}, zwiekszam ilosc "
                        f"z {existing.quantity} do {existing.quantity + quantity}"
                    )
                    # cena zostaje ta z pierwszego dodania
                    existing.quantity += quantity
                else:
                    logger.info(f"Dodaje {kind.value}:{item_id} do koszyka {email} po cenie {price}")
                    self.repo.add_cart_item(
                        cart,
                        CartItemModel(
                            resource_id=item_id,
                            kind=kind.value,
                            name=name.strip(),
                            price=price,
                            quantity=quantity,
                        ),
                    )

                self._commit_cart(cart)

            except Exception as e:
                # rollback cofa tez rezerwacje z tej samej transakcji
                logger.error(f"Blad podczas dodawania do koszyka {email}: {e}")
                self.repo.rollback()
                raise

        return self.get_cart(email)

    def change_quantity(self, email: str, item_id: int, kind, delta: int) -> Dict[str, Any]:
        kind = _as_kind(kind)
        if delta == 0:
            raise ValidationError("Zmiana ilosci nie moze byc 0")

        with self.lock_service.cart_lock(email):
            cart = self.repo.get_cart_by_email(email)
            if not cart:
                raise NotFoundError("Koszyk nie istnieje")

            line = self._find_line(cart, item_id, kind)
            if not line:
                raise NotFoundError("Pozycji nie ma w koszyku")

            try:
                if delta > 0:
                    self.inventory.reserve(kind, item_id, delta)

                new_quantity = line.quantity + delta

                if new_quantity <= 0:
                    # oddajemy tylko to co bylo zarezerwowane, nigdy wiecej
                    logger.info(f"Usuwam {kind.value}:{item_id} z koszyka {email}")
                    self.inventory.release(kind, item_id, line.quantity)
                    self.repo.delete_cart_item(cart, line)
                else:
                    logger.info(
                        f"Zmiana ilosci {kind.value}:{item_id} w koszyku {email}: "
                        f"{line.quantity} -> {new_quantity}"
                    )
                    if delta < 0:
                        #rezerwacja zawsze rowna ilosci w koszyku
                        self.inventory.release(kind, item_id, -delta)
                    line.quantity = new_quantity

                self._commit_cart(cart)

            except Exception as e:
                logger.error(f"Blad podczas zmiany koszyka {email}: {e}")
                self.repo.rollback()
                raise

        return self.get_cart(email)

    def clear(self, email: str) -> None:
        """
        Usuwa koszyk bez zwalniania rezerwacji (towar przechodzi do zamowienia).
        Bez commita, wolajacy zamyka transakcje.
        """
        cart = self.repo.get_cart_by_email(email)
        if cart:
            self.repo.delete_cart(cart)

    def expire_stale_carts(self, now: datetime | None = None) -> int:
        """
        Porzucone koszyki oddaja rezerwacje i znikaja.
        Koszyk zablokowany albo zmieniony w miedzyczasie jest pomijany.
        """
        now = now or datetime.now(timezone.utc)
        cutoff = now - timedelta(seconds=CART_TTL_SECONDS)
        stale = [(c.email, c.version) for c in self.repo.get_stale_carts(cutoff)]

        logger.info(f"Found {len(stale)} carts to expire")

        expired = 0
        for email, version in stale:
            try:
                with self.lock_service.cart_lock(email):
                    cart = self.repo.get_cart_by_email(email)
                    if cart is None:
                        continue
                    self.repo.refresh(cart)
                    if cart.version != version:
                        continue

                    for line in cart.items:
                        self.inventory.release(_as_kind(line.kind), line.resource_id, line.quantity)
                    self.repo.delete_cart(cart)
                    self.repo.commit()
                    expired += 1
                    logger.info(f"Koszyk {email} wygasl, rezerwacje zwolnione")

            except ConcurrencyConflict:
                logger.info(f"Koszyk {email} w uzyciu, pomijam")
            except Exception as e:
                self.repo.rollback()
                logger.warning(f"Failed to expire cart {email}: {e}")

        return expired

    # =====================================================
    # helpers
    # =====================================================
    def _effective_price(self, kind: ResourceKind, resource, price_hint) -> Decimal:
        if kind == ResourceKind.MENU:
            offer_price = self.offers.resolve(resource.id)
            if offer_price is not None:
                return offer_price
            return normalize_price(resource.price)

        # stoliki i sale: cena od klienta (np. za kilka godzin) albo stawka godzinowa
        if price_hint is not None:
            return normalize_price(price_hint)
        return normalize_price(resource.price_per_hour)

    @staticmethod
    def _find_line(cart: CartModel, item_id: int, kind: ResourceKind) -> CartItemModel | None:
        for line in cart.items:
            if line.resource_id == item_id and line.kind == kind.value:
                return line
        return None

    def _commit_cart(self, cart: CartModel) -> None:
        total = sum((i.price * i.quantity for i in cart.items), Decimal("0.00"))

        # Optimistic locking
        rowcount = self.repo.update_cart_version(
            cart_id=cart.id,
            old_version=cart.version,
            new_data={
                "version": cart.version + 1,
                "total": total,
            },
        )

        if rowcount == 0:
            raise ConcurrencyConflict(
                "Konflikt wspolbieznosci - koszyk zostal zmodyfikowany przez inna operacje"
            )

        if not cart.items:
            logger.info(f"Koszyk {cart.email} pusty, usuwam")
            self.repo.delete_cart(cart)

        self.repo.commit()

    @staticmethod
    def _to_dict(cart: CartModel) -> Dict[str, Any]:
        return {
            "items": [
                {
                    "item_id": i.resource_id,
                    "item_type": i.kind,
                    "name": i.name,
                    "price": i.price,
                    "quantity": i.quantity,
                }
                for i in cart.items
            ],
            "total_cost": cart.total,
        }
