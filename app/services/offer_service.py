# app/services/offer_service.py
from decimal import Decimal

from sqlalchemy.orm import Session

from app.repos.catalog_repo import CatalogRepo
from app.utils.pricing import try_normalize_price
from app.utils.logging import get_logger

logger = get_logger(__name__)


class OfferResolver:
    """Cena promocyjna dla pozycji menu albo None. Brak oferty to nie blad."""

    def __init__(self, db: Session):
        self.repo = CatalogRepo(db)

    def resolve(self, menu_item_id: int) -> Decimal | None:
        offer = self.repo.get_offer_for_item(menu_item_id)
        if offer is None:
            return None

        price = try_normalize_price(offer.offer_price)
        if price is None:
            logger.warning(f"Nieprawidlowa cena oferty dla pozycji {menu_item_id}: {offer.offer_price}")
        return price
