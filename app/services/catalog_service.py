# app/services/catalog_service.py
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from app.data.models.menu_item import MenuItemModel
from app.data.models.table import TableModel
from app.data.models.event_hall import EventHallModel
from app.data.models.offer import OfferModel
from app.domain.errors import InvalidPrice, NotFoundError
from app.domain.schemas import (
    MenuItemIn,
    MenuItemUpdate,
    TableIn,
    EventHallIn,
    EventHallUpdate,
)
from app.repos.catalog_repo import CatalogRepo
from app.utils.pricing import normalize_price, try_normalize_price, format_price
from app.utils.logging import get_logger

logger = get_logger(__name__)

PLACEHOLDER_IMAGE = "https://via.placeholder.com/100"


class CatalogService:
    """
    Katalog: menu, stoliki, sale, oferty.
    Odczyty dla klienta + CRUD dla panelu admina.
    """

    def __init__(self, db: Session):
        self.repo = CatalogRepo(db)

    # =====================================================
    # QUERY (klient)
    # =====================================================
    def list_menu(self) -> List[Dict[str, Any]]:
        items = self.repo.list_menu_items()
        if not items:
            raise NotFoundError("Brak pozycji w menu")

        result = []
        for item in items:
            price = try_normalize_price(item.price)
            if price is None:
                # pokazujemy, ale bez ceny i bez oferty
                logger.error(f"Invalid price for item {item.name}: {item.price}, id: {item.id}")
                offer_price = None
                price = Decimal("0.00")
            else:
                offer_price = self._offer_price(item)

            result.append({
                "id": item.id,
                "name": item.name,
                "category": item.category,
                "price": price,
                "offer_price": offer_price,
                "image": item.image or "",
                "stock": item.stock,
            })
        return result

    def get_menu_item(self, item_id: int) -> Dict[str, Any]:
        item = self.repo.get_menu_item(item_id)
        if not item:
            raise NotFoundError("Pozycja menu nie istnieje")
        return self._public_item(item)

    def get_menu_item_by_name(self, name: str) -> Dict[str, Any]:
        item = self.repo.find_menu_item_by_name(name)
        if not item:
            logger.info(f"No item found for name: {name}")
            raise NotFoundError("Pozycja menu nie istnieje")
        return self._public_item(item)

    def list_tables(self) -> List[Dict[str, Any]]:
        return [self._table_dict(t) for t in self.repo.list_tables()]

    def list_event_halls(self) -> List[Dict[str, Any]]:
        return [self._hall_dict(h) for h in self.repo.list_event_halls()]

    def list_public_offers(self) -> List[Dict[str, Any]]:
        result = []
        for offer in self.repo.list_offers():
            item = offer.menu_item
            image = item.image if item and item.image and item.image.strip() else PLACEHOLDER_IMAGE
            result.append({
                "id": offer.id,
                "item_id": item.id if item else None,
                "item_name": offer.item_name,
                "original_price": format_price(offer.original_price),
                "offer_price": format_price(offer.offer_price),
                "image": image,
            })
        return result

    # =====================================================
    # COMMANDS (admin) - menu
    # =====================================================
    def list_admin_menu(self) -> List[Dict[str, Any]]:
        return [self._admin_item(i) for i in self.repo.list_menu_items()]

    def add_menu_item(self, payload: MenuItemIn) -> Dict[str, Any]:
        item = MenuItemModel(
            name=payload.name,
            category=payload.category,
            price=str(normalize_price(payload.price)),
            image=payload.image or "",
            stock=payload.stock,
        )
        created = self.repo.add(item)
        logger.info(f"Dodano pozycje menu {created.id} ({created.name})")
        return self._admin_item(created)

    def update_menu_item(self, item_id: int, payload: MenuItemUpdate) -> Dict[str, Any]:
        item = self._menu_item_or_404(item_id)

        if payload.name:
            item.name = payload.name
        if payload.category:
            item.category = payload.category
        if payload.price is not None:
            item.price = str(normalize_price(payload.price))
        if payload.image:
            item.image = payload.image
        if payload.stock is not None:
            item.stock = payload.stock

        return self._admin_item(self.repo.save(item))

    def update_stock(self, item_id: int, stock: int) -> Dict[str, Any]:
        item = self._menu_item_or_404(item_id)
        item.stock = stock
        saved = self.repo.save(item)
        logger.info(f"Stan {saved.name} ustawiony na {stock}")
        return self._admin_item(saved)

    def delete_menu_item(self, item_id: int) -> None:
        item = self._menu_item_or_404(item_id)
        #oferta leci razem z pozycja (cascade)
        self.repo.delete(item)
        logger.info(f"Usunieto pozycje menu {item_id}")

    # =====================================================
    # COMMANDS (admin) - stoliki, sale
    # =====================================================
    def add_table(self, payload: TableIn) -> Dict[str, Any]:
        table = self.repo.add(TableModel(**payload.model_dump()))
        logger.info(f"Dodano stolik {table.id} ({table.name})")
        return self._table_dict(table)

    def update_table(self, table_id: int, payload: TableIn) -> Dict[str, Any]:
        table = self.repo.get_table(table_id)
        if not table:
            raise NotFoundError("Stolik nie istnieje")
        for field, value in payload.model_dump().items():
            setattr(table, field, value)
        return self._table_dict(self.repo.save(table))

    def delete_table(self, table_id: int) -> None:
        table = self.repo.get_table(table_id)
        if not table:
            raise NotFoundError("Stolik nie istnieje")
        self.repo.delete(table)

    def add_event_hall(self, payload: EventHallIn) -> Dict[str, Any]:
        hall = self.repo.add(EventHallModel(**payload.model_dump()))
        logger.info(f"Dodano sale {hall.id} ({hall.name})")
        return self._hall_dict(hall)

    def update_event_hall(self, hall_id: int, payload: EventHallUpdate) -> Dict[str, Any]:
        hall = self.repo.get_event_hall(hall_id)
        if not hall:
            raise NotFoundError("Sala nie istnieje")
        for field, value in payload.model_dump(exclude_none=True).items():
            setattr(hall, field, value)
        return self._hall_dict(self.repo.save(hall))

    def delete_event_hall(self, hall_id: int) -> None:
        hall = self.repo.get_event_hall(hall_id)
        if not hall:
            raise NotFoundError("Sala nie istnieje")
        self.repo.delete(hall)

    # =====================================================
    # COMMANDS (admin) - oferty
    # =====================================================
    def list_offers(self) -> List[Dict[str, Any]]:
        return [self._offer_dict(o) for o in self.repo.list_offers()]

    def add_offer(self, item_id: int, offer_price) -> Dict[str, Any]:
        item = self._menu_item_or_404(item_id)

        original = try_normalize_price(item.price)
        if original is None:
            logger.error(f"Invalid original price for item {item.name}: {item.price}, id: {item.id}")
            raise InvalidPrice(f"Nieprawidlowa cena bazowa dla {item.name}")

        price = normalize_price(offer_price)

        #jedna oferta na pozycje, nowa zastepuje stara
        offer = self.repo.get_offer_for_item(item_id)
        if offer:
            offer.item_name = item.name
            offer.original_price = original
            offer.offer_price = str(price)
            offer.updated_at = datetime.now(timezone.utc)
            offer = self.repo.save(offer)
        else:
            offer = self.repo.add(OfferModel(
                menu_item_id=item.id,
                item_name=item.name,
                original_price=original,
                offer_price=str(price),
            ))

        logger.info(f"Oferta {offer.id} dla {item.name}: {original} -> {price}")
        return self._offer_dict(offer)

    def update_offer(self, offer_id: int, offer_price) -> Dict[str, Any]:
        offer = self.repo.get_offer(offer_id)
        if not offer:
            raise NotFoundError("Oferta nie istnieje")
        offer.offer_price = str(normalize_price(offer_price))
        offer.updated_at = datetime.now(timezone.utc)
        return self._offer_dict(self.repo.save(offer))

    def delete_offer(self, offer_id: int) -> None:
        offer = self.repo.get_offer(offer_id)
        if not offer:
            raise NotFoundError("Oferta nie istnieje")
        self.repo.delete(offer)

    # =====================================================
    # helpers
    # =====================================================
    def _menu_item_or_404(self, item_id: int) -> MenuItemModel:
        item = self.repo.get_menu_item(item_id)
        if not item:
            raise NotFoundError("Pozycja menu nie istnieje")
        return item

    def _offer_price(self, item: MenuItemModel) -> Decimal | None:
        if item.offer is None:
            return None
        price = try_normalize_price(item.offer.offer_price)
        if price is None:
            logger.warning(f"Invalid offer price for item {item.id}: {item.offer.offer_price}")
        return price

    def _public_item(self, item: MenuItemModel) -> Dict[str, Any]:
        price = try_normalize_price(item.price)
        if price is None:
            logger.error(f"Invalid price for item {item.name}: {item.price}, id: {item.id}")
            raise InvalidPrice(f"Nieprawidlowa cena dla {item.name}")
        return {
            "id": item.id,
            "name": item.name,
            "category": item.category,
            "price": price,
            "offer_price": self._offer_price(item),
            "image": item.image or "",
        }

    @staticmethod
    def _admin_item(item: MenuItemModel) -> Dict[str, Any]:
        return {
            "id": item.id,
            "name": item.name,
            "category": item.category,
            "price": format_price(item.price),
            "image": item.image or "",
            "stock": item.stock,
        }

    @staticmethod
    def _table_dict(table: TableModel) -> Dict[str, Any]:
        return {
            "id": table.id,
            "name": table.name,
            "capacity": table.capacity,
            "ac": table.ac,
            "price_per_hour": table.price_per_hour,
            "available": table.available,
            "booked": table.booked,
        }

    @staticmethod
    def _hall_dict(hall: EventHallModel) -> Dict[str, Any]:
        return {
            "id": hall.id,
            "name": hall.name,
            "capacity": hall.capacity,
            "price_per_hour": hall.price_per_hour,
            "available": hall.available,
        }

    @staticmethod
    def _offer_dict(offer: OfferModel) -> Dict[str, Any]:
        return {
            "id": offer.id,
            "item_id": offer.menu_item_id,
            "item_name": offer.item_name,
            "original_price": offer.original_price,
            "offer_price": try_normalize_price(offer.offer_price),
            "created_at": offer.created_at,
            "updated_at": offer.updated_at,
        }
