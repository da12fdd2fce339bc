# app/repos/catalog_repo.py
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.data.models.menu_item import MenuItemModel
from app.data.models.table import TableModel
from app.data.models.event_hall import EventHallModel
from app.data.models.offer import OfferModel


class CatalogRepo:
    def __init__(self, db: Session):
        self.db = db

    # menu
    def list_menu_items(self) -> list[MenuItemModel]:
        return list(self.db.execute(select(MenuItemModel).order_by(MenuItemModel.id)).scalars().all())

    def get_menu_item(self, item_id: int) -> MenuItemModel | None:
        return self.db.get(MenuItemModel, item_id)

    def find_menu_item_by_name(self, name: str) -> MenuItemModel | None:
        return self.db.execute(
            select(MenuItemModel)
            .where(func.lower(MenuItemModel.name) == name.strip().lower())
            .order_by(MenuItemModel.id)
            .limit(1)
        ).scalar_one_or_none()

    # stoliki i sale
    def list_tables(self) -> list[TableModel]:
        return list(self.db.execute(select(TableModel).order_by(TableModel.id)).scalars().all())

    def get_table(self, table_id: int) -> TableModel | None:
        return self.db.get(TableModel, table_id)

    def list_event_halls(self) -> list[EventHallModel]:
        return list(self.db.execute(select(EventHallModel).order_by(EventHallModel.id)).scalars().all())

    def get_event_hall(self, hall_id: int) -> EventHallModel | None:
        return self.db.get(EventHallModel, hall_id)

    # oferty
    def list_offers(self) -> list[OfferModel]:
        return list(self.db.execute(select(OfferModel).order_by(OfferModel.id)).scalars().all())

    def get_offer(self, offer_id: int) -> OfferModel | None:
        return self.db.get(OfferModel, offer_id)

    def get_offer_for_item(self, item_id: int) -> OfferModel | None:
        return self.db.execute(
            select(OfferModel).where(OfferModel.menu_item_id == item_id)
        ).scalar_one_or_none()

    # zapis (admin)
    def add(self, obj):
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        return obj

    def save(self, obj):
        self.db.commit()
        self.db.refresh(obj)
        return obj

    def delete(self, obj) -> None:
        self.db.delete(obj)
        self.db.commit()
