# app/repos/inventory_repo.py
from sqlalchemy import case, update
from sqlalchemy.orm import Session

from app.data.models.menu_item import MenuItemModel
from app.data.models.table import TableModel
from app.data.models.event_hall import EventHallModel


class InventoryRepo:
    """
    Warunkowe UPDATE'y na licznikach dostepnosci.

    Sprawdzenie i zmiana to jedno zapytanie, baza serializuje je per wiersz,
    wiec dwie rownolegle rezerwacje ostatniej sztuki nie przejda obie.
    Zwracaja rowcount: 0 = warunek nie spelniony (albo brak wiersza).
    """

    def __init__(self, db: Session):
        self.db = db

    def _execute(self, stmt) -> int:
        return self.db.execute(stmt.execution_options(synchronize_session=False)).rowcount

    def decrement_menu_stock(self, item_id: int, amount: int) -> int:
        return self._execute(
            update(MenuItemModel)
            .where(MenuItemModel.id == item_id, MenuItemModel.stock >= amount)
            .values(stock=MenuItemModel.stock - amount)
        )

    def increment_menu_stock(self, item_id: int, amount: int) -> int:
        return self._execute(
            update(MenuItemModel)
            .where(MenuItemModel.id == item_id)
            .values(stock=MenuItemModel.stock + amount)
        )

    def decrement_table_available(self, table_id: int, amount: int) -> int:
        return self._execute(
            update(TableModel)
            .where(TableModel.id == table_id, TableModel.available >= amount)
            .values(
                available=TableModel.available - amount,
                booked=TableModel.booked + amount,
            )
        )

    def increment_table_available(self, table_id: int, amount: int) -> int:
        #booked nie schodzi ponizej zera, admin mogl go recznie wyzerowac
        return self._execute(
            update(TableModel)
            .where(TableModel.id == table_id)
            .values(
                available=TableModel.available + amount,
                booked=case(
                    (TableModel.booked >= amount, TableModel.booked - amount),
                    else_=0,
                ),
            )
        )

    def take_event_hall(self, hall_id: int) -> int:
        return self._execute(
            update(EventHallModel)
            .where(EventHallModel.id == hall_id, EventHallModel.available.is_(True))
            .values(available=False)
        )

    def free_event_hall(self, hall_id: int) -> int:
        return self._execute(
            update(EventHallModel)
            .where(EventHallModel.id == hall_id)
            .values(available=True)
        )
