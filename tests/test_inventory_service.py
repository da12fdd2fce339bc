import threading

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.data import models
from app.data.database import Base
from app.domain.errors import InsufficientStock, NotFoundError, Unavailable, ValidationError
from app.domain.schemas import ResourceKind
from app.services.cart_service import CartService
from app.services.inventory_service import InventoryService


def test_reserve_menu_decrements_stock(db, make_menu_item, stock_of):
    item_id = make_menu_item(stock=5)
    svc = InventoryService(db)

    svc.reserve(ResourceKind.MENU, item_id, 3)
    db.commit()

    assert stock_of(item_id) == 2


def test_reserve_more_than_stock_fails_and_leaves_stock(db, make_menu_item, stock_of):
    item_id = make_menu_item(stock=2)
    svc = InventoryService(db)

    with pytest.raises(InsufficientStock) as exc:
        svc.reserve(ResourceKind.MENU, item_id, 3)
    db.rollback()

    assert "Dostepne: 2" in str(exc.value)
    assert stock_of(item_id) == 2


def test_reserve_unknown_resource_is_not_found(db):
    with pytest.raises(NotFoundError):
        InventoryService(db).reserve(ResourceKind.TABLE, 999, 1)


def test_table_reservation_moves_available_to_booked(db, make_table):
    table_id = make_table(available=2)
    svc = InventoryService(db)

    svc.reserve(ResourceKind.TABLE, table_id, 2)
    db.commit()
    db.expire_all()
    table = db.get(models.TableModel, table_id)
    assert (table.available, table.booked) == (0, 2)

    with pytest.raises(InsufficientStock):
        svc.reserve(ResourceKind.TABLE, table_id, 1)
    db.rollback()

    svc.release(ResourceKind.TABLE, table_id, 2)
    db.commit()
    db.expire_all()
    table = db.get(models.TableModel, table_id)
    assert (table.available, table.booked) == (2, 0)


def test_event_hall_is_a_single_unit(db, make_hall):
    hall_id = make_hall(available=True)
    svc = InventoryService(db)

    svc.reserve(ResourceKind.EVENTHALL, hall_id, 1)
    db.commit()

    with pytest.raises(Unavailable):
        svc.reserve(ResourceKind.EVENTHALL, hall_id, 1)
    db.rollback()

    with pytest.raises(ValidationError):
        svc.reserve(ResourceKind.EVENTHALL, hall_id, 2)

    svc.release(ResourceKind.EVENTHALL, hall_id, 1)
    db.commit()
    db.expire_all()
    assert db.get(models.EventHallModel, hall_id).available is True


def test_release_adds_back_stock(db, make_menu_item, stock_of):
    item_id = make_menu_item(stock=1)
    svc = InventoryService(db)

    svc.release(ResourceKind.MENU, item_id, 4)
    db.commit()

    assert stock_of(item_id) == 5


def test_release_of_deleted_resource_is_skipped(db):
    # brak wyjatku, nie ma czego oddawac
    InventoryService(db).release(ResourceKind.MENU, 12345, 2)


def test_reserve_rejects_non_positive_amount(db, make_menu_item):
    item_id = make_menu_item(stock=5)
    with pytest.raises(ValidationError):
        InventoryService(db).reserve(ResourceKind.MENU, item_id, 0)


def test_concurrent_reservations_of_last_table_only_one_wins(tmp_path, lock_service):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'race.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    Base.metadata.create_all(bind=engine)
    Session = sessionmaker(bind=engine, autocommit=False, autoflush=False)

    with Session() as setup:
        table = models.TableModel(name="Last", capacity=2, ac=False, price_per_hour=100, available=1, booked=0)
        setup.add(table)
        setup.commit()
        table_id = table.id

    barrier = threading.Barrier(2)
    results = []

    def book(email):
        with Session() as session:
            barrier.wait()
            try:
                CartService(session, lock_service).add_item(email, "table", table_id, "Last", 1)
                results.append("ok")
            except InsufficientStock:
                results.append("insufficient")

    threads = [threading.Thread(target=book, args=(f"user{i}@example.com",)) for i in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(results) == ["insufficient", "ok"]
    with Session() as check:
        assert check.get(models.TableModel, table_id).available == 0

    engine.dispose()
