from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from app.data import models
from app.domain.errors import (
    ConcurrencyConflict,
    InsufficientStock,
    InvalidPrice,
    NotFoundError,
    Unavailable,
    ValidationError,
)
from app.services.cart_service import CartService
from app.services.order_service import OrderService

EMAIL = "u@x.com"


@pytest.fixture
def carts(db, lock_service):
    return CartService(db, lock_service)


def test_get_missing_cart_returns_empty_cart(carts):
    assert carts.get_cart("nobody@x.com") == {"items": [], "total_cost": Decimal("0.00")}
    assert carts.get_cart("nobody@x.com") == {"items": [], "total_cost": Decimal("0.00")}


def test_add_then_remove_restores_stock_and_empties_cart(carts, make_menu_item, stock_of, db):
    item_id = make_menu_item(price="100", stock=5)

    cart = carts.add_item(EMAIL, "menu", item_id, "Paneer Tikka", 3)

    assert stock_of(item_id) == 2
    assert cart["total_cost"] == Decimal("300")
    assert [(i["item_id"], i["quantity"], i["price"]) for i in cart["items"]] == [(item_id, 3, Decimal("100"))]

    cart = carts.change_quantity(EMAIL, item_id, "menu", -3)

    assert cart == {"items": [], "total_cost": Decimal("0.00")}
    assert stock_of(item_id) == 5
    db.expire_all()
    assert db.query(models.CartModel).filter_by(email=EMAIL).count() == 0


def test_add_merges_same_item_and_keeps_first_price(carts, make_menu_item, make_offer, stock_of):
    item_id = make_menu_item(price="100", stock=10)

    carts.add_item(EMAIL, "menu", item_id, "Paneer Tikka", 2)
    # oferta pojawia sie po pierwszym dodaniu, cena w koszyku zostaje
    make_offer(item_id, "80")
    cart = carts.add_item(EMAIL, "menu", item_id, "Paneer Tikka", 1)

    assert len(cart["items"]) == 1
    assert cart["items"][0]["quantity"] == 3
    assert cart["items"][0]["price"] == Decimal("100")
    assert cart["total_cost"] == Decimal("300")
    assert stock_of(item_id) == 7


def test_offer_price_is_used_and_client_price_ignored_for_menu(carts, make_menu_item, make_offer):
    item_id = make_menu_item(price="₹120.00", stock=10)
    make_offer(item_id, "90")

    cart = carts.add_item(EMAIL, "menu", item_id, "Paneer Tikka", 2, price_hint="1")

    assert cart["items"][0]["price"] == Decimal("90")
    assert cart["total_cost"] == Decimal("180")


def test_invalid_offer_falls_back_to_catalog_price(carts, make_menu_item, make_offer):
    item_id = make_menu_item(price="50", stock=10)
    make_offer(item_id, "n/a")

    cart = carts.add_item(EMAIL, "menu", item_id, "Paneer Tikka", 1)

    assert cart["total_cost"] == Decimal("50")


def test_insufficient_stock_leaves_no_phantom_line(carts, make_menu_item, stock_of):
    item_id = make_menu_item(stock=2)

    with pytest.raises(InsufficientStock):
        carts.add_item(EMAIL, "menu", item_id, "Paneer Tikka", 3)

    assert stock_of(item_id) == 2
    assert carts.get_cart(EMAIL)["items"] == []


def test_invalid_catalog_price_rejects_add_without_reserving(carts, make_menu_item, stock_of):
    item_id = make_menu_item(price="free", stock=4)

    with pytest.raises(InvalidPrice):
        carts.add_item(EMAIL, "menu", item_id, "Paneer Tikka", 1)

    assert stock_of(item_id) == 4


def test_failure_after_reservation_rolls_back_reservation(carts, make_menu_item, stock_of, monkeypatch):
    item_id = make_menu_item(stock=5)

    def broken_commit(cart):
        raise RuntimeError("db down")

    monkeypatch.setattr(carts, "_commit_cart", broken_commit)

    with pytest.raises(RuntimeError):
        carts.add_item(EMAIL, "menu", item_id, "Paneer Tikka", 2)

    assert stock_of(item_id) == 5
    assert carts.get_cart(EMAIL)["items"] == []


def test_validation_errors_happen_before_any_change(carts, make_menu_item, stock_of):
    item_id = make_menu_item(stock=5)

    with pytest.raises(ValidationError):
        carts.add_item(EMAIL, "menu", item_id, "Paneer Tikka", 0)
    with pytest.raises(ValidationError):
        carts.add_item(EMAIL, "pizza", item_id, "Paneer Tikka", 1)
    with pytest.raises(NotFoundError):
        carts.add_item(EMAIL, "menu", 999, "Ghost", 1)

    assert stock_of(item_id) == 5


def test_positive_change_reserves_delta(carts, make_menu_item, stock_of):
    item_id = make_menu_item(price="100", stock=5)
    carts.add_item(EMAIL, "menu", item_id, "Paneer Tikka", 1)

    cart = carts.change_quantity(EMAIL, item_id, "menu", 2)

    assert cart["items"][0]["quantity"] == 3
    assert cart["total_cost"] == Decimal("300")
    assert stock_of(item_id) == 2


def test_positive_change_without_stock_leaves_line_unchanged(carts, make_menu_item, stock_of):
    item_id = make_menu_item(price="100", stock=2)
    carts.add_item(EMAIL, "menu", item_id, "Paneer Tikka", 2)

    with pytest.raises(InsufficientStock):
        carts.change_quantity(EMAIL, item_id, "menu", 1)

    cart = carts.get_cart(EMAIL)
    assert cart["items"][0]["quantity"] == 2
    assert cart["total_cost"] == Decimal("200")
    assert stock_of(item_id) == 0


def test_large_negative_change_releases_only_what_was_reserved(carts, make_menu_item, stock_of):
    item_id = make_menu_item(stock=5)
    carts.add_item(EMAIL, "menu", item_id, "Paneer Tikka", 2)

    carts.change_quantity(EMAIL, item_id, "menu", -10)

    assert stock_of(item_id) == 5


def test_partial_decrease_returns_the_difference(carts, make_menu_item, stock_of):
    item_id = make_menu_item(price="100", stock=5)
    carts.add_item(EMAIL, "menu", item_id, "Paneer Tikka", 4)

    cart = carts.change_quantity(EMAIL, item_id, "menu", -1)

    assert cart["items"][0]["quantity"] == 3
    assert cart["total_cost"] == Decimal("300")
    assert stock_of(item_id) == 2

    carts.change_quantity(EMAIL, item_id, "menu", -3)

    assert carts.get_cart(EMAIL)["items"] == []
    assert stock_of(item_id) == 5


def test_order_after_partial_decrease_takes_only_ordered_quantity(carts, make_menu_item, stock_of, db, lock_service):
    item_id = make_menu_item(price="100", stock=5)
    carts.add_item(EMAIL, "menu", item_id, "Paneer Tikka", 4)
    carts.change_quantity(EMAIL, item_id, "menu", -3)

    OrderService(db, lock_service).place_order(EMAIL)

    assert stock_of(item_id) == 4



def test_change_on_missing_cart_or_line_is_not_found(carts, make_menu_item, make_table):
    item_id = make_menu_item(stock=5)
    table_id = make_table()

    with pytest.raises(NotFoundError):
        carts.change_quantity(EMAIL, item_id, "menu", 1)

    carts.add_item(EMAIL, "menu", item_id, "Paneer Tikka", 1)
    with pytest.raises(NotFoundError):
        carts.change_quantity(EMAIL, table_id, "table", 1)


def test_zero_change_is_rejected(carts):
    with pytest.raises(ValidationError):
        carts.change_quantity(EMAIL, 1, "menu", 0)


def test_event_hall_cannot_be_booked_twice(carts, make_hall, db):
    hall_id = make_hall()

    cart = carts.add_item(EMAIL, "eventhall", hall_id, "Banquet", 1)
    assert cart["total_cost"] == Decimal("5000")

    with pytest.raises(Unavailable):
        carts.add_item("other@x.com", "eventhall", hall_id, "Banquet", 1)

    carts.change_quantity(EMAIL, hall_id, "eventhall", -1)
    db.expire_all()
    assert db.get(models.EventHallModel, hall_id).available is True


def test_table_uses_price_hint_then_hourly_rate(carts, make_table):
    first = make_table(name="A", available=3, price_per_hour=150)
    second = make_table(name="B", available=3, price_per_hour=200)

    carts.add_item(EMAIL, "table", first, "A", 1, price_hint="₹450")
    cart = carts.add_item(EMAIL, "table", second, "B", 2)

    prices = {i["item_id"]: i["price"] for i in cart["items"]}
    assert prices == {first: Decimal("450"), second: Decimal("200")}
    assert cart["total_cost"] == Decimal("850")


def test_invalid_price_hint_is_rejected_without_reservation(carts, make_table, db):
    table_id = make_table(available=1)

    with pytest.raises(InvalidPrice):
        carts.add_item(EMAIL, "table", table_id, "A", 1, price_hint="0")

    db.expire_all()
    assert db.get(models.TableModel, table_id).available == 1


def test_cart_total_equals_sum_of_lines(carts, make_menu_item, make_table):
    a = make_menu_item(name="A", price="10.50", stock=10)
    b = make_menu_item(name="B", price="3", stock=10)
    t = make_table(available=2, price_per_hour=100)

    carts.add_item(EMAIL, "menu", a, "A", 2)
    carts.add_item(EMAIL, "menu", b, "B", 5)
    carts.add_item(EMAIL, "table", t, "T", 1)
    cart = carts.change_quantity(EMAIL, b, "menu", -2)

    assert cart["total_cost"] == sum(i["price"] * i["quantity"] for i in cart["items"])
    assert cart["total_cost"] == Decimal("130.00")


def test_cart_busy_lock_conflicts_without_changes(carts, lock_service, make_menu_item, stock_of):
    item_id = make_menu_item(stock=5)
    assert lock_service.acquire_cart_lock(EMAIL, "someone-else", ttl=10)

    with pytest.raises(ConcurrencyConflict):
        carts.add_item(EMAIL, "menu", item_id, "Paneer Tikka", 1)

    assert stock_of(item_id) == 5
    lock_service.release_cart_lock(EMAIL, "someone-else")
    carts.add_item(EMAIL, "menu", item_id, "Paneer Tikka", 1)
    assert stock_of(item_id) == 4


def test_expire_stale_carts_releases_reservations(carts, make_menu_item, make_hall, stock_of, db):
    item_id = make_menu_item(stock=5)
    hall_id = make_hall()
    carts.add_item(EMAIL, "menu", item_id, "Paneer Tikka", 3)
    carts.add_item(EMAIL, "eventhall", hall_id, "Banquet", 1)
    carts.add_item("fresh@x.com", "menu", item_id, "Paneer Tikka", 1)

    db.query(models.CartModel).filter_by(email=EMAIL).update(
        {"updated_at": datetime.now(timezone.utc) - timedelta(days=1)}
    )
    db.commit()

    assert carts.expire_stale_carts() == 1

    assert stock_of(item_id) == 4
    assert db.get(models.EventHallModel, hall_id).available is True
    assert carts.get_cart(EMAIL)["items"] == []
    assert len(carts.get_cart("fresh@x.com")["items"]) == 1
