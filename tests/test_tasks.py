from datetime import datetime, timedelta, timezone

from app.data import models
from app.services.cart_service import CartService
from app.services.notification_service import (
    NotificationService,
    send_order_notification_task,
    send_verification_code_task,
)
from app.tasks import expire


def test_verification_mail_is_skipped_without_smtp():
    assert send_verification_code_task("jan@example.com", "123456", "Kod")["status"] == "skipped"


def test_notifications_run_eagerly():
    NotificationService.send_verification_code("jan@example.com", "123456", "Kod")
    result = send_order_notification_task.delay("jan@example.com", 7)

    assert result.get() == {"email": "jan@example.com", "order_id": 7, "status": "sent"}


def test_expire_task_releases_abandoned_carts(db, session_factory, lock_service, make_menu_item, stock_of, monkeypatch):
    item_id = make_menu_item(stock=5)
    CartService(db, lock_service).add_item("u@x.com", "menu", item_id, "Paneer Tikka", 4)
    db.query(models.CartModel).update({"updated_at": datetime.now(timezone.utc) - timedelta(hours=2)})
    db.commit()

    monkeypatch.setattr(expire, "SessionLocal", session_factory)
    monkeypatch.setattr(expire, "LockService", lambda: lock_service)

    assert expire.expire_carts_task.delay().get() == 1
    assert stock_of(item_id) == 5
    assert db.query(models.CartModel).count() == 0
