import os

# przed importem app.*: settings czytaja env przy imporcie
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "1"
os.environ.pop("SMTP_HOST", None)

import time
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api import create_app, create_admin_app
from app.api.deps import get_lock_service, get_otp_service
from app.data import models
from app.data.database import Base, get_db
from app.services.lock_service import LockService, COMPARE_AND_DELETE_LUA
from app.services.otp_service import OtpService
from app.utils.security import hash_password


class FakeRedis:
    """Minimalny Redis w pamieci: SET NX/EX, GET, DELETE i skrypt porownaj-i-usun."""

    def __init__(self):
        self.store = {}

    def _alive(self, key):
        entry = self.store.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at is not None and time.monotonic() >= expires_at:
            del self.store[key]
            return None
        return value

    def set(self, name, value, nx=False, ex=None):
        if nx and self._alive(name) is not None:
            return None
        self.store[name] = (value, time.monotonic() + ex if ex else None)
        return True

    def get(self, name):
        return self._alive(name)

    def delete(self, name):
        return 1 if self.store.pop(name, None) is not None else 0

    def eval(self, script, numkeys, key, arg):
        assert script == COMPARE_AND_DELETE_LUA
        if self._alive(key) == arg:
            del self.store[key]
            return 1
        return 0

    def expire_now(self, key):
        self.store.pop(key, None)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def lock_service(fake_redis):
    return LockService(client=fake_redis)


@pytest.fixture
def otp_service(fake_redis):
    return OtpService(client=fake_redis)


def _client(application, session_factory, lock_service, otp_service):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    application.dependency_overrides[get_db] = override_get_db
    application.dependency_overrides[get_lock_service] = lambda: lock_service
    application.dependency_overrides[get_otp_service] = lambda: otp_service
    return TestClient(application)


@pytest.fixture
def client(session_factory, lock_service, otp_service):
    return _client(create_app(), session_factory, lock_service, otp_service)


@pytest.fixture
def admin_client(session_factory, lock_service, otp_service):
    return _client(create_admin_app(), session_factory, lock_service, otp_service)


# =====================================================
# dane katalogu
# =====================================================
@pytest.fixture
def make_menu_item(db):
    def _make(name="Paneer Tikka", price="100", stock=5, category="Starters", image=""):
        item = models.MenuItemModel(name=name, category=category, price=price, stock=stock, image=image)
        db.add(item)
        db.commit()
        return item.id
    return _make


@pytest.fixture
def make_table(db):
    def _make(name="Window", available=2, price_per_hour=150):
        table = models.TableModel(
            name=name, capacity=4, ac=True, price_per_hour=price_per_hour, available=available, booked=0
        )
        db.add(table)
        db.commit()
        return table.id
    return _make


@pytest.fixture
def make_hall(db):
    def _make(name="Banquet", available=True, price_per_hour=5000):
        hall = models.EventHallModel(name=name, capacity=100, price_per_hour=price_per_hour, available=available)
        db.add(hall)
        db.commit()
        return hall.id
    return _make


@pytest.fixture
def make_offer(db):
    def _make(item_id, offer_price, original_price=Decimal("100")):
        item = db.get(models.MenuItemModel, item_id)
        offer = models.OfferModel(
            menu_item_id=item_id,
            item_name=item.name,
            original_price=original_price,
            offer_price=offer_price,
        )
        db.add(offer)
        db.commit()
        return offer.id
    return _make


@pytest.fixture
def make_user(db):
    def _make(email="jan@example.com", password="secret", is_admin=False, name="Jan"):
        user = models.UserModel(
            name=name,
            email=email,
            phone="123456789",
            password_hash=hash_password(password),
            is_admin=is_admin,
        )
        db.add(user)
        db.commit()
        return user.id
    return _make


@pytest.fixture
def stock_of(db):
    def _stock(item_id):
        db.expire_all()
        return db.get(models.MenuItemModel, item_id).stock
    return _stock
