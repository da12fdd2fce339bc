# app/api/__init__.py
from fastapi import FastAPI
from app.api.errors import internal_failure_handler
from app.api.routers import (
    health,
    users,
    menu,
    carts,
    orders,
    admin_auth,
    admin_catalog,
)


def create_app() -> FastAPI:
    """Serwis klienta: menu, koszyk, zamowienia, konta."""
    app = FastAPI(title="Restaurant Service", version="1.0.0")
    app.add_exception_handler(Exception, internal_failure_handler)

    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(menu.router)
    app.include_router(carts.router)
    app.include_router(orders.router)
    return app


def create_admin_app() -> FastAPI:
    """Panel admina: katalog (menu, stoliki, sale, oferty) i konta adminow."""
    app = FastAPI(title="Restaurant Admin Service", version="1.0.0")
    app.add_exception_handler(Exception, internal_failure_handler)

    app.include_router(health.router)
    app.include_router(admin_auth.router)
    app.include_router(admin_catalog.router)
    return app
