# app/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_lock_service
from app.api.errors import DOMAIN_ERRORS, http_error
from app.data.database import get_db
from app.domain.schemas import OrderCreate, OrderOut, OrderPlacedOut
from app.services.lock_service import LockService
from app.services.order_service import OrderService

router = APIRouter(tags=["orders"])


def get_service(db: Session, lock_service: LockService):
    return OrderService(db, lock_service)


@router.post("/order", response_model=OrderPlacedOut, status_code=201)
def place_order(
    payload: OrderCreate,
    db: Session = Depends(get_db),
    lock_service: LockService = Depends(get_lock_service),
):
    """
    Tworzy zamowienie z koszyka i czysci koszyk.
    Wysyla powiadomienie asynchronicznie.
    """
    svc = get_service(db, lock_service)
    try:
        return svc.place_order(payload.email)
    except DOMAIN_ERRORS as e:
        raise http_error(e)


@router.get("/orders/{email}", response_model=List[OrderOut])
def list_orders(
    email: str,
    db: Session = Depends(get_db),
    lock_service: LockService = Depends(get_lock_service),
):
    """
    Historia zamowien klienta, od najstarszego.
    """
    return get_service(db, lock_service).list_orders(email)
