#app/api/routers/carts.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_lock_service
from app.api.errors import DOMAIN_ERRORS, http_error
from app.data.database import get_db
from app.domain.schemas import (
    CartAddIn,
    CartResultOut,
    CartChangeIn,
    CartOut,
)
from app.services.cart_service import CartService
from app.services.lock_service import LockService

router = APIRouter(prefix="/cart", tags=["cart"])


def get_service(db: Session, lock_service: LockService):
    return CartService(db=db, lock_service=lock_service)


@router.post("/add", response_model=CartResultOut)
def add_item(
    payload: CartAddIn,
    db: Session = Depends(get_db),
    lock_service: LockService = Depends(get_lock_service),
):
    svc = get_service(db, lock_service)
    try:
        cart = svc.add_item(
            email=payload.email,
            kind=payload.item_type,
            item_id=payload.item_id,
            name=payload.name,
            quantity=payload.quantity,
            price_hint=payload.price,
        )
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return {"success": True, "message": "Dodano do koszyka", "cart": cart}


@router.get("/{email}", response_model=CartOut)
def get_cart(
    email: str,
    db: Session = Depends(get_db),
    lock_service: LockService = Depends(get_lock_service),
):
    return get_service(db, lock_service).get_cart(email)


@router.put("/{email}/{item_id}", response_model=CartResultOut)
def change_quantity(
    email: str,
    item_id: int,
    payload: CartChangeIn,
    db: Session = Depends(get_db),
    lock_service: LockService = Depends(get_lock_service),
):
    svc = get_service(db, lock_service)
    try:
        cart = svc.change_quantity(email, item_id, payload.item_type, payload.change)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return {"success": True, "message": "Koszyk zaktualizowany", "cart": cart}
