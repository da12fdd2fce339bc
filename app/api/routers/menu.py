# app/api/routers/menu.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.errors import DOMAIN_ERRORS, http_error
from app.data.database import get_db
from app.domain.schemas import (
    MenuItemOut,
    MenuItemPublicOut,
    TableOut,
    EventHallOut,
    PublicOfferOut,
)
from app.services.catalog_service import CatalogService

router = APIRouter(tags=["catalog"])


@router.get("/menu", response_model=List[MenuItemOut])
def list_menu(db: Session = Depends(get_db)):
    try:
        return CatalogService(db).list_menu()
    except DOMAIN_ERRORS as e:
        raise http_error(e)


@router.get("/menu/name/{name}", response_model=MenuItemPublicOut)
def get_menu_item_by_name(name: str, db: Session = Depends(get_db)):
    try:
        return CatalogService(db).get_menu_item_by_name(name)
    except DOMAIN_ERRORS as e:
        raise http_error(e)


@router.get("/menu/{item_id}", response_model=MenuItemPublicOut)
def get_menu_item(item_id: int, db: Session = Depends(get_db)):
    try:
        return CatalogService(db).get_menu_item(item_id)
    except DOMAIN_ERRORS as e:
        raise http_error(e)


@router.get("/tables", response_model=List[TableOut])
def list_tables(db: Session = Depends(get_db)):
    return CatalogService(db).list_tables()


@router.get("/eventhalls", response_model=List[EventHallOut])
def list_event_halls(db: Session = Depends(get_db)):
    return CatalogService(db).list_event_halls()


@router.get("/offers", response_model=List[PublicOfferOut])
def list_offers(db: Session = Depends(get_db)):
    return CatalogService(db).list_public_offers()
