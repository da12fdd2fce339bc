# app/api/routers/admin_catalog.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import require_admin
from app.api.errors import DOMAIN_ERRORS, http_error
from app.data.database import get_db
from app.domain.schemas import (
    AdminMenuItemOut,
    MenuItemIn,
    MenuItemUpdate,
    StockUpdateIn,
    TableIn,
    TableOut,
    EventHallIn,
    EventHallUpdate,
    EventHallOut,
    OfferIn,
    OfferUpdate,
    OfferOut,
    MessageOut,
)
from app.services.catalog_service import CatalogService

#kazdy endpoint tylko dla admina (naglowek X-Admin-Email albo ?email=)
router = APIRouter(prefix="/admin", tags=["admin-catalog"], dependencies=[Depends(require_admin)])


# =====================================================
# MENU
# =====================================================
@router.get("/menu", response_model=List[AdminMenuItemOut])
def list_menu(db: Session = Depends(get_db)):
    return CatalogService(db).list_admin_menu()


@router.post("/menu/add", response_model=AdminMenuItemOut, status_code=201)
def add_menu_item(payload: MenuItemIn, db: Session = Depends(get_db)):
    try:
        return CatalogService(db).add_menu_item(payload)
    except DOMAIN_ERRORS as e:
        raise http_error(e)


@router.put("/menu/update/{item_id}", response_model=AdminMenuItemOut)
def update_menu_item(item_id: int, payload: MenuItemUpdate, db: Session = Depends(get_db)):
    try:
        return CatalogService(db).update_menu_item(item_id, payload)
    except DOMAIN_ERRORS as e:
        raise http_error(e)


@router.put("/menu/update-stock/{item_id}", response_model=AdminMenuItemOut)
def update_stock(item_id: int, payload: StockUpdateIn, db: Session = Depends(get_db)):
    try:
        return CatalogService(db).update_stock(item_id, payload.stock)
    except DOMAIN_ERRORS as e:
        raise http_error(e)


@router.delete("/menu/delete/{item_id}", response_model=MessageOut)
def delete_menu_item(item_id: int, db: Session = Depends(get_db)):
    try:
        CatalogService(db).delete_menu_item(item_id)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return {"message": "Pozycja menu usunieta"}


# =====================================================
# STOLIKI
# =====================================================
@router.get("/tables", response_model=List[TableOut])
def list_tables(db: Session = Depends(get_db)):
    return CatalogService(db).list_tables()


@router.post("/tables/add", response_model=TableOut, status_code=201)
def add_table(payload: TableIn, db: Session = Depends(get_db)):
    return CatalogService(db).add_table(payload)


@router.put("/tables/update/{table_id}", response_model=TableOut)
def update_table(table_id: int, payload: TableIn, db: Session = Depends(get_db)):
    try:
        return CatalogService(db).update_table(table_id, payload)
    except DOMAIN_ERRORS as e:
        raise http_error(e)


@router.delete("/tables/delete/{table_id}", response_model=MessageOut)
def delete_table(table_id: int, db: Session = Depends(get_db)):
    try:
        CatalogService(db).delete_table(table_id)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return {"message": "Stolik usuniety"}


# =====================================================
# SALE
# =====================================================
@router.get("/eventhalls", response_model=List[EventHallOut])
def list_event_halls(db: Session = Depends(get_db)):
    return CatalogService(db).list_event_halls()


@router.post("/eventhalls/add", response_model=EventHallOut, status_code=201)
def add_event_hall(payload: EventHallIn, db: Session = Depends(get_db)):
    return CatalogService(db).add_event_hall(payload)


@router.put("/eventhalls/update/{hall_id}", response_model=EventHallOut)
def update_event_hall(hall_id: int, payload: EventHallUpdate, db: Session = Depends(get_db)):
    try:
        return CatalogService(db).update_event_hall(hall_id, payload)
    except DOMAIN_ERRORS as e:
        raise http_error(e)


@router.delete("/eventhalls/delete/{hall_id}", response_model=MessageOut)
def delete_event_hall(hall_id: int, db: Session = Depends(get_db)):
    try:
        CatalogService(db).delete_event_hall(hall_id)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return {"message": "Sala usunieta"}


# =====================================================
# OFERTY
# =====================================================
@router.get("/offers", response_model=List[OfferOut])
def list_offers(db: Session = Depends(get_db)):
    return CatalogService(db).list_offers()


@router.post("/offers/add", response_model=OfferOut, status_code=201)
def add_offer(payload: OfferIn, db: Session = Depends(get_db)):
    try:
        return CatalogService(db).add_offer(payload.item_id, payload.offer_price)
    except DOMAIN_ERRORS as e:
        raise http_error(e)


@router.put("/offers/update/{offer_id}", response_model=OfferOut)
def update_offer(offer_id: int, payload: OfferUpdate, db: Session = Depends(get_db)):
    try:
        return CatalogService(db).update_offer(offer_id, payload.offer_price)
    except DOMAIN_ERRORS as e:
        raise http_error(e)


@router.delete("/offers/delete/{offer_id}", response_model=MessageOut)
def delete_offer(offer_id: int, db: Session = Depends(get_db)):
    try:
        CatalogService(db).delete_offer(offer_id)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return {"message": "Oferta usunieta"}
