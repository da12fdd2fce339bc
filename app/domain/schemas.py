# app/domain/schemas.py
from enum import Enum
from pydantic import BaseModel, Field, ConfigDict
from pydantic.alias_generators import to_camel
from typing import List
from decimal import Decimal
from datetime import datetime


class ApiModel(BaseModel):
    """Wspolna baza: camelCase na zewnatrz (kontrakt frontendu), snake_case w kodzie."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ResourceKind(str, Enum):
    MENU = "menu"
    TABLE = "table"
    EVENTHALL = "eventhall"


class MessageOut(ApiModel):
    message: str


# =====================================================
# KONTA
# =====================================================
class SignupIn(ApiModel):
    """Schema dla rejestracji klienta."""

    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3)
    phone: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class AdminSignupIn(SignupIn):
    admin_code: str


class LoginIn(ApiModel):
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=1)


class LoginOut(ApiModel):
    message: str
    email: str
    name: str


class EmailIn(ApiModel):
    email: str = Field(..., min_length=3)


class VerifyCodeIn(ApiModel):
    email: str = Field(..., min_length=3)
    code: str = Field(..., min_length=1)


class ChangePasswordIn(ApiModel):
    """Zmiana hasla wymaga kodu OTP, kod jest zuzywany."""

    email: str = Field(..., min_length=3)
    code: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=1)


# =====================================================
# KOSZYK I ZAMOWIENIA
# =====================================================
class CartAddIn(ApiModel):
    """Schema dla dodawania pozycji do koszyka."""

    email: str = Field(..., min_length=3)
    item_id: int = Field(..., gt=0, description="ID pozycji menu, stolika albo sali")
    name: str = Field(..., min_length=1)
    # podpowiedz ceny, brana pod uwage tylko dla stolikow i sal
    price: float | str | None = None
    quantity: int = Field(..., gt=0, description="Ilosc (musi byc > 0)")
    item_type: ResourceKind


class CartChangeIn(ApiModel):
    change: int
    item_type: ResourceKind


class CartItemOut(ApiModel):
    item_id: int
    item_type: ResourceKind
    name: str
    price: Decimal
    quantity: int


class CartOut(ApiModel):
    """Schema dla koszyka (response)."""

    items: List[CartItemOut]
    total_cost: Decimal


class CartResultOut(ApiModel):
    success: bool = True
    message: str
    cart: CartOut


class OrderCreate(ApiModel):
    email: str = Field(..., min_length=3)


class OrderPlacedOut(ApiModel):
    message: str
    order_id: int


class OrderOut(ApiModel):
    """Schema dla zamowienia (response)."""

    id: int
    email: str
    items: List[CartItemOut]
    total: Decimal
    created_at: datetime


# =====================================================
# KATALOG (odczyt klienta)
# =====================================================
class MenuItemOut(ApiModel):
    id: int
    name: str
    category: str
    price: Decimal
    offer_price: Decimal | None = None
    image: str = ""
    stock: int


class MenuItemPublicOut(ApiModel):
    """Pojedyncza pozycja menu, bez stanu magazynu."""

    id: int
    name: str
    category: str
    price: Decimal
    offer_price: Decimal | None = None
    image: str = ""


class TableOut(ApiModel):
    id: int
    name: str
    capacity: int
    ac: bool
    price_per_hour: Decimal
    available: int
    booked: int


class EventHallOut(ApiModel):
    id: int
    name: str
    capacity: int
    price_per_hour: Decimal
    available: bool


class PublicOfferOut(ApiModel):
    id: int
    item_id: int | None
    item_name: str
    original_price: str
    offer_price: str
    image: str


# =====================================================
# ADMIN
# =====================================================
class MenuItemIn(ApiModel):
    """Schema dla dodawania pozycji menu."""

    name: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    price: float | str
    image: str = ""
    stock: int = Field(..., ge=0, description="Stan magazynu (>= 0)")


class MenuItemUpdate(ApiModel):
    name: str | None = None
    category: str | None = None
    price: float | str | None = None
    image: str | None = None
    stock: int | None = Field(None, ge=0)


class StockUpdateIn(ApiModel):
    stock: int = Field(..., ge=0)


class AdminMenuItemOut(ApiModel):
    id: int
    name: str
    category: str
    price: str
    image: str
    stock: int


class TableIn(ApiModel):
    name: str = Field(..., min_length=1)
    capacity: int = Field(..., gt=0)
    ac: bool
    price_per_hour: Decimal = Field(..., gt=0)
    available: int = Field(0, ge=0)
    booked: int = Field(0, ge=0)


class EventHallIn(ApiModel):
    name: str = Field(..., min_length=1)
    capacity: int = Field(..., gt=0)
    price_per_hour: Decimal = Field(..., gt=0)
    available: bool = True


class EventHallUpdate(ApiModel):
    name: str | None = None
    capacity: int | None = Field(None, gt=0)
    price_per_hour: Decimal | None = Field(None, gt=0)
    available: bool | None = None


class OfferIn(ApiModel):
    item_id: int = Field(..., gt=0)
    offer_price: float | str


class OfferUpdate(ApiModel):
    offer_price: float | str


class OfferOut(ApiModel):
    id: int
    item_id: int
    item_name: str
    original_price: Decimal
    offer_price: Decimal | None
    created_at: datetime
    updated_at: datetime | None = None
