# app/utils/pricing.py
import re
from decimal import Decimal, InvalidOperation

from app.domain.errors import InvalidPrice

#od pierwszej cyfry: "Rs. 100" -> 100, reszta po liczbie nie moze miec cyfr ("1e5", "1.2.3")
_PRICE = re.compile(r"(-?)(\d[\d,]*(?:\.\d+)?)(.*)", re.S)
_CENT = Decimal("0.01")
#kolumny Numeric(10,2)
MAX_PRICE = Decimal("99999999.99")


def _parse_text(value) -> Decimal:
    match = _PRICE.search(str(value))
    if not match or re.search(r"\d", match.group(3)):
        raise InvalidPrice(f"Nieprawidlowa cena: {value!r}")
    try:
        return Decimal(match.group(1) + match.group(2).replace(",", ""))
    except InvalidOperation:
        raise InvalidPrice(f"Nieprawidlowa cena: {value!r}")


def normalize_price(value) -> Decimal:
    """
    Zamienia cene (liczba albo tekst typu "₹1,250.00") na Decimal z dwoma miejscami.
    Brak cyfr, wartosc <= 0 albo ponad MAX_PRICE to InvalidPrice, nigdy cicha zamiana na 0.
    """
    if value is None or isinstance(value, bool):
        raise InvalidPrice(f"Nieprawidlowa cena: {value!r}")

    if isinstance(value, (int, float, Decimal)):
        try:
            price = Decimal(str(value))
        except InvalidOperation:
            raise InvalidPrice(f"Nieprawidlowa cena: {value!r}")
    else:
        price = _parse_text(value)

    if not price.is_finite() or price <= 0:
        raise InvalidPrice(f"Cena musi byc wieksza niz 0: {value!r}")
    if price > MAX_PRICE:
        raise InvalidPrice(f"Cena za duza (max {MAX_PRICE}): {value!r}")

    try:
        return price.quantize(_CENT)
    except InvalidOperation:
        raise InvalidPrice(f"Nieprawidlowa cena: {value!r}")


def try_normalize_price(value) -> Decimal | None:
    try:
        return normalize_price(value)
    except InvalidPrice:
        return None


def format_price(value) -> str:
    price = try_normalize_price(value) or Decimal("0.00")
    return f"₹{price:.2f}"
