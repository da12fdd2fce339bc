# app/domain/errors.py
"""
Bledy domenowe.

Dziedzicza po wbudowanych wyjatkach, ktore routery juz mapuja na kody HTTP:
ValueError -> 400, LookupError -> 404, RuntimeError -> 409, PermissionError -> 403.
"""


class ValidationError(ValueError):
    pass


class InvalidPrice(ValidationError):
    pass


class EmptyCart(ValidationError):
    pass


class NotFoundError(LookupError):
    pass


class InsufficientStock(RuntimeError):
    pass


class Unavailable(RuntimeError):
    pass


class ConcurrencyConflict(RuntimeError):
    pass


class AuthenticationError(PermissionError):
    pass
