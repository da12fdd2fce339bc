# app/api/errors.py
from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse

from app.domain.errors import (
    AuthenticationError,
    ConcurrencyConflict,
    InsufficientStock,
    NotFoundError,
    Unavailable,
)
from app.utils.logging import get_logger

logger = get_logger(__name__)

#wszystko co serwisy rzucaja swiadomie
DOMAIN_ERRORS = (
    ValueError,
    LookupError,
    PermissionError,
    InsufficientStock,
    Unavailable,
    ConcurrencyConflict,
)


def http_error(e: Exception) -> HTTPException:
    if isinstance(e, AuthenticationError):
        return HTTPException(status_code=401, detail=str(e))
    if isinstance(e, PermissionError):
        return HTTPException(status_code=403, detail=str(e))
    if isinstance(e, (NotFoundError, LookupError)):
        return HTTPException(status_code=404, detail=str(e))
    if isinstance(e, (InsufficientStock, Unavailable, ConcurrencyConflict)):
        return HTTPException(status_code=409, detail=str(e))
    return HTTPException(status_code=400, detail=str(e))


async def internal_failure_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"detail": "Blad serwera, sprobuj ponownie"})
