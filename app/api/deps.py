# app/api/deps.py
from functools import lru_cache

from fastapi import Depends, Header, HTTPException, Query
from sqlalchemy.orm import Session

from app.data.database import get_db
from app.data.models.user import UserModel
from app.repos.user_repo import UserRepo
from app.services.lock_service import LockService
from app.services.otp_service import OtpService


@lru_cache
def get_lock_service() -> LockService:
    return LockService()


@lru_cache
def get_otp_service() -> OtpService:
    return OtpService()


def require_admin(
    x_admin_email: str | None = Header(default=None),
    email: str | None = Query(default=None),
    db: Session = Depends(get_db),
) -> UserModel:
    admin_email = x_admin_email or email
    if not admin_email:
        raise HTTPException(status_code=403, detail="Brak dostepu - wymagany email administratora")

    user = UserRepo(db).get_by_email(admin_email)
    if not user or not user.is_admin:
        raise HTTPException(status_code=403, detail="Brak dostepu - tylko administrator")
    return user
