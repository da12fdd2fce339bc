# app/api/routers/admin_auth.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_otp_service
from app.api.errors import DOMAIN_ERRORS, http_error
from app.data.database import get_db
from app.domain.schemas import (
    AdminSignupIn,
    LoginIn,
    LoginOut,
    EmailIn,
    ChangePasswordIn,
    MessageOut,
)
from app.services.otp_service import OtpService
from app.services.user_service import UserService

router = APIRouter(prefix="/admin", tags=["admin-auth"])


@router.post("/signup", response_model=MessageOut, status_code=201)
def admin_signup(payload: AdminSignupIn, db: Session = Depends(get_db), otp: OtpService = Depends(get_otp_service)):
    try:
        UserService(db, otp).admin_signup(payload)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return {"message": "Administrator zarejestrowany"}


@router.post("/login", response_model=LoginOut)
def admin_login(payload: LoginIn, db: Session = Depends(get_db), otp: OtpService = Depends(get_otp_service)):
    try:
        user = UserService(db, otp).login(payload.email, payload.password, admin=True)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return {"message": "Zalogowano jako administrator", "email": user.email, "name": user.name}


@router.post("/forgot", response_model=MessageOut)
def admin_forgot(payload: EmailIn, db: Session = Depends(get_db), otp: OtpService = Depends(get_otp_service)):
    try:
        UserService(db, otp).send_code(payload.email, purpose="admin")
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return {"message": "Kod weryfikacyjny wyslany"}


@router.post("/change-password", response_model=MessageOut)
def admin_change_password(
    payload: ChangePasswordIn,
    db: Session = Depends(get_db),
    otp: OtpService = Depends(get_otp_service),
):
    try:
        UserService(db, otp).change_password(payload.email, payload.code, payload.new_password, admin=True)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return {"message": "Haslo zmienione"}


@router.post("/logout", response_model=MessageOut)
def admin_logout():
    return {"message": "Wylogowano"}
