from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.api.deps import get_otp_service
from app.api.errors import DOMAIN_ERRORS, http_error
from app.data.database import get_db
from app.services.otp_service import OtpService
from app.services.user_service import UserService
from app.domain.schemas import (
    SignupIn,
    LoginIn,
    LoginOut,
    EmailIn,
    VerifyCodeIn,
    ChangePasswordIn,
    MessageOut,
)

router = APIRouter(tags=["users"])


def get_service(db: Session, otp: OtpService):
    return UserService(db, otp)


@router.post("/signup", response_model=MessageOut, status_code=201)
def signup(payload: SignupIn, db: Session = Depends(get_db), otp: OtpService = Depends(get_otp_service)):
    try:
        get_service(db, otp).signup(payload)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return {"message": "Rejestracja zakonczona"}


@router.post("/login", response_model=LoginOut)
def login(payload: LoginIn, db: Session = Depends(get_db), otp: OtpService = Depends(get_otp_service)):
    try:
        user = get_service(db, otp).login(payload.email, payload.password)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return {"message": "Zalogowano", "email": user.email, "name": user.name}


@router.post("/forgot", response_model=MessageOut)
def forgot(payload: EmailIn, db: Session = Depends(get_db), otp: OtpService = Depends(get_otp_service)):
    try:
        get_service(db, otp).send_code(payload.email, purpose="forgot")
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return {"message": "Kod weryfikacyjny wyslany"}


@router.post("/send-code", response_model=MessageOut)
def send_code(payload: EmailIn, db: Session = Depends(get_db), otp: OtpService = Depends(get_otp_service)):
    try:
        get_service(db, otp).send_code(payload.email, purpose="otp")
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return {"message": "Kod OTP wyslany"}


@router.post("/verify-code", response_model=MessageOut)
def verify_code(payload: VerifyCodeIn, db: Session = Depends(get_db), otp: OtpService = Depends(get_otp_service)):
    try:
        get_service(db, otp).verify_code(payload.email, payload.code)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return {"message": "Kod poprawny"}


@router.post("/change-password", response_model=MessageOut)
def change_password(
    payload: ChangePasswordIn,
    db: Session = Depends(get_db),
    otp: OtpService = Depends(get_otp_service),
):
    try:
        get_service(db, otp).change_password(payload.email, payload.code, payload.new_password)
    except DOMAIN_ERRORS as e:
        raise http_error(e)
    return {"message": "Haslo zmienione"}


@router.post("/logout", response_model=MessageOut)
def logout():
    #brak sesji po stronie serwera
    return {"message": "Wylogowano"}
