from sqlalchemy.orm import Session
from app.data.models.user import UserModel
from app.domain.errors import AuthenticationError, NotFoundError, ValidationError
from app.domain.schemas import SignupIn, AdminSignupIn
from app.repos.user_repo import UserRepo
from app.services.notification_service import NotificationService
from app.services.otp_service import OtpService
from app.utils.security import hash_password, verify_password
from app.utils.settings import ADMIN_CODE
from app.utils.logging import get_logger

logger = get_logger(__name__)

_SUBJECTS = {
    "forgot": "Kod do resetu hasla",
    "otp": "Twoj kod OTP",
    "admin": "Kod do resetu hasla administratora",
}


class UserService:
    """
    Konta klientow i administratorow: rejestracja, logowanie, reset hasla kodem OTP.
    Sesji ani tokenow nie ma, tozsamosc to sam email.
    """

    def __init__(self, db: Session, otp_service: OtpService):
        self.repo = UserRepo(db)
        self.otp = otp_service
        self.notification_service = NotificationService()

    def signup(self, payload: SignupIn, is_admin: bool = False) -> UserModel:
        if self.repo.get_by_email(payload.email):
            raise ValidationError("Uzytkownik juz istnieje")

        user = UserModel(
            name=payload.name,
            email=payload.email,
            phone=payload.phone,
            password_hash=hash_password(payload.password),
            is_admin=is_admin,
        )
        created = self.repo.create_user(user)
        logger.info(f"Zarejestrowano {'admina' if is_admin else 'uzytkownika'} {created.email}")
        return created

    def admin_signup(self, payload: AdminSignupIn) -> UserModel:
        if payload.admin_code != ADMIN_CODE:
            raise PermissionError("Nieprawidlowy kod administratora")
        return self.signup(payload, is_admin=True)

    def login(self, email: str, password: str, admin: bool = False) -> UserModel:
        user = self.repo.get_by_email(email)
        if not user:
            raise NotFoundError("Uzytkownik nie istnieje")
        if admin and not user.is_admin:
            raise PermissionError("To konto nie jest kontem administratora")
        if not verify_password(password, user.password_hash):
            raise AuthenticationError("Nieprawidlowe haslo")
        return user

    def send_code(self, email: str, purpose: str = "forgot") -> None:
        """Wydaje kod i wysyla go mailem. purpose: forgot, otp, admin."""
        user = self.repo.get_by_email(email)
        if not user or (purpose == "admin" and not user.is_admin):
            raise NotFoundError("Email nie jest zarejestrowany")

        code = self.otp.issue(email, purpose=self._otp_scope(purpose))
        self.notification_service.send_verification_code(email, code, _SUBJECTS[purpose])

    def verify_code(self, email: str, code: str) -> None:
        #samo sprawdzenie nie zuzywa kodu, zuzywa go dopiero zmiana hasla
        if not self.otp.verify(email, code, purpose="user"):
            raise ValidationError("Nieprawidlowy albo wygasly kod")

    def change_password(self, email: str, code: str, new_password: str, admin: bool = False) -> None:
        user = self.repo.get_by_email(email)
        if not user or (admin and not user.is_admin):
            raise NotFoundError("Uzytkownik nie istnieje")

        if not self.otp.consume(email, code, purpose="admin" if admin else "user"):
            raise ValidationError("Nieprawidlowy albo wygasly kod")

        self.repo.update_password(user, hash_password(new_password))
        logger.info(f"Zmieniono haslo dla {email}")

    @staticmethod
    def _otp_scope(purpose: str) -> str:
        #forgot i send-code dziela jeden kod klienta
        return "admin" if purpose == "admin" else "user"
