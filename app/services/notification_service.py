# app/services/notification_service.py
import smtplib
from email.message import EmailMessage

from app.celery_worker import celery_app
from app.utils.settings import SMTP_HOST, SMTP_PORT, SMTP_USER, SMTP_PASSWORD, MAIL_FROM
from app.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Serwis do wysylania powiadomien.
    Uzywa Celery do asynchronicznego przetwarzania.
    """

    @staticmethod
    def send_verification_code(email: str, code: str, subject: str):
        send_verification_code_task.delay(email, code, subject)

    @staticmethod
    def send_order_notification(email: str, order_id: int):
        """
        Wysyla powiadomienie o przyjeciu zamowienia.
        """
        send_order_notification_task.delay(email, order_id)


@celery_app.task(name="app.services.notification_service.send_verification_code_task")
def send_verification_code_task(email: str, code: str, subject: str):
    if not SMTP_HOST:
        #dev: bez SMTP kod tylko w logach
        logger.warning(f"SMTP_HOST nie ustawiony, mail do {email} nie wyslany")
        logger.debug(f"Kod dla {email}: {code}")
        return {"email": email, "status": "skipped"}

    msg = EmailMessage()
    msg["From"] = MAIL_FROM
    msg["To"] = email
    msg["Subject"] = subject
    msg.set_content(f"Twoj kod weryfikacyjny: {code}. Wygasa za 10 minut.")

    with smtplib.SMTP(SMTP_HOST, SMTP_PORT, timeout=10) as smtp:
        smtp.starttls()
        if SMTP_USER:
            smtp.login(SMTP_USER, SMTP_PASSWORD or "")
        smtp.send_message(msg)

    logger.info(f"[NOTIFICATION] Kod weryfikacyjny wyslany do {email}")
    return {"email": email, "status": "sent"}


@celery_app.task(name="app.services.notification_service.send_order_notification_task")
def send_order_notification_task(email: str, order_id: int):
    """
    Celery task - na razie tylko loguje.
    """
    logger.info(f"[NOTIFICATION] {email}: Order {order_id} accepted")
    return {"email": email, "order_id": order_id, "status": "sent"}
