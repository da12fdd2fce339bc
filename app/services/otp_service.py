# app/services/otp_service.py
import secrets

import redis
from app.services.lock_service import COMPARE_AND_DELETE_LUA
from app.utils.retry import redis_retry
from app.utils.settings import REDIS_URL, OTP_TTL_SECONDS
from app.utils.logging import get_logger

logger = get_logger(__name__)


def generate_code() -> str:
    return str(100000 + secrets.randbelow(900000))


class OtpService:
    """
    Kody weryfikacyjne w Redisie zamiast slownika w pamieci procesu.
    Wygasanie robi TTL Redisa, jednorazowosc robi consume() (porownaj i usun w lua).
    """

    def __init__(self, url: str | None = None, client=None, ttl: int = OTP_TTL_SECONDS):
        self.redis = client or redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )
        self.ttl = ttl

    @staticmethod
    def _key(email: str, purpose: str) -> str:
        return f"otp:{purpose}:{email.lower()}"

    @redis_retry()
    def issue(self, email: str, purpose: str = "user") -> str:
        code = generate_code()
        #nowy kod nadpisuje poprzedni
        self.redis.set(name=self._key(email, purpose), value=code, ex=self.ttl)
        logger.info(f"Wydano kod weryfikacyjny ({purpose}) dla {email}")
        return code

    @redis_retry()
    def verify(self, email: str, code: str, purpose: str = "user") -> bool:
        stored = self.redis.get(self._key(email, purpose))
        return stored is not None and secrets.compare_digest(stored, code)

    @redis_retry()
    def consume(self, email: str, code: str, purpose: str = "user") -> bool:
        res = self.redis.eval(COMPARE_AND_DELETE_LUA, 1, self._key(email, purpose), code)
        if res:
            logger.info(f"Kod weryfikacyjny ({purpose}) dla {email} wykorzystany")
        return bool(res)
