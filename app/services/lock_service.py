import uuid
from contextlib import contextmanager

import redis
from app.domain.errors import ConcurrencyConflict
from app.utils.retry import redis_retry
from app.utils.settings import REDIS_URL, CART_LOCK_TTL_SECONDS
from app.utils.logging import get_logger

logger = get_logger(__name__)

#LUA porownaj i usun, atomicity
COMPARE_AND_DELETE_LUA = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
    return redis.call('DEL', KEYS[1])
else
    return 0
end
"""

#redis wykonuje atomowo przez lua, skrypt dziala jako jedna nieprzerywalna operacja
#nie mozna wcisnac sie miedzy GET a DEL


def _key(email: str) -> str:
    return f"cart:{email.lower()}:lock"


class LockService:
    """
    -blokada koszyka per email (jedna operacja na koszyku naraz)
    -zwalnianie tylko przez wlasciciela tokena
    -ttl zeby martwy proces nie trzymal locka na zawsze
    """

    def __init__(self, url: str | None = None, client=None):
        self.redis = client or redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )

    @redis_retry()
    def acquire_cart_lock(self, email: str, token: str, ttl: int) -> bool:
        key = _key(email)
        logger.debug(f"Acquire lock {key}")
        #SET cart:a@b.pl:lock "<token>" NX EX 10
        return bool(self.redis.set(name=key, value=token, nx=True, ex=ttl))

    @redis_retry()
    def release_cart_lock(self, email: str, token: str) -> bool:
        key = _key(email)
        logger.debug(f"Release lock {key}")
        res = self.redis.eval(COMPARE_AND_DELETE_LUA, 1, key, token)
        return bool(res)

    @contextmanager
    def cart_lock(self, email: str, ttl: int = CART_LOCK_TTL_SECONDS):
        token = uuid.uuid4().hex
        if not self.acquire_cart_lock(email, token, ttl):
            logger.warning(f"Koszyk {email} jest modyfikowany przez inna operacje")
            raise ConcurrencyConflict("Koszyk jest wlasnie modyfikowany, sprobuj ponownie")
        try:
            yield
        finally:
            try:
                self.release_cart_lock(email, token)
            except redis.RedisError as e:
                #lock i tak wygasnie po ttl
                logger.error(f"Nie udalo sie zwolnic locka koszyka {email}: {e}")
