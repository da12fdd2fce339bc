# app/tasks/expire.py
from app.celery_worker import celery_app
from app.data.database import SessionLocal
from app.services.cart_service import CartService
from app.services.lock_service import LockService
from app.utils.retry import db_retry
from app.utils.logging import get_logger

logger = get_logger(__name__)


@db_retry()
def _expire(db) -> int:
    return CartService(db, LockService()).expire_stale_carts()


@celery_app.task(name="app.tasks.expire.expire_carts_task")
def expire_carts_task():
    logger.info("Expire carts task started")

    db = SessionLocal()
    try:
        expired = _expire(db)
        logger.info(f"Expired {expired} carts")
        return expired
    finally:
        db.close()
