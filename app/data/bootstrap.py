# app/data/bootstrap.py
from app.data.database import Base, engine
from app.data.seed import seed
from app.utils.settings import SEED_DEMO_DATA
from app.utils.logging import get_logger

# import wszystkich modeli przed create_all
import app.data.models  # noqa: F401

logger = get_logger(__name__)


def init_db():
    logger.info(f"Models registered in Base.metadata: {list(Base.metadata.tables.keys())}")
    try:
        Base.metadata.create_all(bind=engine)
    except Exception as e:
        logger.error(f"Failed to create tables: {e}")
        raise
    logger.info("Database tables ready")

    if SEED_DEMO_DATA:
        seed()
