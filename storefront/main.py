# storefront/main.py
import uvicorn

from storefront.api import create_app
from storefront.data.database import Base, SessionLocal, engine
from storefront.data.seed import seed
from storefront.utils.logging import get_logger
from storefront.utils.settings import SEED_ON_STARTUP

# import wszystkich modeli PRZED create_all
import storefront.data.models  # noqa: F401

logger = get_logger(__name__)


def init_db():
    logger.info(f"Initializing database, tables: {sorted(Base.metadata.tables.keys())}")
    try:
        Base.metadata.create_all(bind=engine)
    except Exception:
        logger.exception("Failed to create tables")
        raise

    if SEED_ON_STARTUP:
        db = SessionLocal()
        try:
            seed(db)
        finally:
            db.close()


init_db()
app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
