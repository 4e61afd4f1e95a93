# storefront/tasks/purge.py
from datetime import datetime, timedelta, timezone

from storefront.celery_worker import celery_app
from storefront.data.database import SessionLocal
from storefront.repos.cart_repo import CartRepo
from storefront.utils.logging import get_logger
from storefront.utils.settings import GUEST_TOKEN_TTL_SECONDS

logger = get_logger(__name__)


def purge_guest_carts(db, now: datetime | None = None) -> int:
    """
    Usuwa linie koszykow gosci nieruszane dluzej niz waznosc tokenu goscia.
    Po wygasnieciu tokenu nikt juz nie moze sie do takiego koszyka dostac.
    """
    now = now or datetime.now(timezone.utc)
    cutoff = now - timedelta(seconds=GUEST_TOKEN_TTL_SECONDS)
    removed = CartRepo(db).delete_stale_guest_lines(cutoff)
    logger.info(f"Purged {removed} stale guest cart line(s) older than {cutoff.isoformat()}")
    return removed


@celery_app.task(name="storefront.tasks.purge.purge_guest_carts_task")
def purge_guest_carts_task():
    logger.info("Purge guest carts task started")

    db = SessionLocal()
    try:
        return purge_guest_carts(db)
    finally:
        db.close()
