# bigbasket/tasks/expire.py
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from bigbasket.celery_worker import celery_app
from bigbasket.data.database import SessionLocal
from bigbasket.data.models import CartModel
from bigbasket.utils.logging import get_logger

logger = get_logger(__name__)


def expire_stale_carts(db: Session, now: datetime | None = None) -> int:
    """Oznacza aktywne koszyki po terminie jako EXPIRED. Zwraca ich liczbę."""
    now = now or datetime.now(timezone.utc)

    carts = (
        db.query(CartModel)
        .filter(
            CartModel.status == "ACTIVE",
            CartModel.expires_at < now,
        )
        .all()
    )

    logger.info(f"Found {len(carts)} carts to expire")

    for cart in carts:
        cart.status = "EXPIRED"
        db.add(cart)

    db.commit()
    return len(carts)


@celery_app.task(name="bigbasket.tasks.expire.expire_carts_task")
def expire_carts_task():
    logger.info("Expire carts task started")

    db = SessionLocal()
    try:
        return expire_stale_carts(db)
    finally:
        db.close()
