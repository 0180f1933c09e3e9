# storefront/tasks/expire.py
from storefront.celery_worker import celery_app
from storefront.data.database import SessionLocal
from storefront.services.token_service import TokenService
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@celery_app.task(name="storefront.tasks.expire.sweep_expired_sessions_task")
def sweep_expired_sessions_task():
    logger.info("Sweep expired sessions task started")

    db = SessionLocal()
    try:
        return TokenService(db).sweep_expired()
    finally:
        db.close()
