# storefront/tasks/alerts.py
from storefront.celery_worker import celery_app
from storefront.data.database import SessionLocal
from storefront.services.inventory_alert_service import InventoryAlertService
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@celery_app.task(name="storefront.tasks.alerts.dispatch_inventory_alerts_task")
def dispatch_inventory_alerts_task():
    logger.info("Dispatch inventory alerts task started")

    db = SessionLocal()
    try:
        return InventoryAlertService(db).dispatch_triggered_alerts()
    finally:
        db.close()
