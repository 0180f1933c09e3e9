# storefront/services/notification_service.py
from kombu.exceptions import OperationalError as BrokerError

from storefront.celery_worker import celery_app
from storefront.services.webhook_client import WebhookClient
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Powiadomienia (zamówienia, niski stan magazynu).
    Wysyłka idzie przez Celery, serwisy tylko kolejkują.
    """

    @staticmethod
    def send_order_notification(customer_id: int, order_id: int, status: str):
        _enqueue(send_order_notification_task, customer_id, order_id, status)

    @staticmethod
    def send_low_stock_alert(
        seller_id: int,
        product_id: int,
        product_name: str,
        current_quantity: int,
        threshold_quantity: int,
        quantity_to_restock: int,
    ):
        _enqueue(
            send_low_stock_alert_task,
            {
                "seller_id": seller_id,
                "product_id": product_id,
                "product_name": product_name,
                "current_quantity": current_quantity,
                "threshold_quantity": threshold_quantity,
                "quantity_to_restock": quantity_to_restock,
            },
        )


def _enqueue(task, *args):
    # zamówienie jest już zacommitowane, brak brokera nie może go wycofać
    try:
        task.delay(*args)
    except BrokerError as e:
        logger.error(f"Could not queue {task.name}: {e}")


def _deliver(event: str, payload: dict) -> dict:
    client = WebhookClient()
    if client.enabled:
        client.post(event, payload)
        return {**payload, "status": "sent"}
    return {**payload, "status": "logged"}


@celery_app.task(name="storefront.services.notification_service.send_order_notification_task")
def send_order_notification_task(customer_id: int, order_id: int, status: str):
    logger.info(f"[NOTIFICATION] Customer {customer_id}: order {order_id} is {status}")
    return _deliver("order", {"customer_id": customer_id, "order_id": order_id, "order_status": status})


@celery_app.task(name="storefront.services.notification_service.send_low_stock_alert_task")
def send_low_stock_alert_task(payload: dict):
    logger.info(
        f"[NOTIFICATION] Seller {payload['seller_id']}: product {payload['product_id']} "
        f"({payload['product_name']}) is low on stock: {payload['current_quantity']} left, "
        f"threshold {payload['threshold_quantity']}, restock {payload['quantity_to_restock']}"
    )
    return _deliver("low_stock", payload)
