# storefront/services/webhook_client.py
import requests

from storefront.utils.retry import http_retry
from storefront.utils.settings import NOTIFICATION_TIMEOUT_SECONDS, NOTIFICATION_WEBHOOK_URL
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class WebhookClient:
    def __init__(self, url: str | None = None, timeout: int | None = None):
        self.url = url if url is not None else NOTIFICATION_WEBHOOK_URL
        self.timeout = timeout or NOTIFICATION_TIMEOUT_SECONDS

    @property
    def enabled(self) -> bool:
        return bool(self.url)

    @http_retry()
    def post(self, event: str, payload: dict) -> int:
        logger.info(f"WebhookClient POST {self.url} ({event})")

        resp = requests.post(self.url, json={"event": event, "payload": payload}, timeout=self.timeout)
        resp.raise_for_status()
        return resp.status_code
