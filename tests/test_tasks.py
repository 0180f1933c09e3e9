from datetime import timedelta
from unittest.mock import MagicMock, patch

import pytest
import requests

from storefront.celery_worker import celery_app
from storefront.data.models import InventoryAlertModel, UserSessionModel
from storefront.domain.enums import Role
from storefront.services.notification_service import send_low_stock_alert_task, send_order_notification_task
from storefront.services.token_service import TokenService
from storefront.services.webhook_client import WebhookClient
from storefront.tasks.alerts import dispatch_inventory_alerts_task
from storefront.tasks.expire import sweep_expired_sessions_task
from storefront.utils.security import now_utc


class TestBeatSchedule:
    def test_schedule_entries(self):
        schedule = celery_app.conf.beat_schedule
        assert schedule["sweep-expired-sessions"]["task"] == sweep_expired_sessions_task.name
        assert schedule["dispatch-inventory-alerts"]["task"] == dispatch_inventory_alerts_task.name


class TestSweepTask:
    def test_sweep_uses_own_session(self, db, session_factory):
        past = now_utc() - timedelta(hours=3)
        TokenService(db, clock=lambda: past).issue(1, Role.CUSTOMER)
        TokenService(db).issue(2, Role.CUSTOMER)

        with patch("storefront.tasks.expire.SessionLocal", session_factory):
            removed = sweep_expired_sessions_task.delay().get()

        assert removed == 1
        db.expire_all()
        assert [s.user_id for s in db.query(UserSessionModel).all()] == [2]


class TestAlertTask:
    def test_dispatch_task_records_send(self, db, session_factory, seller, make_product):
        product = make_product(quantity=1)
        now = now_utc()
        db.add(
            InventoryAlertModel(
                product_id=product.id,
                seller_id=seller.id,
                threshold_quantity=3,
                alert_enabled=True,
                created_at=now,
                updated_at=now,
                alert_count=0,
            )
        )
        db.commit()

        with patch("storefront.tasks.alerts.SessionLocal", session_factory):
            sent = dispatch_inventory_alerts_task.delay().get()

        assert sent == 1
        db.expire_all()
        alert = db.query(InventoryAlertModel).one()
        assert alert.alert_count == 1
        assert alert.last_alert_sent_at is not None


class TestNotificationTasks:
    def test_order_notification_without_webhook_only_logs(self):
        result = send_order_notification_task.delay(1, 2, "SUCCESS").get()
        assert result == {"customer_id": 1, "order_id": 2, "order_status": "SUCCESS", "status": "logged"}

    def test_low_stock_notification(self):
        payload = {
            "seller_id": 1,
            "product_id": 2,
            "product_name": "Lamp",
            "current_quantity": 1,
            "threshold_quantity": 3,
            "quantity_to_restock": 3,
        }
        assert send_low_stock_alert_task.delay(payload).get()["status"] == "logged"


class TestWebhookClient:
    def test_disabled_without_url(self):
        assert WebhookClient(url="").enabled is False

    def test_post_retries_connection_errors(self):
        ok = MagicMock(status_code=204)
        with patch(
            "storefront.services.webhook_client.requests.post",
            side_effect=[requests.ConnectionError("down"), ok],
        ) as post:
            status = WebhookClient(url="http://hooks.local/notify", timeout=1).post("order", {"order_id": 1})

        assert status == 204
        assert post.call_count == 2
        assert post.call_args.kwargs["json"] == {"event": "order", "payload": {"order_id": 1}}

    def test_post_gives_up(self):
        with patch(
            "storefront.services.webhook_client.requests.post",
            side_effect=requests.ConnectionError("down"),
        ) as post:
            with pytest.raises(requests.ConnectionError):
                WebhookClient(url="http://hooks.local/notify").post("order", {})

        assert post.call_count == 3
