# storefront/celery_worker.py
from celery import Celery

from storefront.utils.settings import (
    ALERT_DISPATCH_INTERVAL_SECONDS,
    CELERY_BROKER_URL,
    CELERY_RESULT_BACKEND,
    CELERY_TASK_ALWAYS_EAGER,
    SESSION_SWEEP_INTERVAL_SECONDS,
)

celery_app = Celery(
    "storefront",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

# taski muszą być zaimportowane, inaczej worker ich nie zarejestruje
celery_app.conf.imports = (
    "storefront.tasks.expire",
    "storefront.tasks.alerts",
    "storefront.services.notification_service",
)

celery_app.conf.beat_schedule = {
    "sweep-expired-sessions": {
        "task": "storefront.tasks.expire.sweep_expired_sessions_task",
        "schedule": SESSION_SWEEP_INTERVAL_SECONDS,
    },
    "dispatch-inventory-alerts": {
        "task": "storefront.tasks.alerts.dispatch_inventory_alerts_task",
        "schedule": ALERT_DISPATCH_INTERVAL_SECONDS,
    },
}

celery_app.conf.timezone = "UTC"

# testy i lokalny dev bez redisa
celery_app.conf.task_always_eager = CELERY_TASK_ALWAYS_EAGER
if CELERY_TASK_ALWAYS_EAGER:
    celery_app.conf.result_backend = "cache+memory://"
