# storefront/celery_worker.py
from celery import Celery

from storefront.utils.settings import CELERY_BROKER_URL, CELERY_RESULT_BACKEND, LOW_STOCK_REPORT_SECONDS

celery_app = Celery(
    "storefront",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

# explicit imports so the worker registers the tasks
celery_app.conf.imports = (
    "storefront.tasks.low_stock",
    "storefront.services.notification_service",
)

celery_app.conf.beat_schedule = {
    "report-low-stock": {
        "task": "storefront.tasks.low_stock.report_low_stock_task",
        "schedule": LOW_STOCK_REPORT_SECONDS,
    },
}

celery_app.conf.timezone = "UTC"
