# storefront/services/notification_service.py
from storefront.celery_worker import celery_app
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Order notifications, processed asynchronously by Celery.
    Call only after the transaction that changed the order has committed.
    """

    @staticmethod
    def send_order_notification(customer_id: int, order_id: int, status: str):
        send_order_notification_task.delay(customer_id, order_id, status)


@celery_app.task(name="storefront.services.notification_service.send_order_notification_task")
def send_order_notification_task(customer_id: int, order_id: int, status: str):
    """
    Celery task. Delivery channels (email, SMS) are not part of this service,
    the event is only logged.
    """
    logger.info(f"[NOTIFICATION] Customer {customer_id}: order {order_id} is now {status}")

    return {"customer_id": customer_id, "order_id": order_id, "status": status, "sent": True}
