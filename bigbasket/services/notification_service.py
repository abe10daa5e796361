# bigbasket/services/notification_service.py
from bigbasket.celery_worker import celery_app
from bigbasket.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """Powiadomienia dla klienta, wysylane przez Celery."""

    @staticmethod
    def send_bill_notification(customer_id: int, order_id: int):
        """
        Wysyła powiadomienie o wystawionym rachunku.
        """
        send_bill_notification_task.delay(customer_id, order_id)


@celery_app.task(name="bigbasket.services.notification_service.send_bill_notification_task")
def send_bill_notification_task(customer_id: int, order_id: int):
    """Na razie tylko loguje; docelowo email/SMS."""
    logger.info(f"[NOTIFICATION] Customer {customer_id}: bill for order {order_id} is ready")

    return {"customer_id": customer_id, "order_id": order_id, "status": "sent"}
