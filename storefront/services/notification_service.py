# storefront/services/notification_service.py
import requests
from kombu.exceptions import OperationalError

from storefront.celery_worker import celery_app
from storefront.utils.logging import get_logger
from storefront.utils.retry import http_retry
from storefront.utils.settings import ORDER_WEBHOOK_URL, WEBHOOK_TIMEOUT_SECONDS

logger = get_logger(__name__)


class WebhookClient:
    def __init__(self, url: str | None = None, timeout: int | None = None):
        self.url = url if url is not None else ORDER_WEBHOOK_URL
        self.timeout = timeout or WEBHOOK_TIMEOUT_SECONDS

    @http_retry()
    def post(self, payload: dict) -> int:
        logger.info(f"WebhookClient POST {self.url}")
        resp = requests.post(self.url, json=payload, timeout=self.timeout)
        resp.raise_for_status()
        return resp.status_code


class NotificationService:
    """
    Powiadomienia o zlozonym zamowieniu.
    Wywolywane PO commicie - blad brokera nie cofa zamowienia, tylko jest logowany.
    """

    def order_placed(self, user_id: int, order_id: int) -> bool:
        try:
            send_order_notification_task.delay(user_id, order_id)
        except OperationalError as e:
            logger.error(f"Could not enqueue notification for order {order_id}: {e}")
            return False
        except requests.RequestException as e:
            #tryb eager: task wykonuje sie tutaj, zamowienie jest juz zapisane
            logger.error(f"Notification webhook failed for order {order_id}: {e}")
            return False
        return True


@celery_app.task(name="storefront.services.notification_service.send_order_notification_task")
def send_order_notification_task(user_id: int, order_id: int):
    """
    Celery task: log + opcjonalny webhook (ORDER_WEBHOOK_URL).
    """
    logger.info(f"[NOTIFICATION] User {user_id}: Order {order_id} placed")

    payload = {"event": "order.placed", "user_id": user_id, "order_id": order_id}
    client = WebhookClient()
    if not client.url:
        return {**payload, "status": "logged"}

    client.post(payload)
    return {**payload, "status": "sent"}
