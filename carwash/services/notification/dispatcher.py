# ============================================================================
# carwash/services/notification/dispatcher.py
# ============================================================================
"""
Outbound notification intents raised by booking admission and lifecycle.

Callers queue intents after their transaction commits. Delivery happens
elsewhere (Celery workers), and a failure to queue is logged and never
reaches the caller.
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from carwash.models.admin_notification import AdminNotificationType
from carwash.schemas.task_payloads import AdminNotificationPayload, CustomerBookingNotificationPayload
from carwash.tasks.notification_tasks import (
    create_admin_notification,
    send_booking_confirmation,
    send_booking_received,
)

logger = logging.getLogger(__name__)


class NotificationDispatcher(ABC):

    def booking_received(self, booking_id) -> None:
        """Customer SMS + push: booking is pending confirmation"""
        self._queue_customer(CustomerBookingNotificationPayload(
            kind="booking_received", booking_id=str(booking_id)
        ))

    def booking_confirmed(self, booking_id) -> None:
        """Customer SMS + push: admin confirmed the booking"""
        self._queue_customer(CustomerBookingNotificationPayload(
            kind="booking_confirmed", booking_id=str(booking_id)
        ))

    def admin_notification(
            self,
            type: AdminNotificationType,
            title: str,
            message: str,
            data: Optional[Dict[str, Any]] = None,
    ) -> None:
        payload = AdminNotificationPayload(
            type=AdminNotificationType(type).value,
            title=title,
            message=message,
            data=data or {},
        )
        try:
            self.send_admin(payload)
        except Exception as e:
            logger.error(f"Failed to queue admin notification '{payload.type}': {e}")

    def _queue_customer(self, payload: CustomerBookingNotificationPayload) -> None:
        try:
            self.send_customer(payload)
        except Exception as e:
            logger.error(f"Failed to queue {payload.kind} notification for booking {payload.booking_id}: {e}")

    @abstractmethod
    def send_customer(self, payload: CustomerBookingNotificationPayload) -> None:
        ...

    @abstractmethod
    def send_admin(self, payload: AdminNotificationPayload) -> None:
        ...


class CeleryNotificationDispatcher(NotificationDispatcher):
    """Enqueues notification tasks on the notifications queue"""

    def send_customer(self, payload: CustomerBookingNotificationPayload) -> None:
        task = send_booking_received if payload.kind == "booking_received" else send_booking_confirmation
        task.delay(payload.booking_id)
        logger.info(f"Queued {payload.kind} notification for booking {payload.booking_id}")

    def send_admin(self, payload: AdminNotificationPayload) -> None:
        create_admin_notification.delay(**payload.model_dump())
        logger.info(f"Queued admin notification '{payload.type}'")
