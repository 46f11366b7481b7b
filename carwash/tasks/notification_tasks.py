# ===== carwash/tasks/notification_tasks.py =====
from typing import Any, Dict, Optional
import logging

from sqlalchemy.orm import joinedload

from carwash.config.celery_config import celery_app
from carwash.config.database import SessionLocal
from carwash.models.booking import Booking
from carwash.services.notification import messages
from carwash.services.notification.admin_notification_service import AdminNotificationService
from carwash.services.notification.push_service import PushService
from carwash.services.sms.sms_service import SMSService, to_e164
from carwash.utils.ids import parse_uuid

logger = logging.getLogger(__name__)


def _load_booking(db, booking_id: str) -> Optional[Booking]:
    return db.query(Booking).options(
        joinedload(Booking.user),
        joinedload(Booking.service),
    ).filter(Booking.id == parse_uuid(booking_id)).first()


def deliver_booking_message(db, booking_id: str, kind: str) -> Dict[str, Any]:
    """
    Send the customer SMS and push for a booking.

    Returns a summary; a missing booking is reported and not retried.
    """
    booking = _load_booking(db, booking_id)
    if booking is None:
        logger.warning(f"Booking {booking_id} not found, skipping {kind} notification")
        return {"status": "skipped", "booking_id": booking_id}

    if kind == "booking_received":
        sms_body = messages.booking_received_sms(booking)
        title, body = messages.booking_received_push(booking)
    else:
        sms_body = messages.booking_confirmed_sms(booking)
        title, body = messages.booking_confirmed_push(booking)

    sms_result = {"success": False, "error": "no phone"}
    user = booking.user
    if user and user.phone:
        sms_result = SMSService().send_sms(to_e164(user.phone, user.country_code), sms_body)

    PushService().send_to_user(str(booking.user_id), title, body, messages.push_data(booking, kind))

    return {"status": "success", "booking_id": booking_id, "sms": sms_result.get("success", False)}


@celery_app.task(bind=True, max_retries=3)
def send_booking_received(self, booking_id: str):
    """
    Tell the customer their booking is pending confirmation

    Args:
        booking_id: Booking UUID
    """
    db = SessionLocal()
    try:
        logger.info(f"Sending booking received notification for {booking_id}")
        return deliver_booking_message(db, booking_id, "booking_received")

    except Exception as exc:
        logger.error(f"Failed to send booking received notification for {booking_id}: {exc}")

        # Retry with exponential backoff: 1min, 2min, 4min
        raise self.retry(
            exc=exc,
            countdown=60 * (2 ** self.request.retries)
        )
    finally:
        db.close()


@celery_app.task(bind=True, max_retries=3)
def send_booking_confirmation(self, booking_id: str):
    """
    Tell the customer an admin confirmed their booking

    Args:
        booking_id: Booking UUID
    """
    db = SessionLocal()
    try:
        logger.info(f"Sending booking confirmation for {booking_id}")
        return deliver_booking_message(db, booking_id, "booking_confirmed")

    except Exception as exc:
        logger.error(f"Failed to send booking confirmation for {booking_id}: {exc}")

        raise self.retry(
            exc=exc,
            countdown=60 * (2 ** self.request.retries)
        )
    finally:
        db.close()


@celery_app.task(bind=True, max_retries=3)
def create_admin_notification(
        self,
        type: str,
        title: str,
        message: str,
        data: Optional[Dict[str, Any]] = None
):
    """
    Add an entry to the admin notification feed

    Args:
        type: AdminNotificationType value
        title: Notification title
        message: Notification body
        data: Related ids (bookingId, bookingNumber, ...)
    """
    db = SessionLocal()
    try:
        notification = AdminNotificationService(db).create_notification(type, title, message, data)
        return {"status": "success", "notification_id": str(notification.id)}

    except Exception as exc:
        db.rollback()
        logger.error(f"Failed to create admin notification '{title}': {exc}")

        raise self.retry(
            exc=exc,
            countdown=60 * (2 ** self.request.retries)
        )
    finally:
        db.close()
