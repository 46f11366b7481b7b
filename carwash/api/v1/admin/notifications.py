# carwash/api/v1/admin/notifications.py
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from carwash.api.dependencies import get_admin_notification_service, require_admin
from carwash.models.admin_notification import AdminNotificationType
from carwash.services.notification.admin_notification_service import AdminNotificationService
from carwash.utils.responses import api_response, paginate_meta

router = APIRouter(prefix="/admin/notifications", dependencies=[Depends(require_admin)])


@router.get("")
def get_notifications(
        page: int = Query(1, ge=1),
        limit: int = Query(20, ge=1, le=100),
        type: Optional[AdminNotificationType] = Query(None),
        service: AdminNotificationService = Depends(get_admin_notification_service),
):
    notifications, total = service.get_notifications(page, limit, type.value if type else None)
    return api_response(
        "Notifications retrieved",
        [notification.to_dict() for notification in notifications],
        paginate_meta(page, limit, total),
    )


@router.get("/recent")
def get_recent_notifications(
        limit: int = Query(5, ge=1, le=50),
        service: AdminNotificationService = Depends(get_admin_notification_service),
):
    notifications = service.get_recent(limit)
    return api_response(
        "Recent notifications retrieved",
        {"notifications": [notification.to_dict() for notification in notifications]},
    )


@router.get("/unread-count")
def get_unread_count(service: AdminNotificationService = Depends(get_admin_notification_service)):
    return api_response("Unread count retrieved", {"count": service.get_unread_count()})


@router.post("/mark-all-read")
def mark_all_as_read(service: AdminNotificationService = Depends(get_admin_notification_service)):
    updated = service.mark_all_as_read()
    return api_response("All notifications marked as read", {"updated": updated})


@router.patch("/{notification_id}/read")
def mark_as_read(
        notification_id: UUID,
        service: AdminNotificationService = Depends(get_admin_notification_service),
):
    service.mark_as_read(notification_id)
    return api_response("Notification marked as read")
