# ============================================================================
# carwash/services/notification/admin_notification_service.py
# ============================================================================
"""Admin in-app notification feed"""
import logging
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy.orm import Session

from carwash.core.exceptions import NotFoundError
from carwash.models.admin_notification import AdminNotification, AdminNotificationType

logger = logging.getLogger(__name__)


class AdminNotificationService:

    def __init__(self, db: Session):
        self.db = db

    def create_notification(
            self,
            type: str,
            title: str,
            message: str,
            data: Optional[Dict[str, Any]] = None,
    ) -> AdminNotification:
        notification = AdminNotification(
            type=AdminNotificationType(type).value,
            title=title,
            message=message,
            data=data or {},
            is_read=False,
        )
        self.db.add(notification)
        self.db.commit()
        self.db.refresh(notification)
        logger.info(f"Admin notification created: {notification.type} - {title}")
        return notification

    def get_notifications(
            self,
            page: int = 1,
            limit: int = 20,
            type: Optional[str] = None,
    ) -> Tuple[List[AdminNotification], int]:
        """Newest first; returns (page items, total)"""
        query = self.db.query(AdminNotification)
        if type:
            query = query.filter(AdminNotification.type == type)

        total = query.count()
        notifications = query.order_by(AdminNotification.created_at.desc()).offset(
            (page - 1) * limit
        ).limit(limit).all()
        return notifications, total

    def get_recent(self, limit: int = 5) -> List[AdminNotification]:
        return self.db.query(AdminNotification).order_by(
            AdminNotification.created_at.desc()
        ).limit(limit).all()

    def get_unread_count(self) -> int:
        return self.db.query(AdminNotification).filter(
            AdminNotification.is_read.is_(False)
        ).count()

    def mark_as_read(self, notification_id: UUID) -> AdminNotification:
        notification = self.db.query(AdminNotification).filter(
            AdminNotification.id == notification_id
        ).first()
        if not notification:
            raise NotFoundError("Notification not found")

        notification.is_read = True
        self.db.commit()
        self.db.refresh(notification)
        return notification

    def mark_all_as_read(self) -> int:
        updated = self.db.query(AdminNotification).filter(
            AdminNotification.is_read.is_(False)
        ).update({AdminNotification.is_read: True}, synchronize_session=False)
        self.db.commit()
        return updated
