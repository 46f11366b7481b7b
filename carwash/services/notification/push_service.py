# carwash/services/notification/push_service.py
"""Push notification boundary; delivery (FCM) belongs to another service"""
import logging
from typing import Dict, Optional

logger = logging.getLogger(__name__)


class PushService:

    def send_to_user(self, user_id: str, title: str, body: str, data: Optional[Dict[str, str]] = None) -> bool:
        """Record the push intent for a user's devices"""
        logger.info(f"[PUSH] user={user_id} title='{title}' body='{body}' data={data or {}}")
        return True
