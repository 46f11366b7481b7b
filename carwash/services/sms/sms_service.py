# carwash/services/sms/sms_service.py
"""Customer SMS via Twilio"""
import logging
from typing import Optional

from twilio.base.exceptions import TwilioException
from twilio.rest import Client

from carwash.config.settings import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()


def to_e164(phone: str, country_code: Optional[str] = None) -> str:
    """Join a local number and its country code, leaving full numbers as-is"""
    phone = phone.strip()
    if phone.startswith("+"):
        return phone
    return f"{country_code or settings.DEFAULT_COUNTRY_CODE}{phone}"


class SMSService:
    def __init__(self, client: Optional[Client] = None):
        self.client = client
        if self.client is None and self.is_configured():
            self.client = Client(settings.TWILIO_ACCOUNT_SID, settings.TWILIO_AUTH_TOKEN)

    @staticmethod
    def is_configured() -> bool:
        return bool(
            settings.SMS_ENABLED
            and settings.TWILIO_ACCOUNT_SID
            and settings.TWILIO_AUTH_TOKEN
            and settings.TWILIO_PHONE_NUMBER
        )

    def send_sms(self, to_phone: str, message_body: str) -> dict:
        """Send one SMS; logs instead of sending when Twilio is not set up"""
        if self.client is None:
            logger.info(f"[SMS] To: {to_phone} | {message_body}")
            return {"success": True, "message_sid": None}

        try:
            twilio_message = self.client.messages.create(
                body=message_body,
                from_=settings.TWILIO_PHONE_NUMBER,
                to=to_phone
            )
            logger.info(f"SMS sent successfully to {to_phone}: {twilio_message.sid}")
            return {"success": True, "message_sid": twilio_message.sid}

        except TwilioException as e:
            logger.error(f"Twilio error sending SMS to {to_phone}: {str(e)}")
            return {"success": False, "error": str(e)}
