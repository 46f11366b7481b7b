# carwash/utils/my_logging.py
"""Logging setup shared by the API process and the notification worker"""
import logging
import sys
from carwash.config.settings import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)-7s [%(correlation_id)s] %(name)s: %(message)s"

# Library loggers that drown out booking activity at INFO
QUIET_LOGGERS = (
    "sqlalchemy.engine",
    "sqlalchemy.pool",
    "celery.app.trace",
    "twilio.http_client",
    "uvicorn.access",
)


class CorrelationIdFilter(logging.Filter):
    """Give every record a correlation_id so the format never fails"""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "correlation_id"):
            record.correlation_id = "-"
        return True


def setup_logging(level: str = None):
    """Install a stdout handler on the root logger; calling it again is a no-op"""
    settings = get_settings()
    root = logging.getLogger()

    root.setLevel(getattr(logging, (level or settings.LOG_LEVEL).upper(), logging.INFO))
    if any(getattr(handler, "_carwash", False) for handler in root.handlers):
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(CorrelationIdFilter())
    handler._carwash = True
    root.addHandler(handler)

    if not settings.DEBUG:
        for name in QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
