"""
Celery worker for booking notifications.

Run with `python -m carwash.worker`, or point the celery CLI at
carwash.config.celery_config:celery_app.
"""
import logging
from celery.signals import task_failure, task_retry, worker_ready

from carwash.config.celery_config import celery_app
from carwash.config.settings import get_settings
from carwash.utils.my_logging import setup_logging

setup_logging()
logger = logging.getLogger(__name__)
settings = get_settings()


@worker_ready.connect
def announce_notification_tasks(sender=None, **kwargs):
    names = sorted(name for name in celery_app.tasks if name.startswith("carwash.tasks."))
    logger.info(f"Notification worker consuming '{settings.NOTIFICATION_QUEUE}': {', '.join(names)}")


@task_retry.connect
def log_notification_retry(request=None, reason=None, **kwargs):
    task_name = request.task if request else "unknown"
    logger.warning(f"Retrying {task_name} with args {request.args if request else ()}: {reason}")


@task_failure.connect
def log_notification_failure(sender=None, task_id=None, exception=None, args=None, **kwargs):
    # Retries exhausted; the booking itself is unaffected
    logger.error(f"{sender.name if sender else 'task'} [{task_id}] gave up for {args}: {exception}")


if __name__ == "__main__":
    celery_app.start([
        "worker",
        "--loglevel=info",
        f"--queues={settings.NOTIFICATION_QUEUE}",
        "--concurrency=2",
    ])
