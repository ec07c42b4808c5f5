from celery import Celery
from app.core.config import settings

# Configure Celery
celery = Celery(
    "worker",
    broker=settings.REDIS_URL,
    backend=settings.REDIS_URL,
    include=["app.tasks.thread"],
)

celery.conf.task_routes = {"app.tasks.*": {"queue": "main-queue"}}

celery.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
)
