"""
Celery application for out-of-band DailySummary recomputation.

Broker and result backend come from the active settings module.
"""
import importlib

from celery import Celery
from celery.schedules import crontab

from config import get_settings_module

settings = importlib.import_module(get_settings_module())

celery_app = Celery(
    "wellness_compliance",
    broker=getattr(settings, "CELERY_BROKER_URL", "redis://localhost:6379/0"),
    backend=getattr(settings, "CELERY_RESULT_BACKEND", "redis://localhost:6379/1"),
    include=["wellness_compliance.workers.tasks"],
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone=getattr(settings, "DEFAULT_TIMEZONE", "Asia/Manila"),
    enable_utc=True,
    task_acks_late=True,
    worker_prefetch_multiplier=1,
    task_soft_time_limit=300,
    task_time_limit=600,
    result_expires=3600,
    task_always_eager=bool(getattr(settings, "CELERY_ALWAYS_EAGER", False)),
    beat_schedule={
        "recalculate-yesterday": {
            "task": "summaries.recalculate_recent",
            # Shortly after midnight in the default organization timezone.
            "schedule": crontab(hour=0, minute=15),
            "options": {"expires": 3600},
        },
    },
)
