# storeadmin/jobs/celery_app.py

from celery import Celery
from celery.schedules import crontab

from ..core.config import settings

celery_app = Celery(
    "storeadmin",
    broker=settings.REDIS_URL,
    backend=settings.REDIS_URL,
    include=["storeadmin.jobs.banner_status"],
)
celery_app.conf.timezone = "UTC"
celery_app.conf.beat_schedule = {
    "banner-status-sweep": {
        "task": "storeadmin.jobs.banner_status.run_banner_status_sweep",
        "schedule": crontab(minute=0, hour=f"*/{settings.STATUS_SWEEP_INTERVAL_HOURS}"),
    },
}

@celery_app.task(name="storeadmin.jobs.banner_status.run_banner_status_sweep")
def run_banner_status_sweep_task():
    from .banner_status import run_banner_status_sweep

    return run_banner_status_sweep()
