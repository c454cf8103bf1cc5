# tests/unit/test_celery_schedule.py

from storeadmin.core.config import settings
from storeadmin.jobs.celery_app import celery_app, run_banner_status_sweep_task

def test_banner_sweep_is_on_beat_schedule():
    entry = celery_app.conf.beat_schedule["banner-status-sweep"]

    assert entry["task"] == "storeadmin.jobs.banner_status.run_banner_status_sweep"
    assert entry["schedule"].minute == {0}
    assert entry["schedule"].hour == set(range(0, 24, settings.STATUS_SWEEP_INTERVAL_HOURS))

def test_sweep_task_is_registered():
    assert "storeadmin.jobs.banner_status.run_banner_status_sweep" in celery_app.tasks

def test_sweep_task_delegates_to_job(mocker):
    job = mocker.patch("storeadmin.jobs.banner_status.run_banner_status_sweep", return_value=3)

    assert run_banner_status_sweep_task() == 3
    job.assert_called_once_with()
