from unittest.mock import MagicMock

import pytest

from notifications import scheduler
from notifications.services.expiry_alerts import POLL_JOB_ID


@pytest.fixture(autouse=True)
def clean_globals(monkeypatch):
    monkeypatch.setattr(scheduler, "_scheduler", None)
    monkeypatch.setattr(scheduler, "_aggregator", None)
    yield
    scheduler.stop_scheduler()


@pytest.fixture
def fake_scheduler_cls(monkeypatch):
    cls = MagicMock()
    monkeypatch.setattr(scheduler, "BackgroundScheduler", cls)
    return cls


def test_disabled_scheduler_does_nothing(settings, fake_scheduler_cls):
    settings.ENABLE_SCHEDULER = False

    scheduler.start_scheduler()

    fake_scheduler_cls.assert_not_called()
    assert scheduler._aggregator is None


def test_enabled_scheduler_registers_poll_job_once(settings, fake_scheduler_cls):
    settings.ENABLE_SCHEDULER = True
    settings.EXPIRY_POLL_INTERVAL_SECONDS = 3600

    scheduler.start_scheduler()
    scheduler.start_scheduler()

    fake_scheduler_cls.assert_called_once_with(timezone=settings.TIME_ZONE)
    instance = fake_scheduler_cls.return_value
    instance.start.assert_called_once_with()
    instance.add_job.assert_called_once()
    kwargs = instance.add_job.call_args.kwargs
    assert kwargs["id"] == POLL_JOB_ID
    assert kwargs["seconds"] == 3600

    aggregator = scheduler.get_aggregator()
    assert aggregator.started


def test_stop_scheduler_tears_everything_down(settings, fake_scheduler_cls):
    settings.ENABLE_SCHEDULER = True
    scheduler.start_scheduler()
    instance = fake_scheduler_cls.return_value
    aggregator = scheduler._aggregator

    scheduler.stop_scheduler()

    instance.shutdown.assert_called_once_with(wait=False)
    instance.add_job.return_value.remove.assert_called_once_with()
    assert not aggregator.started
    assert scheduler._aggregator is None
    assert scheduler._scheduler is None


def test_get_aggregator_with_default_settings_still_polls(settings, fake_scheduler_cls):
    settings.ENABLE_SCHEDULER = False
    settings.EXPIRY_POLL_INTERVAL_SECONDS = 3600

    aggregator = scheduler.get_aggregator()

    fake_scheduler_cls.assert_called_once_with(timezone=settings.TIME_ZONE)
    fake_scheduler_cls.return_value.start.assert_called_once_with()
    assert aggregator.started
    assert aggregator.poll_job is not None
    kwargs = fake_scheduler_cls.return_value.add_job.call_args.kwargs
    assert kwargs["id"] == POLL_JOB_ID
    assert kwargs["seconds"] == 3600
    assert scheduler.get_aggregator() is aggregator
    fake_scheduler_cls.assert_called_once()


def test_get_aggregator_reuses_boot_started_instance(settings, fake_scheduler_cls):
    settings.ENABLE_SCHEDULER = True
    scheduler.start_scheduler()
    booted = scheduler._aggregator

    assert scheduler.get_aggregator() is booted
    fake_scheduler_cls.return_value.add_job.assert_called_once()
