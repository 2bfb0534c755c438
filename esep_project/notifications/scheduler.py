import logging
import threading

from apscheduler.schedulers.background import BackgroundScheduler
from django.conf import settings

from registrations.selectors import pending_registrations

from .services.expiry_alerts import ExpiryAlertAggregator, ExpiryAlertConfig

logger = logging.getLogger(__name__)

# ============================================================
# GLOBAL SAFETY LOCK
# Prevents scheduler from starting more than once
# ============================================================
_scheduler = None
_aggregator = None
_lock = threading.Lock()


def _ensure_started():
    """
    Start APScheduler and the expiry alert aggregator once per process.

    The aggregator always gets the hourly re-poll job; it is the only
    trigger that notices registrations ageing into "expiring soon"
    or "expired" without any row changing.
    """
    global _scheduler, _aggregator

    with _lock:
        # --------------------------------------------
        # SAFETY LOCK (NO DOUBLE START)
        # --------------------------------------------
        if _aggregator is not None:
            return _aggregator

        logger.info("Starting APScheduler...")

        _scheduler = BackgroundScheduler(timezone=settings.TIME_ZONE)
        _scheduler.start()

        # --------------------------------------------
        # SCHEDULE: HOURLY EXPIRY RE-POLL
        # --------------------------------------------
        _aggregator = ExpiryAlertAggregator(
            pending_registrations,
            config=ExpiryAlertConfig.from_settings(),
            scheduler=_scheduler,
        )
        # with a scheduler, start() only subscribes and adds the job
        _aggregator.start()

        logger.info(
            "APScheduler started: expiry alerts re-polled every %s",
            _aggregator.config.poll_interval,
        )
        return _aggregator


def start_scheduler():
    """
    Eager start at boot.

    - Respects ENABLE_SCHEDULER setting
    - Prevents double start (Django autoreload, imports)

    With ENABLE_SCHEDULER off nothing runs at boot; the first
    get_aggregator() call starts the same scheduler and poll job.
    """
    # --------------------------------------------
    # DEV / PROD TOGGLE
    # --------------------------------------------
    if not getattr(settings, "ENABLE_SCHEDULER", False):
        logger.info(
            "APScheduler not started at boot (ENABLE_SCHEDULER=False); "
            "starting on first use"
        )
        return

    _ensure_started()


def stop_scheduler():
    global _scheduler, _aggregator

    with _lock:
        if _aggregator is not None:
            _aggregator.shutdown()
            _aggregator = None

        if _scheduler is not None:
            _scheduler.shutdown(wait=False)
            _scheduler = None


def get_aggregator():
    """
    Process-wide aggregator, started on first use if needed.
    """
    return _ensure_started()
