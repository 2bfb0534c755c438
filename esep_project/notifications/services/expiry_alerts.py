"""
notifications/services/expiry_alerts.py

Live expiry alerts for the admin notification bell.

Two triggers feed the same refresh:
- the registrations change feed (debounced, near real-time)
- a periodic APScheduler job (catch-all for missed changes)

Every refresh re-reads all pending registrations and rebuilds the
alert snapshot wholesale; nothing is patched incrementally.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
import logging
import threading

from django.conf import settings
from django.db import DatabaseError
from django.utils import timezone

from registrations.expiry import ExpiryPolicy, ExpiryState, classify, days_remaining
from registrations.signals import subscribe

logger = logging.getLogger(__name__)

POLL_JOB_ID = "refresh_expiry_alerts"


# ============================================================
# CONFIG
# ============================================================

@dataclass(frozen=True)
class ExpiryAlertConfig:
    soon_window_days: int = 3
    poll_interval: timedelta = timedelta(hours=1)
    auto_surface_delay: float = 2.0
    # bursts of change-feed events collapse into one refresh
    change_debounce: float = 0.5

    @classmethod
    def from_settings(cls):
        return cls(
            soon_window_days=settings.EXPIRY_SOON_WINDOW_DAYS,
            poll_interval=timedelta(seconds=settings.EXPIRY_POLL_INTERVAL_SECONDS),
            auto_surface_delay=settings.EXPIRY_ALERT_DELAY_SECONDS,
            change_debounce=settings.EXPIRY_CHANGE_DEBOUNCE_SECONDS,
        )

    @property
    def policy(self):
        return ExpiryPolicy(soon_window_days=self.soon_window_days)


# ============================================================
# SNAPSHOT
# ============================================================

@dataclass(frozen=True)
class ExpiryAlert:
    registration_id: str
    name: str
    phone: str
    customer_id: str
    category: str
    location: str
    created_at: datetime
    days_remaining: int
    state: str

    def as_dict(self):
        return {
            "id": self.registration_id,
            "name": self.name,
            "phone": self.phone,
            "customer_id": self.customer_id,
            "category": self.category,
            "location": self.location,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "days_remaining": self.days_remaining,
            "state": str(self.state),
        }


@dataclass(frozen=True)
class AlertSnapshot:
    expired: tuple = ()
    expiring_soon: tuple = ()
    refreshed_at: datetime | None = None

    @property
    def expired_count(self):
        return len(self.expired)

    @property
    def expiring_soon_count(self):
        return len(self.expiring_soon)

    @property
    def combined(self):
        return list(self.expired) + list(self.expiring_soon)

    @property
    def has_alerts(self):
        return bool(self.expired or self.expiring_soon)


def _to_alert(registration, days, state):
    category = registration.category
    return ExpiryAlert(
        registration_id=str(registration.pk),
        name=registration.full_name,
        phone=registration.mobile_number,
        customer_id=registration.customer_id,
        category=category.name_english if category else "Unknown",
        location=registration.address,
        created_at=registration.created_at,
        days_remaining=days,
        state=state,
    )


def build_snapshot(registrations, now, policy=None):
    """
    Partition registrations into expired / expiring-soon alerts,
    each sorted most urgent first.
    """
    policy = policy or ExpiryPolicy()
    expired = []
    expiring = []

    for reg in registrations:
        state = classify(reg, now, policy)

        if state == ExpiryState.EXPIRED:
            expired.append(_to_alert(reg, days_remaining(reg.expiry_date, now), state))
        elif state == ExpiryState.EXPIRING_SOON:
            expiring.append(_to_alert(reg, days_remaining(reg.expiry_date, now), state))

    expired.sort(key=lambda a: a.days_remaining)
    expiring.sort(key=lambda a: a.days_remaining)

    return AlertSnapshot(
        expired=tuple(expired),
        expiring_soon=tuple(expiring),
        refreshed_at=now,
    )


# ============================================================
# AGGREGATOR
# ============================================================

class ExpiryAlertAggregator:
    """
    Holds the current alert snapshot and the alert-surfacing state.

    `fetch` returns the pending registrations to classify. Scheduler,
    clock, timer and change feed are injectable so the aggregator can
    be driven deterministically.
    """

    def __init__(
        self,
        fetch,
        *,
        config=None,
        scheduler=None,
        now=None,
        timer_factory=threading.Timer,
        feed_subscribe=subscribe,
    ):
        self._fetch = fetch
        self.config = config or ExpiryAlertConfig()
        self._scheduler = scheduler
        self._now = now or timezone.now
        self._timer_factory = timer_factory
        self._feed_subscribe = feed_subscribe

        self._lock = threading.RLock()
        # held across fetch + swap so the newest read always wins
        self._refresh_lock = threading.Lock()
        self._snapshot = AlertSnapshot()
        self._stale = False
        self._acknowledged = False
        self._alert_open = False
        self._timer = None
        self._debounce = None
        self._last_counts = (0, 0)

        self._subscription = None
        self._job = None
        self._started = False

    # --------------------------------------------------------
    # LIFECYCLE
    # --------------------------------------------------------
    def start(self):
        with self._lock:
            if self._started:
                return
            self._started = True

        self._subscription = self._feed_subscribe(self._on_change)

        if self._scheduler is None:
            self.refresh()
            logger.info(
                "Expiry alerts started without re-poll (alert delay %ss)",
                self.config.auto_surface_delay,
            )
            return

        # first run fires right away on the scheduler thread
        self._job = self._scheduler.add_job(
            self.refresh,
            trigger="interval",
            seconds=self.config.poll_interval.total_seconds(),
            id=POLL_JOB_ID,
            replace_existing=True,
            max_instances=1,
            coalesce=True,
            next_run_time=timezone.now(),
        )

        logger.info(
            "Expiry alerts started (poll every %s, alert delay %ss)",
            self.config.poll_interval,
            self.config.auto_surface_delay,
        )

    def shutdown(self):
        with self._lock:
            self._cancel_timer()
            if self._debounce is not None:
                self._debounce.cancel()
                self._debounce = None
            self._started = False

        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

        if self._job is not None:
            self._job.remove()
            self._job = None

        logger.info("Expiry alerts stopped")

    @property
    def started(self):
        return self._started

    @property
    def poll_job(self):
        return self._job

    # --------------------------------------------------------
    # CHANGE FEED (DEBOUNCED)
    # --------------------------------------------------------
    def _on_change(self):
        """
        Feed callback. Runs in the committing request, so it only
        queues a refresh; events arriving before it runs are absorbed.
        """
        with self._lock:
            if not self._started or self._debounce is not None:
                return
            timer = self._timer_factory(self.config.change_debounce, self._flush_changes)
            timer.daemon = True
            self._debounce = timer
            timer.start()

    def _flush_changes(self):
        with self._lock:
            self._debounce = None
            if not self._started:
                return
        self.refresh()

    @property
    def refresh_pending(self):
        return self._debounce is not None

    # --------------------------------------------------------
    # REFRESH (CHANGE FEED + POLL)
    # --------------------------------------------------------
    def refresh(self):
        """
        Re-read pending registrations and rebuild the snapshot.

        Returns False when the store could not be read; the previous
        snapshot is kept and flagged stale.
        """
        with self._refresh_lock:
            try:
                registrations = self._fetch()
            except DatabaseError:
                logger.exception("Failed to fetch expiring registrations")
                with self._lock:
                    self._stale = True
                return False

            snapshot = build_snapshot(registrations, self._now(), self.config.policy)

            with self._lock:
                self._snapshot = snapshot
                self._stale = False
                self._update_auto_surface()

        logger.debug(
            "Expiry alerts refreshed: %s expired, %s expiring soon",
            snapshot.expired_count,
            snapshot.expiring_soon_count,
        )
        return True

    # --------------------------------------------------------
    # AUTO SURFACING
    # --------------------------------------------------------
    def _update_auto_surface(self):
        counts = (
            self._snapshot.expired_count,
            self._snapshot.expiring_soon_count,
        )
        if counts == self._last_counts:
            return
        self._last_counts = counts

        if not self._snapshot.has_alerts:
            self._cancel_timer()
            return

        if self._acknowledged or self._alert_open or self._timer is not None:
            return

        self._arm_timer()

    def _arm_timer(self):
        timer = self._timer_factory(self.config.auto_surface_delay, self._auto_surface)
        timer.daemon = True
        self._timer = timer
        timer.start()

    def _cancel_timer(self):
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _auto_surface(self):
        with self._lock:
            self._timer = None
            if self._acknowledged or not self._snapshot.has_alerts:
                return
            self._alert_open = True
            counts = (
                self._snapshot.expired_count,
                self._snapshot.expiring_soon_count,
            )

        logger.info(
            "Surfacing expiry alert: %s expired, %s expiring soon",
            *counts,
        )

    # --------------------------------------------------------
    # USER ACTIONS
    # --------------------------------------------------------
    def acknowledge(self):
        with self._lock:
            self._acknowledged = True
            self._cancel_timer()

    def open_alert(self):
        """
        Manual (click) open. Works regardless of acknowledgement.
        """
        with self._lock:
            if self._snapshot.has_alerts:
                self._alert_open = True
            return self._snapshot.combined

    def close_alert(self):
        with self._lock:
            self._alert_open = False

    # --------------------------------------------------------
    # READ
    # --------------------------------------------------------
    @property
    def snapshot(self):
        return self._snapshot

    @property
    def acknowledged(self):
        return self._acknowledged

    @property
    def alert_open(self):
        return self._alert_open

    @property
    def timer_pending(self):
        return self._timer is not None

    def summary(self):
        with self._lock:
            snapshot = self._snapshot
            return {
                "expired_count": snapshot.expired_count,
                "expiring_soon_count": snapshot.expiring_soon_count,
                "acknowledged": self._acknowledged,
                "alert_open": self._alert_open,
                "stale": self._stale,
                "refreshed_at": (
                    snapshot.refreshed_at.isoformat() if snapshot.refreshed_at else None
                ),
                "alerts": [alert.as_dict() for alert in snapshot.combined],
            }
