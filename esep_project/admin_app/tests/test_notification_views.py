from datetime import datetime, timedelta, timezone as dt_timezone
from types import SimpleNamespace

import pytest
from django.urls import reverse

from notifications.services.expiry_alerts import ExpiryAlertAggregator

NOW = datetime(2026, 10, 18, 9, 0, tzinfo=dt_timezone.utc)

pytestmark = pytest.mark.django_db


class IdleTimer:
    def __init__(self, interval, function):
        self.daemon = False

    def start(self):
        pass

    def cancel(self):
        pass


def expired_registration():
    return SimpleNamespace(
        pk="r1",
        full_name="Anitha Kumari",
        mobile_number="9847000001",
        customer_id="ESEP0001",
        category=SimpleNamespace(name_english="Job Card"),
        address="Ward 4",
        created_at=NOW - timedelta(days=50),
        status="pending",
        expiry_date=NOW - timedelta(days=2),
    )


@pytest.fixture
def aggregator(monkeypatch):
    aggregator = ExpiryAlertAggregator(
        lambda: [expired_registration()],
        now=lambda: NOW,
        timer_factory=IdleTimer,
        feed_subscribe=lambda callback: SimpleNamespace(unsubscribe=lambda: None),
    )
    aggregator.start()
    monkeypatch.setattr(
        "admin_app.views.notification_views.get_aggregator", lambda: aggregator
    )
    return aggregator


def test_summary(staff_client, aggregator):
    body = staff_client.get(reverse("admin_app:expiry-summary")).json()

    assert body["success"] is True
    assert body["expired_count"] == 1
    assert body["expiring_soon_count"] == 0
    assert body["acknowledged"] is False
    assert body["alerts"][0]["customer_id"] == "ESEP0001"
    assert body["alerts"][0]["days_remaining"] == -2


def test_summary_requires_staff(client, aggregator):
    assert client.get(reverse("admin_app:expiry-summary")).status_code == 401


def test_open_and_close(staff_client, aggregator):
    opened = staff_client.post(reverse("admin_app:expiry-open")).json()

    assert opened["alert_open"] is True
    assert [a["name"] for a in opened["alerts"]] == ["Anitha Kumari"]

    staff_client.post(reverse("admin_app:expiry-close"))
    assert aggregator.alert_open is False


def test_acknowledge_closes_and_sticks(staff_client, aggregator):
    aggregator.open_alert()

    body = staff_client.post(reverse("admin_app:expiry-acknowledge")).json()

    assert body == {"success": True, "acknowledged": True}
    assert aggregator.acknowledged
    assert not aggregator.alert_open


@pytest.mark.parametrize("name", ["expiry-open", "expiry-close", "expiry-acknowledge"])
def test_actions_require_post(staff_client, aggregator, name):
    assert staff_client.get(reverse(f"admin_app:{name}")).status_code == 405
