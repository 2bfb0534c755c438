from datetime import timedelta
from unittest.mock import MagicMock

import pytest
from django.core.exceptions import ValidationError

from registrations.models import Registration
from registrations.signals import registrations_changed, subscribe

pytestmark = pytest.mark.django_db


# ------------------------------------------------------------
# MODEL RULES
# ------------------------------------------------------------

def test_new_registration_defaults(make_registration):
    registration = make_registration()

    assert registration.status == Registration.Status.PENDING
    assert registration.approved_date is None
    assert registration.approved_by is None
    assert registration.expiry_date is None
    assert str(registration) == f"{registration.customer_id} | {registration.full_name}"


def test_clean_requires_approval_stamp_pair(make_registration, now):
    registration = make_registration()
    registration.approved_date = now

    with pytest.raises(ValidationError) as exc:
        registration.clean()

    assert "approved_by" in exc.value.message_dict


def test_clean_rejects_expiry_before_creation(make_registration, now):
    registration = make_registration(created_at=now)
    registration.expiry_date = now - timedelta(days=1)

    with pytest.raises(ValidationError) as exc:
        registration.clean()

    assert "expiry_date" in exc.value.message_dict


def test_customer_id_cannot_change(make_registration):
    registration = make_registration()
    registration.customer_id = "ESEP9999"

    with pytest.raises(ValidationError):
        registration.save()


def test_created_at_cannot_change(make_registration):
    registration = make_registration()
    registration.created_at = registration.created_at - timedelta(days=3)

    with pytest.raises(ValidationError):
        registration.save()


def test_other_fields_can_change(make_registration):
    registration = make_registration()
    registration.full_name = "Renamed Registrant"
    registration.save()

    registration.refresh_from_db()
    assert registration.full_name == "Renamed Registrant"


# ------------------------------------------------------------
# CHANGE FEED
# ------------------------------------------------------------

def test_feed_fires_after_commit_for_insert_update_delete(
    make_registration, django_capture_on_commit_callbacks
):
    callback = MagicMock()
    subscription = subscribe(callback)
    try:
        with django_capture_on_commit_callbacks(execute=True):
            registration = make_registration()
        assert callback.call_count == 1

        with django_capture_on_commit_callbacks(execute=True):
            registration.full_name = "Updated"
            registration.save()
        assert callback.call_count == 2

        with django_capture_on_commit_callbacks(execute=True):
            registration.delete()
        assert callback.call_count == 3

        callback.assert_called_with()
    finally:
        subscription.unsubscribe()


def test_feed_waits_for_commit(make_registration, django_capture_on_commit_callbacks):
    callback = MagicMock()
    subscription = subscribe(callback)
    try:
        with django_capture_on_commit_callbacks() as callbacks:
            make_registration()

        callback.assert_not_called()
        assert len(callbacks) == 1
    finally:
        subscription.unsubscribe()


def test_feed_reports_action(make_registration, django_capture_on_commit_callbacks):
    actions = []

    def receiver(sender, action, **kwargs):
        actions.append(action)

    registrations_changed.connect(receiver, sender=Registration, dispatch_uid="test-actions")
    try:
        with django_capture_on_commit_callbacks(execute=True):
            registration = make_registration()
        with django_capture_on_commit_callbacks(execute=True):
            registration.delete()
    finally:
        registrations_changed.disconnect(sender=Registration, dispatch_uid="test-actions")

    assert actions == ["saved", "deleted"]


def test_unsubscribe_stops_delivery_and_is_idempotent(
    make_registration, django_capture_on_commit_callbacks
):
    callback = MagicMock()
    subscription = subscribe(callback)

    subscription.unsubscribe()
    subscription.unsubscribe()

    with django_capture_on_commit_callbacks(execute=True):
        make_registration()

    callback.assert_not_called()
    assert subscription.active is False


def test_failing_subscriber_does_not_block_others(
    make_registration, django_capture_on_commit_callbacks
):
    broken = MagicMock(side_effect=RuntimeError("boom"))
    healthy = MagicMock()
    first = subscribe(broken)
    second = subscribe(healthy)
    try:
        with django_capture_on_commit_callbacks(execute=True):
            make_registration()
    finally:
        first.unsubscribe()
        second.unsubscribe()

    broken.assert_called_once_with()
    healthy.assert_called_once_with()
