from datetime import timedelta
from io import StringIO

import pytest
from django.core.management import call_command
from django.utils import timezone

from registrations.models import Registration

pytestmark = pytest.mark.django_db


def test_reports_counts(make_registration, settings):
    settings.EXPIRY_SOON_WINDOW_DAYS = 3
    now = timezone.now()
    make_registration(expiry_date=now - timedelta(days=1))
    make_registration(expiry_date=now + timedelta(days=2))
    make_registration(expiry_date=now + timedelta(days=30))
    make_registration(
        expiry_date=now - timedelta(days=1),
        status=Registration.Status.APPROVED,
    )

    out = StringIO()
    call_command("check_registration_expiry", stdout=out)

    output = out.getvalue()
    assert "Checking registration expiry" in output
    assert "Completed: 1 expired, 1 expiring within 3 days" in output


def test_list_prints_alerts_expired_first(make_registration):
    now = timezone.now()
    make_registration(full_name="Soon", expiry_date=now + timedelta(days=2))
    make_registration(full_name="Late", expiry_date=now - timedelta(days=4))

    out = StringIO()
    call_command("check_registration_expiry", "--list", stdout=out)

    rows = [line for line in out.getvalue().splitlines() if "\t" in line]
    assert [row.split("\t")[1] for row in rows] == ["Late", "Soon"]
