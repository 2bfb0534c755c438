import itertools
from datetime import datetime, timezone as dt_timezone

import pytest

from directory.models import Category, Panchayath
from registrations.models import Registration

NOW = datetime(2026, 10, 18, 9, 0, tzinfo=dt_timezone.utc)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def category(db):
    return Category.objects.create(
        name_english="Job Card",
        name_malayalam="ജോബ് കാർഡ്",
        expiry_days=45,
    )


@pytest.fixture
def other_category(db):
    return Category.objects.create(
        name_english="Pension",
        name_malayalam="പെൻഷൻ",
        expiry_days=60,
    )


@pytest.fixture
def panchayath(db):
    return Panchayath.objects.create(name="Athirampuzha", district="Kottayam")


@pytest.fixture
def make_registration(db, category):
    counter = itertools.count(1)

    def _make(**overrides):
        n = next(counter)
        data = {
            "customer_id": f"ESEP{n:04d}",
            "full_name": f"Registrant {n}",
            "mobile_number": f"98470{n:05d}",
            "address": "Ward 4, Athirampuzha",
            "category": category,
        }
        data.update(overrides)
        return Registration.objects.create(**data)

    return _make


@pytest.fixture
def staff_client(client, django_user_model):
    user = django_user_model.objects.create_user(
        username="eva",
        password="not-a-real-password",
        is_staff=True,
    )
    client.force_login(user)
    return client
