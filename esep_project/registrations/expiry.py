"""
Expiry classification for registrations.

days_remaining is computed on the raw instant difference and rounded
up, so a record expiring in 30.1 days reports 31. There is no
midnight normalisation: the alert windows are calibrated against
this exact rule.

Approved registrations are finished and never classified as
expired or expiring.
"""

import math
from dataclasses import dataclass
from datetime import timedelta

from django.conf import settings
from django.db import models

from .models import Registration

ONE_DAY = timedelta(days=1)


class ExpiryState(models.TextChoices):
    EXPIRED = "expired", "Expired"
    EXPIRING_SOON = "expiring_soon", "Expiring soon"
    NORMAL = "normal", "Normal"
    APPROVED_EXEMPT = "approved_exempt", "Approved"


@dataclass(frozen=True)
class ExpiryPolicy:
    soon_window_days: int = 3

    @classmethod
    def from_settings(cls):
        return cls(soon_window_days=settings.EXPIRY_SOON_WINDOW_DAYS)


def days_remaining(expiry_date, now):
    if expiry_date is None:
        return None
    return math.ceil((expiry_date - now) / ONE_DAY)


def classify(registration, now, policy=None):
    policy = policy or ExpiryPolicy()

    if registration.status == Registration.Status.APPROVED:
        return ExpiryState.APPROVED_EXEMPT

    days = days_remaining(registration.expiry_date, now)

    # no expiry yet: nothing to warn about
    if days is None:
        return ExpiryState.NORMAL

    if days <= 0:
        return ExpiryState.EXPIRED

    if days <= policy.soon_window_days:
        return ExpiryState.EXPIRING_SOON

    return ExpiryState.NORMAL


def matches_expiry_threshold(registration, threshold, now):
    """
    Ad-hoc "expires within N days" filter.

    N == 0 means "already expired" and matches any days_remaining <= 0,
    however negative. Any other N matches 0 <= days_remaining <= N.
    """
    if threshold < 0:
        raise ValueError("Expiry threshold must be zero or positive.")

    if registration.status == Registration.Status.APPROVED:
        return False

    days = days_remaining(registration.expiry_date, now)
    if days is None:
        return False

    if threshold == 0:
        return days <= 0

    return 0 <= days <= threshold
