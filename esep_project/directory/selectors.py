"""
Read-only lookups over categories and panchayaths.
"""

from django.conf import settings

from .models import Category, Panchayath


def active_categories(exclude_id=None):
    qs = Category.objects.filter(is_active=True).order_by("name_english")
    if exclude_id is not None:
        qs = qs.exclude(id=exclude_id)
    return qs


def active_panchayaths():
    return Panchayath.objects.filter(is_active=True).order_by("name")


def expiry_days_for(category_id) -> int:
    """
    Validity period for a category, in days.

    Falls back to REGISTRATION_DEFAULT_EXPIRY_DAYS when the category
    is missing or carries no usable value. Inactive categories still
    resolve, since existing registrations keep pointing at them.
    """
    default = settings.REGISTRATION_DEFAULT_EXPIRY_DAYS

    if category_id is None:
        return default

    days = (
        Category.objects
        .filter(id=category_id)
        .values_list("expiry_days", flat=True)
        .first()
    )

    return days if days else default
