"""
Admin registration list: filtering, sorting and row view-model.

Filtering happens in Python over the fetched list, so the expiry
rules stay identical to the notification bell's.
"""

from dataclasses import dataclass

from registrations.expiry import (
    ExpiryPolicy,
    classify,
    days_remaining,
    matches_expiry_threshold,
)

ALL = "all"

SORT_ORDERS = ("newest", "oldest", "name", "expiry")

JOB_CARD_PALETTE = "yellow"
CATEGORY_PALETTES = ("blue", "green", "purple", "orange", "pink", "indigo")


def category_palette(name):
    """
    Stable colour palette for a category name.
    """
    if not name:
        return CATEGORY_PALETTES[0]

    if "job card" in name.lower():
        return JOB_CARD_PALETTE

    return CATEGORY_PALETTES[sum(ord(ch) for ch in name) % len(CATEGORY_PALETTES)]


@dataclass
class RegistrationFilters:
    search: str = ""
    status: str = ALL
    category: str = ALL
    panchayath: str = ALL
    expires_within: int | None = None
    sort: str = "newest"

    @classmethod
    def from_query(cls, params):
        expires_within = None
        raw = (params.get("expires_within") or "").strip()
        if raw:
            try:
                value = int(raw)
            except ValueError:
                value = None
            # negative or garbage thresholds are ignored
            if value is not None and value >= 0:
                expires_within = value

        sort = params.get("sort") or "newest"
        if sort not in SORT_ORDERS:
            sort = "newest"

        return cls(
            search=(params.get("q") or "").strip(),
            status=params.get("status") or ALL,
            category=params.get("category") or ALL,
            panchayath=params.get("panchayath") or ALL,
            expires_within=expires_within,
            sort=sort,
        )


def _matches_search(registration, query):
    if not query:
        return True

    q = query.lower()
    return (
        q in registration.full_name.lower()
        or query in registration.mobile_number
        or q in registration.customer_id.lower()
    )


def _category_name(registration):
    return registration.category.name_english if registration.category_id else None


def _panchayath_name(registration):
    return registration.panchayath.name if registration.panchayath_id else None


def _sort(registrations, order):
    if order == "oldest":
        return sorted(registrations, key=lambda r: r.created_at)

    if order == "name":
        return sorted(registrations, key=lambda r: r.full_name.lower())

    if order == "expiry":
        # soonest first, no expiry last
        return sorted(
            registrations,
            key=lambda r: (r.expiry_date is None, r.expiry_date or r.created_at),
        )

    return sorted(registrations, key=lambda r: r.created_at, reverse=True)


def filter_registrations(registrations, filters, now):
    result = []

    for reg in registrations:
        if not _matches_search(reg, filters.search):
            continue

        if filters.status != ALL and reg.status != filters.status:
            continue

        if filters.category != ALL and _category_name(reg) != filters.category:
            continue

        if filters.panchayath != ALL and _panchayath_name(reg) != filters.panchayath:
            continue

        if filters.expires_within is not None and not matches_expiry_threshold(
            reg, filters.expires_within, now
        ):
            continue

        result.append(reg)

    return _sort(result, filters.sort)


def _iso(value):
    return value.isoformat() if value else None


def _category_payload(category):
    if category is None:
        return None
    return {
        "id": str(category.id),
        "name_english": category.name_english,
        "name_malayalam": category.name_malayalam,
    }


def registration_row(registration, now, policy=None):
    policy = policy or ExpiryPolicy()
    category = registration.category
    panchayath = registration.panchayath

    return {
        "id": str(registration.id),
        "customer_id": registration.customer_id,
        "full_name": registration.full_name,
        "mobile_number": registration.mobile_number,
        "address": registration.address,
        "ward": registration.ward,
        "agent": registration.agent,
        "status": registration.status,
        "fee": str(registration.fee),
        "created_at": _iso(registration.created_at),
        "approved_date": _iso(registration.approved_date),
        "approved_by": registration.approved_by,
        "expiry_date": _iso(registration.expiry_date),
        "days_remaining": days_remaining(registration.expiry_date, now),
        "expiry_state": classify(registration, now, policy),
        "category": _category_payload(category),
        "category_color": category_palette(category.name_english if category else ""),
        "preference_category": _category_payload(registration.preference_category),
        "panchayath": (
            {
                "id": str(panchayath.id),
                "name": panchayath.name,
                "district": panchayath.district,
            }
            if panchayath else None
        ),
    }
