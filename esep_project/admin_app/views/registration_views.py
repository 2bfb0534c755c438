import logging

from django.core.exceptions import ValidationError
from django.db import DatabaseError
from django.http import HttpResponse, JsonResponse
from django.utils import timezone

from registrations.expiry import ExpiryPolicy
from registrations.models import Registration
from registrations.selectors import registration_queryset

from ..services.export_service import export_filename, write_registrations_csv
from ..services.lifecycle_service import (
    approve_registration,
    delete_registration,
    reject_registration,
    restore_registration,
)
from ..services.registration_filters import (
    RegistrationFilters,
    filter_registrations,
    registration_row,
)

logger = logging.getLogger(__name__)

CONFIRM_VALUES = {"1", "true", "yes", "on"}


def _error(message, status):
    return JsonResponse({"success": False, "error": message}, status=status)


def _method_not_allowed():
    return _error("Invalid request method. Please use POST.", status=405)


def _filtered(request):
    """
    Fetch and filter; raises DatabaseError on store failure.
    """
    registrations = list(registration_queryset())
    filters = RegistrationFilters.from_query(request.GET)
    return filter_registrations(registrations, filters, timezone.now())


# ============================================================
# REGISTRATION LIST
# ============================================================

def registration_list(request):
    """
    Filtered, sorted registrations for the admin table.

    Query params: q, status, category, panchayath, expires_within, sort
    """
    try:
        registrations = list(registration_queryset())
    except DatabaseError:
        logger.exception("Error fetching registrations")
        return _error("Error fetching registrations", status=500)

    filters = RegistrationFilters.from_query(request.GET)
    now = timezone.now()
    policy = ExpiryPolicy.from_settings()

    rows = filter_registrations(registrations, filters, now)

    # =========================================================
    # STATS (ALWAYS BASED ON *ALL* REGISTRATIONS)
    # =========================================================
    status_counts = {status: 0 for status in Registration.Status.values}
    for reg in registrations:
        if reg.status in status_counts:
            status_counts[reg.status] += 1

    return JsonResponse(
        {
            "success": True,
            "count": len(rows),
            "total": len(registrations),
            "status_counts": status_counts,
            "registrations": [registration_row(reg, now, policy) for reg in rows],
        }
    )


# ============================================================
# CSV EXPORT
# ============================================================

def export_registrations(request):
    try:
        rows = _filtered(request)
    except DatabaseError:
        logger.exception("Error exporting registrations")
        return _error("Error exporting registrations", status=500)

    response = HttpResponse(content_type="text/csv")
    response["Content-Disposition"] = f'attachment; filename="{export_filename()}"'

    count = write_registrations_csv(response, rows)
    logger.info("Exported %s registrations for %s", count, request.user)

    return response


# ============================================================
# LIFECYCLE TRANSITIONS
# ============================================================

def _run_transition(request, registration_id, transition, message):
    if request.method != "POST":
        return _method_not_allowed()

    try:
        registration = transition(registration_id)
    except Registration.DoesNotExist:
        return _error("Registration not found.", status=404)
    except ValidationError as exc:
        return _error(" ".join(exc.messages), status=409)
    except DatabaseError:
        logger.exception("Error updating status of registration %s", registration_id)
        return _error("Error updating status", status=500)

    return JsonResponse(
        {
            "success": True,
            "message": message,
            "registration": registration_row(
                registration, timezone.now(), ExpiryPolicy.from_settings()
            ),
        }
    )


def approve(request, registration_id):
    actor = request.user.get_username()
    return _run_transition(
        request,
        registration_id,
        lambda pk: approve_registration(pk, actor=actor),
        "Registration approved successfully",
    )


def reject(request, registration_id):
    return _run_transition(
        request,
        registration_id,
        reject_registration,
        "Registration rejected successfully",
    )


def restore(request, registration_id):
    return _run_transition(
        request,
        registration_id,
        restore_registration,
        "Registration restored to pending status",
    )


def delete(request, registration_id):
    if request.method != "POST":
        return _method_not_allowed()

    confirmed = request.POST.get("confirm", "").strip().lower() in CONFIRM_VALUES

    try:
        delete_registration(registration_id, confirmed=confirmed)
    except Registration.DoesNotExist:
        return _error("Registration not found.", status=404)
    except ValidationError as exc:
        return _error(" ".join(exc.messages), status=400)
    except DatabaseError:
        logger.exception("Error deleting registration %s", registration_id)
        return _error("Error deleting registration", status=500)

    return JsonResponse(
        {"success": True, "message": "Registration deleted successfully"}
    )
