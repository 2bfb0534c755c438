from datetime import timedelta
import logging

from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from directory.selectors import expiry_days_for
from registrations.models import Registration

logger = logging.getLogger(__name__)

Status = Registration.Status


def _lock(registration_id):
    return (
        Registration.objects
        .select_for_update()
        .get(pk=registration_id)
    )


# ============================================================
# APPROVE
# ============================================================

@transaction.atomic
def approve_registration(registration_id, *, actor, now=None):
    """
    pending → approved.

    - Stamps approved_date / approved_by
    - Backfills expiry_date as created_at + category.expiry_days
      (never overwrites an existing expiry)
    - Re-approving an approved registration changes nothing
    """
    if not actor:
        raise ValidationError("An approving admin is required.")

    registration = _lock(registration_id)

    if registration.status == Status.APPROVED:
        logger.info(
            "Registration %s is already approved, leaving it unchanged.",
            registration.pk,
        )
        return registration

    if registration.status != Status.PENDING:
        raise ValidationError(
            f"Only pending registrations can be approved "
            f"(current status: {registration.status})."
        )

    registration.status = Status.APPROVED
    registration.approved_date = now or timezone.now()
    registration.approved_by = actor

    update_fields = ["status", "approved_date", "approved_by"]

    if registration.expiry_date is None:
        days = expiry_days_for(registration.category_id)
        registration.expiry_date = registration.created_at + timedelta(days=days)
        update_fields.append("expiry_date")

    registration.save(update_fields=update_fields)

    logger.info(
        "Registration %s approved by %s (expiry %s).",
        registration.pk, actor, registration.expiry_date,
    )
    return registration


# ============================================================
# REJECT
# ============================================================

@transaction.atomic
def reject_registration(registration_id):
    registration = _lock(registration_id)

    if registration.status != Status.PENDING:
        raise ValidationError(
            f"Only pending registrations can be rejected "
            f"(current status: {registration.status})."
        )

    registration.status = Status.REJECTED
    registration.save(update_fields=["status"])

    logger.info("Registration %s rejected.", registration.pk)
    return registration


# ============================================================
# RESTORE
# ============================================================

@transaction.atomic
def restore_registration(registration_id):
    """
    approved | rejected → pending.

    Clears the approval stamp. expiry_date is kept as-is, so a
    restored registration may carry an expiry computed earlier.
    """
    registration = _lock(registration_id)

    if registration.status not in {Status.APPROVED, Status.REJECTED}:
        raise ValidationError("Only approved or rejected registrations can be restored.")

    registration.status = Status.PENDING
    registration.approved_date = None
    registration.approved_by = None
    registration.save(update_fields=["status", "approved_date", "approved_by"])

    logger.info("Registration %s restored to pending.", registration.pk)
    return registration


# ============================================================
# DELETE (IRREVERSIBLE)
# ============================================================

@transaction.atomic
def delete_registration(registration_id, *, confirmed=False):
    if not confirmed:
        raise ValidationError("Deleting a registration must be confirmed.")

    registration = _lock(registration_id)
    customer_id = registration.customer_id
    registration.delete()

    logger.warning(
        "Registration %s (%s) permanently deleted.",
        registration_id, customer_id,
    )
