import logging

from django.core.exceptions import ValidationError

from directory.models import Category
from directory.selectors import active_categories
from registrations.models import CategoryTransferRequest

logger = logging.getLogger(__name__)


def transfer_target_categories(registration):
    """
    Active categories a registrant can ask to move to.
    """
    return active_categories(exclude_id=registration.category_id)


def request_category_transfer(registration, *, to_category_id, reason=None):
    """
    Queue a category transfer request for admin review.

    The registration itself is not touched; the request keeps a
    snapshot of the registrant's contact details.
    """
    if not to_category_id:
        raise ValidationError("Please select a category to transfer to.")

    try:
        to_category = active_categories().get(id=to_category_id)
    except (Category.DoesNotExist, ValueError, ValidationError):
        raise ValidationError("Selected category is not available.")

    if to_category.id == registration.category_id:
        raise ValidationError("Registration is already in this category.")

    reason = (reason or "").strip() or None

    transfer = CategoryTransferRequest.objects.create(
        registration=registration,
        from_category_id=registration.category_id,
        to_category=to_category,
        mobile_number=registration.mobile_number,
        customer_id=registration.customer_id,
        full_name=registration.full_name,
        reason=reason,
        status=CategoryTransferRequest.Status.PENDING,
    )

    logger.info(
        "Transfer request %s queued for registration %s (%s → %s).",
        transfer.pk, registration.pk, registration.category_id, to_category.id,
    )
    return transfer
