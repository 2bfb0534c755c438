import logging

from django.core.exceptions import ValidationError
from django.db import DatabaseError
from django.http import JsonResponse
from django.shortcuts import get_object_or_404

from registrations.models import Registration

from ..services.transfer_service import (
    request_category_transfer,
    transfer_target_categories,
)

logger = logging.getLogger(__name__)


def transfer_categories(request, registration_id):
    """
    Categories the registrant may request a transfer to.
    """
    registration = get_object_or_404(
        Registration.objects.select_related("category"),
        id=registration_id,
    )

    current = registration.category
    targets = transfer_target_categories(registration).values(
        "id", "name_english", "name_malayalam"
    )

    return JsonResponse(
        {
            "current_category": {
                "id": str(current.id),
                "name_english": current.name_english,
                "name_malayalam": current.name_malayalam,
            },
            "categories": list(targets),
        }
    )


def submit_transfer_request(request, registration_id):
    if request.method != "POST":
        return JsonResponse(
            {"success": False, "error": "Invalid request method. Please use POST."},
            status=405,
        )

    registration = get_object_or_404(Registration, id=registration_id)

    try:
        transfer = request_category_transfer(
            registration,
            to_category_id=request.POST.get("to_category_id", "").strip(),
            reason=request.POST.get("reason"),
        )
    except ValidationError as exc:
        return JsonResponse(
            {"success": False, "error": " ".join(exc.messages)},
            status=400,
        )
    except DatabaseError:
        logger.exception(
            "Error submitting transfer request for registration %s", registration_id
        )
        return JsonResponse(
            {"success": False, "error": "Error submitting transfer request"},
            status=500,
        )

    return JsonResponse(
        {
            "success": True,
            "message": (
                "Transfer request submitted successfully. "
                "It will be reviewed by admin."
            ),
            "transfer_request_id": str(transfer.id),
            "status": transfer.status,
        },
        status=201,
    )
