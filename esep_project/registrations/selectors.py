from .models import Registration


def registration_queryset(status=None):
    """
    Registrations joined with their display relations, newest first.
    """
    qs = (
        Registration.objects
        .select_related("category", "preference_category", "panchayath")
        .order_by("-created_at")
    )
    if status:
        qs = qs.filter(status=status)
    return qs


def pending_registrations():
    return list(registration_queryset(status=Registration.Status.PENDING))
