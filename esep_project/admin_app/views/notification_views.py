from django.http import JsonResponse

from notifications.scheduler import get_aggregator


def _method_not_allowed():
    return JsonResponse(
        {"success": False, "error": "Invalid request method. Please use POST."},
        status=405,
    )


def expiry_summary(request):
    """
    Bell + warning badge counts and the combined alert list
    (expired first, then expiring soon).
    """
    return JsonResponse({"success": True, **get_aggregator().summary()})


def open_expiry_alert(request):
    if request.method != "POST":
        return _method_not_allowed()

    aggregator = get_aggregator()
    alerts = aggregator.open_alert()

    return JsonResponse(
        {
            "success": True,
            "alert_open": aggregator.alert_open,
            "alerts": [alert.as_dict() for alert in alerts],
        }
    )


def close_expiry_alert(request):
    if request.method != "POST":
        return _method_not_allowed()

    get_aggregator().close_alert()
    return JsonResponse({"success": True})


def acknowledge_expiry_alert(request):
    """
    "Got it": stops automatic pop-ups, counts stay visible.
    """
    if request.method != "POST":
        return _method_not_allowed()

    aggregator = get_aggregator()
    aggregator.acknowledge()
    aggregator.close_alert()

    return JsonResponse({"success": True, "acknowledged": True})
