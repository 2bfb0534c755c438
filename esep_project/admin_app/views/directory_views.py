from django.http import JsonResponse

from directory.selectors import active_categories, active_panchayaths


def categories(request):
    data = active_categories().values(
        "id", "name_english", "name_malayalam", "expiry_days"
    )
    return JsonResponse(list(data), safe=False)


def panchayaths(request):
    data = active_panchayaths().values("id", "name", "district")
    return JsonResponse(list(data), safe=False)
