from django.http import JsonResponse


class LoginRequiredMiddleware:
    """
    Gate for the admin dashboard API.

    Everything under /admin/ needs an authenticated staff user;
    the Django admin and registrant-facing paths handle themselves.
    """

    PROTECTED_PREFIXES = ("/admin/",)

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        path = request.path

        if not path.startswith(self.PROTECTED_PREFIXES):
            return self.get_response(request)

        # Block unauthenticated users
        if not request.user.is_authenticated:
            return JsonResponse(
                {"success": False, "error": "Authentication required."},
                status=401,
            )

        # 🔒 STAFF ONLY
        if not request.user.is_staff:
            return JsonResponse(
                {"success": False, "error": "Admin access required."},
                status=403,
            )

        return self.get_response(request)
