from django.contrib import admin
from django.shortcuts import redirect
from django.urls import path, include


def root_redirect(request):
    return redirect("admin:index")


urlpatterns = [
    # ROOT
    path("", root_redirect, name="root"),

    # DJANGO ADMIN (STAFF ONLY)
    path("esep/django/admin/", admin.site.urls),

    # ADMIN DASHBOARD API
    path("admin/", include("admin_app.urls")),

    # REGISTRANT-FACING
    path("registrations/", include("user_app.urls")),
]
