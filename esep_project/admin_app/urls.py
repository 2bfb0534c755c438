from django.urls import path

from .views import directory_views, notification_views, registration_views

app_name = "admin_app"

urlpatterns = [
    # Registrations
    path("registrations/", registration_views.registration_list, name="registrations"),
    path("registrations/export/", registration_views.export_registrations, name="registrations-export"),
    path("registrations/<uuid:registration_id>/approve/", registration_views.approve, name="registration-approve"),
    path("registrations/<uuid:registration_id>/reject/", registration_views.reject, name="registration-reject"),
    path("registrations/<uuid:registration_id>/restore/", registration_views.restore, name="registration-restore"),
    path("registrations/<uuid:registration_id>/delete/", registration_views.delete, name="registration-delete"),

    # Directory
    path("categories/", directory_views.categories, name="categories"),
    path("panchayaths/", directory_views.panchayaths, name="panchayaths"),

    # Expiry notifications
    path("notifications/expiry/", notification_views.expiry_summary, name="expiry-summary"),
    path("notifications/expiry/open/", notification_views.open_expiry_alert, name="expiry-open"),
    path("notifications/expiry/close/", notification_views.close_expiry_alert, name="expiry-close"),
    path("notifications/expiry/acknowledge/", notification_views.acknowledge_expiry_alert, name="expiry-acknowledge"),
]
