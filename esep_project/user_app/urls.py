from django.urls import path

from .views.transfer_views import (
    submit_transfer_request,
    transfer_categories,
)

app_name = "user_app"

urlpatterns = [
    path(
        "<uuid:registration_id>/transfer/categories/",
        transfer_categories,
        name="transfer-categories",
    ),
    path(
        "<uuid:registration_id>/transfer/",
        submit_transfer_request,
        name="transfer-request",
    ),
]
