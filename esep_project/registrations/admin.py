from django.contrib import admin, messages
from django.core.exceptions import ValidationError

from admin_app.services.lifecycle_service import (
    approve_registration,
    reject_registration,
    restore_registration,
)

from .models import CategoryTransferRequest, Registration


# ---------------------------------------------------------------------
# REGISTRATION ADMIN
# ---------------------------------------------------------------------
@admin.register(Registration)
class RegistrationAdmin(admin.ModelAdmin):
    list_display = (
        "customer_id",
        "full_name",
        "mobile_number",
        "category",
        "panchayath",
        "status",
        "created_at",
        "expiry_date",
    )
    list_filter = (
        "status",
        "category",
        "panchayath",
        "created_at",
    )
    search_fields = (
        "customer_id",
        "full_name",
        "mobile_number",
    )
    autocomplete_fields = ("category", "preference_category", "panchayath")
    ordering = ("-created_at",)
    list_per_page = 25

    # status and the approval stamp only change through the actions below
    readonly_fields = ("status", "approved_date", "approved_by", "created_at")

    actions = ["approve_selected", "reject_selected", "restore_selected"]

    def get_readonly_fields(self, request, obj=None):
        fields = super().get_readonly_fields(request, obj)
        if obj is not None:
            return fields + ("customer_id",)
        return fields

    def _apply(self, request, queryset, transition, verb):
        done = 0
        skipped = 0
        for obj in queryset:
            try:
                transition(obj.pk)
                done += 1
            except ValidationError:
                skipped += 1

        self.message_user(request, f"{done} registration(s) {verb}.")
        if skipped:
            self.message_user(
                request,
                f"{skipped} registration(s) skipped: status does not allow this action.",
                level=messages.WARNING,
            )

    # APPROVE
    def approve_selected(self, request, queryset):
        actor = request.user.get_username()
        self._apply(
            request,
            queryset,
            lambda pk: approve_registration(pk, actor=actor),
            "approved",
        )

    approve_selected.short_description = "Approve selected registrations"

    # REJECT
    def reject_selected(self, request, queryset):
        self._apply(request, queryset, reject_registration, "rejected")

    reject_selected.short_description = "Reject selected registrations"

    # RESTORE
    def restore_selected(self, request, queryset):
        self._apply(request, queryset, restore_registration, "restored to pending")

    restore_selected.short_description = "Restore selected to pending"


# ---------------------------------------------------------------------
# CATEGORY TRANSFER REQUEST ADMIN
# ---------------------------------------------------------------------
@admin.register(CategoryTransferRequest)
class CategoryTransferRequestAdmin(admin.ModelAdmin):
    list_display = (
        "customer_id",
        "full_name",
        "from_category",
        "to_category",
        "status",
        "created_at",
    )
    list_filter = ("status", "to_category", "created_at")
    search_fields = ("customer_id", "full_name", "mobile_number")
    readonly_fields = (
        "registration",
        "from_category",
        "to_category",
        "mobile_number",
        "customer_id",
        "full_name",
        "reason",
        "created_at",
    )
    ordering = ("-created_at",)
