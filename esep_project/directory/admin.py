from django.contrib import admin

from .models import Category, Panchayath


# ============================================================
# CATEGORY ADMIN
# ============================================================

@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = (
        "name_english",
        "name_malayalam",
        "expiry_days",
        "is_active",
        "created_at",
    )
    list_filter = ("is_active",)
    search_fields = ("name_english", "name_malayalam")
    ordering = ("name_english",)


# ============================================================
# PANCHAYATH ADMIN
# ============================================================

@admin.register(Panchayath)
class PanchayathAdmin(admin.ModelAdmin):
    list_display = ("name", "district", "is_active")
    list_filter = ("district", "is_active")
    search_fields = ("name", "district")
    ordering = ("name",)
