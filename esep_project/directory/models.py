import uuid

from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone


class Category(models.Model):
    """
    Registration category.

    Inactive categories are hidden from selection lists but stay
    valid for the registrations that already reference them.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name_english = models.CharField(max_length=150)
    name_malayalam = models.CharField(max_length=150)

    expiry_days = models.PositiveIntegerField(
        default=30,
        validators=[MinValueValidator(1)],
        help_text="Validity period applied at approval when no expiry exists",
    )

    is_active = models.BooleanField(default=True, db_index=True)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["name_english"]
        verbose_name_plural = "categories"

    def __str__(self):
        return f"{self.name_english} / {self.name_malayalam}"


class Panchayath(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=150)
    district = models.CharField(max_length=150, blank=True)

    is_active = models.BooleanField(default=True, db_index=True)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return f"{self.name} ({self.district})" if self.district else self.name
