import uuid

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone

from directory.models import Category, Panchayath


class Registration(models.Model):
    """
    A citizen enrollment record.

    Only lifecycle transitions (approve / reject / restore) write
    status, approved_date and approved_by.
    """

    class Status(models.TextChoices):
        PENDING = "pending", "Pending"
        APPROVED = "approved", "Approved"
        REJECTED = "rejected", "Rejected"

    # Fields that can never change after the first save
    IMMUTABLE_FIELDS = ("customer_id", "created_at")

    # =====================================================
    # IDENTITY
    # =====================================================
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    customer_id = models.CharField(
        max_length=50,
        unique=True,
        help_text="Human-facing registration code",
    )

    # =====================================================
    # SUBJECT
    # =====================================================
    full_name = models.CharField(max_length=200)
    mobile_number = models.CharField(max_length=20, db_index=True)
    address = models.TextField(blank=True)
    ward = models.CharField(max_length=50, blank=True)
    agent = models.CharField(max_length=150, blank=True)

    panchayath = models.ForeignKey(
        Panchayath,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="registrations",
    )

    # =====================================================
    # CLASSIFICATION
    # =====================================================
    category = models.ForeignKey(
        Category,
        on_delete=models.PROTECT,
        related_name="registrations",
    )

    preference_category = models.ForeignKey(
        Category,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="preferred_by_registrations",
    )

    # =====================================================
    # LIFECYCLE
    # =====================================================
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
        db_index=True,
    )

    fee = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=0,
        validators=[MinValueValidator(0)],
    )

    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    approved_date = models.DateTimeField(null=True, blank=True)
    approved_by = models.CharField(max_length=150, null=True, blank=True)
    expiry_date = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(
                fields=["status", "expiry_date"],
                name="registration_status_expiry_idx",
            ),
        ]

    def __str__(self):
        return f"{self.customer_id} | {self.full_name}"

    def clean(self):
        errors = {}

        if (self.approved_date is None) != (not self.approved_by):
            errors["approved_by"] = (
                "Approved date and approver must be set together."
            )

        if (
            self.expiry_date is not None
            and self.created_at is not None
            and self.expiry_date < self.created_at
        ):
            errors["expiry_date"] = (
                "Expiry date cannot be earlier than the registration date."
            )

        if errors:
            raise ValidationError(errors)


class CategoryTransferRequest(models.Model):
    """
    A registrant's request to move to another category.

    Reviewed out-of-band by an admin; its status is independent of
    the parent registration and it never changes the registration.
    """

    class Status(models.TextChoices):
        PENDING = "pending", "Pending"
        APPROVED = "approved", "Approved"
        REJECTED = "rejected", "Rejected"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    registration = models.ForeignKey(
        Registration,
        on_delete=models.CASCADE,
        related_name="transfer_requests",
    )

    from_category = models.ForeignKey(
        Category,
        on_delete=models.PROTECT,
        related_name="outgoing_transfer_requests",
    )

    to_category = models.ForeignKey(
        Category,
        on_delete=models.PROTECT,
        related_name="incoming_transfer_requests",
    )

    # Snapshot at request time
    mobile_number = models.CharField(max_length=20)
    customer_id = models.CharField(max_length=50)
    full_name = models.CharField(max_length=200)

    reason = models.TextField(null=True, blank=True)

    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
        db_index=True,
    )

    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return (
            f"{self.customer_id}: "
            f"{self.from_category.name_english} → {self.to_category.name_english}"
        )
