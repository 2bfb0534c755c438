import uuid

import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("directory", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Registration",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("customer_id", models.CharField(help_text="Human-facing registration code", max_length=50, unique=True)),
                ("full_name", models.CharField(max_length=200)),
                ("mobile_number", models.CharField(db_index=True, max_length=20)),
                ("address", models.TextField(blank=True)),
                ("ward", models.CharField(blank=True, max_length=50)),
                ("agent", models.CharField(blank=True, max_length=150)),
                ("status", models.CharField(choices=[("pending", "Pending"), ("approved", "Approved"), ("rejected", "Rejected")], db_index=True, default="pending", max_length=20)),
                ("fee", models.DecimalField(decimal_places=2, default=0, max_digits=10, validators=[django.core.validators.MinValueValidator(0)])),
                ("created_at", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ("approved_date", models.DateTimeField(blank=True, null=True)),
                ("approved_by", models.CharField(blank=True, max_length=150, null=True)),
                ("expiry_date", models.DateTimeField(blank=True, null=True)),
                ("category", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="registrations", to="directory.category")),
                ("panchayath", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="registrations", to="directory.panchayath")),
                ("preference_category", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="preferred_by_registrations", to="directory.category")),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [models.Index(fields=["status", "expiry_date"], name="registration_status_expiry_idx")],
            },
        ),
        migrations.CreateModel(
            name="CategoryTransferRequest",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("mobile_number", models.CharField(max_length=20)),
                ("customer_id", models.CharField(max_length=50)),
                ("full_name", models.CharField(max_length=200)),
                ("reason", models.TextField(blank=True, null=True)),
                ("status", models.CharField(choices=[("pending", "Pending"), ("approved", "Approved"), ("rejected", "Rejected")], db_index=True, default="pending", max_length=20)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("from_category", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="outgoing_transfer_requests", to="directory.category")),
                ("registration", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="transfer_requests", to="registrations.registration")),
                ("to_category", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="incoming_transfer_requests", to="directory.category")),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
    ]
