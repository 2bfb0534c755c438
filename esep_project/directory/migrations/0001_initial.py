import uuid

import django.core.validators
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Category",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name_english", models.CharField(max_length=150)),
                ("name_malayalam", models.CharField(max_length=150)),
                ("expiry_days", models.PositiveIntegerField(default=30, help_text="Validity period applied at approval when no expiry exists", validators=[django.core.validators.MinValueValidator(1)])),
                ("is_active", models.BooleanField(db_index=True, default=True)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                "verbose_name_plural": "categories",
                "ordering": ["name_english"],
            },
        ),
        migrations.CreateModel(
            name="Panchayath",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=150)),
                ("district", models.CharField(blank=True, max_length=150)),
                ("is_active", models.BooleanField(db_index=True, default=True)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                "ordering": ["name"],
            },
        ),
    ]
