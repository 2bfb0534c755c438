"""
notifications/management/commands/check_registration_expiry.py

One-shot expiry check over pending registrations.

Catch-all for cron / manual use; the live bell relies on the
change feed and the in-process scheduler.
"""

from django.core.management.base import BaseCommand
from django.utils import timezone

from notifications.services.expiry_alerts import ExpiryAlertConfig, build_snapshot
from registrations.selectors import pending_registrations


class Command(BaseCommand):
    help = "Report pending registrations that are expired or expiring soon"

    def add_arguments(self, parser):
        parser.add_argument(
            "--list",
            action="store_true",
            help="Print every alerted registration, expired first",
        )

    def handle(self, *args, **options):
        now = timezone.now()
        config = ExpiryAlertConfig.from_settings()

        self.stdout.write(
            self.style.NOTICE(
                f"[{now:%Y-%m-%d %H:%M:%S}] Checking registration expiry"
            )
        )

        snapshot = build_snapshot(pending_registrations(), now, config.policy)

        if options["list"]:
            for alert in snapshot.combined:
                self.stdout.write(
                    f"{alert.customer_id}\t{alert.name}\t{alert.phone}\t"
                    f"{alert.category}\t{alert.days_remaining}"
                )

        self.stdout.write(
            self.style.SUCCESS(
                f"[{now:%Y-%m-%d %H:%M:%S}] Completed: "
                f"{snapshot.expired_count} expired, "
                f"{snapshot.expiring_soon_count} expiring within "
                f"{config.soon_window_days} days"
            )
        )
