from django.apps import AppConfig
import os


class NotificationsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "notifications"
    verbose_name = "Expiry Notifications"

    def ready(self):
        # --------------------------------------------------
        # Expiry alerts: start the hourly re-poll early
        # --------------------------------------------------
        # runserver: only the autoreload child sets RUN_MAIN.
        # Other servers start it lazily on the first
        # get_aggregator() call instead.
        if os.environ.get("RUN_MAIN") != "true":
            return

        from .scheduler import start_scheduler
        start_scheduler()
