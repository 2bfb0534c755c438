"""
registrations/signals.py

Change feed for the registrations table.

Every committed insert, update or delete of a Registration emits
`registrations_changed` with no delta payload; subscribers re-read
the store themselves.
"""

import logging
import uuid

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models.signals import post_delete, post_save, pre_save
from django.dispatch import Signal, receiver

from .models import Registration

logger = logging.getLogger(__name__)

# Sent with: action ("saved" | "deleted")
registrations_changed = Signal()


# ============================================================
# SUBSCRIPTIONS
# ============================================================

class Subscription:
    """Handle returned by subscribe(); unsubscribe() is idempotent."""

    def __init__(self, dispatch_uid):
        self.dispatch_uid = dispatch_uid
        self.active = True

    def unsubscribe(self):
        if not self.active:
            return
        registrations_changed.disconnect(
            sender=Registration,
            dispatch_uid=self.dispatch_uid,
        )
        self.active = False


def subscribe(callback):
    """
    Call `callback()` after every committed registration change.
    """

    def _receiver(sender, **kwargs):
        callback()

    dispatch_uid = f"registrations-feed-{uuid.uuid4().hex}"
    registrations_changed.connect(
        _receiver,
        sender=Registration,
        weak=False,
        dispatch_uid=dispatch_uid,
    )
    return Subscription(dispatch_uid)


def _broadcast(action):
    responses = registrations_changed.send_robust(
        sender=Registration,
        action=action,
    )
    for receiver_fn, response in responses:
        if isinstance(response, Exception):
            logger.error(
                "Registration change subscriber %r failed",
                receiver_fn,
                exc_info=response,
            )


# ============================================================
# PRE_SAVE: IMMUTABLE FIELDS
# ============================================================

@receiver(pre_save, sender=Registration)
def guard_immutable_fields(sender, instance, raw=False, **kwargs):
    """
    customer_id and created_at are fixed once the row exists.
    """
    if raw or instance._state.adding:
        return

    stored = (
        Registration.objects
        .filter(pk=instance.pk)
        .values(*Registration.IMMUTABLE_FIELDS)
        .first()
    )
    if stored is None:
        return

    for field in Registration.IMMUTABLE_FIELDS:
        if stored[field] != getattr(instance, field):
            raise ValidationError({field: f"{field} cannot be changed."})


# ============================================================
# POST_SAVE / POST_DELETE: FEED
# ============================================================

@receiver(post_save, sender=Registration)
@receiver(post_delete, sender=Registration)
def announce_registration_change(sender, instance, **kwargs):
    action = "deleted" if kwargs.get("signal") is post_delete else "saved"
    transaction.on_commit(lambda: _broadcast(action))
