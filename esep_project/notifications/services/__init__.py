"""
Notification service layer.

Expiry alerts are computed, never stored: every refresh rebuilds
the snapshot from the pending registrations.
"""

# =====================================================
# EXPIRY ALERTS
# =====================================================
from .expiry_alerts import (
    ExpiryAlert,
    ExpiryAlertAggregator,
    ExpiryAlertConfig,
    build_snapshot,
)

# =====================================================
# PUBLIC EXPORTS
# =====================================================
__all__ = [
    "ExpiryAlert",
    "ExpiryAlertAggregator",
    "ExpiryAlertConfig",
    "build_snapshot",
]
