# user_app/views/__init__.py

"""
User App Views
==============

Registrant-facing views.
"""

# Category transfer
from .transfer_views import (
    submit_transfer_request,
    transfer_categories,
)


__all__ = [
    'submit_transfer_request',
    'transfer_categories',
]
