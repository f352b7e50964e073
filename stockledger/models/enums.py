"""
Enums for Stockledger models.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class MovementStatus(models.TextChoices):
    """
    Status of a movement or transfer.

    A transfer carries the status its requester chose; the journal legs it
    produces are always IN_TRANSIT (debit) and RECEIVED (credit).
    """
    PENDING = 'Pending', _('Pending')
    IN_TRANSIT = 'In Transit', _('In Transit')
    RECEIVED = 'Received', _('Received')


class BackorderStatus(models.TextChoices):
    """Backorder lifecycle status."""
    PENDING = 'Pending', _('Pending')        # Waiting for stock
    FULFILLED = 'Fulfilled', _('Fulfilled')  # Covered from stock on hand
    CANCELLED = 'Cancelled', _('Cancelled')  # Demand withdrawn


class OrderStatus(models.TextChoices):
    """Customer order status."""
    PLACED = 'Placed', _('Placed')
    SHIPPED = 'Shipped', _('Shipped')


class PurchaseOrderStatus(models.TextChoices):
    """Supplier purchase order status."""
    PENDING = 'Pending', _('Pending')        # Ordered, not yet on hand
    RECEIVED = 'Received', _('Received')     # Lines credited to stock
    CANCELLED = 'Cancelled', _('Cancelled')
