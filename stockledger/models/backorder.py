"""
Backorder model — Recorded unmet demand.
"""

from django.contrib.contenttypes.fields import GenericForeignKey
from django.contrib.contenttypes.models import ContentType
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from stockledger.models.enums import BackorderStatus


class BackorderQuerySet(models.QuerySet):

    def pending(self):
        return self.filter(status=BackorderStatus.PENDING)

    def for_key(self, product, warehouse):
        ct = ContentType.objects.get_for_model(product)
        return self.filter(content_type=ct, object_id=product.pk, warehouse=warehouse)


class Backorder(models.Model):
    """
    Shortfall of a reservation, waiting for stock.

    LIFECYCLE:

        PENDING ──fulfill()──► FULFILLED
           │
           └──cancel()───► CANCELLED

    Quantity never changes after creation. Nothing resolves a backorder
    automatically when stock arrives; fulfill() is an explicit call.
    """

    content_type = models.ForeignKey(
        ContentType,
        on_delete=models.PROTECT,
        related_name='+',
    )
    object_id = models.PositiveIntegerField()
    product = GenericForeignKey('content_type', 'object_id')

    warehouse = models.ForeignKey(
        'stockledger.Warehouse',
        on_delete=models.PROTECT,
        related_name='backorders',
        verbose_name=_('Warehouse'),
    )
    quantity = models.PositiveIntegerField(verbose_name=_('Quantity'))
    status = models.CharField(
        max_length=20,
        choices=BackorderStatus.choices,
        default=BackorderStatus.PENDING,
        db_index=True,
        verbose_name=_('Status'),
    )
    order_item = models.ForeignKey(
        'stockledger.OrderItem',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='backorders',
    )

    created_at = models.DateTimeField(default=timezone.now)
    resolved_at = models.DateTimeField(
        null=True,
        blank=True,
        verbose_name=_('Resolved at'),
    )
    metadata = models.JSONField(default=dict, blank=True)

    objects = BackorderQuerySet.as_manager()

    class Meta:
        verbose_name = _('Backorder')
        verbose_name_plural = _('Backorders')
        ordering = ['created_at', 'pk']
        indexes = [
            models.Index(fields=['content_type', 'object_id', 'warehouse', 'status'], name='backorder_key_status_idx'),
        ]

    @property
    def is_pending(self) -> bool:
        return self.status == BackorderStatus.PENDING

    def __str__(self) -> str:
        return f"{self.quantity}x {self.product} @ {self.warehouse.code} ({self.status})"
