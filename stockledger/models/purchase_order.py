"""
Purchase order models — Supplier orders whose receipt credits stock.
"""

from django.contrib.contenttypes.fields import GenericForeignKey
from django.contrib.contenttypes.models import ContentType
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from stockledger.models.enums import PurchaseOrderStatus


class PurchaseOrder(models.Model):
    """
    Order placed with a supplier.

    LIFECYCLE:

        PENDING ──receive()──► RECEIVED
           │
           └──cancel()───► CANCELLED

    Receiving happens once; it credits every line to its warehouse.
    """

    supplier_id = models.PositiveIntegerField(verbose_name=_('Supplier ID'))
    status = models.CharField(
        max_length=20,
        choices=PurchaseOrderStatus.choices,
        default=PurchaseOrderStatus.PENDING,
        db_index=True,
        verbose_name=_('Status'),
    )
    actor_id = models.CharField(max_length=64, blank=True, default='')
    order_date = models.DateTimeField(default=timezone.now, verbose_name=_('Order date'))
    received_at = models.DateTimeField(null=True, blank=True, verbose_name=_('Received at'))

    class Meta:
        verbose_name = _('Purchase order')
        verbose_name_plural = _('Purchase orders')
        ordering = ['-order_date', '-pk']

    def __str__(self) -> str:
        return f"PO #{self.pk} ({self.status})"


class PurchaseOrderItem(models.Model):
    """One purchase order line, delivered to a single warehouse."""

    purchase_order = models.ForeignKey(
        PurchaseOrder,
        on_delete=models.CASCADE,
        related_name='items',
    )
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
        related_name='purchase_order_items',
        verbose_name=_('Warehouse'),
    )
    quantity = models.PositiveIntegerField(verbose_name=_('Quantity'))

    class Meta:
        verbose_name = _('Purchase order item')
        verbose_name_plural = _('Purchase order items')
        ordering = ['pk']

    @property
    def lock_key(self) -> tuple[int, int, int]:
        return (self.content_type_id, self.object_id, self.warehouse_id)

    def __str__(self) -> str:
        return f"{self.quantity}x {self.product} -> {self.warehouse.code}"
