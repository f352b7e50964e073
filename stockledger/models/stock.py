"""
StockRecord model — On-hand quantity of a product at a warehouse.
"""

from django.contrib.contenttypes.fields import GenericForeignKey
from django.contrib.contenttypes.models import ContentType
from django.db import models
from django.utils.translation import gettext_lazy as _


class StockRecordManager(models.Manager):
    """Manager with helper methods for StockRecord queries."""

    def for_product(self, product):
        """Filter records for a specific product."""
        ct = ContentType.objects.get_for_model(product)
        return self.filter(content_type=ct, object_id=product.pk)

    def at_warehouse(self, warehouse):
        """Filter by warehouse."""
        return self.filter(warehouse=warehouse)

    def for_key(self, product, warehouse):
        """The (product, warehouse) row, as a queryset of at most one."""
        return self.for_product(product).filter(warehouse=warehouse)

    def for_keys(self, keys):
        """Rows matching any of the given (content_type_id, object_id, warehouse_id) keys."""
        match = models.Q(pk__in=[])
        for content_type_id, object_id, warehouse_id in set(keys):
            match |= models.Q(
                content_type_id=content_type_id,
                object_id=object_id,
                warehouse_id=warehouse_id,
            )
        return self.filter(match)


class StockRecord(models.Model):
    """
    Quantity of a product held at a warehouse.

    Identity is (product, warehouse). Rows are created on first receipt or
    as a transfer destination and are never deleted, only zeroed.

    Only the ledger services mutate ``quantity``; they do it under the key
    lock in stockledger.locks with the row selected for update.
    """

    # Generic reference to product (agnostic)
    content_type = models.ForeignKey(
        ContentType,
        on_delete=models.PROTECT,
        verbose_name=_('Product type'),
    )
    object_id = models.PositiveIntegerField(
        verbose_name=_('Product ID'),
    )
    product = GenericForeignKey('content_type', 'object_id')

    warehouse = models.ForeignKey(
        'stockledger.Warehouse',
        on_delete=models.PROTECT,
        related_name='stock_records',
        verbose_name=_('Warehouse'),
    )

    quantity = models.IntegerField(
        default=0,
        verbose_name=_('Quantity'),
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = StockRecordManager()

    class Meta:
        verbose_name = _('Stock record')
        verbose_name_plural = _('Stock records')
        constraints = [
            models.UniqueConstraint(
                fields=['content_type', 'object_id', 'warehouse'],
                name='unique_stock_record_per_product_warehouse',
            )
        ]
        indexes = [
            models.Index(fields=['content_type', 'object_id'], name='stockrecord_product_idx'),
        ]

    @property
    def lock_key(self) -> tuple[int, int, int]:
        return (self.content_type_id, self.object_id, self.warehouse_id)

    def __str__(self) -> str:
        return f"{self.product} [{self.warehouse.code}]: {self.quantity}"
