"""
Order models — Customer orders whose lines reserve stock.
"""

from django.contrib.contenttypes.fields import GenericForeignKey
from django.contrib.contenttypes.models import ContentType
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from stockledger.models.enums import OrderStatus


class Order(models.Model):
    """Customer order shipped from a single warehouse."""

    customer_id = models.PositiveIntegerField(verbose_name=_('Customer ID'))
    warehouse = models.ForeignKey(
        'stockledger.Warehouse',
        on_delete=models.PROTECT,
        related_name='orders',
        verbose_name=_('Warehouse'),
    )
    status = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.PLACED,
        db_index=True,
        verbose_name=_('Status'),
    )
    actor_id = models.CharField(max_length=64, blank=True, default='')
    order_date = models.DateTimeField(default=timezone.now, verbose_name=_('Order date'))
    shipped_date = models.DateTimeField(null=True, blank=True, verbose_name=_('Shipped date'))

    class Meta:
        verbose_name = _('Order')
        verbose_name_plural = _('Orders')
        ordering = ['-order_date', '-pk']

    @property
    def is_fully_reserved(self) -> bool:
        return not self.items.filter(quantity_backordered__gt=0).exists()

    def __str__(self) -> str:
        return f"Order #{self.pk} ({self.status})"


class OrderItem(models.Model):
    """
    One order line.

    quantity_backordered = quantity_ordered - quantity_reserved
    """

    order = models.ForeignKey(
        Order,
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

    quantity_ordered = models.PositiveIntegerField(verbose_name=_('Ordered'))
    quantity_reserved = models.PositiveIntegerField(default=0, verbose_name=_('Reserved'))
    quantity_backordered = models.PositiveIntegerField(default=0, verbose_name=_('Backordered'))

    class Meta:
        verbose_name = _('Order item')
        verbose_name_plural = _('Order items')
        ordering = ['pk']

    def __str__(self) -> str:
        return (
            f"{self.quantity_ordered}x {self.product} "
            f"(reserved {self.quantity_reserved}, backordered {self.quantity_backordered})"
        )
