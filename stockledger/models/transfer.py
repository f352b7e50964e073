"""
Transfer model — Audit record of a warehouse-to-warehouse transfer request.
"""

from django.contrib.contenttypes.fields import GenericForeignKey
from django.contrib.contenttypes.models import ContentType
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from stockledger.models.enums import MovementStatus


class Transfer(models.Model):
    """
    One row per transfer request.

    This is the request/audit record. The stock effect lives in the two
    Movement rows pointing back here (one if the source had no stock row).
    """

    content_type = models.ForeignKey(
        ContentType,
        on_delete=models.PROTECT,
        related_name='+',
    )
    object_id = models.PositiveIntegerField()
    product = GenericForeignKey('content_type', 'object_id')

    source = models.ForeignKey(
        'stockledger.Warehouse',
        on_delete=models.PROTECT,
        related_name='transfers_out',
        verbose_name=_('Source warehouse'),
    )
    destination = models.ForeignKey(
        'stockledger.Warehouse',
        on_delete=models.PROTECT,
        related_name='transfers_in',
        verbose_name=_('Destination warehouse'),
    )
    quantity = models.PositiveIntegerField(verbose_name=_('Quantity'))
    status = models.CharField(
        max_length=20,
        choices=MovementStatus.choices,
        default=MovementStatus.PENDING,
        verbose_name=_('Status'),
    )
    actor_id = models.CharField(max_length=64, blank=True, default='', verbose_name=_('Actor'))
    transfer_date = models.DateTimeField(default=timezone.now, db_index=True, verbose_name=_('Transfer date'))

    class Meta:
        verbose_name = _('Transfer')
        verbose_name_plural = _('Transfers')
        ordering = ['-transfer_date', '-pk']

    def __str__(self) -> str:
        return f"{self.quantity}x {self.product}: {self.source.code} → {self.destination.code}"
