"""
Movement model — Immutable journal of quantity changes.
"""

from django.contrib.contenttypes.fields import GenericForeignKey
from django.contrib.contenttypes.models import ContentType
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from stockledger.models.enums import MovementStatus


class Movement(models.Model):
    """
    Immutable record of a quantity change.

    Rules:
    - NEVER update() or delete()
    - Corrections are new Movements with inverse quantity
    - Receipts set source = destination = the receiving warehouse
    - Transfer legs set only one side: source (debit, negative) or
      destination (credit, positive)

    Reservations write no Movement: they allocate stock, nothing moves.
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
        null=True,
        blank=True,
        related_name='outgoing_movements',
        verbose_name=_('Source warehouse'),
    )
    destination = models.ForeignKey(
        'stockledger.Warehouse',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='incoming_movements',
        verbose_name=_('Destination warehouse'),
    )

    quantity = models.IntegerField(
        verbose_name=_('Quantity'),
        help_text=_('Positive = stock in, negative = stock out'),
    )
    status = models.CharField(
        max_length=20,
        choices=MovementStatus.choices,
        verbose_name=_('Status'),
    )

    transfer = models.ForeignKey(
        'stockledger.Transfer',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='movements',
    )
    reason = models.CharField(max_length=255, blank=True, default='', verbose_name=_('Reason'))
    actor_id = models.CharField(max_length=64, blank=True, default='', verbose_name=_('Actor'))

    created_at = models.DateTimeField(default=timezone.now, db_index=True, verbose_name=_('Created at'))

    class Meta:
        verbose_name = _('Movement')
        verbose_name_plural = _('Movements')
        ordering = ['-created_at', '-pk']
        indexes = [
            models.Index(fields=['content_type', 'object_id', 'created_at'], name='movement_product_time_idx'),
        ]

    def save(self, *args, **kwargs):
        if self.pk:
            raise ValueError(
                "Movements are immutable. "
                "To correct one, record a new Movement with the inverse quantity."
            )
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValueError(
            "Movements are immutable. "
            "To reverse one, record a new Movement with the inverse quantity."
        )

    @property
    def warehouse(self):
        """The warehouse whose stock this entry changed."""
        return self.destination if self.quantity > 0 else self.source

    def __str__(self) -> str:
        sign = '+' if self.quantity > 0 else ''
        return f"{sign}{self.quantity} | {self.status}"
