"""
Warehouse model — Where stock exists.
"""

from django.core.validators import MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _


class Warehouse(models.Model):
    """
    A physical location holding stock.

    Warehouses are stable entities managed by the host project; the ledger
    only reads them. ``capacity`` drives the capacity-relative low-stock
    rule and the "full" flag.

    Examples:
        Warehouse.objects.create(code='main', name='Main DC', capacity=1000)
        Warehouse.objects.create(code='annex', name='Annex')  # no capacity
    """

    code = models.SlugField(
        unique=True,
        max_length=50,
        verbose_name=_('Code'),
        help_text=_('Unique identifier (e.g. main, annex)'),
    )
    name = models.CharField(
        max_length=100,
        verbose_name=_('Name'),
    )
    capacity = models.PositiveIntegerField(
        null=True,
        blank=True,
        validators=[MinValueValidator(1)],
        verbose_name=_('Capacity'),
        help_text=_('Empty = no capacity limit tracked.'),
    )
    metadata = models.JSONField(
        default=dict,
        blank=True,
        verbose_name=_('Metadata'),
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Warehouse')
        verbose_name_plural = _('Warehouses')
        ordering = ['code']

    def __str__(self) -> str:
        return self.name
