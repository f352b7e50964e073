"""
Stock queries — read-only operations.

All methods are classmethods and use no locking. Nothing here is cached:
every call reads the store.
"""

from dataclasses import dataclass

from django.contrib.contenttypes.models import ContentType

from stockledger.models.backorder import Backorder
from stockledger.models.stock import StockRecord
from stockledger.models.warehouse import Warehouse
from stockledger.services.thresholds import StockLevel, evaluate


@dataclass(frozen=True)
class StockRow:
    """A stock record joined with its product, warehouse and level."""

    record: StockRecord
    product: object | None
    warehouse: Warehouse | None
    level: StockLevel

    @property
    def quantity(self) -> int:
        return self.record.quantity


def joined_records(queryset=None):
    """StockRecords with warehouse and product resolved, stable pk order."""
    qs = queryset if queryset is not None else StockRecord.objects.all()
    return qs.select_related('warehouse').prefetch_related('product').order_by('pk')


class StockQueries:
    """Read-only stock query methods."""

    @classmethod
    def get_record(cls, product, warehouse) -> StockRecord | None:
        """The (product, warehouse) record, or None if stock never arrived there."""
        return StockRecord.objects.for_key(product, warehouse).first()

    @classmethod
    def quantity(cls, product, warehouse) -> int:
        """On-hand quantity; a missing record counts as 0."""
        record = cls.get_record(product, warehouse)
        return record.quantity if record else 0

    @classmethod
    def list_stock(cls, product=None, warehouse=None) -> list[StockRow]:
        """Every stock row (optionally filtered) with its evaluated level."""
        qs = StockRecord.objects.all()
        if product is not None:
            ct = ContentType.objects.get_for_model(product)
            qs = qs.filter(content_type=ct, object_id=product.pk)
        if warehouse is not None:
            qs = qs.filter(warehouse=warehouse)

        return [
            StockRow(
                record=record,
                product=record.product,
                warehouse=record.warehouse,
                level=evaluate(record, record.product, record.warehouse),
            )
            for record in joined_records(qs)
        ]

    @classmethod
    def list_backorders(cls, status=None, product=None, warehouse=None):
        """Backorders, oldest first."""
        qs = Backorder.objects.select_related('warehouse', 'order_item')
        if status is not None:
            qs = qs.filter(status=status)
        if product is not None:
            ct = ContentType.objects.get_for_model(product)
            qs = qs.filter(content_type=ct, object_id=product.pk)
        if warehouse is not None:
            qs = qs.filter(warehouse=warehouse)
        return list(qs.order_by('created_at', 'pk'))
