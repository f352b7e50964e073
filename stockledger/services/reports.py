"""
Reporting projections over stock, journal, products and warehouses.

Read-only: nothing here writes, locks or caches. Rows whose product has
disappeared from the catalog are skipped (alerts, valuation) or shown
with a None name (movement history).
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from django.contrib.contenttypes.models import ContentType
from django.db.models import Q

from stockledger.conf import ledger_settings
from stockledger.models.movement import Movement
from stockledger.models.transfer import Transfer
from stockledger.protocols.product import get_product_attr
from stockledger.services.queries import StockRow, joined_records
from stockledger.services.thresholds import evaluate

logger = logging.getLogger('stockledger')


@dataclass(frozen=True)
class MovementEntry:
    """One journal line with names resolved for display."""

    id: int
    product_id: int
    product_name: str | None
    source_id: int | None
    source_name: str | None
    destination_id: int | None
    destination_name: str | None
    quantity: int
    status: str
    reason: str
    created_at: datetime


@dataclass(frozen=True)
class ValuationRow:
    """Inventory value of one product across all warehouses."""

    product_id: int
    product_name: str | None
    total_quantity: int
    total_value: Decimal


class StockReports:
    """Read projections for history, alerts and valuation."""

    @classmethod
    def list_movements(cls, product=None, warehouse=None, limit=None) -> list[MovementEntry]:
        """
        Stock movement history, newest first.

        Args:
            product: Only this product's movements
            warehouse: Only movements into or out of this warehouse
            limit: Max rows (defaults to MOVEMENT_HISTORY_LIMIT)
        """
        qs = Movement.objects.select_related('source', 'destination').prefetch_related('product')
        if product is not None:
            ct = ContentType.objects.get_for_model(product)
            qs = qs.filter(content_type=ct, object_id=product.pk)
        if warehouse is not None:
            qs = qs.filter(Q(source=warehouse) | Q(destination=warehouse))
        qs = qs.order_by('-created_at', '-pk')

        limit = limit if limit is not None else ledger_settings.MOVEMENT_HISTORY_LIMIT
        if limit is not None:
            qs = qs[:limit]

        return [
            MovementEntry(
                id=move.pk,
                product_id=move.object_id,
                product_name=get_product_attr(move.product, 'name') if move.product else None,
                source_id=move.source_id,
                source_name=move.source.name if move.source else None,
                destination_id=move.destination_id,
                destination_name=move.destination.name if move.destination else None,
                quantity=move.quantity,
                status=move.status,
                reason=move.reason,
                created_at=move.created_at,
            )
            for move in qs
        ]

    @classmethod
    def list_transfers(cls, product=None) -> list[Transfer]:
        """Transfer requests, newest first."""
        qs = Transfer.objects.select_related('source', 'destination')
        if product is not None:
            ct = ContentType.objects.get_for_model(product)
            qs = qs.filter(content_type=ct, object_id=product.pk)
        return list(qs.order_by('-transfer_date', '-pk'))

    @classmethod
    def list_low_stock(cls) -> list[StockRow]:
        """Every stock row whose evaluation flags it as low, in pk order."""
        rows = []
        total = 0
        for record in joined_records():
            total += 1
            product = record.product
            if product is None:
                continue
            level = evaluate(record, product, record.warehouse)
            if level.is_low:
                rows.append(StockRow(record=record, product=product,
                                     warehouse=record.warehouse, level=level))

        logger.info(
            "stock.low_stock.checked",
            extra={"rows": total, "low": len(rows)},
        )
        return rows

    @classmethod
    def inventory_value(cls) -> list[ValuationRow]:
        """
        Sum of quantity x cost_price per product.

        Products without a cost price, or missing from the catalog, are left out.
        """
        totals: dict[tuple[int, int], dict] = {}
        for record in joined_records():
            product = record.product
            if product is None:
                continue
            cost_price = get_product_attr(product, 'cost_price')
            if cost_price is None:
                continue

            entry = totals.setdefault(
                (record.content_type_id, record.object_id),
                {
                    'product_id': record.object_id,
                    'product_name': get_product_attr(product, 'name'),
                    'total_quantity': 0,
                    'total_value': Decimal('0'),
                },
            )
            entry['total_quantity'] += record.quantity
            entry['total_value'] += record.quantity * Decimal(str(cost_price))

        return [ValuationRow(**entry) for entry in totals.values()]
