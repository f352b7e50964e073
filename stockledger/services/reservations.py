"""
Stock reservations — allocate on-hand stock to a demand, backorder the rest.

Reservation is an allocation, not a physical movement: it decrements the
StockRecord and writes no Movement.
"""

import logging
from dataclasses import dataclass

from django.contrib.contenttypes.models import ContentType
from django.db import transaction

from stockledger.adapters.audit import emit
from stockledger.locks import key_lock, lock_for_update, stock_key
from stockledger.models.backorder import Backorder
from stockledger.models.stock import StockRecord
from stockledger.services.common import (
    apply_delta,
    resolve_warehouse,
    tracked_steps,
    validate_product,
    validate_quantity,
)

logger = logging.getLogger('stockledger')


@dataclass(frozen=True)
class ReservationResult:
    """Outcome of one reserve() call."""

    requested: int
    reserved_quantity: int
    backorder: Backorder | None = None

    @property
    def backordered_quantity(self) -> int:
        return self.requested - self.reserved_quantity

    @property
    def is_complete(self) -> bool:
        return self.backorder is None


class StockReservations:
    """Reservation methods."""

    @classmethod
    def reserve(cls, quantity, product, warehouse, actor=None) -> ReservationResult:
        """
        Reserve quantity of product at warehouse.

        - Enough on hand: decrement by quantity, no backorder.
        - Short: one PENDING Backorder for the shortfall; whatever was on
          hand (if anything) is reserved and the record is zeroed.
        - No record at all counts as zero on hand.

        Raises:
            ValidationError('INVALID_QUANTITY'): quantity not a positive int
            ValidationError('INVALID_PRODUCT' | 'INVALID_WAREHOUSE')
            PersistenceError: store failure; nothing was applied

        Concurrency:
            - Holds the (product, warehouse) key lock until commit
            - select_for_update() on the StockRecord
            - Must not run inside a caller's transaction.atomic(): the key
              lock would be released before the outer commit
        """
        validate_quantity(quantity)
        validate_product(product)
        warehouse = resolve_warehouse(warehouse)

        with tracked_steps('reserve', product_id=product.pk, warehouse_id=warehouse.pk) as steps:
            ct = ContentType.objects.get_for_model(product)
            key = stock_key(product, warehouse)

            with key_lock(key), transaction.atomic():
                steps.enter('stock_read')
                record = lock_for_update(
                    StockRecord.objects.for_key(product, warehouse)
                ).first()
                available = max(record.quantity, 0) if record else 0

                if available >= quantity:
                    steps.enter('stock_update')
                    apply_delta(record, -quantity)
                    result = ReservationResult(requested=quantity, reserved_quantity=quantity)
                else:
                    steps.enter('backorder_insert')
                    backorder = Backorder.objects.create(
                        content_type=ct,
                        object_id=product.pk,
                        warehouse=warehouse,
                        quantity=quantity - available,
                    )
                    if available > 0:
                        steps.enter('stock_update')
                        apply_delta(record, -available)
                    result = ReservationResult(
                        requested=quantity,
                        reserved_quantity=available,
                        backorder=backorder,
                    )

        logger.info(
            "stock.reserve",
            extra={
                "product": str(product),
                "warehouse": warehouse.code,
                "requested": quantity,
                "reserved": result.reserved_quantity,
            },
        )
        if result.backorder is not None:
            logger.warning(
                "stock.backorder.created",
                extra={
                    "backorder_id": result.backorder.pk,
                    "product": str(product),
                    "warehouse": warehouse.code,
                    "qty": result.backorder.quantity,
                },
            )
        emit(
            actor,
            'stock.reserve',
            f"Reserved {result.reserved_quantity} of {quantity} for product {product.pk} "
            f"in warehouse {warehouse.pk}",
        )
        return result
