"""
Stock movements — receipts and inventory adjustments.

Each call writes exactly one Movement with source = destination = the
warehouse whose stock changed.
"""

import logging

from django.contrib.contenttypes.models import ContentType
from django.db import transaction

from stockledger.adapters.audit import emit
from stockledger.exceptions import ValidationError
from stockledger.locks import key_lock, lock_for_update, stock_key
from stockledger.models.enums import MovementStatus
from stockledger.models.movement import Movement
from stockledger.models.stock import StockRecord
from stockledger.services.common import (
    apply_delta,
    resolve_warehouse,
    tracked_steps,
    validate_product,
    validate_quantity,
)

logger = logging.getLogger('stockledger')


class StockMovements:
    """State-changing receipt and adjustment methods."""

    @classmethod
    def receive(cls, quantity, product, warehouse,
                reason='Receipt', actor=None) -> StockRecord:
        """
        Stock entry.

        Creates or increments the StockRecord and journals +quantity.

        Raises:
            ValidationError('INVALID_QUANTITY'): If quantity <= 0
        """
        validate_quantity(quantity)
        validate_product(product)
        warehouse = resolve_warehouse(warehouse)
        actor_id = str(actor.id) if actor is not None else ''

        with tracked_steps('receive', product_id=product.pk, warehouse_id=warehouse.pk) as steps:
            ct = ContentType.objects.get_for_model(product)

            with key_lock(stock_key(product, warehouse)), transaction.atomic():
                steps.enter('stock_update')
                record = lock_for_update(
                    StockRecord.objects.for_key(product, warehouse)
                ).first()
                if record is None:
                    record = StockRecord.objects.create(
                        content_type=ct,
                        object_id=product.pk,
                        warehouse=warehouse,
                        quantity=quantity,
                    )
                    created = True
                else:
                    apply_delta(record, quantity)
                    created = False

                steps.enter('journal')
                Movement.objects.create(
                    content_type=ct,
                    object_id=product.pk,
                    source=warehouse,
                    destination=warehouse,
                    quantity=quantity,
                    status=MovementStatus.RECEIVED,
                    reason=reason,
                    actor_id=actor_id,
                )

        logger.info(
            "stock.receive",
            extra={
                "product": str(product),
                "qty": quantity,
                "warehouse": warehouse.code,
                "reason": reason,
                "record_id": record.pk,
            },
        )
        verb = "Added" if created else "Updated"
        emit(
            actor,
            'stock.receive',
            f"{verb} stock for product {product.pk} in warehouse {warehouse.pk} by quantity {quantity}",
        )
        return record

    @classmethod
    def adjust(cls, record: StockRecord, new_quantity, reason, actor=None) -> Movement | None:
        """
        Inventory adjustment.

        Calculates delta automatically: new_quantity - record.quantity

        Raises:
            ValidationError('REASON_REQUIRED'): If reason is empty
            ValidationError('INVALID_QUANTITY'): If new_quantity is not an int
            InvariantViolation('NEGATIVE_STOCK'): If new_quantity < 0 and
                negative stock is not allowed
        """
        if not reason:
            raise ValidationError('REASON_REQUIRED')
        if isinstance(new_quantity, bool) or not isinstance(new_quantity, int):
            raise ValidationError('INVALID_QUANTITY', requested=new_quantity)

        actor_id = str(actor.id) if actor is not None else ''

        with tracked_steps('adjust', record_id=record.pk) as steps:
            with key_lock(record.lock_key), transaction.atomic():
                steps.enter('stock_update')
                locked = lock_for_update(StockRecord.objects.filter(pk=record.pk)).get()
                delta = new_quantity - locked.quantity

                if delta == 0:
                    return None

                apply_delta(locked, delta)
                steps.enter('journal')
                move = Movement.objects.create(
                    content_type_id=locked.content_type_id,
                    object_id=locked.object_id,
                    source_id=locked.warehouse_id,
                    destination_id=locked.warehouse_id,
                    quantity=delta,
                    status=MovementStatus.RECEIVED,
                    reason=f"Adjustment: {reason}",
                    actor_id=actor_id,
                )

        record.quantity = locked.quantity
        logger.info(
            "stock.adjust",
            extra={
                "record_id": record.pk,
                "delta": delta,
                "reason": reason,
            },
        )
        emit(
            actor,
            'stock.adjust',
            f"Adjusted stock record {record.pk} by {delta} ({reason})",
        )
        return move
