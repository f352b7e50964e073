"""
Helpers shared by the state-changing services.

Validation here runs before any write. apply_delta() is the only place a
StockRecord quantity changes; callers hold the key lock and an open
transaction.
"""

import logging
from contextlib import contextmanager

from django.db import DatabaseError
from django.db.models import F
from django.utils import timezone

from stockledger.conf import ledger_settings
from stockledger.exceptions import InvariantViolation, PersistenceError, ValidationError
from stockledger.models.stock import StockRecord
from stockledger.models.warehouse import Warehouse

logger = logging.getLogger('stockledger')


def validate_quantity(quantity) -> int:
    """Positive integer or ValidationError('INVALID_QUANTITY')."""
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise ValidationError('INVALID_QUANTITY', requested=quantity)
    return quantity


def validate_product(product, check_exists: bool = False):
    """
    Require a saved product instance.

    With check_exists, also confirm the row is still present in its table.
    """
    if product is None or getattr(product, 'pk', None) is None:
        raise ValidationError('INVALID_PRODUCT', product=product)
    if check_exists:
        try:
            exists = type(product)._default_manager.filter(pk=product.pk).exists()
        except DatabaseError as exc:
            raise PersistenceError('STORE_FAILURE', step='product_lookup') from exc
        if not exists:
            raise ValidationError('INVALID_PRODUCT', product_id=product.pk)
    return product


def validate_positive_id(value, code: str) -> int:
    """Positive integer id or ValidationError(code)."""
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValidationError(code, value=value)
    return value


def resolve_warehouse(warehouse) -> Warehouse:
    """Accept a Warehouse or its pk."""
    if isinstance(warehouse, Warehouse):
        if warehouse.pk is None:
            raise ValidationError('INVALID_WAREHOUSE', warehouse=str(warehouse))
        return warehouse
    if isinstance(warehouse, bool) or not isinstance(warehouse, int):
        raise ValidationError('INVALID_WAREHOUSE', warehouse=warehouse)
    try:
        return Warehouse.objects.get(pk=warehouse)
    except Warehouse.DoesNotExist:
        raise ValidationError('INVALID_WAREHOUSE', warehouse_id=warehouse) from None
    except DatabaseError as exc:
        raise PersistenceError('STORE_FAILURE', step='warehouse_lookup') from exc


class StepTracker:
    """Remembers which sub-step of an operation is running."""

    def __init__(self, operation: str):
        self.operation = operation
        self.step = 'begin'

    def enter(self, step: str) -> None:
        self.step = step


@contextmanager
def tracked_steps(operation: str, **context):
    """
    Turn store failures into PersistenceError naming the failed sub-step.

    Wrap the transaction.atomic() block so the rollback has already
    happened when the error reaches the caller.
    """
    tracker = StepTracker(operation)
    try:
        yield tracker
    except DatabaseError as exc:
        logger.error(
            "stock.persistence_failed",
            extra={"operation": operation, "step": tracker.step, **context},
        )
        raise PersistenceError(
            'STORE_FAILURE',
            operation=operation,
            step=tracker.step,
            error=str(exc),
        ) from exc


def apply_delta(record: StockRecord, delta: int) -> StockRecord:
    """
    Add delta to a locked record.

    Raises:
        InvariantViolation('NEGATIVE_STOCK'): If the result would be negative
            and STOCK_LEDGER['ALLOW_NEGATIVE_STOCK'] is off
    """
    new_quantity = record.quantity + delta
    if new_quantity < 0 and not ledger_settings.ALLOW_NEGATIVE_STOCK:
        raise InvariantViolation(
            'NEGATIVE_STOCK',
            available=record.quantity,
            requested=-delta,
            warehouse_id=record.warehouse_id,
        )

    StockRecord.objects.filter(pk=record.pk).update(
        quantity=F('quantity') + delta,
        updated_at=timezone.now(),
    )
    record.quantity = new_quantity
    if new_quantity < 0:
        logger.warning(
            "stock.negative",
            extra={"record_id": record.pk, "quantity": new_quantity},
        )
    return record
