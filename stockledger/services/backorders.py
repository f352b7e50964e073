"""
Backorder lifecycle — explicit cancel / fulfill of recorded shortfalls.

Nothing here runs automatically when stock arrives.
"""

import logging

from django.db import transaction
from django.utils import timezone

from stockledger.adapters.audit import emit
from stockledger.exceptions import NotFoundError, ValidationError
from stockledger.locks import key_lock, lock_for_update
from stockledger.models.backorder import Backorder
from stockledger.models.enums import BackorderStatus
from stockledger.models.stock import StockRecord
from stockledger.services.common import apply_delta, resolve_warehouse, tracked_steps

logger = logging.getLogger('stockledger')


def _backorder_pk(backorder) -> int:
    pk = getattr(backorder, 'pk', backorder)
    if isinstance(pk, bool) or not isinstance(pk, int):
        raise NotFoundError('BACKORDER_NOT_FOUND', backorder=backorder)
    return pk


def _locked_pending(pk: int) -> Backorder:
    try:
        backorder = lock_for_update(Backorder.objects.filter(pk=pk)).get()
    except Backorder.DoesNotExist:
        raise NotFoundError('BACKORDER_NOT_FOUND', backorder_id=pk) from None

    if backorder.status != BackorderStatus.PENDING:
        raise ValidationError(
            'INVALID_STATUS',
            current=backorder.status,
            expected=BackorderStatus.PENDING,
        )
    return backorder


class StockBackorders:
    """Backorder queue methods."""

    @classmethod
    def pending(cls, product, warehouse):
        """PENDING backorders for (product, warehouse), oldest first."""
        warehouse = resolve_warehouse(warehouse)
        return Backorder.objects.pending().for_key(product, warehouse).order_by('created_at', 'pk')

    @classmethod
    def cancel(cls, backorder, reason='', actor=None) -> Backorder:
        """
        Cancel a backorder.

        Transition: PENDING -> CANCELLED
        """
        pk = _backorder_pk(backorder)

        with tracked_steps('cancel_backorder', backorder_id=pk) as steps:
            with transaction.atomic():
                steps.enter('backorder_read')
                backorder = _locked_pending(pk)

                steps.enter('backorder_update')
                backorder.status = BackorderStatus.CANCELLED
                backorder.resolved_at = timezone.now()
                if reason:
                    backorder.metadata['cancel_reason'] = reason
                backorder.save(update_fields=['status', 'resolved_at', 'metadata'])

        logger.info(
            "stock.backorder.cancelled",
            extra={"backorder_id": pk, "reason": reason},
        )
        emit(actor, 'backorder.cancelled', f"Cancelled backorder {pk} ({reason or 'no reason'})")
        return backorder

    @classmethod
    def fulfill(cls, backorder, actor=None) -> Backorder:
        """
        Fulfill a backorder from stock on hand.

        1. Validates status is PENDING
        2. Requires on-hand stock covering the full backorder quantity
        3. Decrements the StockRecord (an allocation, no Movement)
        4. Transition: PENDING -> FULFILLED

        Raises:
            ValidationError('INSUFFICIENT_QUANTITY'): stock cannot cover it
        """
        pk = _backorder_pk(backorder)

        with tracked_steps('fulfill_backorder', backorder_id=pk) as steps:
            steps.enter('backorder_read')
            try:
                snapshot = Backorder.objects.get(pk=pk)
            except Backorder.DoesNotExist:
                raise NotFoundError('BACKORDER_NOT_FOUND', backorder_id=pk) from None
            key = (snapshot.content_type_id, snapshot.object_id, snapshot.warehouse_id)

            with key_lock(key), transaction.atomic():
                backorder = _locked_pending(pk)

                steps.enter('stock_read')
                record = lock_for_update(
                    StockRecord.objects.filter(
                        content_type_id=backorder.content_type_id,
                        object_id=backorder.object_id,
                        warehouse_id=backorder.warehouse_id,
                    )
                ).first()
                available = record.quantity if record else 0
                if available < backorder.quantity:
                    raise ValidationError(
                        'INSUFFICIENT_QUANTITY',
                        available=available,
                        requested=backorder.quantity,
                    )

                steps.enter('stock_update')
                apply_delta(record, -backorder.quantity)

                steps.enter('backorder_update')
                backorder.status = BackorderStatus.FULFILLED
                backorder.resolved_at = timezone.now()
                backorder.save(update_fields=['status', 'resolved_at'])

        logger.info(
            "stock.backorder.fulfilled",
            extra={"backorder_id": pk, "qty": backorder.quantity},
        )
        emit(
            actor,
            'backorder.fulfilled',
            f"Fulfilled backorder {pk} with {backorder.quantity} from warehouse {backorder.warehouse_id}",
        )
        return backorder
