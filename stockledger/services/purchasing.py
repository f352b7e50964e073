"""
Purchasing — supplier purchase orders that add stock when received.

A purchase order is recorded Pending and credited to stock exactly once,
on receive(). Every line lands in its own (product, warehouse) row and
journals one Movement, the same shape as a single receipt.
"""

import logging

from django.contrib.contenttypes.models import ContentType
from django.db import transaction
from django.utils import timezone

from stockledger.adapters.audit import emit
from stockledger.exceptions import NotFoundError, ValidationError
from stockledger.locks import key_lock, lock_for_update
from stockledger.models.enums import MovementStatus, PurchaseOrderStatus
from stockledger.models.movement import Movement
from stockledger.models.purchase_order import PurchaseOrder, PurchaseOrderItem
from stockledger.models.stock import StockRecord
from stockledger.services.common import (
    apply_delta,
    resolve_warehouse,
    tracked_steps,
    validate_positive_id,
    validate_product,
    validate_quantity,
)

logger = logging.getLogger('stockledger')


def _locked_pending(pk: int) -> PurchaseOrder:
    try:
        order = lock_for_update(PurchaseOrder.objects.filter(pk=pk)).get()
    except PurchaseOrder.DoesNotExist:
        raise NotFoundError('PURCHASE_ORDER_NOT_FOUND', purchase_order_id=pk) from None

    if order.status != PurchaseOrderStatus.PENDING:
        raise ValidationError(
            'INVALID_STATUS',
            current=order.status,
            expected=PurchaseOrderStatus.PENDING,
        )
    return order


class StockPurchasing:
    """Purchase order methods."""

    @classmethod
    def create(cls, supplier_id, items, status=PurchaseOrderStatus.PENDING,
               order_date=None, actor=None) -> PurchaseOrder:
        """
        Record a purchase order.

        Args:
            supplier_id: Positive integer
            items: Iterable of (product, warehouse, quantity)
            status: Initial status. RECEIVED records the order and then
                receives it; CANCELLED records it without touching stock.
            order_date: Defaults to now

        Raises:
            ValidationError: bad supplier, status, empty order or bad line
            PersistenceError: store failure at ``step``
        """
        validate_positive_id(supplier_id, 'INVALID_SUPPLIER')
        if status not in PurchaseOrderStatus.values:
            raise ValidationError('INVALID_STATUS', current=status,
                                  expected=PurchaseOrderStatus.values)
        lines = []
        for product, warehouse, quantity in items:
            validate_product(product)
            validate_quantity(quantity)
            lines.append((product, resolve_warehouse(warehouse), quantity))
        if not lines:
            raise ValidationError('EMPTY_ORDER')

        actor_id = str(actor.id) if actor is not None else ''
        initial = (
            PurchaseOrderStatus.CANCELLED
            if status == PurchaseOrderStatus.CANCELLED
            else PurchaseOrderStatus.PENDING
        )

        with tracked_steps('create_purchase_order', supplier_id=supplier_id) as steps:
            with transaction.atomic():
                steps.enter('purchase_order_insert')
                order = PurchaseOrder.objects.create(
                    supplier_id=supplier_id,
                    status=initial,
                    actor_id=actor_id,
                    order_date=order_date or timezone.now(),
                )

                steps.enter('purchase_order_items_insert')
                PurchaseOrderItem.objects.bulk_create([
                    PurchaseOrderItem(
                        purchase_order=order,
                        content_type=ContentType.objects.get_for_model(product),
                        object_id=product.pk,
                        warehouse=warehouse,
                        quantity=quantity,
                    )
                    for product, warehouse, quantity in lines
                ])

        logger.info(
            "stock.purchase_order.created",
            extra={
                "purchase_order_id": order.pk,
                "supplier_id": supplier_id,
                "lines": len(lines),
                "status": initial,
            },
        )
        emit(
            actor,
            'purchase_order.created',
            f"Created purchase order {order.pk} for supplier {supplier_id} "
            f"with {len(lines)} line(s)",
        )

        if status == PurchaseOrderStatus.RECEIVED:
            order = cls.receive(order, actor=actor)
        return order

    @classmethod
    def receive(cls, purchase_order, actor=None) -> PurchaseOrder:
        """
        Credit every line of a PENDING purchase order to stock.

        Transition: PENDING -> RECEIVED, in one transaction with all the
        stock updates. Rows missing for a line are created. Stock rows are
        locked in one query ordered by pk, key locks in sorted key order.

        Raises:
            NotFoundError('PURCHASE_ORDER_NOT_FOUND' | 'PURCHASE_ORDER_ITEMS_NOT_FOUND')
            ValidationError('INVALID_STATUS'): already received or cancelled
            PersistenceError: store failure at ``step``; nothing was applied
        """
        pk = validate_positive_id(getattr(purchase_order, 'pk', purchase_order),
                                  'INVALID_PURCHASE_ORDER')
        actor_id = str(actor.id) if actor is not None else ''

        with tracked_steps('receive_purchase_order', purchase_order_id=pk) as steps:
            steps.enter('purchase_order_read')
            if not PurchaseOrder.objects.filter(pk=pk).exists():
                raise NotFoundError('PURCHASE_ORDER_NOT_FOUND', purchase_order_id=pk)
            lines = list(PurchaseOrderItem.objects.filter(purchase_order_id=pk))
            if not lines:
                raise NotFoundError('PURCHASE_ORDER_ITEMS_NOT_FOUND', purchase_order_id=pk)
            keys = [line.lock_key for line in lines]

            with key_lock(*keys), transaction.atomic():
                order = _locked_pending(pk)

                steps.enter('stock_lock')
                records = {
                    record.lock_key: record
                    for record in lock_for_update(
                        StockRecord.objects.for_keys(keys).order_by('pk')
                    )
                }

                for line in sorted(lines, key=lambda item: item.lock_key):
                    steps.enter('stock_update')
                    record = records.get(line.lock_key)
                    if record is None:
                        records[line.lock_key] = StockRecord.objects.create(
                            content_type_id=line.content_type_id,
                            object_id=line.object_id,
                            warehouse_id=line.warehouse_id,
                            quantity=line.quantity,
                        )
                    else:
                        apply_delta(record, line.quantity)

                    steps.enter('journal')
                    Movement.objects.create(
                        content_type_id=line.content_type_id,
                        object_id=line.object_id,
                        source_id=line.warehouse_id,
                        destination_id=line.warehouse_id,
                        quantity=line.quantity,
                        status=MovementStatus.RECEIVED,
                        reason=f"Purchase order #{pk}",
                        actor_id=actor_id,
                    )

                steps.enter('purchase_order_update')
                order.status = PurchaseOrderStatus.RECEIVED
                order.received_at = timezone.now()
                order.save(update_fields=['status', 'received_at'])

        units = sum(line.quantity for line in lines)
        logger.info(
            "stock.purchase_order.received",
            extra={"purchase_order_id": pk, "lines": len(lines), "units": units},
        )
        emit(
            actor,
            'purchase_order.received',
            f"Received purchase order {pk}: {len(lines)} line(s), {units} unit(s)",
        )
        return order

    @classmethod
    def cancel(cls, purchase_order, actor=None) -> PurchaseOrder:
        """
        Cancel a purchase order that was never received.

        Transition: PENDING -> CANCELLED
        """
        pk = validate_positive_id(getattr(purchase_order, 'pk', purchase_order),
                                  'INVALID_PURCHASE_ORDER')

        with tracked_steps('cancel_purchase_order', purchase_order_id=pk) as steps:
            with transaction.atomic():
                steps.enter('purchase_order_read')
                order = _locked_pending(pk)

                steps.enter('purchase_order_update')
                order.status = PurchaseOrderStatus.CANCELLED
                order.save(update_fields=['status'])

        logger.info("stock.purchase_order.cancelled", extra={"purchase_order_id": pk})
        emit(actor, 'purchase_order.cancelled', f"Cancelled purchase order {pk}")
        return order

    @classmethod
    def list_purchase_orders(cls, status=None, supplier_id=None) -> list[PurchaseOrder]:
        """Purchase orders with their items, newest first."""
        qs = PurchaseOrder.objects.prefetch_related('items')
        if status is not None:
            qs = qs.filter(status=status)
        if supplier_id is not None:
            qs = qs.filter(supplier_id=supplier_id)
        return list(qs.order_by('-order_date', '-pk'))
