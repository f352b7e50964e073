"""
Customer orders — place (reserving stock per line) and ship.

place_order() is not one transaction: each line reserves
under its own key lock and commits on its own, so a failure part-way
leaves the order and the lines reserved so far in place.
"""

import logging

from django.contrib.contenttypes.models import ContentType
from django.db import transaction
from django.utils import timezone

from stockledger.adapters.audit import emit
from stockledger.exceptions import NotFoundError, ValidationError
from stockledger.locks import lock_for_update
from stockledger.models.backorder import Backorder
from stockledger.models.enums import OrderStatus
from stockledger.models.order import Order, OrderItem
from stockledger.services.common import (
    resolve_warehouse,
    tracked_steps,
    validate_positive_id,
    validate_product,
    validate_quantity,
)
from stockledger.services.reservations import StockReservations

logger = logging.getLogger('stockledger')


class StockOrders:
    """Order placement and shipment."""

    @classmethod
    def place_order(cls, customer_id, warehouse, items, actor=None) -> Order:
        """
        Place an order and reserve stock for every line.

        Args:
            customer_id: Positive integer
            warehouse: Warehouse (or pk) the order ships from
            items: Iterable of (product, quantity)

        Returns:
            The PLACED Order. Shortfalls show up as quantity_backordered on
            its items, never as an error.

        Raises:
            ValidationError: bad customer, warehouse, empty order, bad line
            PersistenceError: store failure at ``step``
        """
        validate_positive_id(customer_id, 'INVALID_CUSTOMER')
        lines = list(items)
        if not lines:
            raise ValidationError('EMPTY_ORDER')
        for product, quantity in lines:
            validate_product(product)
            validate_quantity(quantity)
        warehouse = resolve_warehouse(warehouse)
        actor_id = str(actor.id) if actor is not None else ''

        with tracked_steps('place_order', customer_id=customer_id) as steps:
            with transaction.atomic():
                steps.enter('order_insert')
                order = Order.objects.create(
                    customer_id=customer_id,
                    warehouse=warehouse,
                    status=OrderStatus.PLACED,
                    actor_id=actor_id,
                )

        results = [
            StockReservations.reserve(quantity, product, warehouse, actor=actor)
            for product, quantity in lines
        ]

        with tracked_steps('place_order', order_id=order.pk) as steps:
            with transaction.atomic():
                steps.enter('order_items_insert')
                for (product, quantity), result in zip(lines, results):
                    item = OrderItem.objects.create(
                        order=order,
                        content_type=ContentType.objects.get_for_model(product),
                        object_id=product.pk,
                        quantity_ordered=quantity,
                        quantity_reserved=result.reserved_quantity,
                        quantity_backordered=quantity - result.reserved_quantity,
                    )
                    if result.backorder is not None:
                        Backorder.objects.filter(pk=result.backorder.pk).update(order_item=item)

        backordered = sum(r.backordered_quantity for r in results)
        logger.info(
            "stock.order.placed",
            extra={
                "order_id": order.pk,
                "lines": len(lines),
                "backordered": backordered,
            },
        )
        emit(
            actor,
            'order.placed',
            f"Placed order {order.pk} for customer {customer_id} with {len(lines)} line(s), "
            f"{backordered} unit(s) backordered",
        )
        return order

    @classmethod
    def ship_order(cls, order, actor=None) -> Order:
        """
        Ship an order.

        Transition: PLACED -> SHIPPED. Stock was already decremented when
        the lines were reserved, so nothing else changes.

        Raises:
            NotFoundError('ORDER_NOT_FOUND' | 'ORDER_ITEMS_NOT_FOUND')
            ValidationError('INVALID_STATUS'): already shipped
        """
        order_id = validate_positive_id(getattr(order, 'pk', order), 'INVALID_ORDER')

        with tracked_steps('ship_order', order_id=order_id) as steps:
            with transaction.atomic():
                steps.enter('order_read')
                try:
                    order = lock_for_update(Order.objects.filter(pk=order_id)).get()
                except Order.DoesNotExist:
                    raise NotFoundError('ORDER_NOT_FOUND', order_id=order_id) from None

                steps.enter('order_items_read')
                if not order.items.exists():
                    raise NotFoundError('ORDER_ITEMS_NOT_FOUND', order_id=order_id)

                if order.status != OrderStatus.PLACED:
                    raise ValidationError(
                        'INVALID_STATUS',
                        current=order.status,
                        expected=OrderStatus.PLACED,
                    )

                steps.enter('order_update')
                order.status = OrderStatus.SHIPPED
                order.shipped_date = timezone.now()
                order.save(update_fields=['status', 'shipped_date'])

        logger.info("stock.order.shipped", extra={"order_id": order_id})
        emit(actor, 'order.shipped', f"Shipped order {order_id}")
        return order
