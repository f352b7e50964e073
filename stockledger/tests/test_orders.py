"""
Tests for ledger.place_order() and ledger.ship_order().
"""

import pytest

from stockledger import ledger, NotFoundError, ValidationError
from stockledger.models import Backorder, Order, OrderStatus


pytestmark = pytest.mark.django_db


class TestPlaceOrder:

    def test_order_reserves_every_line(self, product, gadget, main):
        ledger.receive(50, product, main)
        ledger.receive(10, gadget, main)

        order = ledger.place_order(101, main, [(product, 20), (gadget, 4)])

        assert order.status == OrderStatus.PLACED
        assert order.customer_id == 101
        items = list(order.items.all())
        assert [(i.quantity_ordered, i.quantity_reserved, i.quantity_backordered)
                for i in items] == [(20, 20, 0), (4, 4, 0)]
        assert order.is_fully_reserved
        assert ledger.quantity(product, main) == 30
        assert ledger.quantity(gadget, main) == 6

    def test_order_backorders_short_line(self, product, gadget, main):
        ledger.receive(50, product, main)
        ledger.receive(3, gadget, main)

        order = ledger.place_order(101, main, [(product, 20), (gadget, 10)])

        short = order.items.get(object_id=gadget.pk)
        assert short.quantity_reserved == 3
        assert short.quantity_backordered == 7
        assert not order.is_fully_reserved

        backorder = Backorder.objects.get()
        assert backorder.quantity == 7
        assert backorder.order_item == short

    def test_fully_backordered_order_still_placed(self, product, main):
        order = ledger.place_order(5, main, [(product, 4)])

        assert Order.objects.filter(pk=order.pk, status=OrderStatus.PLACED).exists()
        item = order.items.get()
        assert item.quantity_reserved == 0
        assert item.quantity_backordered == 4

    def test_empty_order(self, main):
        with pytest.raises(ValidationError) as exc:
            ledger.place_order(5, main, [])

        assert exc.value.code == 'EMPTY_ORDER'
        assert Order.objects.count() == 0

    @pytest.mark.parametrize('customer_id', [0, -3, 'abc', None])
    def test_invalid_customer(self, product, main, customer_id):
        with pytest.raises(ValidationError) as exc:
            ledger.place_order(customer_id, main, [(product, 1)])

        assert exc.value.code == 'INVALID_CUSTOMER'

    def test_invalid_line_rejects_whole_order(self, product, main):
        ledger.receive(10, product, main)

        with pytest.raises(ValidationError) as exc:
            ledger.place_order(5, main, [(product, 2), (product, 0)])

        assert exc.value.code == 'INVALID_QUANTITY'
        assert Order.objects.count() == 0
        assert ledger.quantity(product, main) == 10


class TestShipOrder:

    def test_ship(self, product, main):
        ledger.receive(10, product, main)
        order = ledger.place_order(5, main, [(product, 2)])

        shipped = ledger.ship_order(order)

        assert shipped.status == OrderStatus.SHIPPED
        assert shipped.shipped_date is not None
        assert ledger.quantity(product, main) == 8

    def test_ship_by_pk(self, product, main):
        order = ledger.place_order(5, main, [(product, 2)])

        ledger.ship_order(order.pk)

        order.refresh_from_db()
        assert order.status == OrderStatus.SHIPPED

    def test_ship_missing_order(self):
        with pytest.raises(NotFoundError) as exc:
            ledger.ship_order(424242)

        assert exc.value.code == 'ORDER_NOT_FOUND'

    def test_ship_order_without_items(self, main):
        order = Order.objects.create(customer_id=5, warehouse=main)

        with pytest.raises(NotFoundError) as exc:
            ledger.ship_order(order)

        assert exc.value.code == 'ORDER_ITEMS_NOT_FOUND'

    def test_ship_twice(self, product, main):
        order = ledger.place_order(5, main, [(product, 2)])
        ledger.ship_order(order)

        with pytest.raises(ValidationError) as exc:
            ledger.ship_order(order)

        assert exc.value.code == 'INVALID_STATUS'

    def test_ship_invalid_id(self):
        with pytest.raises(ValidationError) as exc:
            ledger.ship_order(0)

        assert exc.value.code == 'INVALID_ORDER'
