"""
Stockledger Admin.

Provides read-only views for production debugging:
- Warehouse: list + edit
- StockRecord: read-only (product, warehouse, quantity, low/full flags)
- Movement: read-only journal
- Transfer: read-only request history
- Backorder: read-only with "cancel" action
- Order: read-only with items inline and "ship" action
- PurchaseOrder: read-only with items inline and "receive" / "cancel" actions
- AuditLog: read-only
"""

import logging

from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from stockledger.exceptions import StockError
from stockledger.models import (
    AuditLog,
    Backorder,
    BackorderStatus,
    Movement,
    Order,
    OrderItem,
    OrderStatus,
    PurchaseOrder,
    PurchaseOrderItem,
    PurchaseOrderStatus,
    StockRecord,
    Transfer,
    Warehouse,
)
from stockledger.permissions import Actor

logger = logging.getLogger(__name__)


class ReadOnlyAdmin(admin.ModelAdmin):
    """Ledger rows only change through the ledger services."""

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


def _admin_actor(request) -> Actor:
    return Actor(id=request.user.pk, role='Admin')


# =========================================================================
# WAREHOUSE ADMIN
# =========================================================================

@admin.register(Warehouse)
class WarehouseAdmin(admin.ModelAdmin):
    """Warehouse admin — editable."""

    list_display = ['code', 'name', 'capacity']
    search_fields = ['code', 'name']
    readonly_fields = ['created_at', 'updated_at']


# =========================================================================
# STOCK RECORD ADMIN (read-only)
# =========================================================================

@admin.register(StockRecord)
class StockRecordAdmin(ReadOnlyAdmin):
    """StockRecord admin — read-only. Stock only changes via the ledger."""

    list_display = ['__str__', 'warehouse', 'quantity', 'is_low_display', 'is_full_display']
    list_filter = ['warehouse']
    search_fields = ['object_id']
    readonly_fields = ['content_type', 'object_id', 'warehouse', 'quantity',
                       'created_at', 'updated_at']
    list_select_related = ['warehouse']

    def _level(self, obj):
        from stockledger.services.thresholds import evaluate
        return evaluate(obj, obj.product, obj.warehouse)

    @admin.display(description=_('Low?'), boolean=True)
    def is_low_display(self, obj):
        return self._level(obj).is_low

    @admin.display(description=_('Full?'), boolean=True)
    def is_full_display(self, obj):
        return self._level(obj).is_full


# =========================================================================
# MOVEMENT / TRANSFER ADMIN (read-only journal)
# =========================================================================

@admin.register(Movement)
class MovementAdmin(ReadOnlyAdmin):
    """Movement admin — read-only. Immutable journal."""

    list_display = ['created_at', 'object_id', 'source', 'destination',
                    'quantity', 'status', 'reason', 'actor_id']
    list_filter = ['status', 'source', 'destination']
    search_fields = ['reason', 'object_id']
    readonly_fields = ['content_type', 'object_id', 'source', 'destination', 'quantity',
                       'status', 'transfer', 'reason', 'actor_id', 'created_at']
    date_hierarchy = 'created_at'


@admin.register(Transfer)
class TransferAdmin(ReadOnlyAdmin):
    list_display = ['transfer_date', 'object_id', 'source', 'destination',
                    'quantity', 'status', 'actor_id']
    list_filter = ['status', 'source', 'destination']
    readonly_fields = ['content_type', 'object_id', 'source', 'destination',
                       'quantity', 'status', 'actor_id', 'transfer_date']
    date_hierarchy = 'transfer_date'


# =========================================================================
# BACKORDER ADMIN (read-only with cancel action)
# =========================================================================

@admin.register(Backorder)
class BackorderAdmin(ReadOnlyAdmin):
    """Backorder admin — read-only with cancel action."""

    list_display = ['id', 'product_display', 'warehouse', 'quantity', 'status',
                    'created_at', 'resolved_at']
    list_filter = ['status', 'warehouse']
    search_fields = ['object_id']
    readonly_fields = ['content_type', 'object_id', 'warehouse', 'quantity', 'status',
                       'order_item', 'created_at', 'resolved_at', 'metadata']
    actions = ['cancel_backorders']

    @admin.display(description=_('Product'))
    def product_display(self, obj):
        return str(obj.product) if obj.product else '?'

    @admin.action(description=_('Cancel selected backorders'))
    def cancel_backorders(self, request, queryset):
        from stockledger import ledger

        count = 0
        for backorder in queryset.filter(status=BackorderStatus.PENDING):
            try:
                ledger.cancel_backorder(backorder, reason='Cancelled via admin',
                                        actor=_admin_actor(request))
                count += 1
            except StockError as exc:
                logger.warning("cancel_backorders: failed to cancel %s: %s", backorder.pk, exc)

        self.message_user(request, _('{count} backorder(s) cancelled.').format(count=count))


# =========================================================================
# ORDER ADMIN
# =========================================================================

class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    can_delete = False
    readonly_fields = ['content_type', 'object_id', 'quantity_ordered',
                       'quantity_reserved', 'quantity_backordered']

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Order)
class OrderAdmin(ReadOnlyAdmin):
    list_display = ['id', 'customer_id', 'warehouse', 'status', 'order_date', 'shipped_date']
    list_filter = ['status', 'warehouse']
    readonly_fields = ['customer_id', 'warehouse', 'status', 'actor_id',
                       'order_date', 'shipped_date']
    inlines = [OrderItemInline]
    actions = ['ship_orders']

    @admin.action(description=_('Ship selected orders'))
    def ship_orders(self, request, queryset):
        from stockledger import ledger

        count = 0
        for order in queryset.filter(status=OrderStatus.PLACED):
            try:
                ledger.ship_order(order, actor=_admin_actor(request))
                count += 1
            except StockError as exc:
                logger.warning("ship_orders: failed to ship %s: %s", order.pk, exc)

        self.message_user(request, _('{count} order(s) shipped.').format(count=count))


# =========================================================================
# PURCHASE ORDER ADMIN
# =========================================================================

class PurchaseOrderItemInline(admin.TabularInline):
    model = PurchaseOrderItem
    extra = 0
    can_delete = False
    readonly_fields = ['content_type', 'object_id', 'warehouse', 'quantity']

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(PurchaseOrder)
class PurchaseOrderAdmin(ReadOnlyAdmin):
    list_display = ['id', 'supplier_id', 'status', 'order_date', 'received_at']
    list_filter = ['status']
    readonly_fields = ['supplier_id', 'status', 'actor_id', 'order_date', 'received_at']
    inlines = [PurchaseOrderItemInline]
    actions = ['receive_purchase_orders', 'cancel_purchase_orders']

    @admin.action(description=_('Receive selected purchase orders'))
    def receive_purchase_orders(self, request, queryset):
        from stockledger import ledger

        count = 0
        for order in queryset.filter(status=PurchaseOrderStatus.PENDING):
            try:
                ledger.receive_purchase_order(order, actor=_admin_actor(request))
                count += 1
            except StockError as exc:
                logger.warning("receive_purchase_orders: failed to receive %s: %s", order.pk, exc)

        self.message_user(request, _('{count} purchase order(s) received.').format(count=count))

    @admin.action(description=_('Cancel selected purchase orders'))
    def cancel_purchase_orders(self, request, queryset):
        from stockledger import ledger

        count = 0
        for order in queryset.filter(status=PurchaseOrderStatus.PENDING):
            try:
                ledger.cancel_purchase_order(order, actor=_admin_actor(request))
                count += 1
            except StockError as exc:
                logger.warning("cancel_purchase_orders: failed to cancel %s: %s", order.pk, exc)

        self.message_user(request, _('{count} purchase order(s) cancelled.').format(count=count))


@admin.register(AuditLog)
class AuditLogAdmin(ReadOnlyAdmin):
    list_display = ['timestamp', 'actor_id', 'action', 'details']
    list_filter = ['action']
    search_fields = ['details', 'actor_id']
    readonly_fields = ['actor_id', 'action', 'details', 'timestamp']
