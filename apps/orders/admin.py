# ==========================================
# apps/orders/admin.py
# ==========================================

from django.contrib import admin, messages
from django.utils.html import format_html
from apps.orders.models import Order, Bid, OrderStatus, BidStatus
from apps.orders.services import recalculate_order_total


STATUS_COLORS = {
    OrderStatus.BIDDING: '#C8963E',
    OrderStatus.CONFIRMED: '#6B8E5E',
    OrderStatus.FAILED: '#B85C5C',
    OrderStatus.FULFILLED: '#5E7A8E',
    BidStatus.ACTIVE: '#6B8E5E',
    BidStatus.ACCEPTED: '#5E7A8E',
    BidStatus.CANCELLED: '#999999',
}


def _status_badge(status, label):
    return format_html(
        '<span style="background: {}; color: white; padding: 3px 8px; '
        'border-radius: 10px; font-size: 11px;">{}</span>',
        STATUS_COLORS.get(status, '#999999'),
        label,
    )


class BidInline(admin.TabularInline):
    """Bids shown read-only under their order."""
    model = Bid
    extra = 0
    can_delete = False
    fields = ['user', 'min_kg', 'max_kg', 'price_per_kg', 'status', 'created_at']
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """Admin interface for aggregate orders."""

    list_display = [
        'proposal_id',
        'coffee_bean',
        'total_bid_kg',
        'moq_kg',
        'target_quantity_kg',
        'status_badge',
        'bidding_ends_at',
    ]
    list_filter = ['status', 'bidding_ends_at', 'created_at']
    search_fields = ['proposal_id', 'coffee_bean__name']
    # The running total is maintained by the bid services only
    readonly_fields = ['total_bid_kg', 'created_at', 'updated_at']
    date_hierarchy = 'created_at'
    ordering = ['-created_at']
    inlines = [BidInline]

    fieldsets = (
        ('Proposal', {
            'fields': ('proposal_id', 'coffee_bean')
        }),
        ('Quantities', {
            'fields': ('target_quantity_kg', 'moq_kg', 'total_bid_kg')
        }),
        ('Bidding', {
            'fields': ('bidding_ends_at', 'status')
        }),
        ('Metadata', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def get_queryset(self, request):
        """Optimize query with select_related."""
        return super().get_queryset(request).select_related('coffee_bean')

    def status_badge(self, obj):
        """Display order status as colored badge."""
        return _status_badge(obj.status, obj.get_status_display())
    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'status'

    actions = ['verify_running_total']

    @admin.action(description='Verify running total against bids')
    def verify_running_total(self, request, queryset):
        """Compare each order's total_bid_kg with the sum of its open bids."""
        mismatches = []
        for order in queryset:
            expected = recalculate_order_total(order_id=order.id)
            if expected != order.total_bid_kg:
                mismatches.append(
                    f'#{order.proposal_id} (stored {order.total_bid_kg}, bids {expected})'
                )

        if mismatches:
            self.message_user(
                request,
                'Running total mismatch: ' + ', '.join(mismatches),
                level=messages.ERROR,
            )
        else:
            self.message_user(request, f'Checked {queryset.count()} order(s); all totals match.')


@admin.register(Bid)
class BidAdmin(admin.ModelAdmin):
    """Read-only view of bids; changes go through the bid endpoints."""

    list_display = [
        'order',
        'user',
        'min_kg',
        'max_kg',
        'price_per_kg',
        'status_badge',
        'created_at',
    ]
    list_filter = ['status', 'created_at']
    search_fields = ['user__email', 'order__proposal_id']
    readonly_fields = [
        'order',
        'user',
        'min_kg',
        'max_kg',
        'price_per_kg',
        'status',
        'created_at',
        'updated_at',
    ]
    ordering = ['-created_at']

    def get_queryset(self, request):
        """Optimize query with select_related."""
        return super().get_queryset(request).select_related('order', 'user')

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        # Bids are cancelled through the API so the order total stays in step
        return False

    def status_badge(self, obj):
        """Display bid status as colored badge."""
        return _status_badge(obj.status, obj.get_status_display())
    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'status'
