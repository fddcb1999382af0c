# ==========================================
# apps/accounts/admin.py
# ==========================================

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.db.models import Count, Q
from django.utils.html import format_html
from apps.orders.models import BidStatus
from .models import User


@admin.register(User)
class MemberAdmin(BaseUserAdmin):
    """Collective members, with how many open bids each one holds."""

    list_display = [
        'email',
        'display_name',
        'status_badge',
        'open_bid_count',
        'is_staff',
        'last_login',
    ]
    list_filter = ['is_active', 'is_staff']
    search_fields = ['email', 'display_name']
    ordering = ['-created_at']
    readonly_fields = ['created_at', 'last_login']
    filter_horizontal = ['groups', 'user_permissions']

    # BaseUserAdmin assumes a username field
    fieldsets = (
        (None, {'fields': ('email', 'display_name', 'password')}),
        ('Access', {'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions')}),
        ('Activity', {'fields': ('created_at', 'last_login'), 'classes': ('collapse',)}),
    )
    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'display_name', 'password1', 'password2'),
        }),
    )

    def get_queryset(self, request):
        """Annotate open bid counts for the changelist."""
        return super().get_queryset(request).annotate(
            open_bids=Count('bids', filter=~Q(bids__status=BidStatus.CANCELLED))
        )

    def open_bid_count(self, obj):
        return obj.open_bids
    open_bid_count.short_description = 'Open bids'
    open_bid_count.admin_order_field = 'open_bids'

    def status_badge(self, obj):
        """Display active status as colored badge."""
        color, label = ('#6B8E5E', 'Active') if obj.is_active else ('#B85C5C', 'Inactive')
        return format_html(
            '<span style="background: {}; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            color,
            label,
        )
    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'is_active'

    actions = ['deactivate_members']

    @admin.action(description='Deactivate selected members (keeps their bids)')
    def deactivate_members(self, request, queryset):
        """Deactivate members; superusers are skipped."""
        count = queryset.filter(is_superuser=False).update(is_active=False)
        self.message_user(request, f'Deactivated {count} member(s).')
