# ==========================================
# apps/beans/admin.py
# ==========================================

from django.contrib import admin
from apps.beans.models import CoffeeBean


@admin.register(CoffeeBean)
class CoffeeBeanAdmin(admin.ModelAdmin):
    """Admin interface for the bean catalog."""

    list_display = [
        'name',
        'origin',
        'roast_level',
        'moq_kg',
        'price_per_kg',
        'available',
        'created_at'
    ]
    list_filter = [
        'available',
        'roast_level',
        'origin',
        'created_at'
    ]
    search_fields = [
        'name',
        'origin',
        'region',
        'description',
    ]
    readonly_fields = [
        'created_at',
        'updated_at'
    ]
    date_hierarchy = 'created_at'
    ordering = ['name']

    fieldsets = (
        ('Basic Information', {
            'fields': (
                'name',
                'origin',
                'region',
                'image_url',
            )
        }),
        ('Processing & Roasting', {
            'fields': (
                'process',
                'roast_level',
            )
        }),
        ('Tasting', {
            'fields': (
                'flavor_notes',
                'description',
            )
        }),
        ('Commercial Terms', {
            'fields': (
                'moq_kg',
                'price_per_kg',
                'available',
            )
        }),
        ('Metadata', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    actions = ['mark_available', 'mark_unavailable']

    @admin.action(description='Mark selected beans as available')
    def mark_available(self, request, queryset):
        count = queryset.update(available=True)
        self.message_user(request, f'{count} bean(s) marked available.')

    @admin.action(description='Mark selected beans as unavailable')
    def mark_unavailable(self, request, queryset):
        count = queryset.update(available=False)
        self.message_user(request, f'{count} bean(s) marked unavailable.')
