from rest_framework import serializers
from apps.orders.models import Order
from .models import CoffeeBean
from .services import SORT_ORDERINGS, get_open_orders_for_bean


# =============================================================================
# Input Serializers
# =============================================================================

class BeanFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for catalog filtering.

    Query Parameters:
        origin (str): Exact origin country
        roast_level (str): Exact roast label
        available (bool): Availability flag
        sort (str): name | price | price_desc | moq
    """

    origin = serializers.CharField(max_length=100, required=False)
    roast_level = serializers.CharField(max_length=50, required=False)
    available = serializers.BooleanField(required=False, allow_null=True, default=None)
    sort = serializers.ChoiceField(
        choices=list(SORT_ORDERINGS),
        required=False,
        default='name'
    )


# =============================================================================
# Output Serializers
# =============================================================================

class CoffeeBeanSerializer(serializers.ModelSerializer):
    """Main serializer for catalog beans."""

    class Meta:
        model = CoffeeBean
        fields = [
            'id',
            'name',
            'origin',
            'region',
            'process',
            'roast_level',
            'flavor_notes',
            'description',
            'image_url',
            'moq_kg',
            'price_per_kg',
            'available',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class OpenOrderSerializer(serializers.ModelSerializer):
    """Order summary shown on the bean detail page."""

    class Meta:
        model = Order
        fields = [
            'id',
            'proposal_id',
            'target_quantity_kg',
            'moq_kg',
            'total_bid_kg',
            'bidding_ends_at',
            'status',
        ]
        read_only_fields = fields


class CoffeeBeanDetailSerializer(CoffeeBeanSerializer):
    """Bean with the orders that are still collecting bids."""

    open_orders = serializers.SerializerMethodField()

    class Meta(CoffeeBeanSerializer.Meta):
        fields = CoffeeBeanSerializer.Meta.fields + ['open_orders']
        read_only_fields = fields

    def get_open_orders(self, obj):
        orders = get_open_orders_for_bean(bean=obj)
        return OpenOrderSerializer(orders, many=True).data
