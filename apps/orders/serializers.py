from rest_framework import serializers
from apps.accounts.models import User
from apps.beans.models import CoffeeBean
from .models import Order, Bid, OrderStatus, BidStatus


KG_FIELD = dict(max_digits=12, decimal_places=3)
PRICE_FIELD = dict(max_digits=10, decimal_places=2)

# Largest value a PositiveBigIntegerField column accepts
MAX_PROPOSAL_ID = 9223372036854775807


# =============================================================================
# Input Serializers
# =============================================================================

class StrictInputSerializer(serializers.Serializer):
    """Rejects keys that the serializer does not declare."""

    def validate(self, attrs):
        unknown = set(self.initial_data) - set(self.fields)
        if unknown:
            raise serializers.ValidationError(
                {field: 'Unknown field.' for field in sorted(unknown)}
            )
        return attrs


class PlaceBidSerializer(StrictInputSerializer):
    """
    Body of POST /api/orders/bids/.

    Positivity and min_kg <= max_kg are checked by the service, after
    the bidding window.
    """

    order_id = serializers.UUIDField()
    min_kg = serializers.DecimalField(**KG_FIELD)
    max_kg = serializers.DecimalField(**KG_FIELD)
    price_per_kg = serializers.DecimalField(**PRICE_FIELD)


class UpdateBidSerializer(StrictInputSerializer):
    """Body of PATCH /api/orders/bids/{id}/. Omitted fields are unchanged."""

    min_kg = serializers.DecimalField(required=False, **KG_FIELD)
    max_kg = serializers.DecimalField(required=False, **KG_FIELD)
    price_per_kg = serializers.DecimalField(required=False, **PRICE_FIELD)


class CreateOrderSerializer(StrictInputSerializer):
    """Body of POST /api/orders/."""

    proposal_id = serializers.IntegerField(min_value=1, max_value=MAX_PROPOSAL_ID)
    coffee_bean_id = serializers.UUIDField()
    target_quantity_kg = serializers.DecimalField(**KG_FIELD)
    moq_kg = serializers.DecimalField(**KG_FIELD)
    bidding_days = serializers.IntegerField(required=False, allow_null=True, default=None)


class OrderFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for order listing.

    Query Parameters:
        status (str): bidding | confirmed | failed | fulfilled
        proposal_id (int): External proposal identifier
    """

    status = serializers.ChoiceField(choices=OrderStatus.choices, required=False)
    proposal_id = serializers.IntegerField(min_value=1, max_value=MAX_PROPOSAL_ID, required=False)


class BidFilterSerializer(serializers.Serializer):
    """Validate the optional status query parameter for bid listings."""

    status = serializers.ChoiceField(choices=BidStatus.choices, required=False)


# =============================================================================
# Output Serializers
# =============================================================================

class UserMinimalSerializer(serializers.ModelSerializer):
    """Minimal user info for nested serialization."""

    display_name = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ['id', 'display_name']
        read_only_fields = fields

    def get_display_name(self, obj):
        return obj.get_display_name()


class CoffeeBeanMinimalSerializer(serializers.ModelSerializer):
    """Minimal bean info for nested serialization."""

    class Meta:
        model = CoffeeBean
        fields = ['id', 'name', 'origin', 'roast_level', 'price_per_kg', 'image_url']
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """Order with bean summary and progress towards MOQ and target."""

    coffee_bean = CoffeeBeanMinimalSerializer(read_only=True)
    moq_met = serializers.BooleanField(read_only=True)
    moq_progress_pct = serializers.DecimalField(max_digits=4, decimal_places=1, read_only=True)
    target_progress_pct = serializers.DecimalField(max_digits=4, decimal_places=1, read_only=True)
    bid_count = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = [
            'id',
            'proposal_id',
            'coffee_bean',
            'target_quantity_kg',
            'moq_kg',
            'total_bid_kg',
            'moq_met',
            'moq_progress_pct',
            'target_progress_pct',
            'bid_count',
            'bidding_ends_at',
            'status',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_bid_count(self, obj):
        """Use the queryset annotation when present."""
        if hasattr(obj, 'bid_count'):
            return obj.bid_count
        return obj.bids.exclude(status=BidStatus.CANCELLED).count()


class BidSerializer(serializers.ModelSerializer):
    """Bid as returned by the mutation endpoints and order bid listings."""

    user = UserMinimalSerializer(read_only=True)
    order_total_bid_kg = serializers.DecimalField(
        source='order.total_bid_kg',
        read_only=True,
        **KG_FIELD
    )

    class Meta:
        model = Bid
        fields = [
            'id',
            'order',
            'user',
            'min_kg',
            'max_kg',
            'price_per_kg',
            'status',
            'order_total_bid_kg',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class OrderSummarySerializer(serializers.ModelSerializer):
    """Order fields shown next to a member's own bid."""

    coffee_bean_name = serializers.CharField(source='coffee_bean.name', read_only=True)

    class Meta:
        model = Order
        fields = [
            'id',
            'proposal_id',
            'coffee_bean_name',
            'moq_kg',
            'total_bid_kg',
            'bidding_ends_at',
            'status',
        ]
        read_only_fields = fields


class MyBidSerializer(serializers.ModelSerializer):
    """A member's own bid with its order summary."""

    order = OrderSummarySerializer(read_only=True)

    class Meta:
        model = Bid
        fields = [
            'id',
            'order',
            'min_kg',
            'max_kg',
            'price_per_kg',
            'status',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields
