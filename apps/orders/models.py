# ==========================================
# apps/orders/models.py
# ==========================================

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import F, Q
from decimal import Decimal
import uuid


KG_MAX_DIGITS = 12
KG_DECIMAL_PLACES = 3
MIN_KG = Decimal('0.001')
MIN_PRICE = Decimal('0.01')


class OrderStatus(models.TextChoices):
    BIDDING = 'bidding', 'Bidding'
    CONFIRMED = 'confirmed', 'Confirmed'
    FAILED = 'failed', 'Failed'
    FULFILLED = 'fulfilled', 'Fulfilled'


class BidStatus(models.TextChoices):
    ACTIVE = 'active', 'Active'
    # Never produced by any service; kept so stored rows and clients can name it.
    ACCEPTED = 'accepted', 'Accepted'
    CANCELLED = 'cancelled', 'Cancelled'


class Order(models.Model):
    """Aggregate purchase round for one passed governance proposal."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    # One order per on-chain proposal
    proposal_id = models.PositiveBigIntegerField(unique=True)

    coffee_bean = models.ForeignKey(
        'beans.CoffeeBean',
        on_delete=models.PROTECT,
        related_name='orders'
    )

    # Quantities in kilograms
    target_quantity_kg = models.DecimalField(
        max_digits=KG_MAX_DIGITS,
        decimal_places=KG_DECIMAL_PLACES,
        validators=[MinValueValidator(MIN_KG)]
    )
    moq_kg = models.DecimalField(
        max_digits=KG_MAX_DIGITS,
        decimal_places=KG_DECIMAL_PLACES,
        validators=[MinValueValidator(MIN_KG)]
    )

    # Running total of max_kg over non-cancelled bids.
    # Written only by apps.orders.services.bid_management.
    total_bid_kg = models.DecimalField(
        max_digits=KG_MAX_DIGITS,
        decimal_places=KG_DECIMAL_PLACES,
        default=Decimal('0'),
        editable=False
    )

    bidding_ends_at = models.DateTimeField()
    status = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.BIDDING
    )

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'orders'
        indexes = [
            models.Index(fields=['status', 'bidding_ends_at'], name='orders_status_ends_idx'),
            models.Index(fields=['created_at'], name='orders_created_at_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"Proposal #{self.proposal_id} - {self.total_bid_kg}/{self.moq_kg} kg ({self.status})"

    @property
    def moq_met(self):
        return self.total_bid_kg >= self.moq_kg

    @property
    def moq_progress_pct(self):
        """Share of the MOQ already committed, capped at 100."""
        return _capped_pct(self.total_bid_kg, self.moq_kg)

    @property
    def target_progress_pct(self):
        """Share of the target quantity already committed, capped at 100."""
        return _capped_pct(self.total_bid_kg, self.target_quantity_kg)


def _capped_pct(part, whole):
    if not whole:
        return Decimal('0.0')
    pct = min(Decimal(part) / Decimal(whole) * 100, Decimal('100'))
    return pct.quantize(Decimal('0.1'))


class Bid(models.Model):
    """One member's committed quantity range against an order."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name='bids'
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='bids'
    )

    min_kg = models.DecimalField(
        max_digits=KG_MAX_DIGITS,
        decimal_places=KG_DECIMAL_PLACES,
        validators=[MinValueValidator(MIN_KG)]
    )
    max_kg = models.DecimalField(
        max_digits=KG_MAX_DIGITS,
        decimal_places=KG_DECIMAL_PLACES,
        validators=[MinValueValidator(MIN_KG)]
    )
    price_per_kg = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(MIN_PRICE)]
    )

    # Cancelled bids are kept for the audit trail
    status = models.CharField(
        max_length=20,
        choices=BidStatus.choices,
        default=BidStatus.ACTIVE
    )

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'bids'
        indexes = [
            models.Index(fields=['user', 'created_at'], name='bids_user_created_idx'),
            models.Index(fields=['order', 'status'], name='bids_order_status_idx'),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=['order', 'user'],
                condition=~Q(status='cancelled'),
                name='bids_one_open_bid_per_user',
            ),
            models.CheckConstraint(
                condition=Q(min_kg__lte=F('max_kg')),
                name='bids_min_kg_lte_max_kg',
            ),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.user} bids {self.min_kg}-{self.max_kg} kg @ {self.price_per_kg} ({self.status})"

    @property
    def is_cancelled(self):
        return self.status == BidStatus.CANCELLED
