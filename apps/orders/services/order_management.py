"""
Order management service.

Creates one order per passed governance proposal and serves order reads.
"""

import logging
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction, IntegrityError
from django.db.models import Count, Q, QuerySet, Sum
from django.utils import timezone

from apps.beans.models import CoffeeBean
from apps.orders.models import Order, BidStatus

from .exceptions import (
    InvalidOrderError,
    OrderNotFoundError,
    BeanNotFoundError,
    DuplicateOrderError,
)


logger = logging.getLogger(__name__)


def _open_bid_count():
    return Count('bids', filter=~Q(bids__status=BidStatus.CANCELLED))


@transaction.atomic
def create_order(
    *,
    proposal_id: int,
    coffee_bean_id: UUID,
    target_quantity_kg: Decimal,
    moq_kg: Decimal,
    bidding_days: Optional[int] = None,
    now: Optional[datetime] = None
) -> Order:
    """
    Open a new bidding round for a passed proposal.

    Args:
        proposal_id: External governance proposal identifier
        coffee_bean_id: UUID of the bean being bought
        target_quantity_kg: Quantity the proposal aims to buy
        moq_kg: Committed quantity needed to confirm the order
        bidding_days: Length of the bidding window; defaults to the
            ORDER_DEFAULT_BIDDING_DAYS setting
        now: Start of the bidding window (defaults to now)

    Returns:
        Created Order in bidding status with an empty running total

    Raises:
        InvalidOrderError: If any parameter is out of range
        DuplicateOrderError: If an order for the proposal already exists
        BeanNotFoundError: If the bean doesn't exist
    """
    if bidding_days is None:
        bidding_days = settings.ORDER_DEFAULT_BIDDING_DAYS

    if proposal_id <= 0:
        raise InvalidOrderError("proposal_id must be positive")
    if target_quantity_kg <= 0 or moq_kg <= 0:
        raise InvalidOrderError("Quantities must be positive")
    if bidding_days < 1:
        raise InvalidOrderError("bidding_days must be at least 1")

    if Order.objects.filter(proposal_id=proposal_id).exists():
        raise DuplicateOrderError(f"An order for proposal {proposal_id} already exists")

    try:
        bean = CoffeeBean.objects.get(id=coffee_bean_id)
    except (CoffeeBean.DoesNotExist, ValueError, DjangoValidationError):
        raise BeanNotFoundError("Coffee bean not found")

    now = now or timezone.now()

    try:
        with transaction.atomic():
            order = Order.objects.create(
                proposal_id=proposal_id,
                coffee_bean=bean,
                target_quantity_kg=target_quantity_kg,
                moq_kg=moq_kg,
                bidding_ends_at=now + timedelta(days=bidding_days)
            )
    except IntegrityError:
        # Unique proposal_id caught a concurrent create
        raise DuplicateOrderError(f"An order for proposal {proposal_id} already exists")

    logger.info(
        "Order %s created for proposal %s (bean %s), bidding ends %s",
        order.id, proposal_id, bean.id, order.bidding_ends_at.isoformat()
    )
    return order


def get_order_by_id(*, order_id: UUID) -> Order:
    """
    Raises:
        OrderNotFoundError: If order doesn't exist
    """
    try:
        return (
            Order.objects
            .select_related('coffee_bean')
            .annotate(bid_count=_open_bid_count())
            .get(id=order_id)
        )
    except (Order.DoesNotExist, ValueError, DjangoValidationError):
        raise OrderNotFoundError(f"Order with ID {order_id} not found")


def list_orders(
    *,
    status: Optional[str] = None,
    proposal_id: Optional[int] = None
) -> QuerySet[Order]:
    """Orders newest first, annotated with their open bid count."""
    queryset = Order.objects.select_related('coffee_bean')

    if status:
        queryset = queryset.filter(status=status)

    if proposal_id is not None:
        queryset = queryset.filter(proposal_id=proposal_id)

    return queryset.annotate(bid_count=_open_bid_count()).order_by('-created_at')


def recalculate_order_total(*, order_id: UUID) -> Decimal:
    """
    Sum ``max_kg`` over the order's non-cancelled bids.

    Read-only. Compare against ``Order.total_bid_kg`` to audit the
    running total.

    Raises:
        OrderNotFoundError: If order doesn't exist
    """
    try:
        order = Order.objects.get(id=order_id)
    except (Order.DoesNotExist, ValueError, DjangoValidationError):
        raise OrderNotFoundError(f"Order with ID {order_id} not found")

    total = (
        order.bids
        .exclude(status=BidStatus.CANCELLED)
        .aggregate(total=Sum('max_kg'))['total']
    )
    return total or Decimal('0')
