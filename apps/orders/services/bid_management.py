"""
Order aggregation service.

Places, updates and cancels bids while keeping ``Order.total_bid_kg``
equal to the sum of ``max_kg`` over the order's non-cancelled bids.

Every mutation locks the parent order row first, so mutations of one
order are serialized, and the total moves by a signed delta through a
single ``F()`` update rather than a read-compute-write round trip.
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Optional, Tuple
from uuid import UUID

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction, IntegrityError
from django.db.models import F
from django.utils import timezone

from apps.accounts.models import User
from apps.orders.models import Order, Bid, BidStatus

from .bidding_window import assert_open_for_bidding
from .exceptions import (
    InvalidBidError,
    UnauthorizedError,
    OrderNotFoundError,
    BidNotFoundError,
    BidAlreadyCancelledError,
    DuplicateBidError,
)


logger = logging.getLogger(__name__)


def _require_member(user: Optional[User]) -> None:
    if user is None or not user.is_authenticated:
        raise UnauthorizedError("Authentication required")


def _validate_quantities(min_kg: Decimal, max_kg: Decimal, price_per_kg: Decimal) -> None:
    if min_kg <= 0 or max_kg <= 0 or price_per_kg <= 0:
        raise InvalidBidError("All values must be positive")

    if min_kg > max_kg:
        raise InvalidBidError("min_kg cannot be greater than max_kg")


def _lock_order(order_id: UUID) -> Order:
    try:
        return Order.objects.select_for_update().get(id=order_id)
    except (Order.DoesNotExist, ValueError, DjangoValidationError):
        raise OrderNotFoundError(f"Order with ID {order_id} not found")


def _find_own_bid(bid_id: UUID, user: User) -> Bid:
    # Another member's bid is reported exactly like a missing one
    try:
        return Bid.objects.get(id=bid_id, user=user)
    except (Bid.DoesNotExist, ValueError, DjangoValidationError):
        raise BidNotFoundError("Bid not found")


def _lock_own_bid(bid_id: UUID, user: User) -> Tuple[Order, Bid]:
    """Lock the parent order, then the bid, always in that order."""
    order = _lock_order(_find_own_bid(bid_id, user).order_id)
    bid = Bid.objects.select_for_update().get(id=bid_id)
    return order, bid


def _adjust_total(order: Order, delta: Decimal) -> None:
    """Apply a signed delta to the running total and refresh ``order``."""
    if delta:
        Order.objects.filter(id=order.id).update(
            total_bid_kg=F('total_bid_kg') + delta,
            updated_at=timezone.now()
        )
    order.refresh_from_db(fields=['total_bid_kg', 'updated_at'])


@transaction.atomic
def place_bid(
    *,
    order_id: UUID,
    user: User,
    min_kg: Decimal,
    max_kg: Decimal,
    price_per_kg: Decimal,
    now: Optional[datetime] = None
) -> Bid:
    """
    Commit a quantity range against an order.

    Args:
        order_id: UUID of the order
        user: Member placing the bid
        min_kg: Smallest quantity the member accepts
        max_kg: Largest quantity the member commits to
        price_per_kg: Price the member offers per kilogram
        now: Reference time for the bidding window (defaults to now)

    Returns:
        Created Bid, with ``bid.order`` carrying the updated total

    Raises:
        UnauthorizedError: If no authenticated user is given
        OrderNotFoundError: If order doesn't exist
        BiddingClosedError: If the order is not accepting bids
        InvalidBidError: If quantities or price are invalid
        DuplicateBidError: If the user already has an open bid on the order
    """
    _require_member(user)

    # Lock the order to serialize mutations of its total
    order = _lock_order(order_id)
    assert_open_for_bidding(order, now)
    _validate_quantities(min_kg, max_kg, price_per_kg)

    try:
        with transaction.atomic():
            bid = Bid.objects.create(
                order=order,
                user=user,
                min_kg=min_kg,
                max_kg=max_kg,
                price_per_kg=price_per_kg,
                status=BidStatus.ACTIVE
            )
    except IntegrityError:
        # Partial unique constraint on (order, user) for open bids
        raise DuplicateBidError(
            "You already have a bid on this order. Update it instead."
        )

    _adjust_total(order, max_kg)
    bid.order = order

    logger.info(
        "Bid %s placed on order %s by user %s: delta=+%s total=%s",
        bid.id, order.id, user.id, max_kg, order.total_bid_kg
    )
    return bid


@transaction.atomic
def update_bid(
    *,
    bid_id: UUID,
    user: User,
    min_kg: Optional[Decimal] = None,
    max_kg: Optional[Decimal] = None,
    price_per_kg: Optional[Decimal] = None,
    now: Optional[datetime] = None
) -> Bid:
    """
    Change an open bid's range or price.

    Omitted fields keep their current value. The order total moves by
    ``new max_kg - old max_kg``.

    Raises:
        UnauthorizedError: If no authenticated user is given
        BidNotFoundError: If bid doesn't exist or belongs to another user
        BidAlreadyCancelledError: If the bid was cancelled
        BiddingClosedError: If the order is not accepting bids
        InvalidBidError: If the resulting values are invalid
    """
    _require_member(user)

    order, bid = _lock_own_bid(bid_id, user)

    if bid.is_cancelled:
        raise BidAlreadyCancelledError("Cannot update a cancelled bid")

    assert_open_for_bidding(order, now)

    new_min_kg = bid.min_kg if min_kg is None else min_kg
    new_max_kg = bid.max_kg if max_kg is None else max_kg
    new_price = bid.price_per_kg if price_per_kg is None else price_per_kg
    _validate_quantities(new_min_kg, new_max_kg, new_price)

    delta = new_max_kg - bid.max_kg

    bid.min_kg = new_min_kg
    bid.max_kg = new_max_kg
    bid.price_per_kg = new_price
    bid.save(update_fields=['min_kg', 'max_kg', 'price_per_kg', 'updated_at'])

    _adjust_total(order, delta)
    bid.order = order

    logger.info(
        "Bid %s updated on order %s: delta=%s total=%s",
        bid.id, order.id, delta, order.total_bid_kg
    )
    return bid


@transaction.atomic
def cancel_bid(*, bid_id: UUID, user: User) -> Bid:
    """
    Cancel an open bid and release its quantity from the order total.

    Allowed at any time, including after bidding has closed. The bid row
    is kept with status cancelled.

    Raises:
        UnauthorizedError: If no authenticated user is given
        BidNotFoundError: If bid doesn't exist or belongs to another user
        BidAlreadyCancelledError: If the bid was already cancelled
    """
    _require_member(user)

    order, bid = _lock_own_bid(bid_id, user)

    # Conditional flip: only one caller can move a bid out of an open state
    flipped = (
        Bid.objects
        .filter(id=bid.id)
        .exclude(status=BidStatus.CANCELLED)
        .update(status=BidStatus.CANCELLED, updated_at=timezone.now())
    )
    if not flipped:
        raise BidAlreadyCancelledError("Bid is already cancelled")

    _adjust_total(order, -bid.max_kg)
    bid.refresh_from_db(fields=['status', 'updated_at'])
    bid.order = order

    logger.info(
        "Bid %s cancelled on order %s: delta=-%s total=%s",
        bid.id, order.id, bid.max_kg, order.total_bid_kg
    )
    return bid
