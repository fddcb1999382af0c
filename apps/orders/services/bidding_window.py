"""
Bidding-window policy.

An order accepts bid placement and updates only while its status is
bidding and the deadline has not passed. Cancellation is not gated.
"""

from datetime import datetime
from typing import Optional

from django.utils import timezone

from apps.orders.models import Order, OrderStatus

from .exceptions import BiddingClosedError


def is_open_for_bidding(order: Order, now: Optional[datetime] = None) -> bool:
    """True iff the order is in bidding status and now < bidding_ends_at."""
    now = now or timezone.now()
    return order.status == OrderStatus.BIDDING and now < order.bidding_ends_at


def assert_open_for_bidding(order: Order, now: Optional[datetime] = None) -> None:
    """
    Guard used before every bid placement or update.

    Raises:
        BiddingClosedError: If the order left bidding status or the
            bidding period has ended
    """
    if order.status != OrderStatus.BIDDING:
        raise BiddingClosedError("This order is no longer accepting bids")

    if not is_open_for_bidding(order, now):
        raise BiddingClosedError("Bidding period has ended")
