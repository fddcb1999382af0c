"""
Read-only bid queries.
"""

from typing import Optional
from uuid import UUID

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.orders.models import Order, Bid, BidStatus

from .exceptions import OrderNotFoundError


def get_user_bids(*, user: User, status: Optional[str] = None) -> QuerySet[Bid]:
    """All bids of a user, newest first, with order and bean joined."""
    queryset = (
        Bid.objects
        .filter(user=user)
        .select_related('order', 'order__coffee_bean')
    )

    if status:
        queryset = queryset.filter(status=status)

    return queryset.order_by('-created_at')


def get_order_bids(
    *,
    order_id: UUID,
    status: Optional[str] = None,
    open_only: bool = False
) -> QuerySet[Bid]:
    """
    Bids on one order, newest first.

    ``open_only`` drops cancelled bids, leaving exactly the bids counted
    in the order's running total.

    Raises:
        OrderNotFoundError: If order doesn't exist
    """
    try:
        order = Order.objects.get(id=order_id)
    except (Order.DoesNotExist, ValueError, DjangoValidationError):
        raise OrderNotFoundError(f"Order with ID {order_id} not found")

    queryset = order.bids.select_related('user', 'order')

    if status:
        queryset = queryset.filter(status=status)

    if open_only:
        queryset = queryset.exclude(status=BidStatus.CANCELLED)

    return queryset.order_by('-created_at')
