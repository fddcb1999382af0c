"""
Orders app services layer.

Services contain business logic and orchestrate operations across models.
Every mutation of an order's running total happens here, inside a
transaction holding the order row lock.
"""

from .exceptions import (
    OrdersServiceError,
    ValidationError,
    UnauthorizedError,
    NotFoundError,
    ConflictError,
    InvalidBidError,
    InvalidOrderError,
    OrderNotFoundError,
    BidNotFoundError,
    BeanNotFoundError,
    BiddingClosedError,
    DuplicateBidError,
    BidAlreadyCancelledError,
    DuplicateOrderError,
)

from .bidding_window import (
    is_open_for_bidding,
    assert_open_for_bidding,
)

from .bid_management import (
    place_bid,
    update_bid,
    cancel_bid,
)

from .order_management import (
    create_order,
    get_order_by_id,
    list_orders,
    recalculate_order_total,
)

from .bid_queries import (
    get_user_bids,
    get_order_bids,
)


__all__ = [
    # Exceptions
    'OrdersServiceError',
    'ValidationError',
    'UnauthorizedError',
    'NotFoundError',
    'ConflictError',
    'InvalidBidError',
    'InvalidOrderError',
    'OrderNotFoundError',
    'BidNotFoundError',
    'BeanNotFoundError',
    'BiddingClosedError',
    'DuplicateBidError',
    'BidAlreadyCancelledError',
    'DuplicateOrderError',

    # Bidding window
    'is_open_for_bidding',
    'assert_open_for_bidding',

    # Bid management
    'place_bid',
    'update_bid',
    'cancel_bid',

    # Order management
    'create_order',
    'get_order_by_id',
    'list_orders',
    'recalculate_order_total',

    # Queries
    'get_user_bids',
    'get_order_bids',
]
