"""
Domain-specific exceptions for orders app.

Every error belongs to one of four kinds (validation, unauthorized,
not found, conflict). Views map the kind to an HTTP status and return
the kind's ``code`` alongside the message.
"""


class OrdersServiceError(Exception):
    """Base exception for all orders service errors."""
    code = 'orders_error'


# Kinds

class ValidationError(OrdersServiceError):
    """Malformed or out-of-range input."""
    code = 'validation_error'


class UnauthorizedError(OrdersServiceError):
    """Missing or invalid identity."""
    code = 'unauthorized'


class NotFoundError(OrdersServiceError):
    """Referenced record is absent or not visible to the caller."""
    code = 'not_found'


class ConflictError(OrdersServiceError):
    """Operation clashes with the current state."""
    code = 'conflict'


# Validation

class InvalidBidError(ValidationError):
    """Raised when bid quantities or price are not acceptable."""
    pass


class InvalidOrderError(ValidationError):
    """Raised when order parameters are not acceptable."""
    pass


# Not found

class OrderNotFoundError(NotFoundError):
    """Raised when an order does not exist."""
    pass


class BidNotFoundError(NotFoundError):
    """Raised when a bid does not exist or belongs to another user."""
    pass


class BeanNotFoundError(NotFoundError):
    """Raised when a coffee bean does not exist."""
    pass


# Conflict

class BiddingClosedError(ConflictError):
    """Raised when an order is no longer accepting bids."""
    pass


class DuplicateBidError(ConflictError):
    """Raised when a user already has an open bid on the order."""
    pass


class BidAlreadyCancelledError(ConflictError):
    """Raised when acting on a bid that was already cancelled."""
    pass


class DuplicateOrderError(ConflictError):
    """Raised when an order for the proposal already exists."""
    pass
