"""Services for beans business logic."""

from .exceptions import (
    BeansServiceError,
    BeanNotFoundError,
    DuplicateBeanError,
)
from .bean_management import (
    create_bean,
    get_bean_by_id,
)
from .bean_search import (
    search_beans,
    get_all_origins,
    get_open_orders_for_bean,
    SORT_ORDERINGS,
)

__all__ = [
    # Exceptions
    'BeansServiceError',
    'BeanNotFoundError',
    'DuplicateBeanError',
    # Bean Management
    'create_bean',
    'get_bean_by_id',
    # Bean Search
    'search_beans',
    'get_all_origins',
    'get_open_orders_for_bean',
    'SORT_ORDERINGS',
]
