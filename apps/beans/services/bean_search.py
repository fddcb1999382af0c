"""Bean search and filtering service."""

from django.db.models import QuerySet
from django.utils import timezone
from typing import Optional

from apps.orders.models import Order, OrderStatus
from ..models import CoffeeBean


SORT_ORDERINGS = {
    'name': ('name',),
    'price': ('price_per_kg', 'name'),
    'price_desc': ('-price_per_kg', 'name'),
    'moq': ('moq_kg', 'name'),
}
DEFAULT_SORT = 'name'


def search_beans(
    *,
    origin: Optional[str] = None,
    roast_level: Optional[str] = None,
    available: Optional[bool] = None,
    sort: str = DEFAULT_SORT
) -> QuerySet[CoffeeBean]:
    """
    Filter and sort the catalog.

    Args:
        origin: Exact origin country
        roast_level: Exact roast label
        available: Availability flag, None for both
        sort: One of ``name``, ``price``, ``price_desc``, ``moq``;
            unknown keys fall back to ``name``

    Returns:
        Filtered QuerySet of CoffeeBean
    """
    queryset = CoffeeBean.objects.all()

    if origin:
        queryset = queryset.filter(origin=origin)

    if roast_level:
        queryset = queryset.filter(roast_level=roast_level)

    if available is not None:
        queryset = queryset.filter(available=available)

    ordering = SORT_ORDERINGS.get(sort, SORT_ORDERINGS[DEFAULT_SORT])
    return queryset.order_by(*ordering)


def get_all_origins(*, only_available: bool = False) -> list[str]:
    """
    Get list of all unique origin countries.

    Args:
        only_available: Only include available beans

    Returns:
        Sorted list of origin countries
    """
    queryset = CoffeeBean.objects.all()

    if only_available:
        queryset = queryset.filter(available=True)

    origins = (
        queryset
        .exclude(origin='')
        .values_list('origin', flat=True)
        .distinct()
        .order_by('origin')
    )

    return list(origins)


def get_open_orders_for_bean(*, bean: CoffeeBean) -> QuerySet[Order]:
    """Orders for this bean that still accept bids, soonest deadline first."""
    return (
        Order.objects
        .filter(
            coffee_bean=bean,
            status=OrderStatus.BIDDING,
            bidding_ends_at__gt=timezone.now(),
        )
        .order_by('bidding_ends_at')
    )
