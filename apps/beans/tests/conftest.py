import pytest
from datetime import timedelta
from decimal import Decimal
from django.utils import timezone
from rest_framework.test import APIClient
from apps.beans.models import CoffeeBean
from apps.orders.models import Order, OrderStatus


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def coffeebean(db):
    """Create and return a test coffee bean."""
    return CoffeeBean.objects.create(
        name='Ethiopian Yirgacheffe',
        origin='Ethiopia',
        region='Yirgacheffe',
        process='Washed',
        roast_level='Light',
        flavor_notes=['Blueberry', 'Jasmine'],
        description='Bright and floral.',
        moq_kg=200,
        price_per_kg=Decimal('18.50'),
    )


@pytest.fixture
def coffeebean_dark(db):
    """Create and return a darker, cheaper bean."""
    return CoffeeBean.objects.create(
        name='Sumatra Mandheling',
        origin='Indonesia',
        roast_level='Dark',
        flavor_notes=['Earthy', 'Cedar'],
        moq_kg=300,
        price_per_kg=Decimal('14.25'),
    )


@pytest.fixture
def coffeebean_unavailable(db):
    """Create and return a bean that is not on offer."""
    return CoffeeBean.objects.create(
        name='Kenya AA',
        origin='Kenya',
        roast_level='Light',
        moq_kg=100,
        price_per_kg=Decimal('22.00'),
        available=False,
    )


@pytest.fixture
def open_order(coffeebean):
    """Order for ``coffeebean`` still collecting bids."""
    return Order.objects.create(
        proposal_id=1,
        coffee_bean=coffeebean,
        target_quantity_kg=Decimal('500'),
        moq_kg=Decimal('200'),
        bidding_ends_at=timezone.now() + timedelta(days=7),
    )


@pytest.fixture
def closed_order(coffeebean):
    """Order for ``coffeebean`` that already failed."""
    return Order.objects.create(
        proposal_id=2,
        coffee_bean=coffeebean,
        target_quantity_kg=Decimal('500'),
        moq_kg=Decimal('200'),
        bidding_ends_at=timezone.now() - timedelta(days=1),
        status=OrderStatus.FAILED,
    )


@pytest.fixture
def lapsed_order(coffeebean):
    """Order still marked bidding whose deadline has passed."""
    return Order.objects.create(
        proposal_id=3,
        coffee_bean=coffeebean,
        target_quantity_kg=Decimal('500'),
        moq_kg=Decimal('200'),
        bidding_ends_at=timezone.now() - timedelta(hours=1),
    )
