import pytest
from datetime import timedelta
from decimal import Decimal
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.beans.models import CoffeeBean
from apps.orders.models import Order, Bid, OrderStatus, BidStatus


def jwt_client(user):
    """API client carrying a Bearer access token for ``user``."""
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Create and return a test member."""
    return User.objects.create_user(
        email='member@example.com',
        password='TestPass123!',
        display_name='Member',
    )


@pytest.fixture
def other_user(db):
    """Create and return a second member."""
    return User.objects.create_user(
        email='other@example.com',
        password='TestPass123!',
        display_name='Other Member',
    )


@pytest.fixture
def authenticated_client(user):
    """Return API client authenticated as ``user``."""
    return jwt_client(user)


@pytest.fixture
def other_client(other_user):
    """Return API client authenticated as ``other_user``."""
    return jwt_client(other_user)


@pytest.fixture
def coffee_bean(db):
    """Create and return a catalog bean."""
    return CoffeeBean.objects.create(
        name='Ethiopian Yirgacheffe',
        origin='Ethiopia',
        region='Yirgacheffe',
        process='Washed',
        roast_level='Light',
        flavor_notes=['Blueberry', 'Jasmine'],
        moq_kg=200,
        price_per_kg=Decimal('18.50'),
    )


@pytest.fixture
def order(coffee_bean):
    """Order open for bidding for another week."""
    return Order.objects.create(
        proposal_id=1,
        coffee_bean=coffee_bean,
        target_quantity_kg=Decimal('500'),
        moq_kg=Decimal('200'),
        bidding_ends_at=timezone.now() + timedelta(days=7),
    )


@pytest.fixture
def expired_order(coffee_bean):
    """Order still in bidding status whose deadline has passed."""
    return Order.objects.create(
        proposal_id=2,
        coffee_bean=coffee_bean,
        target_quantity_kg=Decimal('500'),
        moq_kg=Decimal('200'),
        bidding_ends_at=timezone.now() - timedelta(days=1),
    )


@pytest.fixture
def confirmed_order(coffee_bean):
    """Order that has left bidding status before its deadline."""
    return Order.objects.create(
        proposal_id=3,
        coffee_bean=coffee_bean,
        target_quantity_kg=Decimal('500'),
        moq_kg=Decimal('200'),
        bidding_ends_at=timezone.now() + timedelta(days=7),
        status=OrderStatus.CONFIRMED,
    )


@pytest.fixture
def bid(order, user):
    """Active bid of ``user`` on ``order`` with the total kept in step."""
    bid = Bid.objects.create(
        order=order,
        user=user,
        min_kg=Decimal('10'),
        max_kg=Decimal('50'),
        price_per_kg=Decimal('18.50'),
        status=BidStatus.ACTIVE,
    )
    Order.objects.filter(id=order.id).update(total_bid_kg=Decimal('50'))
    order.refresh_from_db()
    return bid
