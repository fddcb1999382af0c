import pytest
from decimal import Decimal
from uuid import uuid4
from django.urls import reverse
from rest_framework import status
from apps.orders.models import Order, Bid, BidStatus
from apps.orders.services import recalculate_order_total


def bid_payload(order, **overrides):
    data = {
        'order_id': str(order.id),
        'min_kg': '10',
        'max_kg': '50',
        'price_per_kg': '18.50',
    }
    data.update(overrides)
    return data


# =============================================================================
# Order Tests
# =============================================================================

@pytest.mark.django_db
class TestOrderList:
    """Tests for GET /api/orders/"""

    def test_list_orders_public(self, api_client, order, bid):
        url = reverse('orders:order-list')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 1
        result = response.data['results'][0]
        assert result['proposal_id'] == order.proposal_id
        assert result['coffee_bean']['name'] == order.coffee_bean.name
        assert Decimal(result['total_bid_kg']) == Decimal('50')
        assert result['bid_count'] == 1
        assert result['moq_met'] is False
        assert Decimal(result['moq_progress_pct']) == Decimal('25.0')
        assert Decimal(result['target_progress_pct']) == Decimal('10.0')

    def test_filter_by_status(self, api_client, order, confirmed_order):
        url = reverse('orders:order-list')
        response = api_client.get(url, {'status': 'confirmed'})

        assert response.status_code == status.HTTP_200_OK
        assert [o['proposal_id'] for o in response.data['results']] == [confirmed_order.proposal_id]

    def test_filter_by_proposal(self, api_client, order, confirmed_order):
        url = reverse('orders:order-list')
        response = api_client.get(url, {'proposal_id': order.proposal_id})

        assert [o['id'] for o in response.data['results']] == [str(order.id)]

    def test_proposal_filter_beyond_column_range(self, api_client, order):
        url = reverse('orders:order-list')
        response = api_client.get(url, {'proposal_id': str(10 ** 30)})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_invalid_status_filter(self, api_client, order):
        url = reverse('orders:order-list')
        response = api_client.get(url, {'status': 'shipped'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestOrderDetail:
    """Tests for GET /api/orders/{id}/"""

    def test_retrieve_order(self, api_client, order):
        url = reverse('orders:order-detail', args=[order.id])
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['id'] == str(order.id)
        assert response.data['status'] == 'bidding'
        assert response.data['bid_count'] == 0

    def test_missing_order(self, api_client, db):
        url = reverse('orders:order-detail', args=[uuid4()])
        response = api_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['code'] == 'not_found'


@pytest.mark.django_db
class TestOrderCreate:
    """Tests for POST /api/orders/"""

    def test_create_order(self, authenticated_client, coffee_bean):
        url = reverse('orders:order-list')
        data = {
            'proposal_id': 10,
            'coffee_bean_id': str(coffee_bean.id),
            'target_quantity_kg': '500',
            'moq_kg': '200',
            'bidding_days': 7,
        }
        response = authenticated_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['proposal_id'] == 10
        assert Decimal(response.data['total_bid_kg']) == Decimal('0')
        assert Order.objects.filter(proposal_id=10).exists()

    def test_duplicate_proposal_conflict(self, authenticated_client, order, coffee_bean):
        url = reverse('orders:order-list')
        data = {
            'proposal_id': order.proposal_id,
            'coffee_bean_id': str(coffee_bean.id),
            'target_quantity_kg': '500',
            'moq_kg': '200',
        }
        response = authenticated_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['code'] == 'conflict'

    def test_missing_bean(self, authenticated_client, db):
        url = reverse('orders:order-list')
        data = {
            'proposal_id': 11,
            'coffee_bean_id': str(uuid4()),
            'target_quantity_kg': '500',
            'moq_kg': '200',
        }
        response = authenticated_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['error'] == 'Coffee bean not found'

    def test_non_positive_quantity(self, authenticated_client, coffee_bean):
        url = reverse('orders:order-list')
        data = {
            'proposal_id': 12,
            'coffee_bean_id': str(coffee_bean.id),
            'target_quantity_kg': '0',
            'moq_kg': '200',
        }
        response = authenticated_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'validation_error'

    def test_unknown_field_rejected(self, authenticated_client, coffee_bean):
        url = reverse('orders:order-list')
        data = {
            'proposal_id': 13,
            'coffee_bean_id': str(coffee_bean.id),
            'target_quantity_kg': '500',
            'moq_kg': '200',
            'total_bid_kg': '999',
        }
        response = authenticated_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'total_bid_kg' in response.data
        assert not Order.objects.filter(proposal_id=13).exists()

    def test_proposal_id_beyond_column_range(self, authenticated_client, coffee_bean):
        url = reverse('orders:order-list')
        data = {
            'proposal_id': 10 ** 30,
            'coffee_bean_id': str(coffee_bean.id),
            'target_quantity_kg': '500',
            'moq_kg': '200',
        }
        response = authenticated_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'proposal_id' in response.data
        assert not Order.objects.exists()

    def test_unauthenticated(self, api_client, coffee_bean):
        url = reverse('orders:order-list')
        response = api_client.post(url, {}, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestOrderBids:
    """Tests for GET /api/orders/{id}/bids/"""

    def test_lists_active_bids(self, api_client, order, bid, other_user):
        Bid.objects.create(
            order=order,
            user=other_user,
            min_kg=Decimal('1'),
            max_kg=Decimal('5'),
            price_per_kg=Decimal('18.50'),
            status=BidStatus.CANCELLED,
        )
        url = reverse('orders:order-bids', args=[order.id])
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 1
        assert response.data['results'][0]['id'] == str(bid.id)
        assert response.data['results'][0]['user']['display_name'] == 'Member'

    def test_default_listing_matches_running_total(self, api_client, order, bid, other_user):
        """Accepted bids count towards the total, so they are listed too."""
        accepted = Bid.objects.create(
            order=order,
            user=other_user,
            min_kg=Decimal('10'),
            max_kg=Decimal('20'),
            price_per_kg=Decimal('18.50'),
            status=BidStatus.ACCEPTED,
        )
        url = reverse('orders:order-bids', args=[order.id])
        response = api_client.get(url)

        ids = {b['id'] for b in response.data['results']}
        assert ids == {str(bid.id), str(accepted.id)}
        listed_kg = sum(Decimal(b['max_kg']) for b in response.data['results'])
        assert listed_kg == recalculate_order_total(order_id=order.id)

    def test_status_filter(self, api_client, order, bid):
        url = reverse('orders:order-bids', args=[order.id])
        response = api_client.get(url, {'status': 'cancelled'})

        assert response.data['count'] == 0

    def test_missing_order(self, api_client, db):
        url = reverse('orders:order-bids', args=[uuid4()])
        response = api_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND


# =============================================================================
# Bid Tests
# =============================================================================

@pytest.mark.django_db
class TestPlaceBid:
    """Tests for POST /api/orders/bids/"""

    def test_place_bid(self, authenticated_client, order, user):
        url = reverse('orders:bid-list')
        response = authenticated_client.post(url, bid_payload(order), format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['status'] == 'active'
        assert Decimal(response.data['max_kg']) == Decimal('50')
        assert Decimal(response.data['order_total_bid_kg']) == Decimal('50')
        assert response.data['user']['id'] == str(user.id)

        order.refresh_from_db()
        assert order.total_bid_kg == Decimal('50')

    def test_duplicate_bid_conflict(self, authenticated_client, order, bid):
        url = reverse('orders:bid-list')
        response = authenticated_client.post(url, bid_payload(order), format='json')

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['code'] == 'conflict'
        assert 'already have a bid' in response.data['error']

    def test_expired_order_conflict(self, authenticated_client, expired_order):
        url = reverse('orders:bid-list')
        response = authenticated_client.post(url, bid_payload(expired_order), format='json')

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['error'] == 'Bidding period has ended'

    def test_min_above_max(self, authenticated_client, order):
        url = reverse('orders:bid-list')
        payload = bid_payload(order, min_kg='60', max_kg='50')
        response = authenticated_client.post(url, payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'validation_error'

    def test_missing_order(self, authenticated_client, db):
        url = reverse('orders:bid-list')
        payload = {
            'order_id': str(uuid4()),
            'min_kg': '10',
            'max_kg': '50',
            'price_per_kg': '18.50',
        }
        response = authenticated_client.post(url, payload, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_missing_field(self, authenticated_client, order):
        url = reverse('orders:bid-list')
        payload = bid_payload(order)
        del payload['max_kg']
        response = authenticated_client.post(url, payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'max_kg' in response.data

    def test_unknown_field_rejected(self, authenticated_client, order):
        url = reverse('orders:bid-list')
        payload = bid_payload(order, user_id=str(uuid4()))
        response = authenticated_client.post(url, payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'user_id' in response.data
        assert not Bid.objects.exists()

    def test_unauthenticated(self, api_client, order):
        url = reverse('orders:bid-list')
        response = api_client.post(url, bid_payload(order), format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert not Bid.objects.exists()


@pytest.mark.django_db
class TestUpdateBid:
    """Tests for PATCH /api/orders/bids/{id}/"""

    def test_update_bid_applies_delta(self, authenticated_client, order, bid):
        url = reverse('orders:bid-detail', args=[bid.id])
        response = authenticated_client.patch(url, {'max_kg': '80'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert Decimal(response.data['max_kg']) == Decimal('80')
        assert Decimal(response.data['order_total_bid_kg']) == Decimal('80')

    def test_other_members_bid(self, other_client, bid):
        url = reverse('orders:bid-detail', args=[bid.id])
        response = other_client.patch(url, {'max_kg': '80'}, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        bid.refresh_from_db()
        assert bid.max_kg == Decimal('50')

    def test_cancelled_bid_conflict(self, authenticated_client, bid):
        Bid.objects.filter(id=bid.id).update(status=BidStatus.CANCELLED)
        url = reverse('orders:bid-detail', args=[bid.id])
        response = authenticated_client.patch(url, {'max_kg': '80'}, format='json')

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_unknown_field_rejected(self, authenticated_client, bid):
        url = reverse('orders:bid-detail', args=[bid.id])
        response = authenticated_client.patch(url, {'status': 'accepted'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        bid.refresh_from_db()
        assert bid.status == BidStatus.ACTIVE


@pytest.mark.django_db
class TestCancelBid:
    """Tests for DELETE /api/orders/bids/{id}/"""

    def test_cancel_bid(self, authenticated_client, order, bid):
        url = reverse('orders:bid-detail', args=[bid.id])
        response = authenticated_client.delete(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == 'cancelled'
        assert Decimal(response.data['order_total_bid_kg']) == Decimal('0')
        assert Bid.objects.filter(id=bid.id).exists()

    def test_cancel_twice_conflict(self, authenticated_client, order, bid):
        url = reverse('orders:bid-detail', args=[bid.id])
        authenticated_client.delete(url)
        response = authenticated_client.delete(url)

        assert response.status_code == status.HTTP_409_CONFLICT
        order.refresh_from_db()
        assert order.total_bid_kg == Decimal('0')

    def test_other_members_bid(self, other_client, bid):
        url = reverse('orders:bid-detail', args=[bid.id])
        response = other_client.delete(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestMyBids:
    """Tests for GET /api/orders/bids/mine/"""

    def test_lists_own_bids_only(self, authenticated_client, order, bid, other_user):
        Bid.objects.create(
            order=order,
            user=other_user,
            min_kg=Decimal('1'),
            max_kg=Decimal('5'),
            price_per_kg=Decimal('18.50'),
        )
        url = reverse('orders:bid-mine')
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 1
        result = response.data['results'][0]
        assert result['id'] == str(bid.id)
        assert result['order']['proposal_id'] == order.proposal_id
        assert result['order']['coffee_bean_name'] == order.coffee_bean.name

    def test_unauthenticated(self, api_client):
        url = reverse('orders:bid-mine')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
