import pytest
from rest_framework.test import APIClient
from apps.accounts.models import User
from apps.accounts.views import issue_token_pair


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def user(db):
    """Active member with a known password."""
    return User.objects.create_user(
        email='testuser@example.com',
        password='TestPass123!',
        display_name='Test User',
    )


@pytest.fixture
def user_inactive(db):
    """Member deactivated by an admin."""
    return User.objects.create_user(
        email='inactive@example.com',
        password='TestPass123!',
        display_name='Inactive User',
        is_active=False,
    )


@pytest.fixture
def authenticated_client(api_client, user):
    """Client carrying the member's access token."""
    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {issue_token_pair(user)['access']}")
    return api_client
