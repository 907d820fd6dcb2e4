import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def investor(db):
    return User.objects.create_user(
        email='investor@example.com',
        password='TestPass123!',
        display_name='Ivy Investor',
        roles=[UserRole.INVESTOR],
    )


@pytest.fixture
def other_user(db):
    return User.objects.create_user(
        email='other@example.com',
        password='TestPass123!',
        display_name='Other User',
    )


@pytest.fixture
def investor_client(api_client, investor):
    """Return API client authenticated as investor."""
    refresh = RefreshToken.for_user(investor)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client
