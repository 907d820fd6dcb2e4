import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.products.models import Product, ProductStatus
from apps.wallets.models import Wallet


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def designer(db):
    """Create and return a product designer."""
    return User.objects.create_user(
        email='designer@example.com',
        password='TestPass123!',
        display_name='Product Designer',
        roles=[UserRole.DESIGNER],
    )


@pytest.fixture
def investor(db):
    """Create and return an investor with a funded wallet."""
    user = User.objects.create_user(
        email='investor@example.com',
        password='TestPass123!',
        display_name='Ivy Investor',
        roles=[UserRole.CUSTOMER, UserRole.INVESTOR],
    )
    Wallet.objects.create(user=user, balance_usd=Decimal('1000.00'))
    return user


@pytest.fixture
def investor_without_wallet(db):
    return User.objects.create_user(
        email='nowallet@example.com',
        password='TestPass123!',
        display_name='No Wallet',
        roles=[UserRole.INVESTOR],
    )


@pytest.fixture
def customer(db):
    """Create and return a user without the investor role."""
    user = User.objects.create_user(
        email='customer@example.com',
        password='TestPass123!',
        display_name='Customer',
    )
    Wallet.objects.create(user=user, balance_usd=Decimal('1000.00'))
    return user


@pytest.fixture
def funding_product(db, designer):
    """Product in its funding round."""
    return Product.objects.create(
        name='Desk Lamp',
        designer=designer,
        status=ProductStatus.FUNDING,
        funding_goal_usd=Decimal('5000.00'),
    )


@pytest.fixture
def draft_product(db, designer):
    """Product not yet open for investment."""
    return Product.objects.create(
        name='Prototype Chair',
        designer=designer,
        status=ProductStatus.DRAFT,
    )


@pytest.fixture
def orphan_product(db):
    """Funding product whose designer account is gone."""
    return Product.objects.create(
        name='Orphan Stool',
        status=ProductStatus.FUNDING,
    )


@pytest.fixture
def investor_client(api_client, investor):
    """Return API client authenticated as investor."""
    refresh = RefreshToken.for_user(investor)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def customer_client(customer):
    """Return API client authenticated as customer."""
    client = APIClient()
    refresh = RefreshToken.for_user(customer)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client
