import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.products.models import Investment, InvestmentStatus, Product, ProductStatus
from apps.revenue.distribution import (
    InvestmentSnapshot,
    ProductSnapshot,
    make_sale_event,
)
from apps.revenue.store import LedgerStore


# =============================================================================
# In-memory stores
# =============================================================================

class InMemoryLedgerStore(LedgerStore):
    """LedgerStore fake that keeps committed batches in a list."""

    def __init__(self, product=None, investments=()):
        self.product = product
        self.investments = list(investments)
        self.committed = []
        self.reads = 0

    def get_product(self, product_id):
        self.reads += 1
        if self.product is None or self.product.id != product_id:
            return None
        return self.product

    def list_investments(self, product_id):
        self.reads += 1
        return [inv for inv in self.investments if inv.product_id == product_id]

    def commit(self, batch):
        self.committed.append(batch)


class FailingCommitStore(InMemoryLedgerStore):
    """Store whose commit always fails, as a dropped connection would."""

    def commit(self, batch):
        raise ConnectionError('database went away')


class FailingReadStore(InMemoryLedgerStore):
    def get_product(self, product_id):
        raise ConnectionError('database went away')


# =============================================================================
# Snapshot fixtures
# =============================================================================

def make_sale(**overrides):
    fields = {
        'product_id': 'p1',
        'sale_amount': Decimal('100.00'),
        'manufacturing_cost': Decimal('50.00'),
        'quantity': 1,
        'order_id': 'order-1',
    }
    fields.update(overrides)
    return make_sale_event(**fields)


@pytest.fixture
def sale():
    """$100 sale of one unit costing $50: $50 profit, $12.50 pool."""
    return make_sale()


@pytest.fixture
def product_snapshot():
    return ProductSnapshot(id='p1', name='Desk Lamp', current_funding=Decimal('1000.00'))


@pytest.fixture
def split_investments():
    """Two investments holding 60% and 40% of a $1000 round."""
    return [
        InvestmentSnapshot(id='i1', product_id='p1', user_id='u1', amount=Decimal('600.00')),
        InvestmentSnapshot(id='i2', product_id='p1', user_id='u2', amount=Decimal('400.00')),
    ]


@pytest.fixture
def memory_store(product_snapshot, split_investments):
    return InMemoryLedgerStore(product_snapshot, split_investments)


# =============================================================================
# Database fixtures
# =============================================================================

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
        roles=[UserRole.CUSTOMER, UserRole.DESIGNER],
    )


@pytest.fixture
def manufacturer(db):
    """Create and return a manufacturer who reports sales."""
    return User.objects.create_user(
        email='manufacturer@example.com',
        password='TestPass123!',
        display_name='Manufacturer',
        roles=[UserRole.MANUFACTURER],
    )


@pytest.fixture
def customer(db):
    """Create and return a plain customer."""
    return User.objects.create_user(
        email='customer@example.com',
        password='TestPass123!',
        display_name='Customer',
    )


@pytest.fixture
def investor1(db):
    return User.objects.create_user(
        email='investor1@example.com',
        password='TestPass123!',
        display_name='Investor One',
        roles=[UserRole.INVESTOR],
    )


@pytest.fixture
def investor2(db):
    return User.objects.create_user(
        email='investor2@example.com',
        password='TestPass123!',
        display_name='Investor Two',
        roles=[UserRole.INVESTOR],
    )


@pytest.fixture
def funded_product(db, designer, investor1, investor2):
    """Product with a $1000 round split 60/40 between two investors."""
    product = Product.objects.create(
        name='Desk Lamp',
        designer=designer,
        status=ProductStatus.ACTIVE,
        funding_goal_usd=Decimal('1000.00'),
        current_funding_usd=Decimal('1000.00'),
        investor_count=2,
    )
    Investment.objects.create(product=product, user=investor1, amount_usd=Decimal('600.00'))
    Investment.objects.create(product=product, user=investor2, amount_usd=Decimal('400.00'))
    return product


@pytest.fixture
def unfunded_product(db, designer):
    """Product nobody has invested in."""
    return Product.objects.create(
        name='Bookshelf',
        designer=designer,
        status=ProductStatus.FUNDING,
    )


@pytest.fixture
def withdrawn_investment(db, funded_product, customer):
    """Withdrawn stake that must not be paid."""
    return Investment.objects.create(
        product=funded_product,
        user=customer,
        amount_usd=Decimal('500.00'),
        status=InvestmentStatus.WITHDRAWN,
    )


@pytest.fixture
def manufacturer_client(api_client, manufacturer):
    """Return API client authenticated as manufacturer."""
    refresh = RefreshToken.for_user(manufacturer)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def customer_client(customer):
    """Return API client authenticated as customer."""
    client = APIClient()
    refresh = RefreshToken.for_user(customer)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def sale_payload(funded_product):
    return {
        'productId': str(funded_product.id),
        'saleAmount': '100.00',
        'manufacturingCost': '50.00',
        'quantity': 1,
        'orderId': 'order-1042',
    }


@pytest.fixture
def sale_factory():
    """Return a builder for SaleEvents with overridable fields."""
    return make_sale
