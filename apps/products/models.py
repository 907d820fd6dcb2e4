from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
import uuid


class ProductStatus(models.TextChoices):
    DRAFT = 'draft', 'Draft'
    FUNDING = 'funding', 'Funding'
    ACTIVE = 'active', 'Active'
    CLOSED = 'closed', 'Closed'


class InvestmentStatus(models.TextChoices):
    ACTIVE = 'active', 'Active'
    WITHDRAWN = 'withdrawn', 'Withdrawn'


class Product(models.Model):
    """Crowdfunded product. current_funding_usd is the ownership denominator."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)

    designer = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='designed_products'
    )

    status = models.CharField(
        max_length=20,
        choices=ProductStatus.choices,
        default=ProductStatus.DRAFT
    )

    # Funding round
    funding_goal_usd = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True
    )
    current_funding_usd = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00')
    )
    investor_count = models.PositiveIntegerField(default=0)
    last_funded_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'products'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.name} ({self.current_funding_usd} USD raised)"

    @property
    def is_accepting_investments(self):
        return self.status in (ProductStatus.FUNDING, ProductStatus.ACTIVE)


class Investment(models.Model):
    """One investor's stake in a product's funding round."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    product = models.ForeignKey(
        Product,
        on_delete=models.CASCADE,
        related_name='investments'
    )
    # Nullable: legacy rows without an investor are skipped at payout
    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='investments'
    )

    amount_usd = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    status = models.CharField(
        max_length=20,
        choices=InvestmentStatus.choices,
        default=InvestmentStatus.ACTIVE
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'investments'
        indexes = [
            models.Index(fields=['product', 'status'], name='investments_product_status_idx'),
        ]
        ordering = ['created_at']

    def __str__(self):
        investor = self.user.email if self.user else 'unknown investor'
        return f"{investor} - {self.amount_usd} USD in {self.product.name}"
