from django.db import models
from decimal import Decimal
import uuid


class TransactionType(models.TextChoices):
    REVENUE_SHARE = 'revenue_share', 'Revenue share'
    INVESTMENT = 'investment', 'Investment'


class TransactionStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    COMPLETED = 'completed', 'Completed'
    FAILED = 'failed', 'Failed'


class Wallet(models.Model):
    """Credit balance of a single user."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.OneToOneField(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='wallet'
    )

    balance_usd = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00')
    )
    currency = models.CharField(max_length=3, default='USD')

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'wallets'

    def __str__(self):
        return f"{self.user.email}: {self.balance_usd} {self.currency}"


class WalletTransaction(models.Model):
    """
    Append-only ledger row.

    amount_usd is signed: credits are positive, debits negative. The
    revenue-share columns are only filled for revenue_share rows.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='wallet_transactions'
    )

    amount_usd = models.DecimalField(max_digits=12, decimal_places=2)
    currency = models.CharField(max_length=3, default='USD')
    type = models.CharField(max_length=30, choices=TransactionType.choices)
    category = models.CharField(max_length=50, blank=True)
    description = models.CharField(max_length=255, blank=True)
    status = models.CharField(
        max_length=20,
        choices=TransactionStatus.choices,
        default=TransactionStatus.COMPLETED
    )

    # Context
    product = models.ForeignKey(
        'products.Product',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='wallet_transactions'
    )
    investment = models.ForeignKey(
        'products.Investment',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='wallet_transactions'
    )
    order_id = models.CharField(max_length=128, blank=True, db_index=True)

    # Revenue share breakdown
    investment_percentage = models.DecimalField(
        max_digits=9,
        decimal_places=6,
        null=True,
        blank=True
    )
    sale_amount_usd = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    profit_usd = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    revenue_share_percentage = models.PositiveSmallIntegerField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'wallet_transactions'
        indexes = [
            models.Index(fields=['user', 'created_at'], name='wallet_tx_user_created_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.type} {self.amount_usd} {self.currency} ({self.user.email})"
