"""
Investment processing service.

Moves money from an investor's wallet into a product's funding round.
Keeps Product.current_funding_usd equal to the sum of active investments,
which the revenue distributor uses as its ownership denominator.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import F
from django.utils import timezone

from apps.accounts.models import User, UserRole
from apps.notifications.models import Notification, NotificationType
from apps.products.models import Investment, InvestmentStatus, Product
from apps.wallets.models import TransactionType, Wallet, WalletTransaction

from .exceptions import (
    InsufficientFundsError,
    InvalidInvestmentError,
    InvestorRoleRequiredError,
    ProductNotAcceptingInvestmentsError,
    ProductNotFoundError,
    WalletNotFoundError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InvestmentReceipt:
    investment: Investment
    funding_total: Decimal
    message: str


@transaction.atomic
def process_investment(*, user: User, product_id: UUID, amount: Decimal) -> InvestmentReceipt:
    """
    Invest from the user's wallet into a product.

    Locks the product and the wallet rows so concurrent investments cannot
    overdraw the wallet or lose a funding increment.

    Args:
        user: The investing user
        product_id: UUID of the product
        amount: Amount in USD, greater than zero

    Returns:
        InvestmentReceipt with the created Investment and new funding total

    Raises:
        InvalidInvestmentError: If amount is not positive
        InvestorRoleRequiredError: If user lacks the investor role
        ProductNotFoundError: If product doesn't exist
        ProductNotAcceptingInvestmentsError: If product has no designer or
            is not funding/active
        WalletNotFoundError: If user has no wallet
        InsufficientFundsError: If wallet balance is below amount
    """
    if amount is None or amount <= 0:
        raise InvalidInvestmentError("Investment amount must be greater than zero")

    if not user.has_role(UserRole.INVESTOR):
        raise InvestorRoleRequiredError("You need investor role to make investments")

    try:
        product = (
            Product.objects
            .select_for_update()
            .get(id=product_id)
        )
    except (Product.DoesNotExist, ValidationError, ValueError):
        raise ProductNotFoundError(f"Product with ID {product_id} not found")

    if product.designer_id is None:
        raise ProductNotAcceptingInvestmentsError("Invalid product data: missing designer")

    if not product.is_accepting_investments:
        raise ProductNotAcceptingInvestmentsError(
            "This product is not currently accepting investments"
        )

    try:
        wallet = Wallet.objects.select_for_update().get(user=user)
    except Wallet.DoesNotExist:
        raise WalletNotFoundError("Wallet not found")

    if wallet.balance_usd < amount:
        raise InsufficientFundsError("Insufficient funds in wallet")

    now = timezone.now()

    Wallet.objects.filter(pk=wallet.pk).update(
        balance_usd=F('balance_usd') - amount,
        updated_at=now,
    )

    Product.objects.filter(pk=product.pk).update(
        current_funding_usd=F('current_funding_usd') + amount,
        investor_count=F('investor_count') + 1,
        last_funded_at=now,
        updated_at=now,
    )

    investment = Investment.objects.create(
        product=product,
        user=user,
        amount_usd=amount,
        status=InvestmentStatus.ACTIVE,
    )

    WalletTransaction.objects.create(
        user=user,
        amount_usd=-amount,
        type=TransactionType.INVESTMENT,
        description=f"Investment in {product.name}",
        product=product,
        investment=investment,
    )

    Notification.objects.bulk_create([
        Notification(
            user=user,
            type=NotificationType.INVESTMENT,
            title='Investment Successful',
            message=f"You've successfully invested ${amount} in {product.name}",
            link=f"/product/{product.id}",
        ),
        Notification(
            user_id=product.designer_id,
            type=NotificationType.INVESTMENT,
            title='New Investment',
            message=f'{user.get_display_name()} has invested ${amount} in your product "{product.name}"',
            link=f"/product/{product.id}",
        ),
    ])

    funding_total = product.current_funding_usd + amount
    logger.info("User %s invested %s in product %s", user.id, amount, product.id)

    return InvestmentReceipt(
        investment=investment,
        funding_total=funding_total,
        message=f"Successfully invested {amount} in {product.name}",
    )

