"""
Ledger mutations produced by a revenue distribution.

A MutationBatch holds every write for one sale: a wallet credit, a
transaction record and a notification per paid investor, plus the totals
for the RevenueDistribution row. Stores apply a batch all-or-nothing.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Tuple

from apps.notifications.models import NotificationType
from apps.wallets.models import TransactionStatus, TransactionType

from .distribution import DistributionPlan, ProductSnapshot, from_cents, to_cents

REVENUE_SHARE_CATEGORY = 'investment_return'
PORTFOLIO_LINK = '/portfolio'


@dataclass(frozen=True)
class WalletCredit:
    user_id: str
    amount: Decimal


@dataclass(frozen=True)
class TransactionRecord:
    user_id: str
    amount: Decimal
    description: str
    product_id: str
    order_id: str
    investment_id: str
    investment_percentage: Decimal
    sale_amount: Decimal
    profit: Decimal
    revenue_share_percentage: int
    type: str = TransactionType.REVENUE_SHARE
    category: str = REVENUE_SHARE_CATEGORY
    status: str = TransactionStatus.COMPLETED


@dataclass(frozen=True)
class NotificationRecord:
    user_id: str
    title: str
    message: str
    link: str = PORTFOLIO_LINK
    type: str = NotificationType.REVENUE_SHARE


@dataclass(frozen=True)
class MutationBatch:
    product_id: str
    order_id: str
    sale_amount: Decimal
    manufacturing_cost: Decimal
    quantity: int
    profit: Decimal
    pool: Decimal
    distributed: Decimal
    investor_count: int
    revenue_share_percentage: int
    wallet_credits: Tuple[WalletCredit, ...] = ()
    transactions: Tuple[TransactionRecord, ...] = ()
    notifications: Tuple[NotificationRecord, ...] = ()


def build_mutation_batch(plan: DistributionPlan, product: ProductSnapshot) -> MutationBatch:
    """
    Turn a non-terminal plan into the writes that pay it out.

    Amounts are the floored cent values from the plan, so the stored sale
    and cost match what the arithmetic used.
    """
    product_name = product.name or 'product'
    sale = plan.sale
    sale_amount = from_cents(to_cents(sale.sale_amount))
    profit = from_cents(plan.profit_cents)

    credits = []
    transactions = []
    notifications = []
    for share in plan.shares:
        amount = share.amount
        credits.append(WalletCredit(user_id=share.investor_id, amount=amount))
        transactions.append(TransactionRecord(
            user_id=share.investor_id,
            amount=amount,
            description=f"Revenue share from sale of {product_name}",
            product_id=product.id,
            order_id=sale.order_id,
            investment_id=share.investment_id,
            investment_percentage=share.percentage,
            sale_amount=sale_amount,
            profit=profit,
            revenue_share_percentage=plan.revenue_share_percentage,
        ))
        notifications.append(NotificationRecord(
            user_id=share.investor_id,
            title='Investment Revenue',
            message=(
                f"You've earned {amount} credits from sales of "
                f"{product_name} you invested in!"
            ),
        ))

    return MutationBatch(
        product_id=product.id,
        order_id=sale.order_id,
        sale_amount=sale_amount,
        manufacturing_cost=from_cents(to_cents(sale.manufacturing_cost)),
        quantity=sale.quantity,
        profit=profit,
        pool=from_cents(plan.pool_cents),
        distributed=from_cents(plan.total_distributed_cents),
        investor_count=plan.investor_count,
        revenue_share_percentage=plan.revenue_share_percentage,
        wallet_credits=tuple(credits),
        transactions=tuple(transactions),
        notifications=tuple(notifications),
    )
