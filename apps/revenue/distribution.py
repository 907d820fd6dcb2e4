"""
Revenue Distribution Arithmetic
===============================

Pure functions that turn a sale into per-investor payouts. Nothing in this
module touches the database; the ledger store and the service layer apply
the resulting plan.

All money is converted to integer cents by flooring before any arithmetic,
and ownership is expressed in basis points (1/100 of a percent), so the
computation never accumulates floating point error.

Algorithm:
    1. ``profit = max(0, floor(sale * 100) - floor(unit_cost * 100) * quantity)``
    2. ``pool = floor(profit * 25 / 100)``
    3. For each investment: ``bps = floor(amount * 10000 / funding)``
    4. ``share = floor(pool * bps / 10000)``; shares below one cent are skipped

Each step floors, so the shares never add up to more than the pool.

Example:
    Two investors holding 60% and 40% of a $1000 round, $10.00 pool::

        >>> plan = plan_distribution(sale, product, investments)
        >>> [share.amount for share in plan.shares]
        [Decimal('6.00'), Decimal('4.00')]
        >>> from_cents(plan.total_distributed_cents)
        Decimal('10.00')
"""

import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_DOWN, ROUND_FLOOR
from typing import Optional, Sequence, Tuple

from .exceptions import InvalidSaleError

logger = logging.getLogger(__name__)

# Percent of profit paid to the investor pool
REVENUE_SHARE_PERCENTAGE = 25

CENTS_PER_DOLLAR = 100
BASIS_POINTS = 10000
CENT = Decimal('0.01')
PERCENTAGE_PRECISION = Decimal('0.000001')

# Money columns are DecimalField(max_digits=12, decimal_places=2)
MAX_AMOUNT_CENTS = 10 ** 12 - 1
# PositiveIntegerField upper bound on every supported backend
MAX_QUANTITY = 2147483647

NO_PROFIT_MESSAGE = 'No profit to distribute'
NO_INVESTORS_MESSAGE = 'Product has no investors'
NO_INVESTMENTS_MESSAGE = 'No investments found for this product'


# =============================================================================
# Money helpers
# =============================================================================

def to_decimal(value) -> Decimal:
    """
    Convert a money value to Decimal.

    Floats go through ``str()`` first so that ``0.29`` stays ``0.29``
    instead of ``0.28999999999999998``.

    Raises:
        ValueError: If the value is not a finite number.
    """
    if isinstance(value, bool):
        raise ValueError(f"Not a money amount: {value!r}")
    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            amount = Decimal(str(value).strip())
        except (InvalidOperation, TypeError):
            raise ValueError(f"Not a money amount: {value!r}")
    if not amount.is_finite():
        raise ValueError(f"Not a money amount: {value!r}")
    return amount


def to_cents(value) -> int:
    """Floor a dollar amount to whole cents."""
    amount = to_decimal(value) * CENTS_PER_DOLLAR
    return int(amount.to_integral_value(rounding=ROUND_FLOOR))


def from_cents(cents: int) -> Decimal:
    """Convert whole cents back to a two-place dollar Decimal."""
    return (Decimal(cents) / CENTS_PER_DOLLAR).quantize(CENT)


# =============================================================================
# Typed snapshots
# =============================================================================

@dataclass(frozen=True)
class SaleEvent:
    """One product sale. Built through make_sale_event()."""

    product_id: str
    sale_amount: Decimal
    manufacturing_cost: Decimal
    quantity: int
    order_id: str


@dataclass(frozen=True)
class ProductSnapshot:
    id: str
    name: str
    current_funding: Decimal


@dataclass(frozen=True)
class InvestmentSnapshot:
    id: str
    product_id: str
    user_id: Optional[str]
    amount: Decimal


@dataclass(frozen=True)
class InvestorShare:
    """Payout to one investment."""

    investment_id: str
    investor_id: str
    amount_cents: int
    ownership_basis_points: int
    # Fraction of the round (0.6 for 60%), six places
    percentage: Decimal

    @property
    def amount(self) -> Decimal:
        return from_cents(self.amount_cents)


@dataclass(frozen=True)
class DistributionPlan:
    """
    Outcome of plan_distribution().

    A terminal plan (no profit, no funding, no investments) carries no
    shares and must not be committed.
    """

    sale: SaleEvent
    profit_cents: int
    pool_cents: int
    message: str
    terminal: bool = False
    shares: Tuple[InvestorShare, ...] = ()
    revenue_share_percentage: int = REVENUE_SHARE_PERCENTAGE

    @property
    def total_distributed_cents(self) -> int:
        return sum(share.amount_cents for share in self.shares)

    @property
    def investor_count(self) -> int:
        return len(self.shares)


@dataclass(frozen=True)
class DistributionResult:
    success: bool
    message: str
    total_distributed: Decimal
    investor_count: int
    total_profit: Optional[Decimal] = None
    per_investor: Tuple[InvestorShare, ...] = ()

    @classmethod
    def empty(cls, message):
        """Terminal success with nothing distributed."""
        return cls(
            success=True,
            message=message,
            total_distributed=from_cents(0),
            investor_count=0,
        )

    @classmethod
    def from_plan(cls, plan: DistributionPlan):
        if plan.terminal:
            return cls.empty(plan.message)
        return cls(
            success=True,
            message=plan.message,
            total_distributed=from_cents(plan.total_distributed_cents),
            investor_count=plan.investor_count,
            total_profit=from_cents(plan.profit_cents),
            per_investor=plan.shares,
        )


# =============================================================================
# Validation
# =============================================================================

def make_sale_event(*, product_id, sale_amount, manufacturing_cost, quantity, order_id) -> SaleEvent:
    """
    Parse loosely typed sale input into a validated SaleEvent.

    Money may arrive as Decimal, str, int or float. A manufacturing cost of
    zero is valid.

    Raises:
        InvalidSaleError: If any field is missing or out of range.
    """
    try:
        sale_amount = to_decimal(sale_amount)
        manufacturing_cost = to_decimal(manufacturing_cost)
    except ValueError as exc:
        raise InvalidSaleError(str(exc))

    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise InvalidSaleError("Quantity must be a whole number")

    sale = SaleEvent(
        product_id=str(product_id).strip() if product_id is not None else '',
        sale_amount=sale_amount,
        manufacturing_cost=manufacturing_cost,
        quantity=quantity,
        order_id=str(order_id).strip() if order_id is not None else '',
    )
    validate_sale(sale)
    return sale


def validate_sale(sale: SaleEvent) -> None:
    """
    Check the range rules on a SaleEvent.

    Raises:
        InvalidSaleError: On the first violated rule.
    """
    if not sale.product_id:
        raise InvalidSaleError("Product ID is required")
    if not sale.order_id:
        raise InvalidSaleError("Order ID is required")
    if not sale.sale_amount > 0:
        raise InvalidSaleError("Sale amount must be greater than zero")
    if sale.manufacturing_cost < 0:
        raise InvalidSaleError("Manufacturing cost cannot be negative")
    if isinstance(sale.quantity, bool) or not isinstance(sale.quantity, int) or sale.quantity <= 0:
        raise InvalidSaleError("Quantity must be a positive whole number")
    if to_cents(sale.sale_amount) > MAX_AMOUNT_CENTS:
        raise InvalidSaleError(f"Sale amount cannot exceed {from_cents(MAX_AMOUNT_CENTS)}")
    if to_cents(sale.manufacturing_cost) > MAX_AMOUNT_CENTS:
        raise InvalidSaleError(f"Manufacturing cost cannot exceed {from_cents(MAX_AMOUNT_CENTS)}")
    if sale.quantity > MAX_QUANTITY:
        raise InvalidSaleError(f"Quantity cannot exceed {MAX_QUANTITY}")


# =============================================================================
# Arithmetic
# =============================================================================

def calculate_profit_cents(sale: SaleEvent) -> int:
    """Sale revenue minus total manufacturing cost, floored at zero."""
    sale_cents = to_cents(sale.sale_amount)
    total_cost_cents = to_cents(sale.manufacturing_cost) * sale.quantity
    return max(0, sale_cents - total_cost_cents)


def calculate_pool_cents(profit_cents: int, percentage: int = REVENUE_SHARE_PERCENTAGE) -> int:
    return profit_cents * percentage // 100


def ownership_basis_points(investment_cents: int, funding_cents: int) -> int:
    """Investment's share of the round in basis points, floored."""
    return investment_cents * BASIS_POINTS // funding_cents


def share_cents(pool_cents: int, basis_points: int) -> int:
    return pool_cents * basis_points // BASIS_POINTS


def _is_eligible(investment: InvestmentSnapshot) -> bool:
    return bool(investment.user_id) and investment.amount is not None and investment.amount > 0


def plan_distribution(
    sale: SaleEvent,
    product: ProductSnapshot,
    investments: Sequence[InvestmentSnapshot],
) -> DistributionPlan:
    """
    Compute every investor's payout for one sale.

    This is the only implementation of the distribution arithmetic; the
    HTTP endpoint and the internal helper both end up here.

    Args:
        sale: The validated sale.
        product: The sold product. ``current_funding`` is the ownership
            denominator.
        investments: Active investments in the product. Rows without an
            investor or with a non-positive amount are skipped.

    Returns:
        DistributionPlan: Shares in input order. Terminal plans have no
        shares.

    Raises:
        InvalidSaleError: If the sale breaks a range rule, or the product or
            an investment belongs to a different product than the sale.

    Note:
        The denominator is ``max(current_funding, sum of eligible amounts)``.
        When the product's funding total matches its investments the two
        are equal; if the record has drifted below them, the larger value
        keeps the payouts inside the pool.
    """
    validate_sale(sale)
    if product.id != sale.product_id:
        raise InvalidSaleError(
            f"Product {product.id} does not match the sold product {sale.product_id}"
        )
    for investment in investments:
        if investment.product_id != product.id:
            raise InvalidSaleError(
                f"Investment {investment.id} belongs to product {investment.product_id}, "
                f"not {product.id}"
            )

    profit_cents = calculate_profit_cents(sale)
    if profit_cents == 0:
        return DistributionPlan(sale, 0, 0, NO_PROFIT_MESSAGE, terminal=True)

    funding_cents = to_cents(product.current_funding) if product.current_funding else 0
    if funding_cents <= 0:
        return DistributionPlan(sale, profit_cents, 0, NO_INVESTORS_MESSAGE, terminal=True)

    if not investments:
        return DistributionPlan(sale, profit_cents, 0, NO_INVESTMENTS_MESSAGE, terminal=True)

    pool_cents = calculate_pool_cents(profit_cents)

    eligible = [
        (investment, to_cents(investment.amount))
        for investment in investments
        if _is_eligible(investment)
    ]
    invested_cents = sum(cents for _, cents in eligible)
    if invested_cents > funding_cents:
        logger.warning(
            "Product %s funding %s is below its active investments %s",
            product.id, from_cents(funding_cents), from_cents(invested_cents),
        )
    denominator = max(funding_cents, invested_cents)

    shares = []
    for investment, investment_cents in eligible:
        basis_points = ownership_basis_points(investment_cents, denominator)
        cents = share_cents(pool_cents, basis_points)
        if cents <= 0:
            continue
        percentage = (Decimal(investment_cents) / Decimal(denominator)).quantize(
            PERCENTAGE_PRECISION, rounding=ROUND_DOWN
        )
        shares.append(InvestorShare(
            investment_id=investment.id,
            investor_id=investment.user_id,
            amount_cents=cents,
            ownership_basis_points=basis_points,
            percentage=percentage,
        ))

    total_cents = sum(share.amount_cents for share in shares)
    message = (
        f"Successfully distributed {from_cents(total_cents)} in revenue "
        f"to {len(shares)} investors"
    )
    return DistributionPlan(
        sale=sale,
        profit_cents=profit_cents,
        pool_cents=pool_cents,
        message=message,
        shares=tuple(shares),
    )
