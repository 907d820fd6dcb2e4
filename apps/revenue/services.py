"""
Revenue Services Module
=======================

Business logic for paying investors their share of a product sale.

Classes:
    RevenueDistributor: Plans a distribution and commits it through a
        ledger store.

Functions:
    distribute_revenue: Helper for server code that already has the sale
        fields at hand.

Example:
    Distributing a sale from a view or another service::

        from apps.revenue.services import distribute_revenue

        result = distribute_revenue(
            product_id=product.id,
            sale_amount=Decimal('100.00'),
            manufacturing_cost=Decimal('50.00'),
            quantity=1,
            order_id='order-1042',
        )
        print(result.message)
        # Successfully distributed 12.50 in revenue to 3 investors
"""

import logging
from dataclasses import replace
from typing import Optional, Sequence

from .distribution import (
    NO_PROFIT_MESSAGE,
    DistributionResult,
    InvestmentSnapshot,
    ProductSnapshot,
    SaleEvent,
    calculate_profit_cents,
    make_sale_event,
    plan_distribution,
    validate_sale,
)
from .exceptions import (
    DistributionFailedError,
    ProductNotFoundError,
    RevenueServiceError,
)
from .ledger import build_mutation_batch
from .store import DjangoLedgerStore, LedgerStore

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = 'An error occurred while distributing revenue'


class RevenueDistributor:
    """
    Pays out the investor share of a sale.

    The distributor owns no state besides the store it is given, so one
    instance can serve many calls and tests can hand it a fake store.

    Every payout of one call is committed as a single batch. If the commit
    fails nothing is written and DistributionFailedError is raised; there is
    no retry.

    Example:
        Using an explicit store::

            distributor = RevenueDistributor(DjangoLedgerStore())
            result = distributor.distribute_sale(sale)
            for share in result.per_investor:
                print(share.investor_id, share.amount)
    """

    def __init__(self, store: LedgerStore):
        self.store = store

    def distribute(
        self,
        sale: SaleEvent,
        product: ProductSnapshot,
        investments: Sequence[InvestmentSnapshot],
    ) -> DistributionResult:
        """
        Distribute one sale's revenue share across the given investments.

        Args:
            sale: The sale being distributed.
            product: Snapshot of the sold product.
            investments: Active investments in the product.

        Returns:
            DistributionResult: Summary of what was paid. Terminal cases
            (no profit, no funding, no investments) return a zero result
            without touching the store.

        Raises:
            InvalidSaleError: If the sale breaks a range rule.
            DuplicateDistributionError: If the order was already paid out.
            DistributionFailedError: If the batch could not be committed.
        """
        plan = plan_distribution(sale, product, investments)
        if plan.terminal:
            logger.info("No distribution for order %s: %s", sale.order_id, plan.message)
            return DistributionResult.from_plan(plan)

        batch = build_mutation_batch(plan, product)
        try:
            self.store.commit(batch)
        except RevenueServiceError:
            raise
        except Exception as exc:
            logger.exception(
                "Failed to commit revenue distribution for product %s, order %s",
                product.id, sale.order_id,
            )
            raise DistributionFailedError(INTERNAL_ERROR_MESSAGE) from exc

        logger.info(
            "Distributed %s of %s pool to %d investors for product %s, order %s",
            batch.distributed, batch.pool, batch.investor_count, product.id, sale.order_id,
        )
        return DistributionResult.from_plan(plan)

    def distribute_sale(self, sale: SaleEvent) -> DistributionResult:
        """
        Load the product and its investments, then distribute.

        A sale without profit returns before any read.

        Raises:
            InvalidSaleError: If the sale breaks a range rule.
            ProductNotFoundError: If the product does not exist.
            DuplicateDistributionError: If the order was already paid out.
            DistributionFailedError: If reading or committing failed.
        """
        validate_sale(sale)
        if calculate_profit_cents(sale) == 0:
            return DistributionResult.empty(NO_PROFIT_MESSAGE)

        try:
            product = self.store.get_product(sale.product_id)
            if product is None:
                raise ProductNotFoundError("Product not found")
            investments = self.store.list_investments(product.id)
            # The store may spell the id differently (UUID case)
            sale = replace(sale, product_id=product.id)
        except RevenueServiceError:
            raise
        except Exception as exc:
            logger.exception("Failed to load product %s for revenue distribution", sale.product_id)
            raise DistributionFailedError(INTERNAL_ERROR_MESSAGE) from exc

        return self.distribute(sale, product, investments)


def distribute_revenue(
    *,
    product_id,
    sale_amount,
    manufacturing_cost,
    quantity,
    order_id,
    store: Optional[LedgerStore] = None,
) -> DistributionResult:
    """
    Distribute a sale given as loose fields.

    Args:
        product_id: ID of the sold product.
        sale_amount: Sale revenue in dollars (Decimal, str, int or float).
        manufacturing_cost: Cost per unit in dollars; zero is valid.
        quantity: Units sold.
        order_id: Order reference, unique per product.
        store: Ledger store to use. Defaults to a new DjangoLedgerStore.

    Returns:
        DistributionResult
    """
    sale = make_sale_event(
        product_id=product_id,
        sale_amount=sale_amount,
        manufacturing_cost=manufacturing_cost,
        quantity=quantity,
        order_id=order_id,
    )
    distributor = RevenueDistributor(store if store is not None else DjangoLedgerStore())
    return distributor.distribute_sale(sale)
