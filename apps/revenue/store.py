"""
Ledger store used by the revenue distributor.

The distributor never talks to the ORM directly; it is handed a store.
DjangoLedgerStore is the production implementation, tests pass in-memory
fakes with the same three methods.
"""

import logging
from typing import List, Optional

from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.db.models import F
from django.utils import timezone

from apps.notifications.models import Notification
from apps.products.models import Investment, InvestmentStatus, Product
from apps.wallets.models import Wallet, WalletTransaction

from .distribution import InvestmentSnapshot, ProductSnapshot
from .exceptions import DuplicateDistributionError
from .ledger import MutationBatch
from .models import RevenueDistribution

logger = logging.getLogger(__name__)


class LedgerStore:
    """
    Data access needed by RevenueDistributor.

    Implementations must apply ``commit`` atomically: either every write in
    the batch lands or none does.
    """

    def get_product(self, product_id: str) -> Optional[ProductSnapshot]:
        raise NotImplementedError

    def list_investments(self, product_id: str) -> List[InvestmentSnapshot]:
        raise NotImplementedError

    def commit(self, batch: MutationBatch) -> None:
        raise NotImplementedError


class DjangoLedgerStore(LedgerStore):
    """LedgerStore backed by the Django ORM."""

    def get_product(self, product_id):
        # Malformed ids read as missing
        try:
            product = Product.objects.filter(pk=product_id).first()
        except (ValidationError, ValueError):
            return None

        if product is None:
            return None

        return ProductSnapshot(
            id=str(product.id),
            name=product.name,
            current_funding=product.current_funding_usd,
        )

    def list_investments(self, product_id):
        rows = Investment.objects.filter(
            product_id=product_id,
            status=InvestmentStatus.ACTIVE,
        ).order_by('created_at', 'id').values('id', 'product_id', 'user_id', 'amount_usd')

        return [
            InvestmentSnapshot(
                id=str(row['id']),
                product_id=str(row['product_id']),
                user_id=str(row['user_id']) if row['user_id'] else None,
                amount=row['amount_usd'],
            )
            for row in rows
        ]

    def commit(self, batch):
        """
        Apply a MutationBatch in a single database transaction.

        Raises:
            DuplicateDistributionError: If this product and order were
                already paid out.
            DatabaseError: Any other failure; nothing is written.
        """
        try:
            with transaction.atomic():
                self._record_distribution(batch)
                self._credit_wallets(batch.wallet_credits)
                self._write_transactions(batch.transactions)
                self._write_notifications(batch.notifications)
        except IntegrityError:
            # Lost a race on the (product, order_id) constraint
            if self._already_distributed(batch):
                raise DuplicateDistributionError(
                    f"Revenue for order {batch.order_id} was already distributed"
                )
            raise

        logger.debug(
            "Committed %d wallet credits for order %s",
            len(batch.wallet_credits), batch.order_id,
        )

    def _already_distributed(self, batch):
        return RevenueDistribution.objects.filter(
            product_id=batch.product_id,
            order_id=batch.order_id,
        ).exists()

    def _record_distribution(self, batch):
        if self._already_distributed(batch):
            raise DuplicateDistributionError(
                f"Revenue for order {batch.order_id} was already distributed"
            )

        RevenueDistribution.objects.create(
            product_id=batch.product_id,
            order_id=batch.order_id,
            sale_amount_usd=batch.sale_amount,
            manufacturing_cost_usd=batch.manufacturing_cost,
            quantity=batch.quantity,
            profit_usd=batch.profit,
            pool_usd=batch.pool,
            distributed_usd=batch.distributed,
            investor_count=batch.investor_count,
            revenue_share_percentage=batch.revenue_share_percentage,
        )

    def _credit_wallets(self, credits):
        if not credits:
            return

        user_ids = sorted({credit.user_id for credit in credits})

        # A concurrent payout may create the same wallet; the loser skips it
        Wallet.objects.bulk_create(
            [Wallet(user_id=user_id) for user_id in user_ids],
            ignore_conflicts=True,
        )

        # Lock in a stable order so concurrent payouts cannot deadlock
        list(
            Wallet.objects.select_for_update()
            .filter(user_id__in=user_ids)
            .order_by('user_id')
            .values_list('id', flat=True)
        )

        now = timezone.now()
        for credit in credits:
            Wallet.objects.filter(user_id=credit.user_id).update(
                balance_usd=F('balance_usd') + credit.amount,
                updated_at=now,
            )

    def _write_transactions(self, records):
        WalletTransaction.objects.bulk_create([
            WalletTransaction(
                user_id=record.user_id,
                amount_usd=record.amount,
                type=record.type,
                category=record.category,
                description=record.description,
                status=record.status,
                product_id=record.product_id,
                investment_id=record.investment_id,
                order_id=record.order_id,
                investment_percentage=record.investment_percentage,
                sale_amount_usd=record.sale_amount,
                profit_usd=record.profit,
                revenue_share_percentage=record.revenue_share_percentage,
            )
            for record in records
        ])

    def _write_notifications(self, records):
        Notification.objects.bulk_create([
            Notification(
                user_id=record.user_id,
                type=record.type,
                title=record.title,
                message=record.message,
                link=record.link,
            )
            for record in records
        ])
