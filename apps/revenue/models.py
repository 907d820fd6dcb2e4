from django.db import models
import uuid


class RevenueDistribution(models.Model):
    """
    Record of one committed revenue payout.

    Written in the same transaction as the wallet credits it describes. The
    (product, order_id) constraint refuses a second payout for one order.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    product = models.ForeignKey(
        'products.Product',
        on_delete=models.PROTECT,
        related_name='revenue_distributions'
    )
    order_id = models.CharField(max_length=128)

    # Sale inputs
    sale_amount_usd = models.DecimalField(max_digits=12, decimal_places=2)
    manufacturing_cost_usd = models.DecimalField(max_digits=12, decimal_places=2)
    quantity = models.PositiveIntegerField()

    # Computed totals
    profit_usd = models.DecimalField(max_digits=12, decimal_places=2)
    pool_usd = models.DecimalField(max_digits=12, decimal_places=2)
    distributed_usd = models.DecimalField(max_digits=12, decimal_places=2)
    investor_count = models.PositiveIntegerField()
    revenue_share_percentage = models.PositiveSmallIntegerField()

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'revenue_distributions'
        constraints = [
            models.UniqueConstraint(
                fields=['product', 'order_id'],
                name='uniq_revenue_distribution_order',
            ),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.order_id}: {self.distributed_usd} USD to {self.investor_count} investors"
