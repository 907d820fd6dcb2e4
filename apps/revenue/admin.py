from django.contrib import admin
from .models import RevenueDistribution


@admin.register(RevenueDistribution)
class RevenueDistributionAdmin(admin.ModelAdmin):
    """Read-only view of committed payouts."""

    list_display = [
        'order_id',
        'product',
        'profit_usd',
        'pool_usd',
        'distributed_usd',
        'investor_count',
        'created_at',
    ]
    list_filter = ['created_at']
    search_fields = ['order_id', 'product__name']
    ordering = ['-created_at']

    def has_add_permission(self, request):
        """Distributions are created by the revenue service only."""
        return False

    def has_change_permission(self, request, obj=None):
        return False
