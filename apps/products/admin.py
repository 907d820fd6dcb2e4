from django.contrib import admin
from .models import Product, Investment


class InvestmentInline(admin.TabularInline):
    """Inline admin for investments within a product."""
    model = Investment
    extra = 0
    fields = ['user', 'amount_usd', 'status', 'created_at']
    readonly_fields = ['created_at']

    def has_add_permission(self, request, obj=None):
        """Investments are created by the investment service."""
        return False


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = [
        'name',
        'designer',
        'status',
        'current_funding_usd',
        'funding_goal_usd',
        'investor_count',
        'created_at',
    ]
    list_filter = ['status', 'created_at']
    search_fields = ['name', 'designer__email']
    readonly_fields = ['current_funding_usd', 'investor_count', 'last_funded_at', 'created_at', 'updated_at']
    inlines = [InvestmentInline]


@admin.register(Investment)
class InvestmentAdmin(admin.ModelAdmin):
    list_display = ['product', 'user', 'amount_usd', 'status', 'created_at']
    list_filter = ['status', 'created_at']
    search_fields = ['product__name', 'user__email']
    raw_id_fields = ['product', 'user']
