from django.contrib import admin
from .models import Wallet, WalletTransaction


@admin.register(Wallet)
class WalletAdmin(admin.ModelAdmin):
    list_display = ['user', 'balance_usd', 'currency', 'updated_at']
    search_fields = ['user__email']
    readonly_fields = ['balance_usd', 'created_at', 'updated_at']


@admin.register(WalletTransaction)
class WalletTransactionAdmin(admin.ModelAdmin):
    """Ledger rows are append-only."""

    list_display = ['user', 'type', 'amount_usd', 'status', 'order_id', 'created_at']
    list_filter = ['type', 'status', 'created_at']
    search_fields = ['user__email', 'order_id', 'description']
    ordering = ['-created_at']

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
