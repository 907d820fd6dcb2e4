from rest_framework import serializers
from .models import WalletTransaction


class WalletTransactionSerializer(serializers.ModelSerializer):
    """Serializer for ledger rows."""

    class Meta:
        model = WalletTransaction
        fields = [
            'id',
            'amount_usd',
            'currency',
            'type',
            'category',
            'description',
            'status',
            'product',
            'investment',
            'order_id',
            'investment_percentage',
            'sale_amount_usd',
            'profit_usd',
            'revenue_share_percentage',
            'created_at',
        ]
        read_only_fields = fields


class WalletSummarySerializer(serializers.Serializer):
    balance_usd = serializers.DecimalField(max_digits=12, decimal_places=2)
    currency = serializers.CharField()
    transactions = WalletTransactionSerializer(many=True)
