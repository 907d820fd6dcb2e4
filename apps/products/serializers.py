from decimal import Decimal
from rest_framework import serializers
from .models import Product, Investment


# =============================================================================
# Input Serializers
# =============================================================================

class InvestInputSerializer(serializers.Serializer):
    """
    Validate input for investing in a product.

    Fields:
        amount (Decimal): Amount in USD to move from the wallet
    """

    amount = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        min_value=Decimal('0.01'),
    )


# =============================================================================
# Output Serializers
# =============================================================================

class ProductSerializer(serializers.ModelSerializer):
    """Serializer for products and their funding round."""

    class Meta:
        model = Product
        fields = [
            'id',
            'name',
            'designer',
            'status',
            'funding_goal_usd',
            'current_funding_usd',
            'investor_count',
            'last_funded_at',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class InvestmentSerializer(serializers.ModelSerializer):
    """Serializer for investments."""

    product_name = serializers.CharField(source='product.name', read_only=True)

    class Meta:
        model = Investment
        fields = [
            'id',
            'product',
            'product_name',
            'user',
            'amount_usd',
            'status',
            'created_at',
        ]
        read_only_fields = fields


class InvestmentReceiptSerializer(serializers.Serializer):
    success = serializers.BooleanField(default=True)
    investment_id = serializers.UUIDField(source='investment.id')
    funding_progress = serializers.DecimalField(
        source='funding_total', max_digits=12, decimal_places=2
    )
    message = serializers.CharField()
