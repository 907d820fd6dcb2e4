from decimal import Decimal
from rest_framework import serializers

from .distribution import MAX_QUANTITY


# =============================================================================
# Input Serializers
# =============================================================================

class DistributeRevenueInputSerializer(serializers.Serializer):
    """
    Validate the revenue distribution payload.

    Field names follow the JSON contract of the callable endpoint.

    Fields:
        productId (str): ID of the sold product
        saleAmount (Decimal): Sale revenue, must be greater than zero
        manufacturingCost (Decimal): Cost per unit, zero allowed
        quantity (int): Units sold, at least one
        orderId (str): Order reference
    """

    productId = serializers.CharField(max_length=64)
    # No decimal_places: extra precision is floored to cents later
    saleAmount = serializers.DecimalField(max_digits=None, decimal_places=None)
    manufacturingCost = serializers.DecimalField(
        max_digits=None,
        decimal_places=None,
        min_value=Decimal('0'),
    )
    quantity = serializers.IntegerField(min_value=1, max_value=MAX_QUANTITY)
    orderId = serializers.CharField(max_length=128)

    def validate_saleAmount(self, value):
        if value <= 0:
            raise serializers.ValidationError('Sale amount must be greater than zero.')
        return value


# =============================================================================
# Output Serializers
# =============================================================================

class InvestorDistributionSerializer(serializers.Serializer):
    investorId = serializers.CharField(source='investor_id')
    investmentId = serializers.CharField(source='investment_id')
    # Money is rendered as JSON numbers, not strings
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, coerce_to_string=False)
    percentage = serializers.DecimalField(max_digits=9, decimal_places=6, coerce_to_string=False)


class DistributionResultSerializer(serializers.Serializer):
    """Serialize a DistributionResult into the callable's response shape."""

    success = serializers.BooleanField()
    message = serializers.CharField()
    distributedAmount = serializers.DecimalField(
        source='total_distributed', max_digits=12, decimal_places=2, coerce_to_string=False
    )
    investorCount = serializers.IntegerField(source='investor_count')
    totalProfit = serializers.DecimalField(
        source='total_profit', max_digits=12, decimal_places=2, required=False,
        coerce_to_string=False,
    )
    distributions = InvestorDistributionSerializer(
        source='per_investor', many=True, required=False
    )

    def to_representation(self, instance):
        data = super().to_representation(instance)
        # Terminal results carry only the summary fields
        if instance.total_profit is None:
            data.pop('totalProfit', None)
            data.pop('distributions', None)
        return data


class ErrorDetailSerializer(serializers.Serializer):
    kind = serializers.CharField()
    message = serializers.CharField()
    details = serializers.DictField(required=False)


class ErrorSerializer(serializers.Serializer):
    error = ErrorDetailSerializer()
