from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema

from config.views import service_error_response

from .models import Product, Investment
from .serializers import (
    ProductSerializer,
    InvestmentSerializer,
    InvestInputSerializer,
    InvestmentReceiptSerializer,
)
from .services import process_investment, InvalidInvestmentError, InvestmentServiceError


class ProductPagination(PageNumberPagination):
    """Custom pagination for products."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class ProductViewSet(viewsets.ReadOnlyModelViewSet):
    """
    ViewSet for products (read-only) and investing.

    list: Get all products
    retrieve: Get a specific product
    invest: Invest from the caller's wallet
    investments: Caller's investments in this product
    """

    queryset = Product.objects.select_related('designer')
    serializer_class = ProductSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = ProductPagination

    @extend_schema(
        request=InvestInputSerializer,
        responses={201: InvestmentReceiptSerializer},
        tags=['products'],
    )
    @action(detail=True, methods=['post'])
    def invest(self, request, pk=None):
        """
        Invest in a product.

        POST /api/products/{id}/invest/
        Body: {"amount": "250.00"}
        """
        input_serializer = InvestInputSerializer(data=request.data)
        if not input_serializer.is_valid():
            return service_error_response(
                InvalidInvestmentError('Invalid investment amount'),
                details=input_serializer.errors,
            )

        try:
            receipt = process_investment(
                user=request.user,
                product_id=pk,
                amount=input_serializer.validated_data['amount'],
            )
        except InvestmentServiceError as e:
            return service_error_response(e)

        return Response(
            InvestmentReceiptSerializer(receipt).data,
            status=status.HTTP_201_CREATED
        )

    @action(detail=True, methods=['get'])
    def investments(self, request, pk=None):
        """
        Get the caller's investments in this product.

        GET /api/products/{id}/investments/
        """
        product = self.get_object()
        investments = Investment.objects.filter(
            product=product,
            user=request.user
        ).select_related('product')
        serializer = InvestmentSerializer(investments, many=True)
        return Response(serializer.data)
