from drf_spectacular.utils import extend_schema
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from config.views import service_error_response

from .distribution import make_sale_event
from .exceptions import InvalidSaleError, RevenueServiceError
from .permissions import CanReportSales
from .serializers import (
    DistributeRevenueInputSerializer,
    DistributionResultSerializer,
    ErrorSerializer,
)
from .services import RevenueDistributor
from .store import DjangoLedgerStore


@extend_schema(
    request=DistributeRevenueInputSerializer,
    responses={
        200: DistributionResultSerializer,
        400: ErrorSerializer,
        404: ErrorSerializer,
        409: ErrorSerializer,
        500: ErrorSerializer,
    },
    description="Distribute the investor revenue share of a product sale.",
    tags=['revenue'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, CanReportSales])
def distribute_investor_revenue(request):
    """Distribute revenue for one sale - thin HTTP handler."""
    input_serializer = DistributeRevenueInputSerializer(data=request.data)
    if not input_serializer.is_valid():
        return service_error_response(
            InvalidSaleError('Invalid revenue distribution parameters'),
            details=input_serializer.errors,
        )
    data = input_serializer.validated_data

    try:
        sale = make_sale_event(
            product_id=data['productId'],
            sale_amount=data['saleAmount'],
            manufacturing_cost=data['manufacturingCost'],
            quantity=data['quantity'],
            order_id=data['orderId'],
        )
        result = RevenueDistributor(DjangoLedgerStore()).distribute_sale(sale)
    except RevenueServiceError as e:
        return service_error_response(e)

    return Response(DistributionResultSerializer(result).data)
