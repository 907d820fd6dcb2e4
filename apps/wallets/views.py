from decimal import Decimal
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from .models import Wallet, WalletTransaction
from .serializers import WalletSummarySerializer

RECENT_TRANSACTIONS_LIMIT = 20


@extend_schema(
    responses={200: WalletSummarySerializer},
    description="Get the current user's wallet balance and recent transactions.",
    tags=['wallets'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def my_wallet(request):
    """Get wallet balance and recent ledger rows for current user."""
    wallet = Wallet.objects.filter(user=request.user).first()
    transactions = WalletTransaction.objects.filter(
        user=request.user
    ).order_by('-created_at')[:RECENT_TRANSACTIONS_LIMIT]

    serializer = WalletSummarySerializer({
        'balance_usd': wallet.balance_usd if wallet else Decimal('0.00'),
        'currency': wallet.currency if wallet else 'USD',
        'transactions': transactions,
    })
    return Response(serializer.data)
