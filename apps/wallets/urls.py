from django.urls import path
from . import views

app_name = 'wallets'

urlpatterns = [
    # GET /api/wallets/me/ - Balance and recent transactions
    path('me/', views.my_wallet, name='my-wallet'),
]
