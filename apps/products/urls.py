from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'products'

router = DefaultRouter()
router.register(r'', views.ProductViewSet, basename='product')

urlpatterns = [
    # GET    /api/products/                    - List products
    # GET    /api/products/{id}/               - Get product details
    # POST   /api/products/{id}/invest/        - Invest from wallet
    # GET    /api/products/{id}/investments/   - Caller's investments
    path('', include(router.urls)),
]
