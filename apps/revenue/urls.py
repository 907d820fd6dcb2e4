from django.urls import path
from . import views

app_name = 'revenue'

urlpatterns = [
    # POST /api/revenue/distribute/ - Distribute investor share of a sale
    path('distribute/', views.distribute_investor_revenue, name='distribute'),
]
