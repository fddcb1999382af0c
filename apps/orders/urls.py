from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'orders'

# Bid routes are registered first so that "bids" is never read as an order id
router = DefaultRouter()
router.register(r'bids', views.BidViewSet, basename='bid')
router.register(r'', views.OrderViewSet, basename='order')

urlpatterns = [
    # Bid ViewSet routes
    # POST   /api/orders/bids/             - Place bid
    # PATCH  /api/orders/bids/{id}/        - Update own bid
    # DELETE /api/orders/bids/{id}/        - Cancel own bid
    # GET    /api/orders/bids/mine/        - List own bids

    # Order ViewSet routes
    # GET    /api/orders/                  - List orders (status, proposal_id)
    # POST   /api/orders/                  - Create order for a proposal
    # GET    /api/orders/{id}/             - Order details
    # GET    /api/orders/{id}/bids/        - Bids on the order

    # Include router URLs
    path('', include(router.urls)),
]
