from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'beans'

router = DefaultRouter()
router.register(r'', views.CoffeeBeanViewSet, basename='coffeebean')

urlpatterns = [
    # Bean ViewSet routes
    # GET    /api/beans/              - List beans (origin, roast_level, available, sort)
    # GET    /api/beans/{id}/         - Bean details with open orders

    # Custom actions
    # GET    /api/beans/origins/      - List all origin countries

    # Include router URLs
    path('', include(router.urls)),
]
