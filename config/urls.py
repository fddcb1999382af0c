"""
Root URL map for the Coffee Collective API.

/api/auth/    login, token refresh, current member
/api/beans/   read-only catalog
/api/orders/  aggregate orders and member bids
"""
from django.contrib import admin
from django.urls import path, include
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView
from rest_framework_simplejwt.views import TokenRefreshView

from config.views import health_check

urlpatterns = [
    path('api/health/', health_check, name='health-check'),
    path('admin/', admin.site.urls),

    # OpenAPI schema and Swagger UI
    path('api/schema/', SpectacularAPIView.as_view(), name='api-schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='api-schema'), name='api-docs'),

    path('api/auth/', include('apps.accounts.urls')),
    path('api/auth/token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),
    path('api/beans/', include('apps.beans.urls')),
    path('api/orders/', include('apps.orders.urls')),
]

handler404 = 'config.views.error_404'
handler500 = 'config.views.error_500'
