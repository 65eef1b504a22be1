# dantela/urls.py
from django.contrib import admin
from django.urls import path, include
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView
from rest_framework_simplejwt.views import TokenRefreshView

from core.token import DantelaTokenObtainPairView

urlpatterns = [
    path("api/v1/", include("accounts.urls")),
    path("api/v1/", include("catalogue.urls")),
    path("api/v1/stock/", include("stock.urls")),
    path("api/v1/", include("demandes.urls")),
    path("api/v1/", include("livraisons.urls")),

    path("api/v1/auth/login/", DantelaTokenObtainPairView.as_view()),
    path("api/v1/auth/refresh/", TokenRefreshView.as_view()),

    path('api/schema/', SpectacularAPIView.as_view(), name='openapi-schema'),

    path(
        'api/docs/',
        SpectacularSwaggerView.as_view(url='/api/schema/'),
        name='swagger-ui'
    ),

    path("admin/", admin.site.urls),
]
