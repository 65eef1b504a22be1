from django.urls import path, include
from rest_framework.routers import DefaultRouter

from livraisons.views import BonLivraisonViewSet

router = DefaultRouter()
router.register("bons-livraison", BonLivraisonViewSet, basename="bons-livraison")

urlpatterns = [
    path("", include(router.urls)),
]
