from django.urls import path, include
from rest_framework.routers import DefaultRouter

from stock.views import MouvementStockViewSet

router = DefaultRouter()
router.register("mouvements", MouvementStockViewSet, basename="mouvements")

urlpatterns = [
    path("", include(router.urls)),
]
