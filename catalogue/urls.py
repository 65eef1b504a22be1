from django.urls import path, include
from rest_framework.routers import DefaultRouter

from catalogue.views import CategorieViewSet, MateriauViewSet

router = DefaultRouter()
router.register("materiaux", MateriauViewSet, basename="materiaux")
router.register("categories", CategorieViewSet, basename="categories")

urlpatterns = [
    path("", include(router.urls)),
]
