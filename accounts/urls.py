from rest_framework.routers import DefaultRouter
from accounts.views import ChefChantierViewSet

router = DefaultRouter()
router.register(r"chefs-chantier", ChefChantierViewSet, basename="chefs-chantier")

urlpatterns = router.urls
