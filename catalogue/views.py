# catalogue/views.py

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db.models import F
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response

from accounts.permissions import IsGestionnaireStock
from catalogue.models import Categorie, Materiau
from catalogue.serializers import CategorieSerializer, MateriauSerializer


class CategorieViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = Categorie.objects.all()
    serializer_class = CategorieSerializer


class MateriauViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Catalogue en lecture seule.

    Le stock n'évolue que via les mouvements de stock.
    """

    serializer_class = MateriauSerializer
    filterset_fields = ["categorie", "actif"]
    search_fields = ["code", "nom", "fournisseur"]
    ordering_fields = ["nom", "code", "stock_actuel"]

    def get_queryset(self):
        qs = Materiau.objects.select_related("categorie")

        # Les chefs de chantier ne voient que le catalogue actif
        if not self.request.user.gere_le_stock:
            qs = qs.filter(actif=True)

        en_alerte = self.request.query_params.get("en_alerte")
        if en_alerte in ("1", "true"):
            qs = qs.filter(stock_actuel__lte=F("stock_minimum"))

        return qs

    @action(detail=True, methods=["post"], permission_classes=[IsGestionnaireStock])
    def desactiver(self, request, pk=None):
        materiau = self.get_object()

        try:
            materiau.desactiver()
        except DjangoValidationError as exc:
            raise ValidationError(exc.messages)

        return Response(MateriauSerializer(materiau).data)
