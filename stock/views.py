# stock/views.py

from django.utils.dateparse import parse_date
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response

from accounts.permissions import IsGestionnaireStock
from stock.models import MouvementStock
from stock.serializers import (
    AjustementStockSerializer,
    EntreeStockSerializer,
    InventaireSerializer,
    MouvementStockSerializer,
)
from stock.services import ledger


def _date_param(request, nom):
    valeur = request.query_params.get(nom)
    if not valeur:
        return None

    date = parse_date(valeur)
    if date is None:
        raise ValidationError({nom: "Format attendu : AAAA-MM-JJ."})
    return date


class MouvementStockViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Grand livre du stock.

    Lecture seule : toute écriture passe par une action
    (entree, ajustement, inventaire) ou par l'émission d'un bon.
    """

    serializer_class = MouvementStockSerializer
    permission_classes = [IsGestionnaireStock]
    filterset_fields = ["materiau", "type_mouvement", "demande", "utilisateur"]
    search_fields = ["motif", "materiau__code", "materiau__nom", "numero_facture"]
    ordering_fields = ["created_at", "quantite"]

    def get_queryset(self):
        qs = MouvementStock.objects.select_related(
            "materiau", "utilisateur", "demande", "ligne_bon__bon"
        )

        date_debut = _date_param(self.request, "date_debut")
        date_fin = _date_param(self.request, "date_fin")
        if date_debut:
            qs = qs.filter(created_at__date__gte=date_debut)
        if date_fin:
            qs = qs.filter(created_at__date__lte=date_fin)

        return qs

    def _reponse(self, mouvement, code=status.HTTP_201_CREATED):
        return Response(
            MouvementStockSerializer(mouvement).data,
            status=code,
        )

    @action(detail=False, methods=["post"])
    def entree(self, request):
        serializer = EntreeStockSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        mouvement = ledger.receptionner(
            data["materiau"],
            data["quantite"],
            request.user,
            fournisseur=data["fournisseur"],
            numero_facture=data["numero_facture"],
            motif=data["motif"],
            description=data["description"],
        )
        return self._reponse(mouvement)

    @action(detail=False, methods=["post"])
    def ajustement(self, request):
        serializer = AjustementStockSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        mouvement = ledger.ajuster_vers(
            data["materiau"],
            data["nouveau_stock"],
            request.user,
            motif=data["motif"],
            description=data["description"],
        )
        return self._reponse(mouvement)

    @action(detail=False, methods=["post"])
    def inventaire(self, request):
        serializer = InventaireSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        mouvement = ledger.inventorier(
            data["materiau"],
            data["stock_compte"],
            request.user,
            motif=data["motif"],
            description=data["description"],
        )
        return self._reponse(mouvement)

    @action(detail=False, methods=["get"])
    def stats(self, request):
        return Response(
            ledger.statistiques(
                date_debut=_date_param(request, "date_debut"),
                date_fin=_date_param(request, "date_fin"),
            )
        )

    @action(
        detail=False,
        methods=["get"],
        url_path=r"historique/(?P<materiau_id>\d+)",
    )
    def historique(self, request, materiau_id=None):
        qs = ledger.historique(materiau_id)

        page = self.paginate_queryset(qs)
        if page is not None:
            serializer = MouvementStockSerializer(page, many=True)
            return self.get_paginated_response(serializer.data)

        return Response(MouvementStockSerializer(qs, many=True).data)
