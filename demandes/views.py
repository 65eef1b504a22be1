# demandes/views.py

from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounts.constants import UserRole
from accounts.permissions import IsDemandeur, IsGestionnaireStock
from demandes.models import Demande
from demandes.serializers import (
    DemandeCreateSerializer,
    DemandeSerializer,
    GenerationBonSerializer,
    SuppressionDemandeSerializer,
    ValidationDemandeSerializer,
)
from demandes.services import lifecycle
from livraisons.serializers import BonLivraisonSerializer


class DemandeViewSet(viewsets.ModelViewSet):
    """
    API Demandes de matériaux

    - EN_ATTENTE : validation (approuver / rejeter)
    - APPROUVEE : génération du bon de livraison
    - EN_PREPARATION : confirmation de livraison
    - Suppression = archivage tracé, jamais physique
    """

    serializer_class = DemandeSerializer
    http_method_names = ["get", "post", "delete", "head", "options"]
    filterset_fields = ["statut", "priorite", "demandeur"]
    search_fields = ["numero", "chantier", "demandeur__username"]
    ordering_fields = ["created_at", "date_livraison_souhaitee", "priorite"]

    def get_permissions(self):
        if self.action == "create":
            return [IsDemandeur()]
        if self.action in ("valider", "generer_bon", "destroy", "stats"):
            return [IsGestionnaireStock()]
        return [IsAuthenticated()]

    def get_queryset(self):
        user = self.request.user
        qs = (
            Demande.objects
            .select_related("demandeur", "valideur", "bon_livraison")
            .prefetch_related("items__materiau")
        )

        # Un chef de chantier ne voit que ses propres demandes
        if user.role == UserRole.CHEF_CHANTIER:
            qs = qs.filter(demandeur=user)

        return qs

    def _reponse(self, demande, code=status.HTTP_200_OK):
        demande = self.get_queryset().get(pk=demande.pk)
        return Response(DemandeSerializer(demande).data, status=code)

    def create(self, request, *args, **kwargs):
        serializer = DemandeCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        demande = lifecycle.creer_demande(
            request.user,
            data["items"],
            priorite=data["priorite"],
            chantier=data["chantier"],
            date_livraison_souhaitee=data["date_livraison_souhaitee"],
            commentaire=data["commentaire"],
        )
        return self._reponse(demande, status.HTTP_201_CREATED)

    def destroy(self, request, *args, **kwargs):
        demande = self.get_object()

        serializer = SuppressionDemandeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        demande = lifecycle.supprimer_demande(
            demande,
            serializer.validated_data["motif"],
            request.user,
        )
        return self._reponse(demande)

    # =========================
    # TRANSITIONS DE STATUT
    # =========================

    @action(detail=True, methods=["post"])
    def valider(self, request, pk=None):
        demande = self.get_object()

        serializer = ValidationDemandeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        demande = lifecycle.valider_demande(
            demande,
            data["action"],
            request.user,
            commentaire=data["commentaire"],
            items_accordes={
                item["id"]: item["quantite_accordee"]
                for item in data["items"]
            },
        )
        return self._reponse(demande)

    @action(detail=True, methods=["post"], url_path="generer-bon")
    def generer_bon(self, request, pk=None):
        demande = self.get_object()

        serializer = GenerationBonSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        bon = lifecycle.generer_bon_livraison(
            demande,
            request.user,
            commentaire=serializer.validated_data["commentaire"],
        )
        return Response(
            BonLivraisonSerializer(bon).data,
            status=status.HTTP_201_CREATED,
        )

    @action(detail=True, methods=["post"])
    def livrer(self, request, pk=None):
        # get_queryset limite déjà le chef de chantier à ses demandes
        demande = self.get_object()

        demande = lifecycle.marquer_livree(demande, acteur=request.user)
        return self._reponse(demande)

    @action(detail=False, methods=["get"])
    def stats(self, request):
        return Response(
            lifecycle.statistiques(self.filter_queryset(self.get_queryset()))
        )
