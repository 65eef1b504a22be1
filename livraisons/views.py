# livraisons/views.py

from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounts.constants import UserRole
from accounts.permissions import IsGestionnaireStock
from core.exceptions import EmptyCart
from livraisons.destinataire import Destinataire
from livraisons.models import BonLivraison
from livraisons.serializers import BonLivraisonSerializer, DistributionSerializer
from livraisons.services import emission
from livraisons.services.distribution import distribuer, panier_depuis_lignes


class BonLivraisonViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Bons de livraison (lecture seule).

    Création uniquement par génération depuis une demande
    ou par distribution directe.
    """

    serializer_class = BonLivraisonSerializer
    filterset_fields = ["type_livraison", "demande", "destinataire", "magazinier"]
    search_fields = ["numero", "destinataire_nom", "destinataire_chantier"]
    ordering_fields = ["created_at", "numero"]

    def get_permissions(self):
        if self.action in ("direct", "stats"):
            return [IsGestionnaireStock()]
        return [IsAuthenticated()]

    def get_queryset(self):
        user = self.request.user
        qs = (
            BonLivraison.objects
            .select_related("demande", "magazinier", "destinataire")
            .prefetch_related("items")
        )

        if user.role == UserRole.CHEF_CHANTIER:
            qs = qs.filter(destinataire=user)

        return qs

    @action(detail=False, methods=["post"])
    def direct(self, request):
        serializer = DistributionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        if not data["lignes"]:
            raise EmptyCart()

        destinataire = Destinataire.resoudre(
            utilisateur_id=data["destinataire"],
            nom=data["destinataire_nom"],
            chantier=data["destinataire_chantier"],
            adresse=data["destinataire_adresse"],
            telephone=data["destinataire_telephone"],
        )

        bon = distribuer(
            panier_depuis_lignes(data["lignes"]),
            destinataire,
            request.user,
            commentaire=data["commentaire"],
        )

        return Response(
            BonLivraisonSerializer(bon).data,
            status=status.HTTP_201_CREATED,
        )

    @action(detail=False, methods=["get"])
    def stats(self, request):
        return Response(
            emission.statistiques(self.filter_queryset(self.get_queryset()))
        )
