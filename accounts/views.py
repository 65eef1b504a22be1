# accounts/views.py
from rest_framework import viewsets

from accounts.models import Utilisateur
from accounts.constants import UserRole
from accounts.permissions import IsGestionnaireStock
from accounts.serializers.chef_chantier import ChefChantierSerializer


class ChefChantierViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Chefs de chantier actifs.
    Sert au choix du destinataire d'une distribution directe.
    """

    serializer_class = ChefChantierSerializer
    permission_classes = [IsGestionnaireStock]
    search_fields = ("username", "first_name", "last_name", "nom_chantier")

    def get_queryset(self):
        return Utilisateur.objects.filter(
            role=UserRole.CHEF_CHANTIER,
            is_active=True,
        ).order_by("last_name", "first_name")
