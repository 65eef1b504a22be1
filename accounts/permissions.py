from rest_framework.permissions import BasePermission

from accounts.constants import DepotRoles


class IsGestionnaireStock(BasePermission):
    """
    Magazinier ou directeur : validation, distribution,
    mouvements de stock.
    """

    def has_permission(self, request, view):
        return (
            request.user.is_authenticated
            and request.user.role in DepotRoles.GESTION_STOCK
        )


class IsDemandeur(BasePermission):
    """
    Chef de chantier ou directeur : création de demandes.
    """

    def has_permission(self, request, view):
        return (
            request.user.is_authenticated
            and request.user.role in DepotRoles.DEMANDEURS
        )
