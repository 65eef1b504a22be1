# core/exceptions.py
"""
Erreurs métier du dépôt.

Chaque erreur est une APIException : les services lèvent,
DRF convertit en réponse HTTP. Aucune n'est rejouée automatiquement.
"""

from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.views import exception_handler


class DomainError(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Opération refusée."
    default_code = "domain_error"

    def __init__(self, detail=None, code=None, **extra):
        super().__init__(detail=detail, code=code)
        self.extra = extra


class InsufficientStock(DomainError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Stock insuffisant."
    default_code = "insufficient_stock"


class InvalidQuantity(DomainError):
    default_detail = "Quantité invalide."
    default_code = "invalid_quantity"


class InvalidGrant(DomainError):
    default_detail = "Quantité accordée invalide."
    default_code = "invalid_grant"


class InvalidTransition(DomainError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Transition de statut interdite."
    default_code = "invalid_transition"


class EmptyRequest(DomainError):
    default_detail = "Au moins un matériau doit être demandé."
    default_code = "empty_request"


class EmptyCart(DomainError):
    default_detail = "Aucun matériau sélectionné."
    default_code = "empty_cart"


class StockExceeded(DomainError):
    """
    Signal non bloquant au niveau du panier :
    la ligne est plafonnée au stock disponible.
    """

    default_detail = "Quantité supérieure au stock disponible."
    default_code = "stock_exceeded"


class MissingRecipient(DomainError):
    default_detail = "Un destinataire doit être renseigné."
    default_code = "missing_recipient"


class MissingMotif(DomainError):
    default_detail = "Un motif est obligatoire."
    default_code = "missing_motif"


class MaterialNotFound(DomainError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Matériau non trouvé."
    default_code = "material_not_found"


class ConcurrentModification(DomainError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Modification concurrente, veuillez réessayer."
    default_code = "concurrent_modification"


def dantela_exception_handler(exc, context):
    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, ValidationError):
        response.data = {
            "code": "validation_error",
            "detail": "Données invalides.",
            "field_errors": response.data,
        }
        return response

    detail = response.data.get("detail") if isinstance(response.data, dict) else response.data
    code = getattr(exc, "default_code", "api_error")

    if isinstance(exc, DomainError):
        response.data = {
            "code": code,
            "detail": str(detail),
            "field_errors": exc.extra,
        }
        return response

    if response.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        code = "internal_error"
    elif response.status_code == status.HTTP_401_UNAUTHORIZED:
        code = "authentication_failed"
    elif response.status_code == status.HTTP_403_FORBIDDEN:
        code = "permission_denied"
    elif response.status_code == status.HTTP_404_NOT_FOUND:
        code = "not_found"

    response.data = {
        "code": code,
        "detail": str(detail),
        "field_errors": {},
    }
    return response
