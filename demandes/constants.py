# demandes/constants.py

from django.db import models


class DemandeStatus(models.TextChoices):
    EN_ATTENTE = "en_attente", "En attente"
    APPROUVEE = "approuvee", "Approuvée"
    REJETEE = "rejetee", "Rejetée"
    EN_PREPARATION = "en_preparation", "En préparation"
    LIVREE = "livree", "Livrée"
    ARCHIVEE = "archivee", "Archivée"


class Priorite(models.TextChoices):
    URGENTE = "urgente", "Urgente"
    HAUTE = "haute", "Haute"
    NORMALE = "normale", "Normale"
    BASSE = "basse", "Basse"


class ActionValidation(models.TextChoices):
    APPROUVER = "approuver", "Approuver"
    REJETER = "rejeter", "Rejeter"


ALLOWED_TRANSITIONS = {
    DemandeStatus.EN_ATTENTE: [
        DemandeStatus.APPROUVEE,
        DemandeStatus.REJETEE,
        DemandeStatus.ARCHIVEE,
    ],
    DemandeStatus.APPROUVEE: [
        DemandeStatus.EN_PREPARATION,
        DemandeStatus.ARCHIVEE,
    ],
    DemandeStatus.EN_PREPARATION: [
        DemandeStatus.LIVREE,
        DemandeStatus.ARCHIVEE,
    ],
    DemandeStatus.LIVREE: [],
    DemandeStatus.REJETEE: [],
    DemandeStatus.ARCHIVEE: [],
}

STATUTS_TERMINAUX = (
    DemandeStatus.LIVREE,
    DemandeStatus.REJETEE,
    DemandeStatus.ARCHIVEE,
)
