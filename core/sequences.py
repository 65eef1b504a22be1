# core/sequences.py

import logging

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from core.models import Compteur

logger = logging.getLogger(__name__)


@transaction.atomic
def valeur_suivante(nom):
    """
    Valeur suivante d'une séquence nommée.

    Ligne compteur verrouillée (SELECT ... FOR UPDATE) :
    strictement croissante, jamais réutilisée une fois validée.
    """

    Compteur.objects.get_or_create(nom=nom)

    compteur = Compteur.objects.select_for_update().get(nom=nom)
    compteur.valeur += 1
    compteur.save(update_fields=["valeur"])

    logger.debug("Séquence %s -> %s", nom, compteur.valeur)
    return compteur.valeur


def prochain_numero(nom):
    """
    Numéro lisible : {PREFIXE}-{ANNEE}-{NNNNN}.
    Ex : DEM-2026-00042, BL-2026-00007.
    """

    prefixe = settings.DANTELA_NUMERO_PREFIXES.get(nom, nom.upper())
    valeur = valeur_suivante(nom)
    annee = timezone.localdate().year

    return f"{prefixe}-{annee}-{str(valeur).zfill(5)}"
