# stock/services/ledger.py

import logging

from django.db import transaction
from django.db.models import Count, Q, Sum
from django.utils import timezone

from catalogue.models import Materiau
from core.exceptions import (
    ConcurrentModification,
    DomainError,
    InsufficientStock,
    InvalidQuantity,
    MaterialNotFound,
)
from stock.constants import TYPES_SIGNES, TypeMouvement
from stock.models import MouvementStock

logger = logging.getLogger(__name__)


# ============================================================
# CALCUL DU DELTA SIGNÉ
# ============================================================

def _delta(type_mouvement, quantite):
    """
    Convertit la quantité fournie en variation signée du stock.

    - entree / sortie : quantité strictement positive (valeur absolue)
    - ajustement / inventaire : variation signée
    """

    if type_mouvement not in TypeMouvement.values:
        raise InvalidQuantity(
            f"Type de mouvement inconnu : {type_mouvement}"
        )

    if isinstance(quantite, bool) or not isinstance(quantite, int):
        raise InvalidQuantity("La quantité doit être un nombre entier.")

    if type_mouvement in TYPES_SIGNES:
        return quantite

    if quantite <= 0:
        raise InvalidQuantity(
            "La quantité doit être strictement positive.",
            quantite=quantite,
        )

    if type_mouvement == TypeMouvement.SORTIE:
        return -quantite

    return quantite


# ============================================================
# COMMIT (SEULE ÉCRITURE DU STOCK)
# ============================================================

def commit(
    materiau,
    type_mouvement,
    quantite,
    acteur,
    motif,
    description="",
    demande=None,
    stock_attendu=None,
    autoriser_negatif=False,
    fournisseur="",
    numero_facture="",
):
    """
    Enregistre un mouvement et met à jour le stock du matériau.

    Lecture verrouillée (SELECT ... FOR UPDATE) puis écriture
    conditionnelle sur (id, stock_avant) : deux commits concurrents
    sur le même matériau ne lisent jamais le même stock_avant.

    Aucun rejeu automatique : l'appelant décide.
    """

    materiau_id = getattr(materiau, "pk", materiau)
    delta = _delta(type_mouvement, quantite)

    with transaction.atomic():
        try:
            materiau = (
                Materiau.objects
                .select_for_update()
                .get(pk=materiau_id)
            )
        except Materiau.DoesNotExist:
            raise MaterialNotFound(
                f"Matériau non trouvé : {materiau_id}",
                materiau=materiau_id,
            )

        stock_avant = materiau.stock_actuel

        if stock_attendu is not None and stock_attendu != stock_avant:
            logger.warning(
                "Stock modifié entre-temps pour %s : attendu %s, lu %s",
                materiau.code,
                stock_attendu,
                stock_avant,
            )
            raise ConcurrentModification(
                f"Le stock de {materiau.nom} a changé "
                f"(attendu {stock_attendu}, actuel {stock_avant}).",
                materiau=materiau.pk,
                stock_actuel=stock_avant,
            )

        stock_apres = stock_avant + delta

        negatif_permis = (
            autoriser_negatif
            and type_mouvement == TypeMouvement.AJUSTEMENT
        )

        if stock_apres < 0 and not negatif_permis:
            logger.warning(
                "Stock insuffisant pour %s : disponible %s, variation %s",
                materiau.code,
                stock_avant,
                delta,
            )
            raise InsufficientStock(
                f"Stock insuffisant pour {materiau.nom} ({materiau.code}). "
                f"Disponible: {stock_avant} {materiau.unite}, "
                f"demandé: {abs(delta)} {materiau.unite}",
                materiau=materiau.pk,
                disponible=stock_avant,
                demande=abs(delta),
            )

        # Écriture conditionnelle
        updated = (
            Materiau.objects
            .filter(pk=materiau.pk, stock_actuel=stock_avant)
            .update(stock_actuel=stock_apres, updated_at=timezone.now())
        )

        if updated != 1:
            raise ConcurrentModification(
                f"Écriture concurrente sur {materiau.nom}.",
                materiau=materiau.pk,
            )

        mouvement = MouvementStock.objects.create(
            materiau=materiau,
            type_mouvement=type_mouvement,
            quantite=delta,
            stock_avant=stock_avant,
            stock_apres=stock_apres,
            utilisateur=acteur,
            motif=motif,
            description=description,
            demande=demande,
            fournisseur=fournisseur,
            numero_facture=numero_facture,
        )

    logger.info(
        "Mouvement %s #%s : %s %s (%s -> %s)",
        type_mouvement,
        mouvement.pk,
        materiau.code,
        delta,
        stock_avant,
        stock_apres,
    )

    return mouvement


# ============================================================
# COMPENSATION (ANNULATION D'UNE OPÉRATION PARTIELLE)
# ============================================================

def compenser(mouvements, acteur, raison):
    """
    Annule des sorties déjà engagées par des ajustements inverses.

    Parcours en ordre inverse. Un échec de compensation est journalisé
    et n'interrompt pas les suivantes.
    """

    compensations = []

    for mouvement in reversed(mouvements):
        try:
            compensations.append(
                commit(
                    mouvement.materiau_id,
                    TypeMouvement.AJUSTEMENT,
                    -mouvement.quantite,
                    acteur,
                    motif=f"Annulation : {mouvement.motif}"[:255],
                    description=(
                        f"Compensation du mouvement #{mouvement.pk} ({raison})"
                    ),
                    demande=mouvement.demande,
                )
            )
        except DomainError:
            logger.exception(
                "Échec de compensation du mouvement #%s",
                mouvement.pk,
            )
        else:
            logger.warning(
                "Mouvement #%s compensé (%s)",
                mouvement.pk,
                raison,
            )

    return compensations


# ============================================================
# OPÉRATIONS DE STOCK DU MAGAZINIER
# ============================================================

def receptionner(
    materiau,
    quantite,
    acteur,
    fournisseur="",
    numero_facture="",
    motif="",
    description="",
):
    """
    Entrée de stock (réception fournisseur).
    """

    return commit(
        materiau,
        TypeMouvement.ENTREE,
        quantite,
        acteur,
        motif=motif or "Réception fournisseur",
        description=description or f"Réception de {quantite} unités",
        fournisseur=fournisseur,
        numero_facture=numero_facture,
    )


def _lire_stock(materiau):
    materiau_id = getattr(materiau, "pk", materiau)

    try:
        return Materiau.objects.get(pk=materiau_id)
    except Materiau.DoesNotExist:
        raise MaterialNotFound(
            f"Matériau non trouvé : {materiau_id}",
            materiau=materiau_id,
        )


def ajuster_vers(materiau, nouveau_stock, acteur, motif="", description=""):
    """
    Correction manuelle : amène le stock à une valeur cible.

    Le delta est calculé sur le stock lu ; si celui-ci change avant
    le commit, ConcurrentModification.
    """

    if isinstance(nouveau_stock, bool) or not isinstance(nouveau_stock, int) or nouveau_stock < 0:
        raise InvalidQuantity("Le nouveau stock doit être un entier positif ou nul.")

    materiau = _lire_stock(materiau)
    difference = nouveau_stock - materiau.stock_actuel

    if difference == 0:
        raise InvalidQuantity(
            "Le nouveau stock est identique au stock actuel."
        )

    return commit(
        materiau,
        TypeMouvement.AJUSTEMENT,
        difference,
        acteur,
        motif=motif or "Ajustement inventaire",
        description=description or (
            f"Ajustement de {materiau.stock_actuel} à {nouveau_stock} {materiau.unite}"
        ),
        stock_attendu=materiau.stock_actuel,
    )


def inventorier(materiau, stock_compte, acteur, motif="", description=""):
    """
    Comptage physique : enregistre l'écart constaté (éventuellement nul).
    """

    if isinstance(stock_compte, bool) or not isinstance(stock_compte, int) or stock_compte < 0:
        raise InvalidQuantity("Le stock compté doit être un entier positif ou nul.")

    materiau = _lire_stock(materiau)
    ecart = stock_compte - materiau.stock_actuel

    return commit(
        materiau,
        TypeMouvement.INVENTAIRE,
        ecart,
        acteur,
        motif=motif or "Inventaire physique",
        description=description or (
            f"Comptage : {stock_compte} {materiau.unite} "
            f"(système : {materiau.stock_actuel}, écart : {ecart})"
        ),
        stock_attendu=materiau.stock_actuel,
    )


# ============================================================
# CONSULTATION
# ============================================================

def historique(materiau_id):
    return (
        MouvementStock.objects
        .filter(materiau_id=materiau_id)
        .select_related("utilisateur", "demande")
        .order_by("-created_at", "-id")
    )


def statistiques(date_debut=None, date_fin=None):
    qs = MouvementStock.objects.all()

    if date_debut:
        qs = qs.filter(created_at__date__gte=date_debut)
    if date_fin:
        qs = qs.filter(created_at__date__lte=date_fin)

    stats = qs.aggregate(
        total_mouvements=Count("id"),
        entrees=Count("id", filter=Q(type_mouvement=TypeMouvement.ENTREE)),
        sorties=Count("id", filter=Q(type_mouvement=TypeMouvement.SORTIE)),
        ajustements=Count("id", filter=Q(type_mouvement=TypeMouvement.AJUSTEMENT)),
        inventaires=Count("id", filter=Q(type_mouvement=TypeMouvement.INVENTAIRE)),
        total_entrees=Sum("quantite", filter=Q(type_mouvement=TypeMouvement.ENTREE)),
        total_sorties=Sum("quantite", filter=Q(type_mouvement=TypeMouvement.SORTIE)),
        materiaux_concernes=Count("materiau", distinct=True),
        utilisateurs_actifs=Count("utilisateur", distinct=True),
    )

    stats["total_entrees"] = stats["total_entrees"] or 0
    stats["total_sorties"] = abs(stats["total_sorties"] or 0)

    return stats
