# livraisons/services/emission.py

import logging

from django.db import DatabaseError, transaction
from django.db.models import Count, Q, Sum

from core.exceptions import DomainError, EmptyCart
from core.sequences import prochain_numero
from core.signals import emettre_apres_commit, note_issued
from livraisons.constants import MOTIF_DISTRIBUTION_DIRECTE, TypeLivraison
from livraisons.models import BonItem, BonLivraison
from stock.constants import TypeMouvement
from stock.services.ledger import commit, compenser

logger = logging.getLogger(__name__)


# ============================================================
# CONSTRUCTION DU BON (SEUL POINT DE CRÉATION)
# ============================================================

def _creer_bon(mouvements, destinataire, acteur, demande, commentaire):
    bon = BonLivraison.objects.create(
        numero=prochain_numero("bon_livraison"),
        type_livraison=(
            TypeLivraison.COMMANDE if demande is not None
            else TypeLivraison.DIRECTE
        ),
        demande=demande,
        magazinier=acteur,
        commentaire=commentaire,
        **destinataire.snapshot(),
    )

    BonItem.objects.bulk_create([
        BonItem(
            bon=bon,
            materiau=mouvement.materiau,
            code=mouvement.materiau.code,
            nom=mouvement.materiau.nom,
            unite=mouvement.materiau.unite,
            quantite=-mouvement.quantite,
            mouvement=mouvement,
        )
        for mouvement in mouvements
    ])

    return bon


# ============================================================
# ÉMISSION (DEMANDE OU DISTRIBUTION DIRECTE)
# ============================================================

def emettre(lignes, destinataire, acteur, demande=None, commentaire="", avant_creation=None):
    """
    Sortie de stock ligne par ligne puis création du bon.

    lignes : [(materiau, quantite), ...]
    avant_creation : appelé dans la transaction du bon, avant sa
    création (ex : bascule de statut de la demande). Une exception
    y annule l'émission.

    Chaque sortie est un commit indépendant. Au premier échec, les
    sorties déjà engagées sont compensées puis l'erreur est relevée :
    aucun bon partiel, aucun rejeu.
    """

    if not lignes:
        raise EmptyCart()

    motif = demande.numero if demande is not None else (
        commentaire.strip()[:255] or MOTIF_DISTRIBUTION_DIRECTE
    )

    mouvements = []

    try:
        for materiau, quantite in lignes:
            mouvements.append(
                commit(
                    materiau,
                    TypeMouvement.SORTIE,
                    quantite,
                    acteur,
                    motif=motif,
                    description=(
                        f"Livraison à {destinataire.nom} ({destinataire.chantier})"
                    ),
                    demande=demande,
                )
            )

        with transaction.atomic():
            if avant_creation is not None:
                avant_creation()
            bon = _creer_bon(mouvements, destinataire, acteur, demande, commentaire)

    except (DomainError, DatabaseError) as exc:
        logger.warning(
            "Émission annulée (%s) après %s sortie(s) : %s",
            motif,
            len(mouvements),
            exc,
        )
        compenser(mouvements, acteur, raison=f"échec émission {motif}")
        raise

    emettre_apres_commit(note_issued, sender=BonLivraison, bon=bon)

    logger.info(
        "Bon %s émis (%s, %s ligne(s)) pour %s",
        bon.numero,
        bon.type_livraison,
        len(mouvements),
        destinataire.nom,
    )

    return bon


# ============================================================
# STATISTIQUES
# ============================================================

def statistiques(qs=None):
    if qs is None:
        qs = BonLivraison.objects.all()

    stats = qs.aggregate(
        total_bons=Count("id", distinct=True),
        bons_commande=Count(
            "id", distinct=True, filter=Q(type_livraison=TypeLivraison.COMMANDE)
        ),
        bons_directs=Count(
            "id", distinct=True, filter=Q(type_livraison=TypeLivraison.DIRECTE)
        ),
        destinataires=Count("destinataire_nom", distinct=True),
    )

    stats["total_quantite"] = (
        BonItem.objects
        .filter(bon__in=qs)
        .aggregate(total=Sum("quantite"))
        .get("total")
    ) or 0

    return stats
