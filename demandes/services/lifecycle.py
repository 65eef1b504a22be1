# demandes/services/lifecycle.py

import logging

from django.db import transaction
from django.db.models import Count, Q
from django.utils import timezone

from catalogue.models import Materiau
from core.exceptions import (
    ConcurrentModification,
    EmptyRequest,
    InvalidGrant,
    InvalidQuantity,
    InvalidTransition,
    MaterialNotFound,
    MissingMotif,
)
from core.sequences import prochain_numero
from core.signals import emettre_apres_commit, request_created, request_validated
from demandes.constants import STATUTS_TERMINAUX, ActionValidation, DemandeStatus, Priorite
from demandes.models import Demande, DemandeItem
from livraisons.destinataire import Destinataire
from livraisons.services.emission import emettre
from stock.constants import TypeMouvement
from stock.services.ledger import commit

logger = logging.getLogger(__name__)


def _est_entier(valeur):
    return isinstance(valeur, int) and not isinstance(valeur, bool)


def _recharger(demande):
    return Demande.objects.select_related("demandeur").get(pk=demande.pk)


# ============================================================
# CRÉATION
# ============================================================

def _fusionner_items(items):
    """
    Regroupe les lignes portant sur le même matériau.
    """

    fusion = {}

    for item in items:
        materiau_id = getattr(item["materiau"], "pk", item["materiau"])
        quantite = item.get("quantite_demandee")

        if not _est_entier(quantite) or quantite <= 0:
            raise InvalidQuantity(
                "La quantité demandée doit être un entier strictement positif.",
                materiau=materiau_id,
                quantite=quantite,
            )

        if materiau_id in fusion:
            fusion[materiau_id]["quantite_demandee"] += quantite
        else:
            fusion[materiau_id] = {
                "quantite_demandee": quantite,
                "commentaire": item.get("commentaire", ""),
            }

    return fusion


def creer_demande(
    demandeur,
    items,
    priorite=Priorite.NORMALE,
    chantier="",
    date_livraison_souhaitee=None,
    commentaire="",
):
    """
    Nouvelle demande en attente de validation.

    items : [{"materiau": Materiau | id, "quantite_demandee": n, "commentaire": ""}]
    Le stock de chaque matériau est figé sur la ligne (stock_au_moment).
    """

    if not items:
        raise EmptyRequest()

    fusion = _fusionner_items(items)

    materiaux = Materiau.objects.filter(actif=True).in_bulk(list(fusion))
    manquants = [pk for pk in fusion if pk not in materiaux]
    if manquants:
        raise MaterialNotFound(
            f"Matériau(x) introuvable(s) ou inactif(s) : {manquants}",
            materiaux=manquants,
        )

    with transaction.atomic():
        demande = Demande.objects.create(
            numero=prochain_numero("demande"),
            demandeur=demandeur,
            chantier=chantier or demandeur.nom_chantier,
            priorite=priorite,
            date_livraison_souhaitee=date_livraison_souhaitee,
            commentaire_demandeur=commentaire,
        )

        DemandeItem.objects.bulk_create([
            DemandeItem(
                demande=demande,
                materiau=materiaux[materiau_id],
                quantite_demandee=ligne["quantite_demandee"],
                unite=materiaux[materiau_id].unite,
                stock_au_moment=materiaux[materiau_id].stock_actuel,
                commentaire=ligne["commentaire"],
            )
            for materiau_id, ligne in fusion.items()
        ])

        emettre_apres_commit(request_created, sender=Demande, demande=demande)

    logger.info(
        "Demande %s créée par %s (%s ligne(s))",
        demande.numero,
        demandeur.pk,
        len(fusion),
    )

    return demande


# ============================================================
# VALIDATION (APPROBATION / REJET)
# ============================================================

def _quantites_accordees(items, items_accordes):
    """
    Contrôle global des quantités accordées.

    Absente : quantité demandée. Toute ligne hors de
    [0, min(demandée, stock)] rejette l'ensemble.
    """

    inconnus = [pk for pk in items_accordes if pk not in {i.pk for i in items}]
    if inconnus:
        raise InvalidGrant(
            "Ligne(s) inconnue(s) dans cette demande.",
            items=inconnus,
        )

    accordees = {}
    erreurs = []

    for item in items:
        accordee = items_accordes.get(item.pk, item.quantite_demandee)
        plafond = min(item.quantite_demandee, item.materiau.stock_actuel)

        if not _est_entier(accordee) or accordee < 0 or accordee > plafond:
            erreurs.append({
                "item": item.pk,
                "materiau": item.materiau.code,
                "quantite_accordee": accordee,
                "maximum": max(plafond, 0),
            })
            continue

        accordees[item.pk] = accordee

    if erreurs:
        raise InvalidGrant(
            "Quantité accordée supérieure à la demande ou au stock disponible.",
            items=erreurs,
        )

    return accordees


def valider_demande(demande, action, valideur, commentaire="", items_accordes=None):
    """
    Approuve ou rejette une demande en attente.

    items_accordes : {item_id: quantite}. Un rejet exige un motif
    et remet toutes les quantités accordées à zéro.
    """

    if action not in ActionValidation.values:
        raise InvalidTransition(f"Action inconnue : {action}", action=action)

    items_accordes = items_accordes or {}
    commentaire = (commentaire or "").strip()

    with transaction.atomic():
        demande = Demande.objects.select_for_update().get(pk=demande.pk)

        if demande.statut != DemandeStatus.EN_ATTENTE:
            raise InvalidTransition(
                "Seule une demande en attente peut être validée.",
                statut=demande.statut,
            )

        items = list(demande.items.select_related("materiau"))

        if action == ActionValidation.APPROUVER:
            accordees = _quantites_accordees(items, items_accordes)
            for item in items:
                item.quantite_accordee = accordees[item.pk]
            DemandeItem.objects.bulk_update(items, ["quantite_accordee"])
            nouveau_statut = DemandeStatus.APPROUVEE
        else:
            if not commentaire:
                raise MissingMotif("Un motif de rejet est obligatoire.")
            demande.items.update(quantite_accordee=0)
            nouveau_statut = DemandeStatus.REJETEE

        demande.verifier_transition(nouveau_statut)
        demande.statut = nouveau_statut
        demande.valideur = valideur
        demande.date_validation = timezone.now()
        demande.commentaire_magazinier = commentaire
        demande.save(update_fields=[
            "statut",
            "valideur",
            "date_validation",
            "commentaire_magazinier",
            "updated_at",
        ])

        emettre_apres_commit(
            request_validated,
            sender=Demande,
            demande=demande,
            action=action,
        )

    logger.info(
        "Demande %s %s par %s",
        demande.numero,
        demande.statut,
        valideur.pk,
    )

    return demande


# ============================================================
# BON DE LIVRAISON
# ============================================================

def _basculer(demande, depuis, vers, **champs):
    """
    Changement de statut conditionnel : une seule bascule réussit.
    """

    updated = (
        Demande.objects
        .filter(pk=demande.pk, statut=depuis)
        .update(statut=vers, updated_at=timezone.now(), **champs)
    )
    return updated == 1


def generer_bon_livraison(demande, acteur, commentaire=""):
    """
    Sortie des quantités accordées et émission du bon.

    La demande passe en préparation dans la même transaction que
    la création du bon ; en cas d'échec elle reste approuvée.
    """

    demande = _recharger(demande)
    demande.verifier_transition(DemandeStatus.EN_PREPARATION)

    lignes = [
        (item.materiau, item.quantite_accordee)
        for item in demande.items.select_related("materiau")
        if item.quantite_accordee > 0
    ]

    if not lignes:
        raise EmptyRequest("Aucune quantité accordée à livrer.")

    def reserver():
        if not _basculer(demande, DemandeStatus.APPROUVEE, DemandeStatus.EN_PREPARATION):
            raise ConcurrentModification(
                f"La demande {demande.numero} a déjà été traitée.",
                demande=demande.pk,
            )

    bon = emettre(
        lignes,
        Destinataire.depuis_compte(demande.demandeur, chantier=demande.chantier),
        acteur,
        demande=demande,
        commentaire=commentaire,
        avant_creation=reserver,
    )

    return bon


def marquer_livree(demande, acteur=None):
    """
    Confirmation de réception. Un second appel échoue sans effet.
    """

    if not _basculer(
        demande,
        DemandeStatus.EN_PREPARATION,
        DemandeStatus.LIVREE,
        date_livraison=timezone.now(),
    ):
        demande = _recharger(demande)
        raise InvalidTransition(
            "Seule une demande en préparation peut être marquée livrée.",
            statut=demande.statut,
        )

    demande = _recharger(demande)
    logger.info(
        "Demande %s livrée (confirmée par %s)",
        demande.numero,
        getattr(acteur, "pk", None),
    )
    return demande


# ============================================================
# SUPPRESSION (ARCHIVAGE TRACÉ)
# ============================================================

def supprimer_demande(demande, motif, acteur):
    """
    Archive la demande. Chaque matériau concerné reçoit un ajustement
    de quantité nulle décrivant la demande supprimée ; le stock
    ne bouge pas.
    """

    motif = (motif or "").strip()
    if not motif:
        raise MissingMotif("Un motif de suppression est obligatoire.")

    with transaction.atomic():
        demande = Demande.objects.select_for_update().get(pk=demande.pk)

        if demande.statut == DemandeStatus.LIVREE:
            raise InvalidTransition(
                "Une demande livrée ne peut pas être supprimée.",
                statut=demande.statut,
            )
        demande.verifier_transition(DemandeStatus.ARCHIVEE)

        for item in demande.items.select_related("materiau"):
            commit(
                item.materiau,
                TypeMouvement.AJUSTEMENT,
                0,
                acteur,
                motif=f"Suppression demande {demande.numero}"[:255],
                description=(
                    f"Demande {demande.numero} ({demande.get_statut_display()}) "
                    f"de {demande.demandeur.nom_complet}, chantier {demande.chantier or '-'} : "
                    f"{item.materiau.nom} demandé {item.quantite_demandee} {item.unite}, "
                    f"accordé {item.quantite_accordee}. Motif : {motif}"
                ),
                demande=demande,
            )

        demande.statut = DemandeStatus.ARCHIVEE
        demande.supprimee_par = acteur
        demande.date_suppression = timezone.now()
        demande.motif_suppression = motif
        demande.save(update_fields=[
            "statut",
            "supprimee_par",
            "date_suppression",
            "motif_suppression",
            "updated_at",
        ])

    logger.warning(
        "Demande %s archivée par %s : %s",
        demande.numero,
        acteur.pk,
        motif,
    )

    return demande


# ============================================================
# STATISTIQUES
# ============================================================

def statistiques(qs=None):
    if qs is None:
        qs = Demande.objects.all()

    return qs.aggregate(
        total=Count("id"),
        **{
            statut: Count("id", filter=Q(statut=statut))
            for statut in DemandeStatus.values
        },
        urgentes=Count(
            "id",
            filter=Q(priorite=Priorite.URGENTE) & ~Q(statut__in=STATUTS_TERMINAUX),
        ),
    )
