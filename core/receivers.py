# core/receivers.py

import logging

from django.dispatch import receiver

from core.signals import note_issued, request_created, request_validated

logger = logging.getLogger("dantela.evenements")


@receiver(request_created)
def journaliser_demande_creee(sender, demande, **kwargs):
    logger.info(
        "Demande %s créée par %s (%s)",
        demande.numero,
        demande.demandeur_id,
        demande.priorite,
    )


@receiver(request_validated)
def journaliser_demande_validee(sender, demande, action, **kwargs):
    logger.info(
        "Demande %s : %s par %s",
        demande.numero,
        action,
        demande.valideur_id,
    )


@receiver(note_issued)
def journaliser_bon_emis(sender, bon, **kwargs):
    logger.info(
        "Bon de livraison %s émis (%s) pour %s",
        bon.numero,
        bon.type_livraison,
        bon.destinataire_nom,
    )
