# core/signals.py
"""
Événements métier émis par le dépôt.

Un notificateur externe s'abonne avec @receiver ;
l'émission a lieu après commit et n'attend aucun abonné.
"""

from django.db import transaction
from django.dispatch import Signal

# kwargs : demande
request_created = Signal()

# kwargs : demande, action
request_validated = Signal()

# kwargs : bon
note_issued = Signal()


def emettre_apres_commit(signal, sender, **kwargs):
    transaction.on_commit(
        lambda: signal.send_robust(sender=sender, **kwargs)
    )
