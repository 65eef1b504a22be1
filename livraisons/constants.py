# livraisons/constants.py

from django.db import models


class TypeLivraison(models.TextChoices):
    COMMANDE = "commande", "Sur demande"
    DIRECTE = "directe", "Distribution directe"


MOTIF_DISTRIBUTION_DIRECTE = "Distribution directe"
