# stock/constants.py

from django.db import models


class TypeMouvement(models.TextChoices):
    ENTREE = "entree", "Entrée"
    SORTIE = "sortie", "Sortie"
    AJUSTEMENT = "ajustement", "Ajustement"
    INVENTAIRE = "inventaire", "Inventaire"


# Quantité signée fournie par l'appelant
TYPES_SIGNES = (
    TypeMouvement.AJUSTEMENT,
    TypeMouvement.INVENTAIRE,
)
