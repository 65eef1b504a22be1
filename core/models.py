from django.db import models


class Compteur(models.Model):
    """
    Compteur nommé pour la numérotation métier.
    Une ligne par séquence, verrouillée à chaque allocation.
    """

    nom = models.CharField(max_length=50, unique=True)
    valeur = models.PositiveBigIntegerField(default=0)

    class Meta:
        db_table = "core_compteur"

    def __str__(self):
        return f"{self.nom}={self.valeur}"
