# livraisons/models.py

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models

from livraisons.constants import TypeLivraison


class BonLivraison(models.Model):
    """
    Bon de livraison : pièce justificative d'une sortie de stock.

    Émis une seule fois, jamais modifié ni supprimé.
    Les coordonnées du destinataire sont figées à l'émission.
    """

    numero = models.CharField(max_length=30, unique=True)

    type_livraison = models.CharField(
        max_length=20,
        choices=TypeLivraison.choices
    )

    # Vide pour une distribution directe
    demande = models.OneToOneField(
        "demandes.Demande",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="bon_livraison"
    )

    destinataire = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="bons_recus"
    )

    destinataire_nom = models.CharField(max_length=150)
    destinataire_chantier = models.CharField(max_length=150)
    destinataire_adresse = models.TextField(blank=True)
    destinataire_telephone = models.CharField(max_length=50, blank=True)

    magazinier = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name="bons_emis"
    )

    commentaire = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"{self.numero} – {self.destinataire_nom}"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValidationError("Un bon de livraison émis est immuable.")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("Un bon de livraison ne peut pas être supprimé.")

    @property
    def total_quantite(self):
        return sum(item.quantite for item in self.items.all())


class BonItem(models.Model):
    bon = models.ForeignKey(
        BonLivraison,
        on_delete=models.CASCADE,
        related_name="items"
    )

    materiau = models.ForeignKey(
        "catalogue.Materiau",
        on_delete=models.PROTECT,
        related_name="lignes_bon"
    )

    # Instantanés du catalogue à l'émission
    code = models.CharField(max_length=50)
    nom = models.CharField(max_length=150)
    unite = models.CharField(max_length=30)

    quantite = models.PositiveIntegerField()

    # Sortie de stock correspondante
    mouvement = models.OneToOneField(
        "stock.MouvementStock",
        on_delete=models.PROTECT,
        related_name="ligne_bon"
    )

    class Meta:
        ordering = ["id"]

    def __str__(self):
        return f"{self.bon.numero} – {self.code} x{self.quantite}"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValidationError("Une ligne de bon de livraison est immuable.")
        super().save(*args, **kwargs)
