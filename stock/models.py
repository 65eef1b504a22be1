# stock/models.py

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import F, Q

from stock.constants import TypeMouvement


class MouvementStock(models.Model):
    """
    Grand livre du stock (append-only).

    - stock_apres = stock_avant + quantite
    - seule écriture autorisée de Materiau.stock_actuel
    - jamais modifié ni supprimé
    """

    materiau = models.ForeignKey(
        "catalogue.Materiau",
        on_delete=models.PROTECT,
        related_name="mouvements"
    )

    type_mouvement = models.CharField(
        max_length=20,
        choices=TypeMouvement.choices
    )

    # Négative pour une sortie
    quantite = models.IntegerField()

    stock_avant = models.IntegerField()
    stock_apres = models.IntegerField()

    utilisateur = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="mouvements_stock"
    )

    motif = models.CharField(max_length=255)
    description = models.TextField(blank=True)

    demande = models.ForeignKey(
        "demandes.Demande",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="mouvements"
    )

    # Réception fournisseur
    fournisseur = models.CharField(max_length=150, blank=True)
    numero_facture = models.CharField(max_length=100, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        constraints = [
            models.CheckConstraint(
                condition=Q(stock_apres=F("stock_avant") + F("quantite")),
                name="mouvement_stock_coherent",
            ),
        ]

    def __str__(self):
        return (
            f"{self.get_type_mouvement_display()} {self.quantite} "
            f"– {self.materiau_id} ({self.stock_avant} → {self.stock_apres})"
        )

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValidationError(
                "Un mouvement de stock ne peut pas être modifié."
            )
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError(
            "Un mouvement de stock ne peut pas être supprimé."
        )
