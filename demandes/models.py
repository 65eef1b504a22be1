# demandes/models.py

from django.conf import settings
from django.db import models
from django.db.models import Q

from core.exceptions import InvalidTransition
from demandes.constants import ALLOWED_TRANSITIONS, DemandeStatus, Priorite


class Demande(models.Model):
    """
    Demande de matériaux d'un chef de chantier.

    - EN_ATTENTE : validation par le magazinier
    - APPROUVEE : quantités accordées figées
    - EN_PREPARATION : bon de livraison émis, stock sorti
    - LIVREE / REJETEE / ARCHIVEE : terminaux
    """

    numero = models.CharField(max_length=30, unique=True)

    demandeur = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="demandes"
    )

    chantier = models.CharField(max_length=150, blank=True)

    priorite = models.CharField(
        max_length=20,
        choices=Priorite.choices,
        default=Priorite.NORMALE
    )

    statut = models.CharField(
        max_length=20,
        choices=DemandeStatus.choices,
        default=DemandeStatus.EN_ATTENTE
    )

    date_livraison_souhaitee = models.DateField(null=True, blank=True)
    commentaire_demandeur = models.TextField(blank=True)

    # =========================
    # VALIDATION
    # =========================
    commentaire_magazinier = models.TextField(blank=True)

    valideur = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="demandes_validees"
    )
    date_validation = models.DateTimeField(null=True, blank=True)

    date_livraison = models.DateTimeField(null=True, blank=True)

    # =========================
    # SUPPRESSION (ARCHIVAGE)
    # =========================
    supprimee_par = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="demandes_supprimees"
    )
    date_suppression = models.DateTimeField(null=True, blank=True)
    motif_suppression = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"{self.numero} ({self.get_statut_display()})"

    def verifier_transition(self, nouveau_statut):
        if nouveau_statut not in ALLOWED_TRANSITIONS.get(self.statut, []):
            raise InvalidTransition(
                f"Transition interdite : {self.statut} → {nouveau_statut}",
                statut=self.statut,
                cible=str(nouveau_statut),
            )


class DemandeItem(models.Model):
    demande = models.ForeignKey(
        Demande,
        on_delete=models.CASCADE,
        related_name="items"
    )

    materiau = models.ForeignKey(
        "catalogue.Materiau",
        on_delete=models.PROTECT,
        related_name="lignes_demande"
    )

    quantite_demandee = models.PositiveIntegerField()
    quantite_accordee = models.PositiveIntegerField(default=0)

    # Instantanés à la création
    unite = models.CharField(max_length=30)
    stock_au_moment = models.IntegerField()

    commentaire = models.CharField(max_length=255, blank=True)

    class Meta:
        ordering = ["id"]
        constraints = [
            models.UniqueConstraint(
                fields=["demande", "materiau"],
                name="unique_materiau_par_demande",
            ),
            models.CheckConstraint(
                condition=Q(quantite_demandee__gt=0),
                name="quantite_demandee_positive",
            ),
        ]

    def __str__(self):
        return f"{self.demande.numero} – {self.materiau_id} x{self.quantite_demandee}"
