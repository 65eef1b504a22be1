# catalogue/models.py

from django.db import models
from django.core.exceptions import ValidationError


class Categorie(models.Model):
    nom = models.CharField(max_length=100, unique=True)
    description = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["nom"]

    def __str__(self):
        return self.nom


class Materiau(models.Model):
    """
    Matériau de construction référencé au dépôt.

    - stock_actuel n'est écrit que par le grand livre (stock.services.ledger)
    - jamais supprimé, seulement désactivé
    """

    code = models.CharField(
        max_length=50,
        unique=True,
        help_text="Code produit (ex: CIM-50KG)"
    )
    nom = models.CharField(max_length=150)
    description = models.TextField(blank=True)
    unite = models.CharField(max_length=30)

    categorie = models.ForeignKey(
        Categorie,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="materiaux"
    )

    stock_actuel = models.IntegerField(default=0, editable=False)
    stock_minimum = models.PositiveIntegerField(default=0)

    fournisseur = models.CharField(max_length=150, blank=True)

    actif = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["nom"]

    def __str__(self):
        return f"{self.nom} ({self.code})"

    @property
    def en_alerte(self):
        """
        Indique si le matériau est sous son stock minimum.
        """
        return self.stock_actuel <= self.stock_minimum

    def desactiver(self):
        if not self.actif:
            raise ValidationError("Ce matériau est déjà désactivé.")

        self.actif = False
        self.save(update_fields=["actif", "updated_at"])

    def delete(self, *args, **kwargs):
        raise ValidationError(
            "Un matériau ne peut pas être supprimé. Utilisez la désactivation."
        )
