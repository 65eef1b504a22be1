from django.db import models
from django.contrib.auth.models import AbstractUser

from accounts.constants import UserRole


class Utilisateur(AbstractUser):
    role = models.CharField(
        max_length=20,
        choices=UserRole.CHOICES,
        default=UserRole.CHEF_CHANTIER,
    )

    # Renseignés pour les chefs de chantier (destinataires des bons)
    nom_chantier = models.CharField(max_length=150, blank=True)
    telephone = models.CharField(max_length=50, blank=True)
    adresse = models.TextField(blank=True)

    @property
    def nom_complet(self):
        nom = f"{self.first_name} {self.last_name}".strip()
        return nom or self.username

    @property
    def gere_le_stock(self):
        return self.role in (UserRole.DIRECTEUR, UserRole.MAGAZINIER)

    def __str__(self):
        return self.nom_complet
