# accounts/serializers/chef_chantier.py
from rest_framework import serializers

from accounts.models import Utilisateur


class ChefChantierSerializer(serializers.ModelSerializer):
    nom_complet = serializers.CharField(read_only=True)

    class Meta:
        model = Utilisateur
        fields = (
            "id",
            "username",
            "first_name",
            "last_name",
            "nom_complet",
            "email",
            "nom_chantier",
            "telephone",
            "adresse",
        )
        read_only_fields = fields
