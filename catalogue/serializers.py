from rest_framework import serializers

from catalogue.models import Categorie, Materiau


class CategorieSerializer(serializers.ModelSerializer):
    class Meta:
        model = Categorie
        fields = ["id", "nom", "description"]


class MateriauSerializer(serializers.ModelSerializer):

    categorie_nom = serializers.CharField(
        source="categorie.nom",
        read_only=True,
        default=None
    )

    en_alerte = serializers.BooleanField(read_only=True)

    class Meta:
        model = Materiau
        fields = [
            "id",
            "code",
            "nom",
            "description",
            "unite",
            "categorie",
            "categorie_nom",
            "stock_actuel",
            "stock_minimum",
            "en_alerte",
            "fournisseur",
            "actif",
            "updated_at",
        ]
        read_only_fields = fields
