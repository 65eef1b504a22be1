from rest_framework import serializers

from livraisons.models import BonItem, BonLivraison


class BonItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = BonItem
        fields = [
            "id",
            "materiau",
            "code",
            "nom",
            "unite",
            "quantite",
            "mouvement",
        ]
        read_only_fields = fields


class BonLivraisonSerializer(serializers.ModelSerializer):

    items = BonItemSerializer(many=True, read_only=True)

    demande_numero = serializers.CharField(
        source="demande.numero",
        read_only=True,
        default=None
    )

    magazinier_nom = serializers.CharField(
        source="magazinier.nom_complet",
        read_only=True,
        default=None
    )

    total_quantite = serializers.IntegerField(read_only=True)

    class Meta:
        model = BonLivraison
        fields = [
            "id",
            "numero",
            "type_livraison",
            "demande",
            "demande_numero",
            "destinataire",
            "destinataire_nom",
            "destinataire_chantier",
            "destinataire_adresse",
            "destinataire_telephone",
            "magazinier",
            "magazinier_nom",
            "commentaire",
            "items",
            "total_quantite",
            "created_at",
        ]
        read_only_fields = fields


# =========================
# DISTRIBUTION DIRECTE
# =========================

class LignePanierSerializer(serializers.Serializer):
    materiau = serializers.IntegerField()
    quantite = serializers.IntegerField()


class DistributionSerializer(serializers.Serializer):
    lignes = LignePanierSerializer(many=True, allow_empty=True)

    # Compte existant OU saisie libre
    destinataire = serializers.IntegerField(required=False, allow_null=True, default=None)
    destinataire_nom = serializers.CharField(max_length=150, required=False, allow_blank=True, default="")
    destinataire_chantier = serializers.CharField(max_length=150, required=False, allow_blank=True, default="")
    destinataire_adresse = serializers.CharField(required=False, allow_blank=True, default="")
    destinataire_telephone = serializers.CharField(max_length=50, required=False, allow_blank=True, default="")

    commentaire = serializers.CharField(required=False, allow_blank=True, default="")
