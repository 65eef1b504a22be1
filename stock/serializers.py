from rest_framework import serializers

from stock.models import MouvementStock


class MouvementStockSerializer(serializers.ModelSerializer):

    materiau_code = serializers.CharField(
        source="materiau.code",
        read_only=True
    )

    materiau_nom = serializers.CharField(
        source="materiau.nom",
        read_only=True
    )

    utilisateur_nom = serializers.CharField(
        source="utilisateur.nom_complet",
        read_only=True,
        default=None
    )

    demande_numero = serializers.CharField(
        source="demande.numero",
        read_only=True,
        default=None
    )

    bon_numero = serializers.CharField(
        source="ligne_bon.bon.numero",
        read_only=True,
        default=None
    )

    class Meta:
        model = MouvementStock
        fields = [
            "id",
            "materiau",
            "materiau_code",
            "materiau_nom",
            "type_mouvement",
            "quantite",
            "stock_avant",
            "stock_apres",
            "motif",
            "description",
            "utilisateur",
            "utilisateur_nom",
            "demande",
            "demande_numero",
            "bon_numero",
            "fournisseur",
            "numero_facture",
            "created_at",
        ]
        read_only_fields = fields


# =========================
# ENTRÉES MAGAZINIER
# =========================

class EntreeStockSerializer(serializers.Serializer):
    materiau = serializers.IntegerField()
    quantite = serializers.IntegerField(min_value=1)
    fournisseur = serializers.CharField(max_length=150, required=False, allow_blank=True, default="")
    numero_facture = serializers.CharField(max_length=100, required=False, allow_blank=True, default="")
    motif = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
    description = serializers.CharField(required=False, allow_blank=True, default="")


class AjustementStockSerializer(serializers.Serializer):
    materiau = serializers.IntegerField()
    nouveau_stock = serializers.IntegerField(min_value=0)
    motif = serializers.CharField(max_length=255)
    description = serializers.CharField(required=False, allow_blank=True, default="")


class InventaireSerializer(serializers.Serializer):
    materiau = serializers.IntegerField()
    stock_compte = serializers.IntegerField(min_value=0)
    motif = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
    description = serializers.CharField(required=False, allow_blank=True, default="")
