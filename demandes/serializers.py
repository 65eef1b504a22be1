from rest_framework import serializers

from demandes.constants import ActionValidation, Priorite
from demandes.models import Demande, DemandeItem


class DemandeItemSerializer(serializers.ModelSerializer):

    materiau_code = serializers.CharField(
        source="materiau.code",
        read_only=True
    )

    materiau_nom = serializers.CharField(
        source="materiau.nom",
        read_only=True
    )

    stock_actuel = serializers.IntegerField(
        source="materiau.stock_actuel",
        read_only=True
    )

    class Meta:
        model = DemandeItem
        fields = [
            "id",
            "materiau",
            "materiau_code",
            "materiau_nom",
            "quantite_demandee",
            "quantite_accordee",
            "unite",
            "stock_au_moment",
            "stock_actuel",
            "commentaire",
        ]
        read_only_fields = fields


class DemandeSerializer(serializers.ModelSerializer):

    items = DemandeItemSerializer(many=True, read_only=True)

    demandeur_nom = serializers.CharField(
        source="demandeur.nom_complet",
        read_only=True
    )

    valideur_nom = serializers.CharField(
        source="valideur.nom_complet",
        read_only=True,
        default=None
    )

    bon_numero = serializers.CharField(
        source="bon_livraison.numero",
        read_only=True,
        default=None
    )

    class Meta:
        model = Demande
        fields = [
            "id",
            "numero",
            "statut",
            "priorite",
            "demandeur",
            "demandeur_nom",
            "chantier",
            "date_livraison_souhaitee",
            "commentaire_demandeur",
            "commentaire_magazinier",
            "valideur",
            "valideur_nom",
            "date_validation",
            "date_livraison",
            "supprimee_par",
            "date_suppression",
            "motif_suppression",
            "bon_numero",
            "items",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


# =========================
# ENTRÉES
# =========================

class DemandeItemInputSerializer(serializers.Serializer):
    materiau = serializers.IntegerField()
    quantite_demandee = serializers.IntegerField()
    commentaire = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")


class DemandeCreateSerializer(serializers.Serializer):
    chantier = serializers.CharField(max_length=150, required=False, allow_blank=True, default="")
    priorite = serializers.ChoiceField(choices=Priorite.choices, default=Priorite.NORMALE)
    date_livraison_souhaitee = serializers.DateField(required=False, allow_null=True, default=None)
    commentaire = serializers.CharField(required=False, allow_blank=True, default="")
    items = DemandeItemInputSerializer(many=True, allow_empty=True)


class QuantiteAccordeeSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    quantite_accordee = serializers.IntegerField()


class ValidationDemandeSerializer(serializers.Serializer):
    action = serializers.ChoiceField(choices=ActionValidation.choices)
    commentaire = serializers.CharField(required=False, allow_blank=True, default="")
    items = QuantiteAccordeeSerializer(many=True, required=False, default=list)


class GenerationBonSerializer(serializers.Serializer):
    commentaire = serializers.CharField(required=False, allow_blank=True, default="")


class SuppressionDemandeSerializer(serializers.Serializer):
    motif = serializers.CharField(required=False, allow_blank=True, default="")
