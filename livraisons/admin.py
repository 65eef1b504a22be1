from django.contrib import admin

from livraisons.models import BonItem, BonLivraison


class BonItemInline(admin.TabularInline):
    model = BonItem
    extra = 0
    can_delete = False
    readonly_fields = ("materiau", "code", "nom", "unite", "quantite", "mouvement")

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(BonLivraison)
class BonLivraisonAdmin(admin.ModelAdmin):
    list_display = (
        "numero",
        "type_livraison",
        "destinataire_nom",
        "destinataire_chantier",
        "magazinier",
        "created_at",
    )
    list_filter = ("type_livraison",)
    search_fields = ("numero", "destinataire_nom", "destinataire_chantier")
    inlines = [BonItemInline]

    # Bon émis = pièce justificative figée
    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
