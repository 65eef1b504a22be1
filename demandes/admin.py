from django.contrib import admin

from demandes.models import Demande, DemandeItem


class DemandeItemInline(admin.TabularInline):
    model = DemandeItem
    extra = 0
    can_delete = False
    readonly_fields = (
        "materiau",
        "quantite_demandee",
        "quantite_accordee",
        "unite",
        "stock_au_moment",
        "commentaire",
    )


@admin.register(Demande)
class DemandeAdmin(admin.ModelAdmin):
    list_display = (
        "numero",
        "demandeur",
        "chantier",
        "priorite",
        "statut",
        "created_at",
    )
    list_filter = ("statut", "priorite")
    search_fields = ("numero", "chantier", "demandeur__username")
    inlines = [DemandeItemInline]

    # Transitions uniquement via l'API
    readonly_fields = (
        "numero",
        "statut",
        "valideur",
        "date_validation",
        "date_livraison",
        "supprimee_par",
        "date_suppression",
        "motif_suppression",
    )

    def has_delete_permission(self, request, obj=None):
        return False
