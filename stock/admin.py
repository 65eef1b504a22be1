from django.contrib import admin

from stock.models import MouvementStock


@admin.register(MouvementStock)
class MouvementStockAdmin(admin.ModelAdmin):
    list_display = (
        "created_at",
        "materiau",
        "type_mouvement",
        "quantite",
        "stock_avant",
        "stock_apres",
        "utilisateur",
        "demande",
    )
    list_filter = ("type_mouvement",)
    search_fields = ("motif", "materiau__code", "materiau__nom")

    # Grand livre : consultation uniquement
    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
