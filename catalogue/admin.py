from django.contrib import admin

from catalogue.models import Categorie, Materiau


@admin.register(Categorie)
class CategorieAdmin(admin.ModelAdmin):
    list_display = ("nom", "description")
    search_fields = ("nom",)


@admin.register(Materiau)
class MateriauAdmin(admin.ModelAdmin):
    list_display = (
        "code",
        "nom",
        "unite",
        "stock_actuel",
        "stock_minimum",
        "categorie",
        "actif",
    )
    list_filter = ("categorie", "actif")
    search_fields = ("code", "nom", "fournisseur")
    readonly_fields = ("stock_actuel",)

    def save_model(self, request, obj, form, change):
        # Le stock ne s'écrit que par le grand livre
        if change:
            obj.save(update_fields=[
                field.name
                for field in obj._meta.concrete_fields
                if not field.primary_key and field.name != "stock_actuel"
            ])
        else:
            super().save_model(request, obj, form, change)

    def has_delete_permission(self, request, obj=None):
        return False
