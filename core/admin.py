# core/admin.py
from django.contrib import admin

from .models import Compteur


@admin.register(Compteur)
class CompteurAdmin(admin.ModelAdmin):
    list_display = ("nom", "valeur")
    readonly_fields = ("nom", "valeur")

    # Une valeur allouée n'est jamais réutilisée
    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
