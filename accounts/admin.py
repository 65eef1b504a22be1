from django.contrib import admin
from django.contrib.auth.admin import UserAdmin

from accounts.models import Utilisateur


@admin.register(Utilisateur)
class UtilisateurAdmin(UserAdmin):
    list_display = ("username", "first_name", "last_name", "role", "nom_chantier", "is_active")
    list_filter = ("role", "is_active")
    fieldsets = UserAdmin.fieldsets + (
        ("Dépôt", {"fields": ("role", "nom_chantier", "telephone", "adresse")}),
    )
