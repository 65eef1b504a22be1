from django.contrib import admin
from django.test import RequestFactory

from catalogue.admin import MateriauAdmin
from catalogue.models import Materiau
from stock.services.ledger import receptionner


def _enregistrer(materiau, utilisateur, change=True):
    request = RequestFactory().post("/admin/catalogue/materiau/")
    request.user = utilisateur
    MateriauAdmin(Materiau, admin.site).save_model(request, materiau, form=None, change=change)


def test_modification_admin_preserve_le_stock(db, ciment, directeur, magazinier):
    # Formulaire ouvert sur une lecture à 10
    formulaire = Materiau.objects.get(pk=ciment.pk)

    receptionner(ciment, 15, magazinier, fournisseur="SOCOCIM")

    formulaire.nom = "Ciment CEM II 50kg"
    formulaire.stock_minimum = 8
    _enregistrer(formulaire, directeur)

    ciment.refresh_from_db()
    assert ciment.stock_actuel == 25
    assert ciment.nom == "Ciment CEM II 50kg"
    assert ciment.stock_minimum == 8


def test_creation_admin(db, categorie, directeur):
    materiau = Materiau(code="BRQ-15", nom="Brique 15", unite="unité", categorie=categorie)

    _enregistrer(materiau, directeur, change=False)

    assert Materiau.objects.get(code="BRQ-15").stock_actuel == 0
