import pytest
from rest_framework.test import APIClient

from accounts.constants import UserRole
from accounts.models import Utilisateur
from catalogue.models import Categorie, Materiau
from stock.services.ledger import receptionner


# =========================
# UTILISATEURS
# =========================

@pytest.fixture
def directeur(db):
    return Utilisateur.objects.create_user(
        username="directeur",
        password="dantela-test-2026",
        role=UserRole.DIRECTEUR,
    )


@pytest.fixture
def magazinier(db):
    return Utilisateur.objects.create_user(
        username="magazinier",
        password="dantela-test-2026",
        first_name="Moussa",
        last_name="Diop",
        role=UserRole.MAGAZINIER,
    )


@pytest.fixture
def chef_chantier(db):
    return Utilisateur.objects.create_user(
        username="chef",
        password="dantela-test-2026",
        first_name="Awa",
        last_name="Ndiaye",
        role=UserRole.CHEF_CHANTIER,
        nom_chantier="Résidence Almadies",
        telephone="+221 77 000 00 00",
        adresse="Route des Almadies, Dakar",
    )


@pytest.fixture
def autre_chef(db):
    return Utilisateur.objects.create_user(
        username="chef2",
        password="dantela-test-2026",
        role=UserRole.CHEF_CHANTIER,
        nom_chantier="Immeuble Plateau",
    )


# =========================
# CLIENTS API
# =========================

@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def client_magazinier(magazinier):
    client = APIClient()
    client.force_authenticate(magazinier)
    return client


@pytest.fixture
def client_chef(chef_chantier):
    client = APIClient()
    client.force_authenticate(chef_chantier)
    return client


# =========================
# CATALOGUE
# =========================

@pytest.fixture
def categorie(db):
    return Categorie.objects.create(nom="Gros œuvre")


@pytest.fixture
def creer_materiau(db, categorie, magazinier):
    """
    Fabrique de matériaux ; le stock initial passe par le grand livre.
    """

    def _creer(code, stock=0, nom=None, unite="sac", **kwargs):
        materiau = Materiau.objects.create(
            code=code,
            nom=nom or code,
            unite=unite,
            categorie=categorie,
            **kwargs,
        )
        if stock:
            receptionner(materiau, stock, magazinier, fournisseur="SOCOCIM")
            materiau.refresh_from_db()
        return materiau

    return _creer


@pytest.fixture
def ciment(creer_materiau):
    return creer_materiau("CIM-50KG", stock=10, nom="Ciment 50kg", stock_minimum=5)


@pytest.fixture
def fer(creer_materiau):
    return creer_materiau("FER-12", stock=20, nom="Fer à béton 12mm", unite="barre")
