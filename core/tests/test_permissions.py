import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken


@pytest.fixture
def client():
    return APIClient()


def test_login_ajoute_le_role(client, chef_chantier):
    resp = client.post(
        "/api/v1/auth/login/",
        {"username": "chef", "password": "dantela-test-2026"},
        format="json",
    )

    assert resp.status_code == 200
    token = AccessToken(resp.data["access"])
    assert token["role"] == "chef_chantier"
    assert token["nom_chantier"] == "Résidence Almadies"


def test_login_refuse(client, chef_chantier):
    resp = client.post(
        "/api/v1/auth/login/",
        {"username": "chef", "password": "mauvais"},
        format="json",
    )

    assert resp.status_code == 401
    assert resp.data["code"] == "authentication_failed"


def test_jeton_donne_acces(client, magazinier):
    resp = client.post(
        "/api/v1/auth/login/",
        {"username": "magazinier", "password": "dantela-test-2026"},
        format="json",
    )
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {resp.data['access']}")

    assert client.get("/api/v1/stock/mouvements/").status_code == 200


@pytest.mark.parametrize(
    "role_fixture, attendu",
    [
        ("directeur", 200),
        ("magazinier", 200),
        ("chef_chantier", 403),
    ],
)
def test_liste_chefs_de_chantier(client, request, role_fixture, attendu):
    client.force_authenticate(request.getfixturevalue(role_fixture))

    assert client.get("/api/v1/chefs-chantier/").status_code == attendu


def test_chefs_de_chantier_actifs(client, magazinier, chef_chantier, autre_chef):
    autre_chef.is_active = False
    autre_chef.save()
    client.force_authenticate(magazinier)

    resp = client.get("/api/v1/chefs-chantier/")

    assert [u["username"] for u in resp.data] == ["chef"]


def test_directeur_cree_une_demande(client, directeur, ciment):
    client.force_authenticate(directeur)

    resp = client.post(
        "/api/v1/demandes/",
        {"chantier": "Siège", "items": [{"materiau": ciment.pk, "quantite_demandee": 1}]},
        format="json",
    )

    assert resp.status_code == 201
    assert resp.data["chantier"] == "Siège"
