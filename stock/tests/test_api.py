from django.test import TestCase
from rest_framework.test import APIClient

from accounts.constants import UserRole
from accounts.models import Utilisateur
from catalogue.models import Materiau
from stock.constants import TypeMouvement
from stock.models import MouvementStock

URL = "/api/v1/stock/mouvements/"


class MouvementStockApiTestCase(TestCase):

    def setUp(self):
        self.client = APIClient()

        self.magazinier = Utilisateur.objects.create_user(
            username="mag",
            password="dantela-test-2026",
            role=UserRole.MAGAZINIER,
        )
        self.chef = Utilisateur.objects.create_user(
            username="chef",
            password="dantela-test-2026",
            role=UserRole.CHEF_CHANTIER,
        )

        self.gravier = Materiau.objects.create(
            code="GRA-15-25",
            nom="Gravier 15/25",
            unite="m3",
        )

        self.client.force_authenticate(self.magazinier)

    def _entree(self, quantite, **extra):
        return self.client.post(
            f"{URL}entree/",
            {"materiau": self.gravier.pk, "quantite": quantite, **extra},
            format="json",
        )

    def test_entree_fournisseur(self):
        resp = self._entree(12, fournisseur="Carrière de Diack", numero_facture="F-2026-118")

        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.data["stock_apres"], 12)
        self.assertEqual(resp.data["numero_facture"], "F-2026-118")

        self.gravier.refresh_from_db()
        self.assertEqual(self.gravier.stock_actuel, 12)

    def test_entree_quantite_nulle(self):
        resp = self._entree(0)

        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.data["code"], "validation_error")

    def test_entree_materiau_inconnu(self):
        resp = self.client.post(
            f"{URL}entree/",
            {"materiau": 999999, "quantite": 3},
            format="json",
        )

        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.data["code"], "material_not_found")

    def test_ajustement(self):
        self._entree(10)

        resp = self.client.post(
            f"{URL}ajustement/",
            {"materiau": self.gravier.pk, "nouveau_stock": 8, "motif": "Pertes"},
            format="json",
        )

        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.data["quantite"], -2)
        self.assertEqual(resp.data["type_mouvement"], TypeMouvement.AJUSTEMENT)

    def test_ajustement_sans_motif(self):
        resp = self.client.post(
            f"{URL}ajustement/",
            {"materiau": self.gravier.pk, "nouveau_stock": 8},
            format="json",
        )

        self.assertEqual(resp.status_code, 400)

    def test_inventaire(self):
        self._entree(10)

        resp = self.client.post(
            f"{URL}inventaire/",
            {"materiau": self.gravier.pk, "stock_compte": 11},
            format="json",
        )

        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.data["quantite"], 1)

    def test_liste_et_historique(self):
        self._entree(5)
        self._entree(3)

        resp = self.client.get(URL, {"materiau": self.gravier.pk})
        self.assertEqual(len(resp.data), 2)

        resp = self.client.get(f"{URL}historique/{self.gravier.pk}/")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual([m["stock_apres"] for m in resp.data], [8, 5])

    def test_stats(self):
        self._entree(5)

        resp = self.client.get(f"{URL}stats/")

        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.data["entrees"], 1)
        self.assertEqual(resp.data["total_entrees"], 5)

    def test_stats_date_invalide(self):
        resp = self.client.get(f"{URL}stats/", {"date_debut": "hier"})

        self.assertEqual(resp.status_code, 400)

    def test_lecture_seule(self):
        self._entree(5)
        mouvement = MouvementStock.objects.get()

        resp = self.client.delete(f"{URL}{mouvement.pk}/")
        self.assertEqual(resp.status_code, 405)

        resp = self.client.post(URL, {"materiau": self.gravier.pk, "quantite": 1}, format="json")
        self.assertEqual(resp.status_code, 405)

    def test_chef_de_chantier_refuse(self):
        self.client.force_authenticate(self.chef)

        self.assertEqual(self.client.get(URL).status_code, 403)
        self.assertEqual(self._entree(5).status_code, 403)

    def test_non_authentifie(self):
        self.client.force_authenticate(None)

        resp = self.client.get(URL)

        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.data["code"], "authentication_failed")
