from django.test import TestCase, override_settings
from django.utils import timezone

from core.models import Compteur
from core.sequences import prochain_numero, valeur_suivante


class SequenceTestCase(TestCase):

    def test_valeurs_croissantes(self):
        self.assertEqual(valeur_suivante("demande"), 1)
        self.assertEqual(valeur_suivante("demande"), 2)
        self.assertEqual(valeur_suivante("bon_livraison"), 1)

        self.assertEqual(Compteur.objects.get(nom="demande").valeur, 2)

    def test_format_numero(self):
        annee = timezone.localdate().year

        self.assertEqual(prochain_numero("demande"), f"DEM-{annee}-00001")
        self.assertEqual(prochain_numero("bon_livraison"), f"BL-{annee}-00001")

    @override_settings(DANTELA_NUMERO_PREFIXES={"demande": "REQ"})
    def test_prefixe_configurable(self):
        self.assertTrue(prochain_numero("demande").startswith("REQ-"))

    def test_jamais_reutilise(self):
        Compteur.objects.create(nom="bon_livraison", valeur=41)

        self.assertTrue(prochain_numero("bon_livraison").endswith("-00042"))
