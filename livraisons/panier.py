# livraisons/panier.py
"""
Panier de distribution directe.

Objet en mémoire, sans persistance : il borne chaque ligne au
stock lu au moment de l'ajout. Le contrôle définitif a lieu
au commit de la sortie.
"""

from core.exceptions import InvalidQuantity, StockExceeded


class LignePanier:

    def __init__(self, materiau, quantite):
        self.materiau = materiau
        self.quantite = quantite

    def __repr__(self):
        return f"<LignePanier {self.materiau.code} x{self.quantite}>"


class Panier:

    def __init__(self):
        self._lignes = {}

    def __len__(self):
        return len(self._lignes)

    def __iter__(self):
        return iter(self._lignes.values())

    def est_vide(self):
        return not self._lignes

    def quantite(self, materiau):
        ligne = self._lignes.get(materiau.pk)
        return ligne.quantite if ligne else 0

    def _depassement(self, materiau, voulu, maximum):
        return StockExceeded(
            f"Stock disponible pour {materiau.nom} : {maximum} {materiau.unite}.",
            materiau=materiau.pk,
            quantite=voulu,
            maximum=maximum,
        )

    def ajouter(self, materiau, delta=1):
        """
        Ajoute `delta` unités, plafonnées au stock disponible.

        Si le plafond est atteint, la ligne est conservée au maximum
        et StockExceeded est levée pour informer l'appelant.
        """

        if isinstance(delta, bool) or not isinstance(delta, int) or delta < 1:
            raise InvalidQuantity("La quantité ajoutée doit être un entier positif.")

        maximum = materiau.stock_actuel
        voulu = self.quantite(materiau) + delta

        if maximum <= 0:
            self.retirer(materiau)
            raise self._depassement(materiau, voulu, 0)

        self._lignes[materiau.pk] = LignePanier(materiau, min(voulu, maximum))

        if voulu > maximum:
            raise self._depassement(materiau, voulu, maximum)

        return voulu

    def definir_quantite(self, materiau, quantite):
        """
        Fixe la quantité d'une ligne. Zéro ou moins retire la ligne ;
        au-delà du stock, la ligne est laissée inchangée.
        """

        if isinstance(quantite, bool) or not isinstance(quantite, int):
            raise InvalidQuantity("La quantité doit être un nombre entier.")

        if quantite <= 0:
            self.retirer(materiau)
            return 0

        if quantite > materiau.stock_actuel:
            raise self._depassement(materiau, quantite, materiau.stock_actuel)

        self._lignes[materiau.pk] = LignePanier(materiau, quantite)
        return quantite

    def retirer(self, materiau):
        self._lignes.pop(materiau.pk, None)

    def lignes(self):
        return [(ligne.materiau, ligne.quantite) for ligne in self]
