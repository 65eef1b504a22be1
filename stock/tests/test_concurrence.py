import threading

import pytest
from django.db import connection

from catalogue.models import Materiau
from core.exceptions import ConcurrentModification, InsufficientStock
from livraisons.destinataire import Destinataire
from livraisons.models import BonLivraison
from livraisons.panier import Panier
from livraisons.services.distribution import distribuer
from stock.constants import TypeMouvement
from stock.models import MouvementStock
from stock.services import ledger


def _panier(materiau, quantite):
    panier = Panier()
    panier.definir_quantite(materiau, quantite)
    return panier


def test_deux_distributions_du_dernier_stock(db, creer_materiau, magazinier, chef_chantier):
    sable = creer_materiau("SAB-M3", stock=5, unite="m3")

    # Deux paniers construits sur la même lecture du stock
    premier = _panier(sable, 5)
    second = _panier(sable, 5)
    destinataire = Destinataire.depuis_compte(chef_chantier)

    distribuer(premier, destinataire, magazinier)

    with pytest.raises(InsufficientStock):
        distribuer(second, destinataire, magazinier)

    sable.refresh_from_db()
    assert sable.stock_actuel == 0
    assert BonLivraison.objects.count() == 1


@pytest.mark.django_db(transaction=True)
def test_distributions_simultanees(creer_materiau, magazinier, chef_chantier):
    """
    Deux threads soumettent le dernier stock en même temps.

    SQLite sérialise les écritures : lancer contre PostgreSQL,
    par exemple
    POSTGRES_DB=dantela_test pytest stock/tests/test_concurrence.py
    (POSTGRES_USER, POSTGRES_PASSWORD, POSTGRES_HOST au besoin).
    """

    if connection.vendor != "postgresql":
        pytest.skip("verrouillage de ligne réel requis (PostgreSQL)")

    sable = creer_materiau("SAB-M3", stock=5, unite="m3")
    destinataire = Destinataire.depuis_compte(chef_chantier)

    depart = threading.Barrier(2)
    resultats = []

    def soumettre():
        panier = _panier(Materiau.objects.get(pk=sable.pk), 5)
        depart.wait()
        try:
            resultats.append(distribuer(panier, destinataire, magazinier))
        except InsufficientStock as exc:
            resultats.append(exc)
        finally:
            connection.close()

    threads = [threading.Thread(target=soumettre) for _ in range(2)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    sable.refresh_from_db()
    assert sable.stock_actuel == 0
    assert sum(isinstance(r, BonLivraison) for r in resultats) == 1
    assert sum(isinstance(r, InsufficientStock) for r in resultats) == 1


class _LectureDepassee:
    """
    Un autre poste écrit le stock juste après la lecture verrouillée.
    """

    def __init__(self, queryset, ecart):
        self.queryset = queryset
        self.ecart = ecart

    def get(self, **kwargs):
        materiau = self.queryset.get(**kwargs)
        Materiau.objects.filter(pk=materiau.pk).update(
            stock_actuel=materiau.stock_actuel - self.ecart
        )
        return materiau


def test_ecriture_concurrente_detectee(db, creer_materiau, magazinier, monkeypatch):
    sable = creer_materiau("SAB-M3", stock=5, unite="m3")
    lecture = Materiau.objects.select_for_update

    monkeypatch.setattr(
        Materiau.objects,
        "select_for_update",
        lambda: _LectureDepassee(lecture(), ecart=5),
    )

    with pytest.raises(ConcurrentModification):
        ledger.commit(sable, TypeMouvement.SORTIE, 5, magazinier, motif="Distribution directe")

    monkeypatch.undo()

    # L'écriture fautive est annulée avec la transaction du commit
    sable.refresh_from_db()
    assert sable.stock_actuel == 5
    assert not MouvementStock.objects.filter(
        materiau=sable, type_mouvement=TypeMouvement.SORTIE
    ).exists()
