import pytest
from django.core.exceptions import ValidationError

from core.exceptions import EmptyCart, InsufficientStock, MissingRecipient
from livraisons.constants import TypeLivraison
from livraisons.destinataire import Destinataire
from livraisons.models import BonLivraison
from livraisons.panier import Panier
from livraisons.services.distribution import distribuer
from stock.constants import TypeMouvement
from stock.models import MouvementStock
from stock.services.ledger import commit


@pytest.fixture
def panier(ciment, fer):
    panier = Panier()
    panier.ajouter(ciment, 4)
    panier.ajouter(fer, 6)
    return panier


def test_distribution_vers_chef_de_chantier(db, panier, ciment, fer, magazinier, chef_chantier):
    bon = distribuer(
        panier,
        Destinataire.depuis_compte(chef_chantier),
        magazinier,
        commentaire="Urgence coffrage",
    )

    ciment.refresh_from_db()
    fer.refresh_from_db()
    assert ciment.stock_actuel == 6
    assert fer.stock_actuel == 14

    assert bon.type_livraison == TypeLivraison.DIRECTE
    assert bon.demande is None
    assert bon.destinataire == chef_chantier
    assert bon.destinataire_chantier == "Résidence Almadies"
    assert bon.numero.startswith("BL-")
    assert bon.total_quantite == 10

    # Chaque ligne pointe sur sa sortie de stock
    for item in bon.items.all():
        assert item.mouvement.type_mouvement == TypeMouvement.SORTIE
        assert item.mouvement.quantite == -item.quantite
        assert item.mouvement.motif == "Urgence coffrage"
        assert item.mouvement.demande is None


def test_distribution_destinataire_libre(db, panier, magazinier):
    destinataire = Destinataire.depuis_saisie(
        nom="Ibrahima Fall",
        chantier="Villa Ngor",
        telephone="+221 78 111 11 11",
    )

    bon = distribuer(panier, destinataire, magazinier)

    assert bon.destinataire is None
    assert bon.destinataire_nom == "Ibrahima Fall"
    assert bon.items.first().mouvement.motif == "Distribution directe"


def test_panier_vide(db, magazinier, chef_chantier):
    with pytest.raises(EmptyCart):
        distribuer(Panier(), Destinataire.depuis_compte(chef_chantier), magazinier)


def test_sans_destinataire(db, panier, magazinier):
    with pytest.raises(MissingRecipient):
        distribuer(panier, None, magazinier)


def test_echec_seconde_ligne_compense_la_premiere(db, panier, ciment, fer, magazinier, chef_chantier):
    # Le fer est consommé entre la constitution du panier et la soumission
    commit(fer, TypeMouvement.SORTIE, 18, magazinier, motif="Autre chantier")

    with pytest.raises(InsufficientStock):
        distribuer(panier, Destinataire.depuis_compte(chef_chantier), magazinier)

    ciment.refresh_from_db()
    assert ciment.stock_actuel == 10
    assert BonLivraison.objects.count() == 0
    assert MouvementStock.objects.filter(
        materiau=ciment,
        type_mouvement=TypeMouvement.AJUSTEMENT,
        quantite=4,
    ).exists()


def test_bon_immuable(db, panier, magazinier, chef_chantier):
    bon = distribuer(panier, Destinataire.depuis_compte(chef_chantier), magazinier)
    bon.commentaire = "modifié"

    with pytest.raises(ValidationError):
        bon.save()

    with pytest.raises(ValidationError):
        bon.delete()


def test_instantane_destinataire_fige(db, panier, magazinier, chef_chantier):
    bon = distribuer(panier, Destinataire.depuis_compte(chef_chantier), magazinier)

    chef_chantier.nom_chantier = "Nouveau chantier"
    chef_chantier.save()

    bon.refresh_from_db()
    assert bon.destinataire_chantier == "Résidence Almadies"


def test_numerotation_croissante(db, ciment, magazinier, chef_chantier):
    destinataire = Destinataire.depuis_compte(chef_chantier)
    numeros = []

    for _ in range(2):
        panier = Panier()
        ciment.refresh_from_db()
        panier.ajouter(ciment, 1)
        numeros.append(distribuer(panier, destinataire, magazinier).numero)

    assert numeros[0] != numeros[1]
    assert int(numeros[1].rsplit("-", 1)[1]) == int(numeros[0].rsplit("-", 1)[1]) + 1
