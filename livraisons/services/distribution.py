# livraisons/services/distribution.py

from catalogue.models import Materiau
from core.exceptions import (
    EmptyCart,
    InsufficientStock,
    InvalidQuantity,
    MaterialNotFound,
    MissingRecipient,
    StockExceeded,
)
from livraisons.panier import Panier
from livraisons.services.emission import emettre


def distribuer(panier, destinataire, acteur, commentaire=""):
    """
    Distribution directe sans demande : un bon de type « directe ».
    """

    if panier is None or panier.est_vide():
        raise EmptyCart()

    if destinataire is None:
        raise MissingRecipient()

    return emettre(
        panier.lignes(),
        destinataire,
        acteur,
        commentaire=commentaire,
    )


def panier_depuis_lignes(lignes):
    """
    Reconstruit un panier à partir des lignes envoyées par le client :
    [{"materiau": id, "quantite": n}, ...].

    Les lignes en double sont regroupées. Une quantité au-delà du
    stock lu n'est pas plafonnée : la soumission est refusée comme
    le ferait le registre, avec InsufficientStock.
    """

    ids = [ligne["materiau"] for ligne in lignes]
    materiaux = Materiau.objects.filter(actif=True).in_bulk(ids)

    panier = Panier()

    for ligne in lignes:
        materiau = materiaux.get(ligne["materiau"])
        if materiau is None:
            raise MaterialNotFound(
                f"Matériau non trouvé : {ligne['materiau']}",
                materiau=ligne["materiau"],
            )

        quantite = ligne["quantite"]
        if quantite <= 0:
            raise InvalidQuantity(
                f"Quantité invalide pour {materiau.nom}.",
                materiau=materiau.pk,
                quantite=quantite,
            )

        try:
            if panier.quantite(materiau):
                panier.ajouter(materiau, quantite)
            else:
                panier.definir_quantite(materiau, quantite)
        except StockExceeded as exc:
            raise InsufficientStock(
                f"Stock insuffisant pour {materiau.nom} ({materiau.code}). "
                f"Disponible: {materiau.stock_actuel} {materiau.unite}, "
                f"demandé: {exc.extra['quantite']} {materiau.unite}",
                materiau=materiau.pk,
                disponible=materiau.stock_actuel,
                demande=exc.extra["quantite"],
            ) from exc

    return panier
