# livraisons/destinataire.py

from accounts.constants import UserRole
from accounts.models import Utilisateur
from core.exceptions import MissingRecipient


class Destinataire:
    """
    Destinataire d'un bon : soit un compte chef de chantier,
    soit des coordonnées saisies (nom et chantier obligatoires).
    Jamais les deux.
    """

    def __init__(self, nom, chantier, adresse="", telephone="", utilisateur=None):
        self.utilisateur = utilisateur
        self.nom = nom
        self.chantier = chantier
        self.adresse = adresse
        self.telephone = telephone

    def __repr__(self):
        return f"<Destinataire {self.nom} / {self.chantier}>"

    @classmethod
    def depuis_compte(cls, utilisateur, chantier=""):
        return cls(
            nom=utilisateur.nom_complet,
            chantier=chantier or utilisateur.nom_chantier or utilisateur.nom_complet,
            adresse=utilisateur.adresse,
            telephone=utilisateur.telephone,
            utilisateur=utilisateur,
        )

    @classmethod
    def depuis_saisie(cls, nom="", chantier="", adresse="", telephone=""):
        nom = (nom or "").strip()
        chantier = (chantier or "").strip()

        if not nom or not chantier:
            raise MissingRecipient(
                "Le nom et le chantier du destinataire sont obligatoires.",
                nom=nom,
                chantier=chantier,
            )

        return cls(
            nom=nom,
            chantier=chantier,
            adresse=(adresse or "").strip(),
            telephone=(telephone or "").strip(),
        )

    @classmethod
    def resoudre(cls, utilisateur_id=None, nom="", chantier="", adresse="", telephone=""):
        """
        Choix exclusif entre un compte existant et une saisie libre.
        """

        saisie = any(
            (valeur or "").strip()
            for valeur in (nom, chantier, adresse, telephone)
        )

        if utilisateur_id and saisie:
            raise MissingRecipient(
                "Choisir un chef de chantier existant ou saisir un destinataire, pas les deux."
            )

        if utilisateur_id:
            try:
                utilisateur = Utilisateur.objects.get(
                    pk=utilisateur_id,
                    role=UserRole.CHEF_CHANTIER,
                    is_active=True,
                )
            except Utilisateur.DoesNotExist:
                raise MissingRecipient(
                    "Chef de chantier introuvable.",
                    destinataire=utilisateur_id,
                )
            return cls.depuis_compte(utilisateur)

        if not saisie:
            raise MissingRecipient()

        return cls.depuis_saisie(nom, chantier, adresse, telephone)

    def snapshot(self):
        return {
            "destinataire": self.utilisateur,
            "destinataire_nom": self.nom[:150],
            "destinataire_chantier": self.chantier[:150],
            "destinataire_adresse": self.adresse,
            "destinataire_telephone": self.telephone[:50],
        }
