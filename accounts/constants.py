# accounts/constants.py

class UserRole:
    DIRECTEUR = "directeur"
    MAGAZINIER = "magazinier"
    CHEF_CHANTIER = "chef_chantier"

    CHOICES = [
        (DIRECTEUR, "Directeur"),
        (MAGAZINIER, "Magazinier"),
        (CHEF_CHANTIER, "Chef de chantier"),
    ]


class DepotRoles:
    # Valident les demandes et engagent des mouvements de stock
    GESTION_STOCK = (
        UserRole.DIRECTEUR,
        UserRole.MAGAZINIER,
    )

    # Émettent des demandes de matériaux
    DEMANDEURS = (
        UserRole.DIRECTEUR,
        UserRole.CHEF_CHANTIER,
    )
