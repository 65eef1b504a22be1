import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("catalogue", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Demande",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("numero", models.CharField(max_length=30, unique=True)),
                ("chantier", models.CharField(blank=True, max_length=150)),
                (
                    "priorite",
                    models.CharField(
                        choices=[("urgente", "Urgente"), ("haute", "Haute"), ("normale", "Normale"), ("basse", "Basse")],
                        default="normale",
                        max_length=20,
                    ),
                ),
                (
                    "statut",
                    models.CharField(
                        choices=[
                            ("en_attente", "En attente"),
                            ("approuvee", "Approuvée"),
                            ("rejetee", "Rejetée"),
                            ("en_preparation", "En préparation"),
                            ("livree", "Livrée"),
                            ("archivee", "Archivée"),
                        ],
                        default="en_attente",
                        max_length=20,
                    ),
                ),
                ("date_livraison_souhaitee", models.DateField(blank=True, null=True)),
                ("commentaire_demandeur", models.TextField(blank=True)),
                ("commentaire_magazinier", models.TextField(blank=True)),
                ("date_validation", models.DateTimeField(blank=True, null=True)),
                ("date_livraison", models.DateTimeField(blank=True, null=True)),
                ("date_suppression", models.DateTimeField(blank=True, null=True)),
                ("motif_suppression", models.TextField(blank=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "demandeur",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="demandes",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "valideur",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="demandes_validees",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "supprimee_par",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="demandes_supprimees",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at", "-id"],
            },
        ),
        migrations.CreateModel(
            name="DemandeItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("quantite_demandee", models.PositiveIntegerField()),
                ("quantite_accordee", models.PositiveIntegerField(default=0)),
                ("unite", models.CharField(max_length=30)),
                ("stock_au_moment", models.IntegerField()),
                ("commentaire", models.CharField(blank=True, max_length=255)),
                (
                    "demande",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="items",
                        to="demandes.demande",
                    ),
                ),
                (
                    "materiau",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="lignes_demande",
                        to="catalogue.materiau",
                    ),
                ),
            ],
            options={
                "ordering": ["id"],
                "constraints": [
                    models.UniqueConstraint(fields=("demande", "materiau"), name="unique_materiau_par_demande"),
                    models.CheckConstraint(
                        condition=models.Q(("quantite_demandee__gt", 0)),
                        name="quantite_demandee_positive",
                    ),
                ],
            },
        ),
    ]
