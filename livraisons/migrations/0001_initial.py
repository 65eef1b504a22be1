import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("catalogue", "0001_initial"),
        ("demandes", "0001_initial"),
        ("stock", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="BonLivraison",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("numero", models.CharField(max_length=30, unique=True)),
                (
                    "type_livraison",
                    models.CharField(
                        choices=[("commande", "Sur demande"), ("directe", "Distribution directe")],
                        max_length=20,
                    ),
                ),
                ("destinataire_nom", models.CharField(max_length=150)),
                ("destinataire_chantier", models.CharField(max_length=150)),
                ("destinataire_adresse", models.TextField(blank=True)),
                ("destinataire_telephone", models.CharField(blank=True, max_length=50)),
                ("commentaire", models.TextField(blank=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "demande",
                    models.OneToOneField(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="bon_livraison",
                        to="demandes.demande",
                    ),
                ),
                (
                    "destinataire",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="bons_recus",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "magazinier",
                    models.ForeignKey(
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="bons_emis",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at", "-id"],
            },
        ),
        migrations.CreateModel(
            name="BonItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("code", models.CharField(max_length=50)),
                ("nom", models.CharField(max_length=150)),
                ("unite", models.CharField(max_length=30)),
                ("quantite", models.PositiveIntegerField()),
                (
                    "bon",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="items",
                        to="livraisons.bonlivraison",
                    ),
                ),
                (
                    "materiau",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="lignes_bon",
                        to="catalogue.materiau",
                    ),
                ),
                (
                    "mouvement",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="ligne_bon",
                        to="stock.mouvementstock",
                    ),
                ),
            ],
            options={
                "ordering": ["id"],
            },
        ),
    ]
