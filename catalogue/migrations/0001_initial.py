import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Categorie",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("nom", models.CharField(max_length=100, unique=True)),
                ("description", models.TextField(blank=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["nom"],
            },
        ),
        migrations.CreateModel(
            name="Materiau",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("code", models.CharField(help_text="Code produit (ex: CIM-50KG)", max_length=50, unique=True)),
                ("nom", models.CharField(max_length=150)),
                ("description", models.TextField(blank=True)),
                ("unite", models.CharField(max_length=30)),
                ("stock_actuel", models.IntegerField(default=0, editable=False)),
                ("stock_minimum", models.PositiveIntegerField(default=0)),
                ("fournisseur", models.CharField(blank=True, max_length=150)),
                ("actif", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "categorie",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="materiaux",
                        to="catalogue.categorie",
                    ),
                ),
            ],
            options={
                "ordering": ["nom"],
            },
        ),
    ]
