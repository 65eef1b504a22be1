from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Compteur",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("nom", models.CharField(max_length=50, unique=True)),
                ("valeur", models.PositiveBigIntegerField(default=0)),
            ],
            options={
                "db_table": "core_compteur",
            },
        ),
    ]
