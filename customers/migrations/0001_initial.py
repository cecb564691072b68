from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Customer",
            fields=[
                ("id", models.CharField(editable=False, max_length=64, primary_key=True, serialize=False)),
                ("email", models.CharField(db_index=True, max_length=254, unique=True)),
                ("name", models.CharField(blank=True, default="", max_length=255)),
                ("country", models.CharField(blank=True, default="", max_length=8)),
                (
                    "external_customer_ref",
                    models.CharField(
                        blank=True,
                        help_text="Payment processor customer ID",
                        max_length=255,
                        null=True,
                        unique=True,
                    ),
                ),
                ("created_at", models.DateTimeField()),
                ("updated_at", models.DateTimeField()),
            ],
            options={
                "db_table": "customers",
                "ordering": ["created_at"],
            },
        ),
    ]
