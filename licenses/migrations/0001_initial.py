import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("customers", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="License",
            fields=[
                ("id", models.CharField(editable=False, max_length=64, primary_key=True, serialize=False)),
                ("key", models.CharField(db_index=True, max_length=100, unique=True)),
                ("product_id", models.CharField(blank=True, default="", max_length=255)),
                ("product_name", models.CharField(blank=True, default="", max_length=255)),
                ("version", models.CharField(blank=True, default="", max_length=64)),
                (
                    "status",
                    models.CharField(
                        choices=[("active", "Active"), ("suspended", "Suspended"), ("expired", "Expired")],
                        default="active",
                        max_length=20,
                    ),
                ),
                ("price_paid", models.BigIntegerField(default=0, help_text="Amount in minor currency units")),
                ("currency", models.CharField(blank=True, default="", max_length=8)),
                (
                    "purchase_session_id",
                    models.CharField(
                        blank=True,
                        help_text="Checkout session that produced this license",
                        max_length=255,
                        null=True,
                        unique=True,
                    ),
                ),
                ("created_at", models.DateTimeField()),
                ("updated_at", models.DateTimeField()),
                (
                    "customer",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="licenses",
                        to="customers.customer",
                    ),
                ),
            ],
            options={
                "db_table": "licenses",
                "ordering": ["created_at"],
                "indexes": [
                    models.Index(fields=["customer", "created_at"], name="licenses_custome_6a1d2c_idx"),
                    models.Index(fields=["status"], name="licenses_status_9b3e41_idx"),
                ],
            },
        ),
    ]
