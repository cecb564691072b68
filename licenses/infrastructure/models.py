"""
License model.
"""

from django.db import models


class License(models.Model):
    """
    A license key issued to a customer for one product.

    Status is stored as free text; values other than "active" are
    treated as not active by validation.
    """

    STATUS_CHOICES = [
        ("active", "Active"),
        ("suspended", "Suspended"),
        ("expired", "Expired"),
    ]

    id = models.CharField(primary_key=True, max_length=64, editable=False)
    key = models.CharField(max_length=100, unique=True, db_index=True)
    customer = models.ForeignKey(
        "customers.Customer", on_delete=models.PROTECT, related_name="licenses"
    )
    product_id = models.CharField(max_length=255, blank=True, default="")
    product_name = models.CharField(max_length=255, blank=True, default="")
    version = models.CharField(max_length=64, blank=True, default="")
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="active")
    price_paid = models.BigIntegerField(default=0, help_text="Amount in minor currency units")
    currency = models.CharField(max_length=8, blank=True, default="")
    purchase_session_id = models.CharField(
        max_length=255,
        unique=True,
        null=True,
        blank=True,
        help_text="Checkout session that produced this license",
    )
    created_at = models.DateTimeField()
    updated_at = models.DateTimeField()

    class Meta:
        app_label = "licenses"
        db_table = "licenses"
        ordering = ["created_at"]
        indexes = [
            models.Index(fields=["customer", "created_at"], name="licenses_custome_6a1d2c_idx"),
            models.Index(fields=["status"], name="licenses_status_9b3e41_idx"),
        ]

    def __str__(self):
        return self.key
