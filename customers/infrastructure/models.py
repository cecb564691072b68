"""
Customer model.
"""

from django.db import models


class Customer(models.Model):
    """
    A purchaser of one or more licenses.

    Rows are created by provisioning and are never deleted; licenses
    reference them through a protected foreign key.
    """

    id = models.CharField(primary_key=True, max_length=64, editable=False)
    email = models.CharField(max_length=254, unique=True, db_index=True)
    name = models.CharField(max_length=255, blank=True, default="")
    country = models.CharField(max_length=8, blank=True, default="")
    external_customer_ref = models.CharField(
        max_length=255,
        unique=True,
        null=True,
        blank=True,
        help_text="Payment processor customer ID",
    )
    created_at = models.DateTimeField()
    updated_at = models.DateTimeField()

    class Meta:
        app_label = "customers"
        db_table = "customers"
        ordering = ["created_at"]

    def __str__(self):
        return self.email
