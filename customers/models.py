"""
Django model registry for the customers app.
"""

from customers.infrastructure.models import Customer  # noqa: F401
