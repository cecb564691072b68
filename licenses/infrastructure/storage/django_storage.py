"""
Django implementation of the Storage port.

This adapter converts between domain entities and Django ORM models.
Referential integrity is enforced by the licenses.customer foreign key;
uniqueness by the unique columns. Database errors are translated into
the storage exception hierarchy.
"""
import logging
from contextlib import contextmanager
from typing import List, Optional

from asgiref.sync import sync_to_async
from django.db import DatabaseError, IntegrityError, connection, transaction

from core.domain.exceptions import DuplicateEntityError, ReferentialIntegrityError, StorageError
from customers.domain.customer import Customer
from customers.infrastructure.models import Customer as CustomerModel
from licenses.domain.license import License
from licenses.infrastructure.models import License as LicenseModel
from licenses.ports.storage import Storage

logger = logging.getLogger(__name__)


@contextmanager
def _translate_errors(operation: str, entity_id: str = ""):
    """Wrap database failures in StorageError with operation context."""
    try:
        yield
    except StorageError:
        raise
    except DatabaseError as e:
        logger.error(
            "Storage operation failed",
            extra={"operation": operation, "entity_id": entity_id, "error": str(e)},
        )
        raise StorageError(f"{operation} failed for {entity_id or 'query'}: {e}") from e


class DjangoStorage(Storage):
    """
    Django ORM implementation of Storage.

    This adapter:
    1. Converts Django models to domain entities
    2. Converts domain entities to Django models
    3. Maps IntegrityError to referential and duplicate errors
    """

    def _customer_to_domain(self, model: CustomerModel) -> Customer:
        return Customer(
            id=model.id,
            email=model.email,
            name=model.name,
            country=model.country,
            external_customer_ref=model.external_customer_ref or "",
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _license_to_domain(self, model: LicenseModel) -> License:
        return License(
            id=model.id,
            key=model.key,
            customer_id=model.customer_id,
            product_id=model.product_id,
            product_name=model.product_name,
            version=model.version,
            status=model.status,
            price_paid=model.price_paid,
            currency=model.currency,
            purchase_session_id=model.purchase_session_id or "",
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @sync_to_async
    def get_customer(self, customer_id: str) -> Optional[Customer]:
        with _translate_errors("get_customer", customer_id):
            model = CustomerModel.objects.filter(id=customer_id).first()
            return self._customer_to_domain(model) if model else None

    @sync_to_async
    def find_customer_by_email(self, email: str) -> Optional[Customer]:
        with _translate_errors("find_customer_by_email"):
            model = CustomerModel.objects.filter(email=email).first()
            return self._customer_to_domain(model) if model else None

    @sync_to_async
    def find_customer_by_external_ref(self, external_ref: str) -> Optional[Customer]:
        if not external_ref:
            return None
        with _translate_errors("find_customer_by_external_ref"):
            model = CustomerModel.objects.filter(external_customer_ref=external_ref).first()
            return self._customer_to_domain(model) if model else None

    @sync_to_async
    def save_customer(self, customer: Customer) -> Customer:
        """
        Insert or replace a customer.

        Args:
            customer: Customer entity to save

        Returns:
            Saved customer entity
        """
        model = CustomerModel(
            id=customer.id,
            email=customer.email,
            name=customer.name,
            country=customer.country,
            external_customer_ref=customer.external_customer_ref or None,
            created_at=customer.created_at,
            updated_at=customer.updated_at,
        )
        with _translate_errors("save_customer", customer.id):
            try:
                with transaction.atomic():
                    model.save()
            except IntegrityError as e:
                raise DuplicateEntityError(
                    f"Customer {customer.id} conflicts with an existing customer"
                ) from e
        return customer

    @sync_to_async
    def get_license(self, license_id: str) -> Optional[License]:
        with _translate_errors("get_license", license_id):
            model = LicenseModel.objects.filter(id=license_id).first()
            return self._license_to_domain(model) if model else None

    @sync_to_async
    def find_license_by_key(self, key: str) -> Optional[License]:
        with _translate_errors("find_license_by_key"):
            model = LicenseModel.objects.filter(key=key).first()
            return self._license_to_domain(model) if model else None

    @sync_to_async
    def find_licenses_by_customer(self, customer_id: str) -> List[License]:
        with _translate_errors("find_licenses_by_customer", customer_id):
            models = LicenseModel.objects.filter(customer_id=customer_id).order_by("created_at")
            return [self._license_to_domain(model) for model in models]

    @sync_to_async
    def find_license_by_purchase_session(self, session_id: str) -> Optional[License]:
        if not session_id:
            return None
        with _translate_errors("find_license_by_purchase_session"):
            model = LicenseModel.objects.filter(purchase_session_id=session_id).first()
            return self._license_to_domain(model) if model else None

    @sync_to_async
    def save_license(self, license: License) -> License:
        """
        Insert or replace a license.

        Foreign keys may be deferred until commit (SQLite, PostgreSQL), so
        the constraint is checked explicitly before leaving the atomic block.

        Args:
            license: License entity to save

        Returns:
            Saved license entity
        """
        model = LicenseModel(
            id=license.id,
            key=license.key,
            customer_id=license.customer_id,
            product_id=license.product_id,
            product_name=license.product_name,
            version=license.version,
            status=license.status,
            price_paid=license.price_paid,
            currency=license.currency,
            purchase_session_id=license.purchase_session_id or None,
            created_at=license.created_at,
            updated_at=license.updated_at,
        )
        with _translate_errors("save_license", license.id):
            try:
                with transaction.atomic():
                    model.save()
                    connection.check_constraints(table_names=[LicenseModel._meta.db_table])
            except IntegrityError as e:
                if not CustomerModel.objects.filter(id=license.customer_id).exists():
                    raise ReferentialIntegrityError(
                        f"Customer {license.customer_id} not found for license {license.id}"
                    ) from e
                raise DuplicateEntityError(
                    f"License {license.id} conflicts with an existing license"
                ) from e
        return license

    @sync_to_async
    def close(self) -> None:
        if not connection.in_atomic_block:
            connection.close()
