"""
Storage port (interface).

This defines the contract for customer and license persistence.
Implementations are in the infrastructure layer and must all pass the
same conformance suite.

Not found is always reported as None (or an empty list), never as an
error. Errors are reserved for infrastructure failures and integrity
violations, see core.domain.exceptions.StorageError.
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from customers.domain.customer import Customer
from licenses.domain.license import License

HEALTH_CHECK_CUSTOMER_ID = "health-check-test"


class Storage(ABC):
    """
    Abstract storage for Customer and License entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def get_customer(self, customer_id: str) -> Optional[Customer]:
        """
        Find a customer by ID.

        Args:
            customer_id: Customer ID

        Returns:
            Customer entity or None if not found
        """
        pass

    @abstractmethod
    async def find_customer_by_email(self, email: str) -> Optional[Customer]:
        """
        Find a customer by email address.

        Args:
            email: Customer email

        Returns:
            Customer entity or None if not found
        """
        pass

    @abstractmethod
    async def find_customer_by_external_ref(self, external_ref: str) -> Optional[Customer]:
        """
        Find a customer by payment processor customer ID.

        Args:
            external_ref: External customer reference

        Returns:
            Customer entity or None if not found
        """
        pass

    @abstractmethod
    async def save_customer(self, customer: Customer) -> Customer:
        """
        Insert or replace a customer by ID.

        Args:
            customer: Customer entity to save

        Returns:
            Saved customer entity

        Raises:
            DuplicateEntityError: If the email or external reference
                belongs to another customer
            StorageError: On backend failure
        """
        pass

    @abstractmethod
    async def get_license(self, license_id: str) -> Optional[License]:
        """
        Find a license by ID.

        Args:
            license_id: License ID

        Returns:
            License entity or None if not found
        """
        pass

    @abstractmethod
    async def find_license_by_key(self, key: str) -> Optional[License]:
        """
        Find a license by its key.

        Args:
            key: License key string

        Returns:
            License entity or None if not found
        """
        pass

    @abstractmethod
    async def find_licenses_by_customer(self, customer_id: str) -> List[License]:
        """
        Find all licenses owned by a customer, oldest first.

        Args:
            customer_id: Customer ID

        Returns:
            List of License entities
        """
        pass

    @abstractmethod
    async def find_license_by_purchase_session(self, session_id: str) -> Optional[License]:
        """
        Find the license produced by a checkout session.

        Args:
            session_id: Payment processor checkout session ID

        Returns:
            License entity or None if not found
        """
        pass

    @abstractmethod
    async def save_license(self, license: License) -> License:
        """
        Insert or replace a license by ID.

        Args:
            license: License entity to save

        Returns:
            Saved license entity

        Raises:
            ReferentialIntegrityError: If the license customer does not exist
            DuplicateEntityError: If the key or purchase session belongs
                to another license
            StorageError: On backend failure
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release backend resources. Calling it more than once is harmless."""
        pass

    async def ping(self) -> None:
        """
        Probe the backend.

        Raises:
            StorageError: If the backend cannot serve a lookup
        """
        await self.get_customer(HEALTH_CHECK_CUSTOMER_ID)
