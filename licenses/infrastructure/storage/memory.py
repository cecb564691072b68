"""
In-memory implementation of the Storage port.

All maps are guarded by a single lock. The lock is only held for the
dictionary work inside each call and never across an await.
"""
import logging
import threading
from typing import Dict, List, Optional

from core.domain.exceptions import DuplicateEntityError, ReferentialIntegrityError
from customers.domain.customer import Customer
from licenses.domain.license import License
from licenses.ports.storage import Storage

logger = logging.getLogger(__name__)


class MemoryStorage(Storage):
    """
    Dictionary-backed storage.

    Data lives for the lifetime of the process. Subclasses can persist the
    state by overriding _commit(), which runs with the lock held after every
    successful mutation.
    """

    def __init__(self):
        """Initialize empty storage."""
        self._lock = threading.Lock()
        self._customers: Dict[str, Customer] = {}
        self._licenses: Dict[str, License] = {}

    def _commit(self) -> None:
        """Hook called after a mutation while the lock is held."""

    async def get_customer(self, customer_id: str) -> Optional[Customer]:
        with self._lock:
            return self._customers.get(customer_id)

    async def find_customer_by_email(self, email: str) -> Optional[Customer]:
        with self._lock:
            return self._find_customer_by_email(email)

    async def find_customer_by_external_ref(self, external_ref: str) -> Optional[Customer]:
        if not external_ref:
            return None
        with self._lock:
            for customer in self._customers.values():
                if customer.external_customer_ref == external_ref:
                    return customer
            return None

    async def save_customer(self, customer: Customer) -> Customer:
        with self._lock:
            for other in self._customers.values():
                if other.id == customer.id:
                    continue
                if other.email == customer.email:
                    raise DuplicateEntityError(f"Customer with email {customer.email} already exists")
                if (
                    customer.external_customer_ref
                    and other.external_customer_ref == customer.external_customer_ref
                ):
                    raise DuplicateEntityError(
                        f"Customer with external reference {customer.external_customer_ref} already exists"
                    )

            previous = self._customers.get(customer.id)
            self._customers[customer.id] = customer
            try:
                self._commit()
            except Exception:
                self._restore(self._customers, customer.id, previous)
                raise
            return customer

    async def get_license(self, license_id: str) -> Optional[License]:
        with self._lock:
            return self._licenses.get(license_id)

    async def find_license_by_key(self, key: str) -> Optional[License]:
        with self._lock:
            for license in self._licenses.values():
                if license.key == key:
                    return license
            return None

    async def find_licenses_by_customer(self, customer_id: str) -> List[License]:
        with self._lock:
            licenses = [lic for lic in self._licenses.values() if lic.customer_id == customer_id]
        return sorted(licenses, key=lambda lic: lic.created_at)

    async def find_license_by_purchase_session(self, session_id: str) -> Optional[License]:
        if not session_id:
            return None
        with self._lock:
            for license in self._licenses.values():
                if license.purchase_session_id == session_id:
                    return license
            return None

    async def save_license(self, license: License) -> License:
        with self._lock:
            if license.customer_id not in self._customers:
                raise ReferentialIntegrityError(
                    f"Customer {license.customer_id} not found for license {license.id}"
                )
            for other in self._licenses.values():
                if other.id == license.id:
                    continue
                if other.key == license.key:
                    raise DuplicateEntityError("License key already exists")
                if (
                    license.purchase_session_id
                    and other.purchase_session_id == license.purchase_session_id
                ):
                    raise DuplicateEntityError(
                        f"License for purchase session {license.purchase_session_id} already exists"
                    )

            previous = self._licenses.get(license.id)
            self._licenses[license.id] = license
            try:
                self._commit()
            except Exception:
                self._restore(self._licenses, license.id, previous)
                raise
            return license

    async def close(self) -> None:
        """Nothing to release; data stays available until the process exits."""

    def _find_customer_by_email(self, email: str) -> Optional[Customer]:
        for customer in self._customers.values():
            if customer.email == email:
                return customer
        return None

    @staticmethod
    def _restore(table: dict, entity_id: str, previous) -> None:
        if previous is None:
            table.pop(entity_id, None)
        else:
            table[entity_id] = previous
