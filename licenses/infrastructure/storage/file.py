"""
JSON file implementation of the Storage port.

The whole database is one JSON document:

    {"customers": [...], "licenses": [...]}

Older files holding a bare list of customers are still accepted on load.
Every successful write rewrites the document through a temporary file and
os.replace, so readers never observe a half-written file.
"""
import json
import logging
import os
import tempfile
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Union

from core.domain.exceptions import StorageError
from customers.domain.customer import Customer
from licenses.domain.license import DEFAULT_PRODUCT_NAME, License
from licenses.infrastructure.storage.memory import MemoryStorage

logger = logging.getLogger(__name__)


def _parse_datetime(value: Any) -> datetime:
    if not value:
        return datetime.now(timezone.utc)
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _customer_from_dict(data: Dict[str, Any]) -> Customer:
    return Customer(
        id=str(data["id"]),
        email=data["email"],
        name=data.get("name") or "",
        country=data.get("country") or "",
        external_customer_ref=data.get("external_customer_ref")
        or data.get("stripe_customer_id")
        or "",
        created_at=_parse_datetime(data.get("created_at")),
        updated_at=_parse_datetime(data.get("updated_at")),
    )


def _license_from_dict(data: Dict[str, Any]) -> License:
    return License(
        id=str(data["id"]),
        key=data["key"],
        customer_id=str(data["customer_id"]),
        product_id=data.get("product_id") or "",
        product_name=data.get("product_name") or DEFAULT_PRODUCT_NAME,
        version=data.get("version") or "",
        status=data.get("status") or "",
        price_paid=int(data.get("price_paid") or 0),
        currency=data.get("currency") or "",
        purchase_session_id=data.get("purchase_session_id") or data.get("stripe_session_id") or "",
        created_at=_parse_datetime(data.get("created_at")),
        updated_at=_parse_datetime(data.get("updated_at")),
    )


def _to_dict(entity) -> Dict[str, Any]:
    data = asdict(entity)
    data["created_at"] = entity.created_at.isoformat()
    data["updated_at"] = entity.updated_at.isoformat()
    return data


class FileStorage(MemoryStorage):
    """
    Durable storage in a single JSON file.

    Reads are served from memory. Writes update memory and then persist the
    full document; when persisting fails the in-memory change is rolled back
    and a StorageError is raised.
    """

    def __init__(self, path: Union[str, Path]):
        """
        Initialize storage and load existing data.

        Args:
            path: Location of the JSON document

        Raises:
            StorageError: If the file exists but cannot be parsed
        """
        super().__init__()
        self.path = Path(path)
        self._load()

    def _load(self) -> None:
        if not self.path.exists():
            logger.info(
                "Storage file not found, starting with an empty database",
                extra={"path": str(self.path)},
            )
            return

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                document = json.load(f)
        except (OSError, ValueError) as e:
            raise StorageError(f"Failed to read storage file {self.path}: {e}") from e

        if isinstance(document, list):
            document = {"customers": document, "licenses": []}
        if not isinstance(document, dict):
            raise StorageError(f"Unexpected storage file layout in {self.path}")

        try:
            for item in document.get("customers") or []:
                customer = _customer_from_dict(item)
                self._customers[customer.id] = customer
            for item in document.get("licenses") or []:
                license = _license_from_dict(item)
                self._licenses[license.id] = license
        except (KeyError, TypeError, ValueError) as e:
            raise StorageError(f"Malformed record in storage file {self.path}: {e}") from e

        logger.info(
            "Storage file loaded",
            extra={
                "path": str(self.path),
                "customers": len(self._customers),
                "licenses": len(self._licenses),
            },
        )

    def _commit(self) -> None:
        document = {
            "customers": [_to_dict(c) for c in self._customers.values()],
            "licenses": [_to_dict(lic) for lic in self._licenses.values()],
        }
        directory = self.path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(prefix=f".{self.path.name}.", dir=directory)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(document, f, indent=2)
                    f.flush()
                    os.fsync(f.fileno())
                os.replace(tmp_path, self.path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise
        except OSError as e:
            raise StorageError(f"Failed to write storage file {self.path}: {e}") from e
