"""
Storage backend selection.

The backend is chosen by the LICENSE_STORAGE_BACKEND setting:

- memory: process-local dictionaries, lost on restart
- file: JSON document at LICENSE_STORAGE_PATH
- sql: Django ORM on the configured database
"""
import logging
import threading
from typing import Optional

from asgiref.sync import async_to_sync
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from licenses.ports.storage import Storage

logger = logging.getLogger(__name__)

BACKEND_MEMORY = "memory"
BACKEND_FILE = "file"
BACKEND_SQL = "sql"

_storage: Optional[Storage] = None
_storage_lock = threading.Lock()


def build_storage(backend: Optional[str] = None, path: Optional[str] = None) -> Storage:
    """
    Create a storage backend.

    Args:
        backend: Backend name, defaults to settings.LICENSE_STORAGE_BACKEND
        path: File location for the file backend, defaults to
            settings.LICENSE_STORAGE_PATH

    Returns:
        Storage instance

    Raises:
        ImproperlyConfigured: If the backend name is unknown
    """
    backend = (backend or getattr(settings, "LICENSE_STORAGE_BACKEND", BACKEND_SQL)).lower()

    if backend == BACKEND_MEMORY:
        from licenses.infrastructure.storage.memory import MemoryStorage

        storage = MemoryStorage()
    elif backend == BACKEND_FILE:
        from licenses.infrastructure.storage.file import FileStorage

        storage = FileStorage(path or settings.LICENSE_STORAGE_PATH)
    elif backend == BACKEND_SQL:
        from licenses.infrastructure.storage.django_storage import DjangoStorage

        storage = DjangoStorage()
    else:
        raise ImproperlyConfigured(f"Unknown LICENSE_STORAGE_BACKEND: {backend}")

    logger.info("Storage backend initialised", extra={"backend": backend})
    return storage


def get_storage() -> Storage:
    """Return the process-wide storage, creating it on first use."""
    global _storage
    if _storage is None:
        with _storage_lock:
            if _storage is None:
                _storage = build_storage()
    return _storage


def reset_storage() -> None:
    """Close and forget the process-wide storage."""
    global _storage
    with _storage_lock:
        storage, _storage = _storage, None
    if storage is not None:
        async_to_sync(storage.close)()
