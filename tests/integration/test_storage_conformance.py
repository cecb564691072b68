"""
Conformance tests run against every Storage backend.

The tests are synchronous and drive the async port through async_to_sync,
so the Django backend runs on the test thread inside the test transaction.
"""
import json
from dataclasses import replace

import pytest
from asgiref.sync import async_to_sync

from core.domain.exceptions import DuplicateEntityError, ReferentialIntegrityError, StorageError
from customers.domain.customer import Customer
from licenses.domain.license import License
from licenses.infrastructure.storage.django_storage import DjangoStorage
from licenses.infrastructure.storage.factory import build_storage
from licenses.infrastructure.storage.file import FileStorage
from licenses.infrastructure.storage.memory import MemoryStorage


def call(storage, method, *args):
    return async_to_sync(getattr(storage, method))(*args)


@pytest.fixture(params=["memory", "file", "sql"])
def storage(request, db, tmp_path):
    """Fixture for each storage backend."""
    if request.param == "memory":
        backend = MemoryStorage()
    elif request.param == "file":
        backend = FileStorage(tmp_path / "licenses.json")
    else:
        backend = DjangoStorage()
    yield backend
    call(backend, "close")


@pytest.fixture
def customer(storage):
    return call(
        storage,
        "save_customer",
        Customer.create(email="jane@example.com", name="Jane", external_customer_ref="cus_1"),
    )


def new_license(customer_id, **overrides):
    license = License.create(
        customer_id=customer_id,
        product_id="prod_focus",
        version="1.0.0",
        price_paid=4900,
        currency="usd",
        purchase_session_id=overrides.pop("purchase_session_id", ""),
    )
    return replace(license, **overrides) if overrides else license


@pytest.mark.integration
class TestStorageConformance:
    """Behaviour every backend must share."""

    def test_missing_entities_are_none(self, storage):
        assert call(storage, "get_customer", "nope") is None
        assert call(storage, "find_customer_by_email", "nobody@example.com") is None
        assert call(storage, "find_customer_by_external_ref", "cus_nope") is None
        assert call(storage, "find_customer_by_external_ref", "") is None
        assert call(storage, "get_license", "nope") is None
        assert call(storage, "find_license_by_key", "AFP-NOPE-NOPE-NOPE-NOPE") is None
        assert call(storage, "find_license_by_purchase_session", "cs_nope") is None
        assert call(storage, "find_license_by_purchase_session", "") is None
        assert call(storage, "find_licenses_by_customer", "nope") == []

    def test_customer_round_trip(self, storage, customer):
        assert call(storage, "get_customer", customer.id) == customer
        assert call(storage, "find_customer_by_email", "jane@example.com") == customer
        assert call(storage, "find_customer_by_external_ref", "cus_1") == customer

    def test_save_customer_upserts_by_id(self, storage, customer):
        updated = replace(customer, name="Jane Doe", country="NO")

        call(storage, "save_customer", updated)

        stored = call(storage, "get_customer", customer.id)
        assert stored.name == "Jane Doe"
        assert stored.country == "NO"

    def test_duplicate_email_rejected(self, storage, customer):
        with pytest.raises(DuplicateEntityError):
            call(storage, "save_customer", Customer.create(email="jane@example.com"))

    def test_duplicate_external_ref_rejected(self, storage, customer):
        with pytest.raises(DuplicateEntityError):
            call(storage, "save_customer", Customer.create(email="other@example.com", external_customer_ref="cus_1"))

    def test_empty_external_refs_do_not_collide(self, storage):
        call(storage, "save_customer", Customer.create(email="a@example.com"))
        call(storage, "save_customer", Customer.create(email="b@example.com"))

        assert call(storage, "find_customer_by_email", "b@example.com") is not None

    def test_license_round_trip(self, storage, customer):
        license = call(storage, "save_license", new_license(customer.id, purchase_session_id="cs_1"))

        assert call(storage, "get_license", license.id) == license
        assert call(storage, "find_license_by_key", license.key) == license
        assert call(storage, "find_license_by_purchase_session", "cs_1") == license
        assert call(storage, "find_licenses_by_customer", customer.id) == [license]

    def test_license_requires_existing_customer(self, storage):
        with pytest.raises(ReferentialIntegrityError):
            call(storage, "save_license", new_license("missing-customer"))

        assert call(storage, "find_licenses_by_customer", "missing-customer") == []

    def test_referential_error_is_storage_error(self, storage):
        with pytest.raises(StorageError):
            call(storage, "save_license", new_license("missing-customer"))

    def test_duplicate_key_rejected(self, storage, customer):
        first = call(storage, "save_license", new_license(customer.id))

        with pytest.raises(DuplicateEntityError):
            call(storage, "save_license", new_license(customer.id, key=first.key))

    def test_duplicate_purchase_session_rejected(self, storage, customer):
        call(storage, "save_license", new_license(customer.id, purchase_session_id="cs_1"))

        with pytest.raises(DuplicateEntityError):
            call(storage, "save_license", new_license(customer.id, purchase_session_id="cs_1"))

    def test_status_update_is_upsert(self, storage, customer):
        license = call(storage, "save_license", new_license(customer.id, purchase_session_id="cs_1"))

        call(storage, "save_license", license.suspend())

        stored = call(storage, "find_license_by_key", license.key)
        assert stored.status == "suspended"
        assert stored.is_active() is False
        assert len(call(storage, "find_licenses_by_customer", customer.id)) == 1

    def test_unknown_status_is_preserved(self, storage, customer):
        license = call(storage, "save_license", new_license(customer.id, status="refunded"))

        assert call(storage, "get_license", license.id).status == "refunded"

    def test_licenses_ordered_by_creation(self, storage, customer):
        first = call(storage, "save_license", new_license(customer.id))
        second = call(storage, "save_license", new_license(customer.id))

        ids = [lic.id for lic in call(storage, "find_licenses_by_customer", customer.id)]
        assert ids == [first.id, second.id]

    def test_ping(self, storage):
        call(storage, "ping")

    def test_close_is_idempotent(self, storage):
        call(storage, "close")
        call(storage, "close")


@pytest.mark.integration
class TestFileStorageDurability:
    """File backend specifics."""

    def test_missing_file_starts_empty(self, tmp_path):
        storage = FileStorage(tmp_path / "missing" / "licenses.json")
        assert call(storage, "find_customer_by_email", "a@example.com") is None

    def test_writes_survive_reload(self, tmp_path):
        path = tmp_path / "licenses.json"
        storage = FileStorage(path)
        customer = call(storage, "save_customer", Customer.create(email="jane@example.com", name="Jane"))
        license = call(storage, "save_license", new_license(customer.id, purchase_session_id="cs_9"))

        reloaded = FileStorage(path)

        assert call(reloaded, "get_customer", customer.id) == customer
        assert call(reloaded, "find_license_by_key", license.key) == license
        assert call(reloaded, "find_license_by_purchase_session", "cs_9") == license

    def test_document_layout(self, tmp_path):
        path = tmp_path / "licenses.json"
        storage = FileStorage(path)
        customer = call(storage, "save_customer", Customer.create(email="jane@example.com"))
        call(storage, "save_license", new_license(customer.id))

        document = json.loads(path.read_text())

        assert set(document) == {"customers", "licenses"}
        assert document["customers"][0]["email"] == "jane@example.com"
        assert document["licenses"][0]["customer_id"] == customer.id

    def test_legacy_customer_list(self, tmp_path):
        path = tmp_path / "customers.json"
        path.write_text(json.dumps([{"id": "c1", "email": "old@example.com", "stripe_customer_id": "cus_old"}]))

        storage = FileStorage(path)

        customer = call(storage, "find_customer_by_external_ref", "cus_old")
        assert customer.id == "c1"
        assert customer.email == "old@example.com"

    def test_corrupt_file(self, tmp_path):
        path = tmp_path / "licenses.json"
        path.write_text("{broken")

        with pytest.raises(StorageError):
            FileStorage(path)

    def test_rejected_write_is_not_persisted(self, tmp_path):
        path = tmp_path / "licenses.json"
        storage = FileStorage(path)
        call(storage, "save_customer", Customer.create(email="jane@example.com"))

        with pytest.raises(DuplicateEntityError):
            call(storage, "save_customer", Customer.create(email="jane@example.com"))

        assert len(json.loads(path.read_text())["customers"]) == 1

    def test_failed_persist_rolls_back_memory(self, tmp_path, monkeypatch):
        storage = FileStorage(tmp_path / "licenses.json")

        def fail(*args, **kwargs):
            raise OSError("read-only file system")

        monkeypatch.setattr("licenses.infrastructure.storage.file.tempfile.mkstemp", fail)

        with pytest.raises(StorageError):
            call(storage, "save_customer", Customer.create(email="jane@example.com"))
        assert call(storage, "find_customer_by_email", "jane@example.com") is None


@pytest.mark.integration
class TestBuildStorage:
    """Tests for backend selection."""

    def test_backends(self, tmp_path):
        assert isinstance(build_storage("memory"), MemoryStorage)
        assert isinstance(build_storage("file", str(tmp_path / "x.json")), FileStorage)
        assert isinstance(build_storage("sql"), DjangoStorage)

    def test_default_from_settings(self, settings):
        settings.LICENSE_STORAGE_BACKEND = "memory"
        assert type(build_storage()) is MemoryStorage

    def test_unknown_backend(self):
        from django.core.exceptions import ImproperlyConfigured

        with pytest.raises(ImproperlyConfigured):
            build_storage("redis")
