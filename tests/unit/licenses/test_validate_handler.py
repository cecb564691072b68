"""
Unit tests for ValidateLicenseHandler.
"""
import pytest
import pytest_asyncio

from core.domain.exceptions import InvalidRequestError, StorageError
from licenses.application.handlers.validate_license_handler import ValidateLicenseHandler
from licenses.application.queries.validate_license import ValidateLicenseQuery
from licenses.domain.services import LicenseValidator
from licenses.domain.signing import ResponseSigner
from licenses.infrastructure.storage.memory import MemoryStorage

FIXED_NOW = 1700000000


class BrokenStorage(MemoryStorage):
    """Storage whose lookups fail."""

    async def find_license_by_key(self, key):
        raise StorageError("database is locked")


@pytest.fixture
def signer():
    return ResponseSigner("unit-test-secret")


@pytest.fixture
def handler(memory_storage, signer):
    return ValidateLicenseHandler(storage=memory_storage, signer=signer, clock=lambda: FIXED_NOW)


@pytest_asyncio.fixture
async def stored_license(memory_storage, sample_customer, sample_license):
    await memory_storage.save_customer(sample_customer)
    return await memory_storage.save_license(sample_license)


@pytest.mark.asyncio
class TestValidateLicenseHandler:
    """Tests for ValidateLicenseHandler."""

    async def test_valid_license(self, handler, signer, stored_license):
        verdict = await handler.handle(ValidateLicenseQuery(stored_license.key, "1.4.0"))

        assert verdict.valid is True
        assert verdict.message == "license valid"
        assert verdict.timestamp == FIXED_NOW
        assert signer.verify(True, "license valid", FIXED_NOW, verdict.signature)

    async def test_key_is_trimmed(self, handler, stored_license):
        verdict = await handler.handle(ValidateLicenseQuery(f"  {stored_license.key}\n", "1.0.0"))
        assert verdict.valid is True

    async def test_unknown_key(self, handler, signer):
        verdict = await handler.handle(ValidateLicenseQuery("AFP-NOPE-NOPE-NOPE-NOPE", "1.0.0"))

        assert verdict.valid is False
        assert verdict.message == "license not found"
        assert signer.verify(False, "license not found", FIXED_NOW, verdict.signature)

    async def test_suspended_license(self, handler, memory_storage, stored_license):
        await memory_storage.save_license(stored_license.suspend())

        verdict = await handler.handle(ValidateLicenseQuery(stored_license.key, "1.0.0"))

        assert verdict.valid is False
        assert verdict.message == "license not active"

    async def test_incompatible_version(self, handler, stored_license):
        verdict = await handler.handle(ValidateLicenseQuery(stored_license.key, "2.0.0"))
        assert (verdict.valid, verdict.message) == (False, "license version incompatible")

    async def test_missing_app_version(self, handler, stored_license):
        verdict = await handler.handle(ValidateLicenseQuery(stored_license.key, ""))
        assert (verdict.valid, verdict.message) == (False, "invalid version format")

    async def test_version_check_disabled(self, memory_storage, signer, stored_license):
        handler = ValidateLicenseHandler(
            storage=memory_storage,
            signer=signer,
            validator=LicenseValidator(check_version=False),
        )
        verdict = await handler.handle(ValidateLicenseQuery(stored_license.key, "7.0.0"))
        assert verdict.valid is True

    @pytest.mark.parametrize("key", ["", "   ", None])
    async def test_empty_key_is_rejected(self, handler, key):
        with pytest.raises(InvalidRequestError):
            await handler.handle(ValidateLicenseQuery(key, "1.0.0"))

    async def test_storage_error_propagates(self, signer):
        handler = ValidateLicenseHandler(storage=BrokenStorage(), signer=signer)

        with pytest.raises(StorageError):
            await handler.handle(ValidateLicenseQuery("AFP-AAAA-BBBB-CCCC-DDDD", "1.0.0"))
