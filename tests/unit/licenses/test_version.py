"""
Unit tests for version compatibility rules.
"""
import pytest

from licenses.domain.version import InvalidVersionError, extract_major_version, is_compatible


class TestExtractMajorVersion:
    """Tests for extract_major_version."""

    @pytest.mark.parametrize(
        "version,expected",
        [("1.0.0", 1), ("2", 2), ("10.4", 10), ("0.9.1", 0), ("+3.1.0", 3), ("1.x", 1)],
    )
    def test_valid_versions(self, version, expected):
        assert extract_major_version(version) == expected

    @pytest.mark.parametrize("version", ["", "invalid", "-1.0.0", "v1.0.0", " 1.0", "1a.0", "."])
    def test_invalid_versions(self, version):
        with pytest.raises(InvalidVersionError):
            extract_major_version(version)


class TestIsCompatible:
    """Tests for is_compatible."""

    @pytest.mark.parametrize("app_version", ["1.0.0", "1.9.9", "1"])
    def test_same_major_is_compatible(self, app_version):
        assert is_compatible("1.0.0", app_version) is True

    def test_different_major_is_incompatible(self):
        assert is_compatible("1.0.0", "2.0.0") is False

    def test_malformed_side_raises(self):
        with pytest.raises(InvalidVersionError):
            is_compatible("1.0.0", "")
        with pytest.raises(InvalidVersionError):
            is_compatible("", "1.0.0")
