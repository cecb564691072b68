"""
Version compatibility rules.

A license is issued for a major version of the product. Any client release
with the same leading numeric component is allowed to use it.
"""
import re

_MAJOR_PATTERN = re.compile(r"[+-]?\d+")


class InvalidVersionError(ValueError):
    """Raised when a version string has no usable major component."""


def extract_major_version(version: str) -> int:
    """
    Extract the major component of a dotted version string.

    Args:
        version: Version string such as "1.4.0" or "2"

    Returns:
        Major version as a non-negative integer

    Raises:
        InvalidVersionError: If the string is empty, the leading component
            is not numeric, or it is negative
    """
    if not version:
        raise InvalidVersionError("empty version string")

    major = version.split(".", 1)[0]
    if not _MAJOR_PATTERN.fullmatch(major):
        raise InvalidVersionError(f"invalid major version: {major!r}")

    value = int(major)
    if value < 0:
        raise InvalidVersionError(f"negative major version: {value}")
    return value


def is_compatible(license_version: str, app_version: str) -> bool:
    """
    Check whether a client version may use a license.

    Raises:
        InvalidVersionError: If either version is malformed
    """
    return extract_major_version(license_version) == extract_major_version(app_version)
