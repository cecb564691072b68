"""
License key generation.

Keys are drawn from a cryptographically secure random source over an
alphabet without look-alike characters (no 0/O, 1/I/L), so they can be
read aloud or retyped from an email without ambiguity.
"""

import secrets

KEY_ALPHABET = "ABCDEFGHJKMNPQRSTUVWXYZ23456789"
KEY_GROUPS = 4
KEY_GROUP_SIZE = 4


def generate_license_key(prefix: str = "AFP") -> str:
    """
    Generate a license key in format: PREFIX-XXXX-XXXX-XXXX-XXXX.

    Args:
        prefix: Key prefix (e.g., 'AFP')

    Returns:
        Generated license key string
    """
    parts = [
        "".join(secrets.choice(KEY_ALPHABET) for _ in range(KEY_GROUP_SIZE))
        for _ in range(KEY_GROUPS)
    ]
    body = "-".join(parts)
    prefix = (prefix or "").strip().upper()
    return f"{prefix}-{body}" if prefix else body


def normalize_license_key(raw_key: str) -> str:
    """Strip surrounding whitespace from a key typed by a user."""
    return (raw_key or "").strip()
