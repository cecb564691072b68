"""
Response signing.

Validation verdicts are signed so the desktop client can detect a forged or
replayed response. The signed message is "<valid>|<message>|<timestamp>" with
valid rendered as lowercase true/false, and the signature is the standard
base64 encoding of its HMAC-SHA256.
"""
import base64
import hashlib
import hmac
import logging
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_SIGNING_SECRET = "insecure-default-license-signing-secret"


class ResponseSigner:
    """Signs validation verdicts with a shared secret."""

    def __init__(self, secret: Optional[str] = None):
        """
        Initialize signer.

        Args:
            secret: Shared HMAC secret. When empty the insecure default
                is used and a configuration warning is logged.
        """
        if not secret:
            logger.warning(
                "LICENSE_HMAC_SECRET is not set, signing responses with the insecure default secret"
            )
            secret = DEFAULT_SIGNING_SECRET
            self.using_default_secret = True
        else:
            self.using_default_secret = False
        self._secret = secret.encode("utf-8")

    @staticmethod
    def canonical_message(valid: bool, message: str, timestamp: int) -> str:
        """Build the string that is signed for a verdict."""
        return f"{'true' if valid else 'false'}|{message}|{timestamp}"

    def sign(self, valid: bool, message: str, timestamp: int) -> str:
        """
        Sign a verdict.

        Args:
            valid: Verdict outcome
            message: Verdict message
            timestamp: Unix timestamp in seconds

        Returns:
            Base64-encoded HMAC-SHA256 signature
        """
        payload = self.canonical_message(valid, message, timestamp).encode("utf-8")
        digest = hmac.new(self._secret, payload, hashlib.sha256).digest()
        return base64.b64encode(digest).decode("ascii")

    def verify(self, valid: bool, message: str, timestamp: int, signature: str) -> bool:
        """Check a signature in constant time."""
        expected = self.sign(valid, message, timestamp)
        return hmac.compare_digest(expected, signature or "")
