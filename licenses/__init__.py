"""
Licenses app - license issuance and validation.

This module handles:
- License entity, key generation and version compatibility
- Signed validation verdicts for the desktop client
- Provisioning a customer and license from a completed purchase
- Storage backends (memory, JSON file, Django ORM)
"""
