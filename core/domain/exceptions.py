"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions.
"""


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class InvalidRequestError(DomainException):
    """Raised when a client request is malformed or incomplete."""

    def __init__(self, message: str = "invalid request"):
        super().__init__(message, code="INVALID_REQUEST")


class StorageError(DomainException):
    """
    Raised when a storage backend fails.

    Only infrastructure failures and integrity violations are errors;
    a missing entity is always reported as None.
    """

    def __init__(self, message: str = "Storage failure", code: str = "STORAGE_ERROR"):
        super().__init__(message, code=code)


class ReferentialIntegrityError(StorageError):
    """Raised when a license references a customer that does not exist."""

    def __init__(self, message: str = "Customer not found"):
        super().__init__(message, code="REFERENTIAL_INTEGRITY")


class DuplicateEntityError(StorageError):
    """Raised when a uniqueness invariant would be violated."""

    def __init__(self, message: str = "Entity already exists"):
        super().__init__(message, code="DUPLICATE_ENTITY")


class ProvisioningError(DomainException):
    """Raised when a purchase cannot be turned into a customer and license."""

    def __init__(self, message: str = "Provisioning failed"):
        super().__init__(message, code="PROVISIONING_FAILED")


class NotificationError(DomainException):
    """Raised when a customer notification cannot be delivered."""

    def __init__(self, message: str = "Notification failed"):
        super().__init__(message, code="NOTIFICATION_FAILED")


class WebhookException(DomainException):
    """Base exception for inbound webhook errors."""

    pass


class WebhookVerificationError(WebhookException):
    """Raised when a webhook signature does not match its payload."""

    def __init__(self, message: str = "Invalid webhook signature"):
        super().__init__(message, code="INVALID_SIGNATURE")


class InvalidWebhookPayloadError(WebhookException):
    """Raised when a webhook payload cannot be parsed or is incomplete."""

    def __init__(self, message: str = "Invalid webhook payload"):
        super().__init__(message, code="INVALID_PAYLOAD")


class WebhookNotConfiguredError(WebhookException):
    """Raised when the webhook shared secret is missing."""

    def __init__(self, message: str = "Webhook not configured"):
        super().__init__(message, code="WEBHOOK_NOT_CONFIGURED")
