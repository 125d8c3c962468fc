"""
Error codes returned by use cases, and the one exception the core raises.
"""


class ErrorCode:
    UNAUTHENTICATED = "UNAUTHENTICATED"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    ACCOUNT_INACTIVE = "ACCOUNT_INACTIVE"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    DUPLICATE_IDENTITY = "DUPLICATE_IDENTITY"
    INVALID_OR_EXPIRED_TOKEN = "INVALID_OR_EXPIRED_TOKEN"
    PRECONDITION_FAILED = "PRECONDITION_FAILED"
    EMAIL_DELIVERY_FAILED = "EMAIL_DELIVERY_FAILED"
    OAUTH_NOT_CONFIGURED = "OAUTH_NOT_CONFIGURED"
    OAUTH_FAILED = "OAUTH_FAILED"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"


class ConfigurationError(Exception):
    """A mandatory setting (signing secret, mail transport) is missing or insecure."""


class DuplicateIdentityError(Exception):
    """A unique email, login id, internal id or external identity already exists."""
