from .config import settings, get_settings
from .security import (
    create_access_token,
    verify_access_token,
    verify_password,
    get_password_hash,
    generate_temporary_password
)
from .exceptions import (
    DomainError,
    ValidationError,
    BusinessRuleError,
    AuthenticationError,
    PermissionDeniedError,
    NotFoundError,
    OrphanedReferenceError
)

__all__ = [
    "settings",
    "get_settings",
    "create_access_token",
    "verify_access_token",
    "verify_password",
    "get_password_hash",
    "generate_temporary_password",
    "DomainError",
    "ValidationError",
    "BusinessRuleError",
    "AuthenticationError",
    "PermissionDeniedError",
    "NotFoundError",
    "OrphanedReferenceError"
]
