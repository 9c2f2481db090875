"""
DOMAIN EXCEPTIONS - Business rule violations

These exceptions are raised by domain and application logic and caught by the
presentation layer, which maps them to HTTP status codes. Every class carries
a stable `code` used as the `error` field of HTTP error bodies.
"""

from soconnect.domain.exceptions.validation_error import (
    DomainValidationError,
    InvalidUserCodeError,
    EmptyMessageError,
    SameParticipantError,
    UnsupportedTypeError,
    AttachmentTooLargeError,
)
from soconnect.domain.exceptions.auth_error import (
    AuthError,
    InvalidCredentialsError,
    UnauthenticatedError,
)
from soconnect.domain.exceptions.conflict_error import (
    ConflictError,
    CodeAlreadyRegisteredError,
)
from soconnect.domain.exceptions.entity_not_found import EntityNotFoundError
from soconnect.domain.exceptions.transient_store_error import TransientStoreError

__all__ = [
    "DomainValidationError",
    "InvalidUserCodeError",
    "EmptyMessageError",
    "SameParticipantError",
    "UnsupportedTypeError",
    "AttachmentTooLargeError",
    "AuthError",
    "InvalidCredentialsError",
    "UnauthenticatedError",
    "ConflictError",
    "CodeAlreadyRegisteredError",
    "EntityNotFoundError",
    "TransientStoreError",
]
