"""
DomainValidationError - Raised when input breaks a business rule.
Maps to: HTTP 400 Bad Request (413 for oversized attachments)

Never retried automatically.
"""


class DomainValidationError(Exception):
    """Exception raised for domain validation errors."""

    code = "ValidationError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidUserCodeError(DomainValidationError):
    code = "InvalidUserCode"


class EmptyMessageError(DomainValidationError):
    code = "EmptyMessage"

    def __init__(self, message: str = "A message needs text or an attachment"):
        super().__init__(message)


class SameParticipantError(DomainValidationError):
    code = "SameParticipant"


class UnsupportedTypeError(DomainValidationError):
    code = "UnsupportedType"


class AttachmentTooLargeError(DomainValidationError):
    code = "AttachmentTooLarge"
