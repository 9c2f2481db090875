"""
ConflictError - Raised when a write collides with existing state.
Maps to: HTTP 400 Bad Request (registration surface)
"""


class ConflictError(Exception):
    code = "Conflict"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class CodeAlreadyRegisteredError(ConflictError):
    code = "CodeAlreadyRegistered"
