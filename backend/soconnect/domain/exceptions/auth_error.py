"""
AuthError - Raised for bad credentials or a dead session.
Maps to: HTTP 401 Unauthorized

Clients must treat any AuthError on an authenticated call as a forced logout.
"""


class AuthError(Exception):
    code = "AuthError"

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(message)
        self.message = message


class InvalidCredentialsError(AuthError):
    """Code or passcode did not match. Never says which one."""

    code = "InvalidCredentials"

    def __init__(self, message: str = "Invalid code or passcode"):
        super().__init__(message)


class UnauthenticatedError(AuthError):
    code = "Unauthenticated"

    def __init__(self, message: str = "Session is missing, expired or revoked"):
        super().__init__(message)
