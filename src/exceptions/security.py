class BaseSecurityError(Exception):
    """Base exception class for security-related errors.

    Raised by the JWT manager when a bearer token presented to the
    authentication gate cannot be accepted.
    """

    def __init__(self, message: str | None = None) -> None:
        if message is None:
            message = "A security error occurred."
        super().__init__(message)


class TokenExpiredError(BaseSecurityError):
    """Exception raised when a bearer token has passed its expiration time."""

    def __init__(self, message: str = "Token has expired.") -> None:
        super().__init__(message)


class InvalidTokenError(BaseSecurityError):
    """Exception raised when a bearer token is malformed or badly signed."""

    def __init__(self, message: str = "Invalid token.") -> None:
        super().__init__(message)
