"""Exception types raised by otterboard."""


class OtterboardError(Exception):
    """Base class for otterboard errors."""


class ConfigError(OtterboardError):
    """Config file could not be read or holds an invalid value."""


class ApiError(OtterboardError):
    """A remote call failed.

    ``status`` is the HTTP status code, or None when the request never
    got a response (connection refused, timeout, ...).
    """

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status


class AuthenticationRequired(ApiError):
    """The remote service rejected the request as unauthenticated."""

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message, 401)
