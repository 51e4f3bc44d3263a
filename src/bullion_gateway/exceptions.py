"""Application error taxonomy.

Each error carries the HTTP status it maps to; main.py registers a single
handler that renders any AppError as ``{"error": message}``.
"""


class AppError(Exception):
    """Base class for errors that are safe to show to API clients."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def headers(self) -> dict[str, str] | None:
        return None


class InputValidationError(AppError):
    status_code = 400
    default_message = "Invalid input"


class DuplicateEmailError(AppError):
    status_code = 400
    default_message = "Email already in use"


class InvalidCredentialsError(AppError):
    """Raised for an unknown email and for a wrong password alike."""

    status_code = 401
    default_message = "Invalid credentials"


class InvalidTokenError(AppError):
    status_code = 401
    default_message = "Invalid token"

    @property
    def headers(self) -> dict[str, str]:
        return {"WWW-Authenticate": "Bearer"}


class UserNotFoundError(AppError):
    status_code = 404
    default_message = "User not found"


class CredentialStoreError(AppError):
    status_code = 503
    default_message = "User store unavailable"


class UpstreamError(AppError):
    """Upstream quote provider failed; message is passed through to the client."""

    status_code = 502
    default_message = "Upstream error"


class UpstreamThrottledError(UpstreamError):
    """Upstream rejected the call with a rate limit (HTTP 429)."""

    default_message = "rate_limited"
