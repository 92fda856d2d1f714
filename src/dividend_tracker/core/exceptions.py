"""Application-level exceptions."""


class AppError(Exception):
    """Base exception for application errors."""

    status_code = 400

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class NotFoundError(AppError):
    """Raised when a requested resource is not found."""

    status_code = 404

    def __init__(self, resource: str, identifier: str):
        super().__init__(f"{resource} not found: {identifier}", code="NOT_FOUND")


class InsufficientSharesError(AppError):
    """Raised when attempting to sell more shares than owned."""

    def __init__(self, ticker: str, requested: str, available: str):
        super().__init__(
            f"Cannot sell more shares of {ticker} than you own: "
            f"requested {requested}, available {available}",
            code="INSUFFICIENT_SHARES",
        )


class AuthenticationError(AppError):
    """Raised when a bearer token or credentials are missing or invalid."""

    status_code = 401

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message, code="UNAUTHORIZED")


class PersistenceError(AppError):
    """Raised when the storage layer fails; the operation is rolled back."""

    status_code = 500

    def __init__(self, message: str = "Storage operation failed"):
        super().__init__(message, code="PERSISTENCE_ERROR")


class UpstreamUnavailableError(AppError):
    """Raised by a quote provider that could not produce a price.

    Always absorbed by the price resolver; never rendered to a client.
    """

    status_code = 502

    def __init__(self, source: str, ticker: str, reason: str):
        self.source = source
        self.ticker = ticker
        super().__init__(f"{source} unavailable for {ticker}: {reason}", code="UPSTREAM_UNAVAILABLE")
