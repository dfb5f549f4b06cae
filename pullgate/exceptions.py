"""pullgate exception classes."""


class PullGateError(Exception):
    """Base exception for all pullgate errors."""

    def __init__(
        self, code: str, message: str, request_id: str | None = None
    ) -> None:
        self.code = code
        self.message = message
        self.request_id = request_id
        super().__init__(f"[{code}] {message}")


class ConfigurationError(PullGateError):
    """Raised when configuration or environment settings are invalid or missing."""

    def __init__(self, message: str) -> None:
        super().__init__("CONFIGURATION_ERROR", message)


class AuthenticationError(PullGateError):
    """Raised when the hosting system or tracker rejects the credentials."""

    pass


class AuthorizationError(PullGateError):
    """Raised when access is denied."""

    pass


class NotFoundError(PullGateError):
    """Raised when a repository, pull request or bug is not found."""

    pass


class ConflictError(PullGateError):
    """Raised on conflicting updates."""

    pass


class RateLimitedError(PullGateError):
    """Raised when rate limited."""

    def __init__(
        self,
        code: str,
        message: str,
        retry_after: int,
        request_id: str | None = None,
    ) -> None:
        super().__init__(code, message, request_id)
        self.retry_after = retry_after


class ValidationError(PullGateError):
    """Raised when a request is rejected as invalid."""

    pass


class ServerError(PullGateError):
    """Raised on server errors (5xx) and connection failures."""

    pass
