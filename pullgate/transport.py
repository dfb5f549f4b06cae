"""
HTTP Transport for pullgate collaborators.

Sends GitHub and Bugzilla REST calls through one httpx client per service,
retrying transient failures and turning error responses into pullgate
exceptions.
"""

import random
import time
from dataclasses import dataclass, field
from typing import Any

import httpx

from pullgate.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    PullGateError,
    RateLimitedError,
    ServerError,
    ValidationError,
)
from pullgate.logging import log_http_request, log_http_response, mask_sensitive_data

# Client errors with a dedicated exception; any other 4xx is a ValidationError
_STATUS_ERRORS: dict[int, type[PullGateError]] = {
    401: AuthenticationError,
    403: AuthorizationError,
    404: NotFoundError,
    409: ConflictError,
}

DEFAULT_RATE_LIMIT_WAIT = 60


@dataclass
class RetryConfig:
    """Retry policy shared by the GitHub and Bugzilla transports."""

    max_retries: int = 3
    backoff_factor: float = 2.0
    retry_statuses: frozenset[int] = field(
        default_factory=lambda: frozenset({429, 500, 502, 503, 504})
    )
    respect_retry_after: bool = True
    max_backoff: float = 60.0  # seconds
    jitter: float = 0.1  # fraction of the delay, applied both ways


class HTTPTransport:
    """
    Synchronous JSON transport with retries.

    Retries network failures, the statuses in ``RetryConfig.retry_statuses``
    and GitHub rate-limit rejections. Waits follow the server's
    ``Retry-After`` or ``X-RateLimit-Reset`` hint when present, exponential
    backoff with jitter otherwise.
    """

    def __init__(
        self,
        base_url: str,
        headers: dict[str, str] | None = None,
        timeout: float = 30.0,
        retry_config: RetryConfig | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        """
        Initialize HTTP transport.

        Args:
            base_url: Service root (e.g., "https://api.github.com")
            headers: Headers sent with every request (authentication, accept)
            timeout: Request timeout in seconds
            retry_config: Retry policy (default: RetryConfig())
            client: Preconfigured httpx client (e.g., with a mock transport)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.retry_config = retry_config or RetryConfig()

        self._client = client or httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            headers=headers or {},
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "HTTPTransport":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        body: dict[str, Any] | None = None,
    ) -> Any:
        """
        Send a request, retrying transient failures.

        Args:
            method: HTTP method
            path: Path below base_url
            params: Query parameters
            body: JSON body (for POST/PATCH)

        Returns:
            Decoded JSON body, or None when the body is empty

        Raises:
            PullGateError: On error responses, or once retries are exhausted
        """
        url = f"{self.base_url}{path}"
        attempt = 0
        while True:
            log_http_request(method, url, params, body)
            started = time.monotonic()
            try:
                response = self._client.request(method, path, params=params, json=body)
            except httpx.RequestError as e:
                if attempt >= self.retry_config.max_retries:
                    raise ServerError("CONNECTION_ERROR", str(e)) from e
                time.sleep(self._get_backoff_time(attempt, None))
                attempt += 1
                continue
            log_http_response(
                response.status_code, url, (time.monotonic() - started) * 1000
            )

            if not response.is_error:
                if not response.content:
                    return None
                try:
                    return response.json()
                except ValueError as e:
                    raise ServerError(
                        "INVALID_RESPONSE",
                        f"Invalid JSON in response from {mask_sensitive_data(url)}",
                        request_id=response.headers.get("X-GitHub-Request-Id"),
                    ) from e

            error = self._parse_error_response(response)
            rate_limited = isinstance(error, RateLimitedError)
            if not self._should_retry(response.status_code, attempt, rate_limited):
                raise error

            time.sleep(self._get_backoff_time(attempt, self._wait_hint(response)))
            attempt += 1

    def _should_retry(
        self, status_code: int, attempt: int, rate_limited: bool = False
    ) -> bool:
        """
        Decide whether a failed attempt is tried again.

        Args:
            status_code: Status of the failed response
            attempt: Attempt number, starting at 0
            rate_limited: The response was a rate-limit rejection
        """
        if attempt >= self.retry_config.max_retries:
            return False
        return rate_limited or status_code in self.retry_config.retry_statuses

    def _get_backoff_time(self, attempt: int, hint: float | None) -> float:
        """
        Seconds to wait before the next attempt.

        A server hint wins when the policy respects it. Otherwise the
        delay is backoff_factor ** attempt, jittered and capped at
        max_backoff.
        """
        config = self.retry_config
        if hint is not None and config.respect_retry_after:
            return max(hint, 0.0)

        delay = config.backoff_factor ** attempt
        delay *= 1 + random.uniform(-config.jitter, config.jitter)
        return min(delay, config.max_backoff)

    @staticmethod
    def _wait_hint(response: httpx.Response) -> float | None:
        """Server-suggested wait from Retry-After or GitHub's X-RateLimit-Reset."""
        retry_after = response.headers.get("Retry-After")
        if retry_after is not None:
            try:
                return float(retry_after)
            except ValueError:
                return None

        reset = response.headers.get("X-RateLimit-Reset")
        if reset is not None and response.headers.get("X-RateLimit-Remaining") == "0":
            try:
                return float(reset) - time.time()
            except ValueError:
                return None
        return None

    def _parse_error_response(self, response: httpx.Response) -> PullGateError:
        """
        Map an error response to a pullgate exception.

        Reads GitHub bodies (``{"message": ..., "errors": [...]}``) and
        Bugzilla bodies (``{"error": true, "code": ..., "message": ...}``).
        GitHub reports an exhausted rate limit as 403 with
        ``X-RateLimit-Remaining: 0``; that is a RateLimitedError too.
        """
        try:
            data = response.json()
        except ValueError:
            data = None
        if not isinstance(data, dict):
            data = {}

        status = response.status_code
        code = str(data.get("code") or f"HTTP_{status}")
        message = data.get("message") or f"HTTP {status}"
        details = [
            " ".join(str(item[key]) for key in ("field", "code") if key in item)
            for item in data.get("errors") or []
            if isinstance(item, dict)
        ]
        if any(details):
            message = f"{message}: {'; '.join(detail for detail in details if detail)}"
        request_id = response.headers.get("X-GitHub-Request-Id")

        if status == 429 or (
            status == 403 and response.headers.get("X-RateLimit-Remaining") == "0"
        ):
            return RateLimitedError(code, message, self._retry_after(response), request_id)
        if status >= 500:
            return ServerError(code, message, request_id)
        error_type = _STATUS_ERRORS.get(status, ValidationError)
        return error_type(code, message, request_id)

    @classmethod
    def _retry_after(cls, response: httpx.Response) -> int:
        hint = cls._wait_hint(response)
        if hint is None:
            return DEFAULT_RATE_LIMIT_WAIT
        return max(int(hint), 0)
