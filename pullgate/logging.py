"""
pullgate logging utilities.

Loggers:
    pullgate            package root; handlers are attached here
    pullgate.http       GitHub and Bugzilla calls, DEBUG only
    pullgate.evaluator  merge policy decisions and verdicts

Credentials (GitHub tokens, Bugzilla API keys) are masked before any
request detail reaches a log record.
"""

import logging
import re
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pullgate.result import Result

ROOT_LOGGER = "pullgate"
REDACTED = "[REDACTED]"

_root_logger = logging.getLogger(ROOT_LOGGER)
_http_logger = logging.getLogger(f"{ROOT_LOGGER}.http")
_evaluator_logger = logging.getLogger(f"{ROOT_LOGGER}.evaluator")

_DEFAULT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

_REDACTIONS: list[tuple[re.Pattern[str], str]] = [
    # Authorization header values
    (re.compile(r"\b(Bearer|token)\s+[\w\-.]{8,}", re.IGNORECASE), rf"\1 {REDACTED}"),
    # GitHub personal, OAuth, app and fine-grained tokens
    (re.compile(r"\b(?:gh[pousr]|github_pat)_\w{16,}"), "[TOKEN_REDACTED]"),
    # Bugzilla keys carried in query strings
    (re.compile(r"\b(Bugzilla_api_key|api_key)=[^&\s]+", re.IGNORECASE), rf"\1={REDACTED}"),
    # Quoted assignments in serialized payloads
    (
        re.compile(r"\b(secret|token|password|api_key)['\"]?\s*[:=]\s*['\"][^'\"]+['\"]", re.IGNORECASE),
        rf"\1: {REDACTED}",
    ),
]

SENSITIVE_KEYS = frozenset({
    "authorization",
    "token",
    "api_key",
    "x-bugzilla-api-key",
    "secret",
    "password",
})


def configure_logging(
    level: int = logging.INFO,
    http_level: int | None = None,
    evaluator_level: int | None = None,
    handler: logging.Handler | None = None,
    format_string: str | None = None,
) -> None:
    """
    Attach a handler to the pullgate loggers and set their levels.

    Args:
        level: Level of the package root logger (default: INFO)
        http_level: Level of pullgate.http (default: level)
        evaluator_level: Level of pullgate.evaluator (default: level)
        handler: Destination (default: a stderr StreamHandler)
        format_string: Record format (default: time, level, logger, message)

    Example:
        ```python
        import logging
        from pullgate.logging import configure_logging

        # Trace every GitHub and Bugzilla call
        configure_logging(http_level=logging.DEBUG)
        ```
    """
    handler = handler or logging.StreamHandler()
    handler.setFormatter(logging.Formatter(format_string or _DEFAULT_FORMAT))
    _root_logger.addHandler(handler)

    for logger, logger_level in (
        (_root_logger, level),
        (_http_logger, http_level),
        (_evaluator_logger, evaluator_level),
    ):
        logger.setLevel(level if logger_level is None else logger_level)


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the package root logger, or the ``pullgate.<name>`` child."""
    if not name:
        return _root_logger
    return _root_logger.getChild(name)


def mask_sensitive_data(text: str) -> str:
    """
    Mask credentials in free text.

    Args:
        text: URL, header dump or message that may carry credentials

    Returns:
        The text with tokens and API keys replaced by placeholders
    """
    for pattern, replacement in _REDACTIONS:
        text = pattern.sub(replacement, text)
    return text


def _is_sensitive(key: str, sensitive_keys: frozenset[str] | set[str]) -> bool:
    lowered = key.lower()
    return any(sensitive in lowered for sensitive in sensitive_keys)


def _redact(value: Any, sensitive_keys: frozenset[str] | set[str]) -> Any:
    if isinstance(value, dict):
        return safe_log_dict(value, sensitive_keys)
    if isinstance(value, list):
        return [_redact(item, sensitive_keys) for item in value]
    return value


def safe_log_dict(
    data: dict[str, Any], sensitive_keys: frozenset[str] | set[str] | None = None
) -> dict[str, Any]:
    """
    Copy a mapping for logging, redacting credential-like keys.

    A key is sensitive when it contains any of ``sensitive_keys``
    (case-insensitive), so ``Bugzilla_api_key`` matches ``api_key``.
    Nested mappings and lists are redacted recursively.
    """
    keys = SENSITIVE_KEYS if sensitive_keys is None else sensitive_keys
    return {
        key: REDACTED if _is_sensitive(key, keys) else _redact(value, keys)
        for key, value in data.items()
    }


def log_http_request(
    method: str,
    url: str,
    params: dict[str, Any] | None = None,
    body: dict[str, Any] | None = None,
) -> None:
    """
    Log an outgoing call on pullgate.http at DEBUG.

    Args:
        method: HTTP method
        url: Full request URL
        params: Query parameters, redacted before logging
        body: JSON body, redacted before logging
    """
    if not _http_logger.isEnabledFor(logging.DEBUG):
        return

    message = f"{method} {mask_sensitive_data(url)}"
    if params:
        message += f" | params={safe_log_dict(params)}"
    if body:
        message += f" | body={safe_log_dict(body)}"
    _http_logger.debug(message)


def log_http_response(
    status_code: int,
    url: str,
    elapsed_ms: float | None = None,
) -> None:
    """Log a response status on pullgate.http at DEBUG, with timing when known."""
    if not _http_logger.isEnabledFor(logging.DEBUG):
        return

    message = f"Response {status_code} from {mask_sensitive_data(url)}"
    if elapsed_ms is not None:
        message += f" | elapsed={elapsed_ms:.2f}ms"
    _http_logger.debug(message)


def log_verdict(repository: str, number: int, result: "Result") -> None:
    """Log the verdict reached for a pull request on pullgate.evaluator at INFO."""
    if not _evaluator_logger.isEnabledFor(logging.INFO):
        return

    message = f"verdict: pr={repository}#{number}, mergeable={result.mergeable}"
    if result.complaints:
        message += f" | complaints={len(result.complaints)}"
    _evaluator_logger.info(message)


__all__ = [
    "configure_logging",
    "get_logger",
    "mask_sensitive_data",
    "safe_log_dict",
    "log_http_request",
    "log_http_response",
    "log_verdict",
]
