"""Error types and retry handling."""

import json
import time
from typing import Any, Callable, Optional, Tuple, Type, TypeVar

from googleapiclient.errors import HttpError

from .logging_config import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

QUOTA_REASONS = ("quotaExceeded", "dailyLimitExceeded")


class YouTubeError(Exception):
    """Base class for YouTube API errors."""

    pass


class ConfigurationError(YouTubeError):
    """Error raised when required settings are missing or malformed."""

    pass


class AuthorizationError(YouTubeError):
    """Error raised when no valid OAuth token is available."""

    def __init__(self, message: str, authorization_url: Optional[str] = None):
        """Initialize error.

        Args:
            message: Error message
            authorization_url: URL the user must visit to grant access
        """
        super().__init__(message)
        self.authorization_url = authorization_url


class ChannelNotFoundError(YouTubeError):
    """Error raised when a channel or its uploads playlist is not found."""

    pass


class PlaylistNotFoundError(YouTubeError):
    """Error raised when a playlist is not found."""

    pass


class PlaylistCreationError(YouTubeError):
    """Error raised when a playlist cannot be created."""

    pass


class ApiError(YouTubeError):
    """Error returned by the remote API or its transport."""

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        reason: Optional[str] = None,
    ):
        """Initialize error.

        Args:
            message: Error message
            status: HTTP status code, None for transport failures
            reason: API error reason, e.g. quotaExceeded
        """
        super().__init__(message)
        self.status = status
        self.reason = reason


class NotFoundError(ApiError):
    """Error raised when the API answers 404."""

    pass


class QuotaExceededError(ApiError):
    """Error raised when the API quota is exhausted."""

    pass


def parse_http_error(error: HttpError) -> Tuple[Optional[int], str, str]:
    """Extract status, reason and message from an HttpError.

    Args:
        error: Error raised by googleapiclient

    Returns:
        Tuple of (status, reason, message); reason is "unknown" if absent
    """
    status = getattr(error.resp, "status", None)
    try:
        status = int(status) if status is not None else None
    except (TypeError, ValueError):
        status = None

    reason = "unknown"
    message = ""
    content = error.content
    if isinstance(content, bytes):
        content = content.decode("utf-8", "ignore")
    try:
        body = json.loads(content) if content else {}
    except ValueError:
        body = {}

    details = body.get("error", {}) if isinstance(body, dict) else {}
    if isinstance(details, dict):
        message = details.get("message", "")
        errors = details.get("errors") or []
        if errors and isinstance(errors[0], dict):
            reason = errors[0].get("reason", reason)

    if not message:
        message = f"Code {status}" if status else str(error)
    return status, reason, message


def api_error_from_http(error: HttpError) -> ApiError:
    """Translate an HttpError into the matching ApiError subclass.

    Args:
        error: Error raised by googleapiclient

    Returns:
        NotFoundError, QuotaExceededError or ApiError
    """
    status, reason, message = parse_http_error(error)
    if status == 404:
        return NotFoundError(message, status=status, reason=reason)
    if reason in QUOTA_REASONS:
        return QuotaExceededError(message, status=status, reason=reason)
    return ApiError(message, status=status, reason=reason)


def linear_backoff(base: float) -> Callable[[int], float]:
    """Build a backoff function returning attempt * base seconds.

    Args:
        base: Delay in seconds for the first attempt

    Returns:
        Function mapping a 1-based attempt number to a delay
    """

    def backoff(attempt: int) -> float:
        return attempt * base

    return backoff


def with_retry(
    operation: Callable[[], T],
    max_attempts: int,
    backoff: Callable[[int], float],
    is_terminal: Optional[Callable[[Exception], bool]] = None,
    on_failure: Optional[Callable[[Exception, int, int], None]] = None,
    retryable: Tuple[Type[Exception], ...] = (YouTubeError,),
) -> T:
    """Call an operation until it succeeds or attempts run out.

    Args:
        operation: Zero-argument callable to run
        max_attempts: Total number of attempts, including the first one
        backoff: Maps the failed attempt number to seconds to sleep
        is_terminal: Predicate marking errors that must not be retried
        on_failure: Called with (error, attempt, max_attempts) after each failure
        retryable: Exception types that count as failed attempts

    Returns:
        Result of the first successful call

    Raises:
        The terminal error, or the last error once attempts are exhausted.
        Exceptions outside ``retryable`` propagate immediately.
    """
    attempt = 0
    while True:
        attempt += 1
        try:
            return operation()
        except retryable as e:
            if on_failure:
                on_failure(e, attempt, max_attempts)
            if is_terminal and is_terminal(e):
                raise
            if attempt >= max_attempts:
                raise
            delay = backoff(attempt)
            logger.debug(
                "Attempt %d/%d failed: %s. Retrying in %.1f seconds...",
                attempt,
                max_attempts,
                str(e),
                delay,
            )
            time.sleep(delay)


def describe_error(error: Any) -> str:
    """Format an error with its API status and reason when available."""
    status = getattr(error, "status", None)
    reason = getattr(error, "reason", None)
    if status is None and reason is None:
        return str(error)
    return f"{error} (status: {status}, reason: {reason or 'unknown'})"
