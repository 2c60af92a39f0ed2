"""Retry logic with exponential backoff for Drive API rate limits.

This module provides retry functionality for handling rate limit responses
from the Drive API. Drive signals rate limiting either with HTTP 429 or with
HTTP 403 and a ``rateLimitExceeded``/``userRateLimitExceeded`` reason. It
implements exponential backoff (1s, 2s, 4s) and fails fast for all other errors.
"""

import time
import logging
from typing import Callable, TypeVar
from functools import wraps

from .errors import APIAccessError, DriveError

logger = logging.getLogger(__name__)

T = TypeVar('T')

MAX_RETRIES = 3


def retry_on_rate_limit(func: Callable[..., T], *args, **kwargs) -> T:
    """Retry function on rate limit errors with exponential backoff.

    Executes the given function with the provided arguments, retrying up to 3 times
    with exponential backoff (1s, 2s, 4s) when a rate limit error is encountered.
    Fails fast for all other errors.

    Args:
        func: The function to execute with retry logic
        *args: Positional arguments to pass to the function
        **kwargs: Keyword arguments to pass to the function

    Returns:
        The return value of the function

    Raises:
        APIAccessError: If rate limit persists after 3 retries
        Other exceptions: Passed through immediately without retry

    Example:
        >>> result = retry_on_rate_limit(api.get_file, "1AbC", ["id"])
    """
    for retry_num in range(MAX_RETRIES + 1):  # 0, 1, 2, 3 = 4 attempts total
        try:
            return func(*args, **kwargs)
        except Exception as e:
            if not _is_rate_limit_error(e):
                raise

            if retry_num >= MAX_RETRIES:
                logger.error(
                    f"Rate limit persisted after {MAX_RETRIES} retries, giving up"
                )
                raise APIAccessError("Drive API failure (after 3 retries)") from e

            # 1s, 2s, 4s
            wait_time = 2 ** retry_num
            logger.info(
                f"Rate limit hit, retrying in {wait_time}s "
                f"(retry {retry_num + 1}/{MAX_RETRIES})"
            )
            time.sleep(wait_time)

    # Unreachable, keeps the type checker happy
    raise APIAccessError("Drive API failure (after 3 retries)")


def as_decorator(func: Callable[..., T]) -> Callable[..., T]:
    """Decorator version of retry_on_rate_limit for use with @decorator syntax.

    Args:
        func: The function to wrap with retry logic

    Returns:
        Wrapped function with retry logic
    """
    @wraps(func)
    def wrapper(*args, **kwargs) -> T:
        return retry_on_rate_limit(func, *args, **kwargs)

    return wrapper


def _is_rate_limit_error(exception: Exception) -> bool:
    """Check if an exception represents a Drive rate limit error.

    Args:
        exception: The exception to check

    Returns:
        True if this appears to be a rate limit error, False otherwise
    """
    # Already translated; its message may contain ids that look like codes
    if isinstance(exception, DriveError):
        return False

    # HttpError text includes the request URI, so file ids can look like codes.
    # A known status always wins over the message.
    status = _status_of(exception)
    if status is not None:
        if status == 429:
            return True
        if status == 403:
            reason = _reason_of(exception).lower()
            return 'ratelimitexceeded' in reason or 'rate limit exceeded' in reason
        return False

    # Match specific phrases only; a bare "rate limit" may appear in
    # unrelated messages
    error_msg = str(exception).lower()
    rate_limit_patterns = [
        '429',
        'too many requests',
        'ratelimitexceeded',
        'userratelimitexceeded',
        'rate limit exceeded',
    ]
    return any(pattern in error_msg for pattern in rate_limit_patterns)


def _status_of(exception: Exception):
    """Extract an HTTP status code from an exception, or None."""
    # googleapiclient.errors.HttpError keeps the httplib2 response in .resp
    resp = getattr(exception, 'resp', None)
    if resp is not None and getattr(resp, 'status', None) is not None:
        try:
            return int(resp.status)
        except (TypeError, ValueError):
            return None

    status_code = getattr(exception, 'status_code', None)
    if isinstance(status_code, int):
        return status_code

    return None


def _reason_of(exception: Exception) -> str:
    """Collect the machine-readable reasons attached to an HttpError."""
    details = getattr(exception, 'error_details', None)
    reasons = []
    if isinstance(details, list):
        for detail in details:
            if isinstance(detail, dict) and detail.get('reason'):
                reasons.append(str(detail['reason']))
    reason = getattr(exception, 'reason', None)
    if isinstance(reason, str):
        reasons.append(reason)
    return ' '.join(reasons)
