"""Retry wrapper for GraphQL calls with rate-limit aware backoff."""

import asyncio
import logging
from enum import Enum
from typing import Any, Awaitable, Callable, TypeVar

from .errors import ExhaustedRetries, RateLimited, UpstreamError

logger = logging.getLogger("shopify_catalog_api.retry")

T = TypeVar("T")

SleepFunc = Callable[[float], Awaitable[Any]]


class RetryState(str, Enum):
    """States a retried call moves through."""
    ATTEMPTING = "attempting"
    BACKOFF_RATE_LIMITED = "backoff_rate_limited"
    BACKOFF_TRANSIENT = "backoff_transient"
    EXHAUSTED = "exhausted"
    SUCCEEDED = "succeeded"


def is_rate_limited(error: BaseException) -> bool:
    """Return True if the error signals a Shopify rate limit."""
    if isinstance(error, RateLimited):
        return True
    if getattr(error, "status_code", None) == 429:
        return True
    response = getattr(error, "response", None)
    if getattr(response, "status_code", None) == 429:
        return True
    message = str(error)
    return "THROTTLED" in message or "Too Many Requests" in message


def rate_limit_delay(attempt: int, base_delay: float = 1.0) -> float:
    """Exponential backoff for a rate-limited attempt (attempt starts at 1)."""
    return (2 ** attempt) * base_delay


async def call_with_retry(
    request: Callable[[], Awaitable[T]],
    max_attempts: int = 3,
    *,
    base_delay: float = 1.0,
    sleep: SleepFunc = asyncio.sleep,
) -> T:
    """
    Call ``request`` until it succeeds or the attempt budget is spent.

    Rate-limited failures back off for ``2 ** attempt * base_delay`` seconds.
    Other failures back off for ``base_delay`` seconds, and the failure from
    the final attempt is re-raised as-is. ``UpstreamError`` is never retried.

    Args:
        request: Zero-argument callable returning an awaitable
        max_attempts: Attempts allowed for this call
        base_delay: Backoff unit in seconds
        sleep: Awaitable sleep used for backoff

    Returns:
        The result of the first successful attempt

    Raises:
        ExhaustedRetries: If every attempt ended rate limited
    """
    last_error: BaseException | None = None

    for attempt in range(1, max_attempts + 1):
        _transition(RetryState.ATTEMPTING, attempt, max_attempts)
        try:
            result = await request()
        except UpstreamError:
            raise
        except Exception as e:
            last_error = e
            if is_rate_limited(e):
                if attempt == max_attempts:
                    break
                delay = rate_limit_delay(attempt, base_delay)
                _transition(RetryState.BACKOFF_RATE_LIMITED, attempt, max_attempts)
                logger.warning(
                    "Rate limit hit. Waiting %.1fs before retry %d/%d",
                    delay, attempt, max_attempts,
                )
                await sleep(delay)
                continue

            if attempt == max_attempts:
                logger.error("Failed after %d attempts: %s", max_attempts, e)
                raise

            _transition(RetryState.BACKOFF_TRANSIENT, attempt, max_attempts)
            logger.warning("Error on attempt %d/%d: %s. Retrying", attempt, max_attempts, e)
            await sleep(base_delay)
            continue

        _transition(RetryState.SUCCEEDED, attempt, max_attempts)
        return result

    _transition(RetryState.EXHAUSTED, max_attempts, max_attempts)
    raise ExhaustedRetries(
        f"Failed to fetch after {max_attempts} attempts", attempts=max_attempts
    ) from last_error


def _transition(state: RetryState, attempt: int, max_attempts: int) -> None:
    logger.debug("retry_state", extra={"state": state.value, "attempt": attempt, "max_attempts": max_attempts})
