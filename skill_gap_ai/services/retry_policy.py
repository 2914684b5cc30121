"""Async retry with exponential backoff and an optional overall deadline."""

import asyncio
import random
import time
from typing import Awaitable, Callable, Optional, TypeVar

from skill_gap_ai.errors import BackendTimeoutError, DeadlineExceededError, is_transient_error
from skill_gap_ai.schemas.retry_config import RetryConfig
from skill_gap_ai.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


def deadline_after(seconds: Optional[float]) -> Optional[float]:
    """Absolute monotonic deadline `seconds` from now. None or <= 0 means no deadline."""
    if not seconds or seconds <= 0:
        return None
    return time.monotonic() + seconds


def remaining_time(deadline: Optional[float]) -> Optional[float]:
    if deadline is None:
        return None
    return deadline - time.monotonic()


def compute_delay(config: RetryConfig, attempt: int) -> float:
    """Backoff delay after failed attempt `attempt` (zero-based), jittered if configured."""
    delay = config.delay_for(attempt)
    if config.jitter and delay > 0:
        delay = random.uniform(delay / 2.0, delay)
    return delay


async def _attempt(operation: Callable[[], Awaitable[T]]) -> T:
    try:
        return await operation()
    except asyncio.TimeoutError as e:
        raise BackendTimeoutError(str(e) or "operation timed out") from e


async def retry(
    operation: Callable[[], Awaitable[T]],
    config: Optional[RetryConfig] = None,
    *,
    is_retryable: Callable[[BaseException], bool] = is_transient_error,
    deadline: Optional[float] = None,
    label: str = "operation",
) -> T:
    """
    Run `operation` up to config.max_retries + 1 times, sleeping between attempts.
    Errors rejected by `is_retryable` propagate on first occurrence; when retries are
    exhausted the last error is re-raised. With a deadline, no attempt or backoff sleep
    starts past it and an in-flight attempt is cut at it (DeadlineExceededError).
    """
    config = config or RetryConfig()
    last_error: Optional[Exception] = None

    for attempt in range(config.max_attempts):
        remaining = remaining_time(deadline)
        if remaining is not None and remaining <= 0:
            raise DeadlineExceededError(
                f"deadline expired before attempt {attempt + 1} of {label}"
            ) from last_error
        try:
            if remaining is None:
                return await _attempt(operation)
            return await asyncio.wait_for(_attempt(operation), timeout=remaining)
        except DeadlineExceededError:
            raise
        except Exception as e:
            if isinstance(e, asyncio.TimeoutError):
                # Only wait_for can raise it here; the operation's own timeouts are wrapped
                raise DeadlineExceededError(f"deadline expired during attempt {attempt + 1} of {label}") from e
            last_error = e
            if not is_retryable(e):
                logger.warning("%s failed with non-retryable error: %s", label, e)
                raise
            if attempt >= config.max_retries:
                logger.error("%s failed after %s attempts: %s", label, config.max_attempts, e)
                raise
            delay = compute_delay(config, attempt)
            remaining = remaining_time(deadline)
            if remaining is not None and delay >= remaining:
                raise DeadlineExceededError(
                    f"deadline would expire during backoff after attempt {attempt + 1} of {label}"
                ) from e
            logger.warning(
                "%s attempt %s/%s failed, retrying in %.2fs: %s",
                label,
                attempt + 1,
                config.max_attempts,
                delay,
                e,
            )
            await asyncio.sleep(delay)

    raise RuntimeError(f"{label} made no attempts (max_attempts={config.max_attempts})")
