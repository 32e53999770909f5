"""Bounded retry for operations that may fail transiently.

Retries are expressed as data: every run returns a RetryOutcome carrying the
attempt count and either the produced value or the last error. Nothing the
wrapped operation raises escapes the executor.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from mtd085zb.core.config import MAX_RETRIES, RETRY_DELAY_MS
from mtd085zb.core.exceptions import ConfigurationError, OperationFailedError

logger = logging.getLogger(__name__)

T = TypeVar("T")

RetryCallback = Callable[[int, BaseException], None]


@dataclass(frozen=True)
class AttemptResult(Generic[T]):
    """Result reported by a single synchronous attempt."""

    success: bool
    value: T | None = None
    error: BaseException | None = None

    @classmethod
    def ok(cls, value: T | None = None) -> AttemptResult[T]:
        return cls(success=True, value=value)

    @classmethod
    def failed(cls, error: BaseException | None = None) -> AttemptResult[T]:
        return cls(success=False, error=error)


@dataclass(frozen=True)
class RetryOutcome(Generic[T]):
    """Outcome of one retry-executor run.

    Attributes:
        succeeded: Whether any attempt succeeded.
        attempts: Number of attempts made (1-based, at least 1).
        value: Value produced by the successful attempt.
        last_error: Error from the final failed attempt.
        cancelled: True if the run stopped early on a cancel signal.
    """

    succeeded: bool
    attempts: int
    value: T | None = None
    last_error: BaseException | None = None
    cancelled: bool = False

    def raise_for_failure(self, what: str = "Operation") -> None:
        """Raise ConfigurationError if the run did not succeed.

        Args:
            what: Name of the operation for the error message.

        Raises:
            ConfigurationError: If succeeded is False.
        """
        if self.succeeded:
            return
        if self.cancelled:
            message = f"{what} cancelled after {self.attempts} attempts"
        else:
            message = f"{what} failed after {self.attempts} attempts"
        details = str(self.last_error) if self.last_error is not None else None
        raise ConfigurationError(message, details) from self.last_error


def _check_max_attempts(max_attempts: int) -> None:
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")


def run_with_retry(
    operation: Callable[[int], AttemptResult[T] | T],
    max_attempts: int = MAX_RETRIES,
) -> RetryOutcome[T]:
    """Run a synchronous operation up to max_attempts times.

    The operation receives the 1-based attempt number and reports its result
    as an AttemptResult. Any other return value counts as a successful
    attempt producing that value, and a raised Exception counts as a failed
    attempt carrying that exception.

    Args:
        operation: Callable invoked once per attempt.
        max_attempts: Maximum number of attempts (>= 1).

    Returns:
        RetryOutcome for the run.

    Raises:
        ValueError: If max_attempts is less than 1.

    Example:
        >>> outcome = run_with_retry(lambda attempt: AttemptResult.ok(attempt), 3)
        >>> outcome.succeeded, outcome.attempts
        (True, 1)
    """
    _check_max_attempts(max_attempts)

    last_error: BaseException | None = None
    for attempt in range(1, max_attempts + 1):
        try:
            result: Any = operation(attempt)
        except Exception as e:
            result = AttemptResult.failed(e)

        if not isinstance(result, AttemptResult):
            result = AttemptResult.ok(result)

        if result.success:
            return RetryOutcome(succeeded=True, attempts=attempt, value=result.value)

        last_error = result.error or OperationFailedError(f"attempt {attempt}")
        logger.debug("Attempt %d/%d failed: %s", attempt, max_attempts, last_error)

    return RetryOutcome(succeeded=False, attempts=max_attempts, last_error=last_error)


async def _pause(delay_seconds: float | None, cancel_event: asyncio.Event | None) -> bool:
    """Suspend between attempts. Returns True if cancelled."""
    if cancel_event is not None and cancel_event.is_set():
        return True
    if not delay_seconds:
        return False
    if cancel_event is None:
        await asyncio.sleep(delay_seconds)
        return False
    try:
        await asyncio.wait_for(cancel_event.wait(), timeout=delay_seconds)
    except asyncio.TimeoutError:
        return False
    return True


async def run_with_retry_async(
    operation: Callable[[], Awaitable[T]],
    max_attempts: int = MAX_RETRIES,
    delay_seconds: float | None = RETRY_DELAY_MS / 1000,
    on_retry: RetryCallback | None = None,
    cancel_event: asyncio.Event | None = None,
) -> RetryOutcome[T]:
    """Run a coroutine function up to max_attempts times.

    Between non-final failed attempts the on_retry observer is called with
    the attempt number and its error, then the run suspends for
    delay_seconds (skipped when zero or None). Attempts never overlap.

    Args:
        operation: Coroutine function; raising an Exception marks failure.
        max_attempts: Maximum number of attempts (>= 1).
        delay_seconds: Pause between attempts.
        on_retry: Observer for failed non-final attempts.
        cancel_event: Optional event; once set, the run stops before the
            next attempt and reports a cancelled failure.

    Returns:
        RetryOutcome for the run.

    Raises:
        ValueError: If max_attempts is less than 1.
    """
    _check_max_attempts(max_attempts)

    last_error: BaseException | None = None
    for attempt in range(1, max_attempts + 1):
        try:
            value = await operation()
        except Exception as e:
            last_error = e
        else:
            return RetryOutcome(succeeded=True, attempts=attempt, value=value)

        if attempt == max_attempts:
            break

        logger.warning("Attempt %d/%d failed: %s", attempt, max_attempts, last_error)
        if on_retry is not None:
            on_retry(attempt, last_error)

        if await _pause(delay_seconds, cancel_event):
            logger.info("Retry cancelled after %d attempts", attempt)
            return RetryOutcome(
                succeeded=False,
                attempts=attempt,
                last_error=last_error,
                cancelled=True,
            )

    logger.warning("All %d attempts failed: %s", max_attempts, last_error)
    return RetryOutcome(succeeded=False, attempts=max_attempts, last_error=last_error)
