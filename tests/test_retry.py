"""Tests for the bounded retry executor."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any

import pytest

from mtd085zb.core.exceptions import ConfigurationError, OperationFailedError
from mtd085zb.core.retry import (
    AttemptResult,
    RetryOutcome,
    run_with_retry,
    run_with_retry_async,
)

MAX_RETRIES = 3


def make_async_fail_then_succeed(fail_count: int, value: Any = "configured") -> Callable[[], Any]:
    """Coroutine function raising on its first fail_count calls."""
    calls = 0

    async def operation() -> Any:
        nonlocal calls
        calls += 1
        if calls <= fail_count:
            raise RuntimeError(f"Attempt {calls} failed")
        return value

    return operation


# ============================================================================
# Synchronous executor
# ============================================================================


class TestRunWithRetry:
    """Tests for run_with_retry."""

    def test_first_try_success(self, fail_then_succeed) -> None:
        """Immediate success should take one attempt."""
        outcome = run_with_retry(fail_then_succeed(0), MAX_RETRIES)
        assert outcome.succeeded is True
        assert outcome.attempts == 1
        assert outcome.value == "configured"
        assert outcome.last_error is None

    @pytest.mark.parametrize("fail_count", [1, 2])
    def test_retries_until_success(self, fail_then_succeed, fail_count: int) -> None:
        """Should succeed after fail_count + 1 attempts."""
        outcome = run_with_retry(fail_then_succeed(fail_count), MAX_RETRIES)
        assert outcome.succeeded is True
        assert outcome.attempts == fail_count + 1

    def test_all_attempts_fail(self, fail_then_succeed) -> None:
        """Should stop after max_attempts with the last error."""
        outcome = run_with_retry(fail_then_succeed(100), MAX_RETRIES)
        assert outcome.succeeded is False
        assert outcome.attempts == MAX_RETRIES
        assert outcome.value is None
        assert str(outcome.last_error) == f"Attempt {MAX_RETRIES} failed"

    @pytest.mark.parametrize("max_attempts", range(1, 11))
    @pytest.mark.parametrize("fail_count", range(0, 16))
    def test_attempts_law(self, fail_then_succeed, max_attempts: int, fail_count: int) -> None:
        """attempts == min(k + 1, max) and success iff k < max."""
        outcome = run_with_retry(fail_then_succeed(fail_count), max_attempts)
        assert outcome.attempts == min(fail_count + 1, max_attempts)
        assert outcome.succeeded is (fail_count < max_attempts)

    def test_attempt_number_passed(self) -> None:
        """Operation should receive 1-based attempt numbers."""
        seen: list[int] = []

        def operation(attempt: int) -> AttemptResult[None]:
            seen.append(attempt)
            return AttemptResult.failed()

        run_with_retry(operation, 4)
        assert seen == [1, 2, 3, 4]

    def test_failure_without_error(self) -> None:
        """A bare failure should record OperationFailedError."""
        outcome = run_with_retry(lambda attempt: AttemptResult.failed(), 2)
        assert isinstance(outcome.last_error, OperationFailedError)
        assert "attempt 2" in str(outcome.last_error)

    def test_exceptions_captured(self) -> None:
        """Raised exceptions should become failed attempts."""

        def operation(attempt: int) -> int:
            if attempt < 3:
                raise ValueError(f"boom {attempt}")
            return attempt * 10

        outcome = run_with_retry(operation, 3)
        assert outcome.succeeded is True
        assert outcome.attempts == 3
        assert outcome.value == 30

    def test_exceptions_exhausted(self) -> None:
        """Exhausted raising operation should not raise."""

        def operation(attempt: int) -> None:
            raise ValueError(f"boom {attempt}")

        outcome = run_with_retry(operation, 2)
        assert outcome.succeeded is False
        assert isinstance(outcome.last_error, ValueError)
        assert str(outcome.last_error) == "boom 2"

    def test_plain_value_is_success(self) -> None:
        """A non-AttemptResult return value counts as success."""
        outcome = run_with_retry(lambda attempt: None, 3)
        assert outcome.succeeded is True
        assert outcome.attempts == 1

    @pytest.mark.parametrize("max_attempts", [0, -1])
    def test_invalid_max_attempts(self, max_attempts: int) -> None:
        """max_attempts below 1 should be rejected."""
        with pytest.raises(ValueError, match="max_attempts"):
            run_with_retry(lambda attempt: None, max_attempts)


# ============================================================================
# Asynchronous executor
# ============================================================================


class TestRunWithRetryAsync:
    """Tests for run_with_retry_async."""

    @pytest.mark.asyncio
    async def test_third_attempt_succeeds(self) -> None:
        """Failing twice then succeeding should take three attempts."""
        outcome = await run_with_retry_async(
            make_async_fail_then_succeed(2), max_attempts=3, delay_seconds=0
        )
        assert outcome.succeeded is True
        assert outcome.attempts == 3
        assert outcome.value == "configured"

    @pytest.mark.asyncio
    async def test_two_attempts_not_enough(self) -> None:
        """The same operation with max_attempts=2 should fail."""
        outcome = await run_with_retry_async(
            make_async_fail_then_succeed(2), max_attempts=2, delay_seconds=0
        )
        assert outcome.succeeded is False
        assert outcome.attempts == 2
        assert str(outcome.last_error) == "Attempt 2 failed"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("fail_count", range(0, 6))
    async def test_attempts_law(self, fail_count: int) -> None:
        """Async variant should obey the same attempts law."""
        outcome = await run_with_retry_async(
            make_async_fail_then_succeed(fail_count), max_attempts=MAX_RETRIES, delay_seconds=None
        )
        assert outcome.attempts == min(fail_count + 1, MAX_RETRIES)
        assert outcome.succeeded is (fail_count < MAX_RETRIES)

    @pytest.mark.asyncio
    async def test_on_retry_called_between_attempts(self) -> None:
        """Observer should see every non-final failure, not the final one."""
        seen: list[tuple[int, str]] = []

        outcome = await run_with_retry_async(
            make_async_fail_then_succeed(10),
            max_attempts=3,
            delay_seconds=0,
            on_retry=lambda attempt, error: seen.append((attempt, str(error))),
        )
        assert outcome.succeeded is False
        assert seen == [(1, "Attempt 1 failed"), (2, "Attempt 2 failed")]

    @pytest.mark.asyncio
    async def test_delay_between_attempts(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should sleep for the configured delay between attempts."""
        delays: list[float] = []

        async def fake_sleep(seconds: float) -> None:
            delays.append(seconds)

        monkeypatch.setattr(asyncio, "sleep", fake_sleep)

        await run_with_retry_async(
            make_async_fail_then_succeed(10), max_attempts=3, delay_seconds=0.25
        )
        assert delays == [0.25, 0.25]

    @pytest.mark.asyncio
    async def test_zero_delay_skips_sleep(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """A zero delay should not suspend."""
        delays: list[float] = []

        async def fake_sleep(seconds: float) -> None:
            delays.append(seconds)

        monkeypatch.setattr(asyncio, "sleep", fake_sleep)

        await run_with_retry_async(
            make_async_fail_then_succeed(10), max_attempts=3, delay_seconds=0
        )
        assert delays == []

    @pytest.mark.asyncio
    async def test_cancel_event_stops_retries(self) -> None:
        """A set cancel event should stop before the next attempt."""
        cancel = asyncio.Event()
        calls = 0

        async def operation() -> None:
            nonlocal calls
            calls += 1
            cancel.set()
            raise RuntimeError("not joined yet")

        outcome = await run_with_retry_async(
            operation, max_attempts=5, delay_seconds=10, cancel_event=cancel
        )
        assert calls == 1
        assert outcome.succeeded is False
        assert outcome.cancelled is True
        assert outcome.attempts == 1
        assert str(outcome.last_error) == "not joined yet"

    @pytest.mark.asyncio
    async def test_cancel_during_delay(self) -> None:
        """Setting the event while waiting should end the run early."""
        cancel = asyncio.Event()

        async def cancel_soon() -> None:
            await asyncio.sleep(0.01)
            cancel.set()

        task = asyncio.create_task(cancel_soon())
        outcome = await run_with_retry_async(
            make_async_fail_then_succeed(10),
            max_attempts=5,
            delay_seconds=5,
            cancel_event=cancel,
        )
        await task
        assert outcome.cancelled is True
        assert outcome.attempts == 1

    @pytest.mark.asyncio
    async def test_unset_cancel_event_waits_delay(self) -> None:
        """An unset event should not cut the delay short."""
        outcome = await run_with_retry_async(
            make_async_fail_then_succeed(1),
            max_attempts=2,
            delay_seconds=0.01,
            cancel_event=asyncio.Event(),
        )
        assert outcome.succeeded is True
        assert outcome.cancelled is False

    @pytest.mark.asyncio
    async def test_invalid_max_attempts(self) -> None:
        """max_attempts below 1 should be rejected."""
        with pytest.raises(ValueError):
            await run_with_retry_async(make_async_fail_then_succeed(0), max_attempts=0)


# ============================================================================
# RetryOutcome
# ============================================================================


class TestRetryOutcome:
    """Tests for RetryOutcome.raise_for_failure."""

    def test_success_does_not_raise(self) -> None:
        RetryOutcome(succeeded=True, attempts=1, value=1).raise_for_failure()

    def test_failure_raises_configuration_error(self) -> None:
        """Exhausted outcome should raise with the last error as details."""
        outcome = RetryOutcome(succeeded=False, attempts=3, last_error=TimeoutError("no ack"))
        with pytest.raises(ConfigurationError) as exc_info:
            outcome.raise_for_failure("IAS Zone configuration")
        assert str(exc_info.value) == "IAS Zone configuration failed after 3 attempts: no ack"
        assert isinstance(exc_info.value.__cause__, TimeoutError)

    def test_cancelled_message(self) -> None:
        """Cancelled outcome should say so."""
        outcome = RetryOutcome(succeeded=False, attempts=1, cancelled=True)
        with pytest.raises(ConfigurationError, match="cancelled after 1 attempts"):
            outcome.raise_for_failure()
