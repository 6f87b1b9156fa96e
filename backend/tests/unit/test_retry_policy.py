"""
Unit Tests for RetryPolicy
Tests fixed-delay retry, exhaustion and non-retryable errors
"""
import asyncio
import time
import pytest
from unittest.mock import AsyncMock

from cdr_gateway.domain.services.retry_policy import RetryPolicy


class RecordingSleep:
    """Stand-in for asyncio.sleep that records requested delays"""

    def __init__(self):
        self.delays = []

    async def __call__(self, seconds):
        self.delays.append(seconds)


class TestRetryPolicy:

    @pytest.mark.asyncio
    async def test_first_attempt_success_does_not_sleep(self):
        sleep = RecordingSleep()
        policy = RetryPolicy(max_attempts=3, delay_seconds=1.0, sleep=sleep)
        operation = AsyncMock(return_value="ok")

        assert await policy.run(operation) == "ok"
        assert operation.await_count == 1
        assert sleep.delays == []

    @pytest.mark.asyncio
    async def test_succeeds_on_third_attempt(self):
        """Two failures, then success: three calls and two fixed delays"""
        sleep = RecordingSleep()
        policy = RetryPolicy(max_attempts=3, delay_seconds=1.0, sleep=sleep)
        operation = AsyncMock(side_effect=[ConnectionError("a"), ConnectionError("b"), ["campaign"]])

        assert await policy.run(operation, "Campaign lookup") == ["campaign"]
        assert operation.await_count == 3
        assert sleep.delays == [1.0, 1.0]

    @pytest.mark.asyncio
    async def test_exhaustion_reraises_last_error(self):
        """No sleep after the final attempt"""
        sleep = RecordingSleep()
        policy = RetryPolicy(max_attempts=3, delay_seconds=0.5, sleep=sleep)
        operation = AsyncMock(side_effect=[ValueError("first"), ValueError("second"), ValueError("third")])

        with pytest.raises(ValueError, match="third"):
            await policy.run(operation)

        assert operation.await_count == 3
        assert sleep.delays == [0.5, 0.5]

    @pytest.mark.asyncio
    async def test_single_attempt_never_sleeps(self):
        sleep = RecordingSleep()
        policy = RetryPolicy(max_attempts=1, delay_seconds=1.0, sleep=sleep)
        operation = AsyncMock(side_effect=RuntimeError("down"))

        with pytest.raises(RuntimeError):
            await policy.run(operation)

        assert operation.await_count == 1
        assert sleep.delays == []

    @pytest.mark.asyncio
    async def test_non_retryable_error_raised_immediately(self):
        sleep = RecordingSleep()
        policy = RetryPolicy(
            max_attempts=3,
            delay_seconds=1.0,
            is_retryable=lambda e: not isinstance(e, PermissionError),
            sleep=sleep
        )
        operation = AsyncMock(side_effect=PermissionError("401"))

        with pytest.raises(PermissionError):
            await policy.run(operation)

        assert operation.await_count == 1
        assert sleep.delays == []

    @pytest.mark.asyncio
    async def test_real_delay_between_attempts(self):
        """Default sleep actually waits between attempts"""
        policy = RetryPolicy(max_attempts=2, delay_seconds=0.05)
        operation = AsyncMock(side_effect=[ConnectionError("a"), "ok"])

        started = time.monotonic()
        assert await policy.run(operation) == "ok"
        assert time.monotonic() - started >= 0.045

    @pytest.mark.asyncio
    async def test_cancellation_during_delay_propagates(self):
        policy = RetryPolicy(max_attempts=3, delay_seconds=10.0)
        operation = AsyncMock(side_effect=ConnectionError("down"))

        task = asyncio.create_task(policy.run(operation))
        await asyncio.sleep(0.01)
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
        assert operation.await_count == 1

    def test_invalid_arguments_rejected(self):
        with pytest.raises(ValueError):
            RetryPolicy(max_attempts=0)
        with pytest.raises(ValueError):
            RetryPolicy(delay_seconds=-1)
