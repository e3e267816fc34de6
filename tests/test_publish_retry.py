"""Tests for the fixed-delay retry helper."""

import logging

import pytest
from publish_retry import RetryConfig, RetryError, retry_async


class TestRetryAsync:
    @pytest.mark.asyncio
    async def test_succeeds_first_try(self, sleep_recorder):
        async def ok():
            return 42

        assert await retry_async(ok, RetryConfig(max_attempts=3), sleep_recorder) == 42
        assert sleep_recorder.calls == []

    @pytest.mark.asyncio
    async def test_succeeds_after_failures(self, sleep_recorder):
        attempts = []

        async def flaky():
            attempts.append(1)
            if len(attempts) < 3:
                raise RuntimeError("transient")
            return "ok"

        result = await retry_async(flaky, RetryConfig(max_attempts=3, delay=2.0), sleep_recorder)
        assert result == "ok"
        assert len(attempts) == 3
        assert sleep_recorder.calls == [2.0, 2.0]

    @pytest.mark.asyncio
    async def test_exhausts_retries(self, sleep_recorder):
        async def always_fail():
            raise RuntimeError("permanent")

        with pytest.raises(RetryError) as exc_info:
            await retry_async(always_fail, RetryConfig(max_attempts=2, delay=0.5), sleep_recorder)
        assert exc_info.value.attempts == 2
        assert len(exc_info.value.errors) == 2
        assert "permanent" in str(exc_info.value.last_error)
        # No sleep after the final attempt
        assert sleep_recorder.calls == [0.5]

    @pytest.mark.asyncio
    async def test_non_retryable_propagates(self, sleep_recorder):
        calls = []

        async def bad_input():
            calls.append(1)
            raise ValueError("bad")

        with pytest.raises(ValueError):
            await retry_async(
                bad_input,
                RetryConfig(max_attempts=3, retryable_exceptions=(RuntimeError,)),
                sleep_recorder,
            )
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_passes_args(self, sleep_recorder):
        async def add(a, b):
            return a + b

        assert await retry_async(add, RetryConfig(max_attempts=1), sleep_recorder, 3, b=4) == 7

    @pytest.mark.asyncio
    async def test_logs_every_failed_attempt(self, sleep_recorder, caplog):
        async def always_fail():
            raise RuntimeError("nope")

        with caplog.at_level(logging.WARNING, logger="Retry"):
            with pytest.raises(RetryError):
                await retry_async(always_fail, RetryConfig(max_attempts=3), sleep_recorder)
        warnings = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
        assert warnings == ["Attempt 1/3 failed: nope", "Attempt 2/3 failed: nope", "Attempt 3/3 failed: nope"]
