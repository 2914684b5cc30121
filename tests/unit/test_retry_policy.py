import asyncio

import pytest

from skill_gap_ai.errors import BackendError, BackendTimeoutError, DeadlineExceededError, RateLimitedError
from skill_gap_ai.schemas.retry_config import RetryConfig
from skill_gap_ai.services import retry_policy
from skill_gap_ai.services.retry_policy import compute_delay, deadline_after, retry

NO_DELAY = RetryConfig(max_retries=3, initial_delay=0.0, max_delay=0.0)


class FlakyOperation:
    """Fails with the given errors in order, then returns `result`."""

    def __init__(self, errors, result="ok") -> None:
        self.errors = list(errors)
        self.result = result
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        if self.errors:
            raise self.errors.pop(0)
        return self.result


def test_retry_backs_off_exponentially_then_succeeds(monkeypatch) -> None:
    delays = []

    async def fake_sleep(seconds):
        delays.append(seconds)

    monkeypatch.setattr(retry_policy.asyncio, "sleep", fake_sleep)
    config = RetryConfig(max_retries=3, initial_delay=1.0, max_delay=10.0, backoff_factor=2.0)
    op = FlakyOperation([RateLimitedError("429 Too Many Requests")] * 2)

    assert asyncio.run(retry(op, config)) == "ok"
    assert op.calls == 3
    assert delays == [1.0, 2.0]


def test_retry_gives_up_after_max_retries_and_reraises_last_error() -> None:
    op = FlakyOperation([RateLimitedError(f"rate limit {i}") for i in range(10)])

    with pytest.raises(RateLimitedError, match="rate limit 3"):
        asyncio.run(retry(op, NO_DELAY))
    assert op.calls == NO_DELAY.max_attempts


def test_retry_does_not_retry_non_transient_errors() -> None:
    op = FlakyOperation([BackendError("invalid api key")])

    with pytest.raises(BackendError):
        asyncio.run(retry(op, NO_DELAY))
    assert op.calls == 1


def test_retry_treats_rate_limit_messages_as_transient() -> None:
    op = FlakyOperation([RuntimeError("Rate limit reached for tokens per minute")])

    assert asyncio.run(retry(op, NO_DELAY)) == "ok"
    assert op.calls == 2


def test_retry_with_zero_retries_runs_once() -> None:
    op = FlakyOperation([RateLimitedError("429")])

    with pytest.raises(RateLimitedError):
        asyncio.run(retry(op, RetryConfig(max_retries=0, initial_delay=0.0, max_delay=0.0)))
    assert op.calls == 1


def test_exhausted_retries_reraise_the_final_error_object() -> None:
    errors = [RateLimitedError("first"), RateLimitedError("second")]
    op = FlakyOperation(list(errors))

    with pytest.raises(RateLimitedError) as excinfo:
        asyncio.run(retry(op, RetryConfig(max_retries=1, initial_delay=0.0, max_delay=0.0)))
    assert excinfo.value is errors[1]
    assert op.calls == 2


def test_operation_timeouts_are_retried_as_backend_timeouts() -> None:
    op = FlakyOperation([asyncio.TimeoutError()])

    assert asyncio.run(retry(op, NO_DELAY)) == "ok"
    assert op.calls == 2

    op = FlakyOperation([asyncio.TimeoutError()] * 10)
    with pytest.raises(BackendTimeoutError):
        asyncio.run(retry(op, NO_DELAY))


def test_expired_deadline_prevents_any_attempt() -> None:
    op = FlakyOperation([])

    with pytest.raises(DeadlineExceededError):
        asyncio.run(retry(op, NO_DELAY, deadline=deadline_after(0.001) - 1.0))
    assert op.calls == 0


def test_backoff_that_would_overrun_deadline_is_not_started() -> None:
    config = RetryConfig(max_retries=3, initial_delay=5.0, max_delay=5.0)
    op = FlakyOperation([RateLimitedError("429")] * 3)

    async def run():
        return await retry(op, config, deadline=deadline_after(0.5))

    with pytest.raises(DeadlineExceededError):
        asyncio.run(run())
    assert op.calls == 1


def test_in_flight_attempt_is_cut_at_deadline() -> None:
    async def slow():
        await asyncio.sleep(5)
        return "late"

    async def run():
        return await retry(slow, NO_DELAY, deadline=deadline_after(0.05))

    with pytest.raises(DeadlineExceededError):
        asyncio.run(run())


def test_deadline_helper_disables_on_non_positive_values() -> None:
    assert deadline_after(None) is None
    assert deadline_after(0) is None
    assert deadline_after(-1) is None
    assert deadline_after(1.0) is not None


def test_jittered_delay_stays_within_half_to_full_delay() -> None:
    config = RetryConfig(initial_delay=2.0, max_delay=8.0, jitter=True)
    for attempt in range(5):
        delay = compute_delay(config, attempt)
        full = config.delay_for(attempt)
        assert full / 2 <= delay <= full
