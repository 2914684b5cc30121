import asyncio

import pytest

from skill_gap_ai.errors import (
    AllCandidatesExhaustedError,
    AuthError,
    DeadlineExceededError,
    RateLimitedError,
)
from skill_gap_ai.schemas.retry_config import RetryConfig
from skill_gap_ai.services.model_fallback import run_with_fallback
from skill_gap_ai.services.retry_policy import deadline_after

NO_DELAY = RetryConfig(max_retries=2, initial_delay=0.0, max_delay=0.0)


class ScriptedModels:
    """invoke(model) raises or returns per model; records every call."""

    def __init__(self, behaviour) -> None:
        self.behaviour = behaviour
        self.calls = []

    async def __call__(self, model):
        self.calls.append(model)
        outcome = self.behaviour[model]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def test_switches_model_after_exhausting_retries_on_transient_errors() -> None:
    invoke = ScriptedModels({"m1": RateLimitedError("429"), "m2": '{"technical": []}'})

    result = asyncio.run(run_with_fallback(["m1", "m2"], invoke, NO_DELAY))

    assert result == '{"technical": []}'
    assert invoke.calls == ["m1"] * NO_DELAY.max_attempts + ["m2"]


def test_non_transient_error_switches_model_without_retry() -> None:
    invoke = ScriptedModels({"m1": AuthError("bad key"), "m2": "text"})

    assert asyncio.run(run_with_fallback(["m1", "m2"], invoke, NO_DELAY)) == "text"
    assert invoke.calls == ["m1", "m2"]


def test_rejected_output_moves_to_next_candidate() -> None:
    invoke = ScriptedModels({"m1": "sorry, no json", "m2": "{json}"})

    result = asyncio.run(
        run_with_fallback(["m1", "m2"], invoke, NO_DELAY, accept=lambda text: text.startswith("{"))
    )

    assert result == "{json}"
    assert invoke.calls == ["m1", "m2"]


def test_returns_first_rejected_output_when_nothing_is_accepted() -> None:
    invoke = ScriptedModels({"m1": "first prose", "m2": RateLimitedError("429"), "m3": "other prose"})

    result = asyncio.run(run_with_fallback(["m1", "m2", "m3"], invoke, NO_DELAY, accept=lambda text: False))

    assert result == "first prose"


def test_raises_exhausted_only_when_no_candidate_returned_text() -> None:
    invoke = ScriptedModels({"m1": AuthError("bad key"), "m2": RateLimitedError("429")})

    with pytest.raises(AllCandidatesExhaustedError) as excinfo:
        asyncio.run(run_with_fallback(["m1", "m2"], invoke, NO_DELAY))
    assert isinstance(excinfo.value.last_error, RateLimitedError)


def test_empty_candidate_list_is_exhausted() -> None:
    with pytest.raises(AllCandidatesExhaustedError):
        asyncio.run(run_with_fallback([], ScriptedModels({}), NO_DELAY))


def test_deadline_expiry_is_not_treated_as_model_failure() -> None:
    config = RetryConfig(max_retries=3, initial_delay=5.0, max_delay=5.0)
    invoke = ScriptedModels({"m1": RateLimitedError("429"), "m2": "never reached"})

    async def run():
        return await run_with_fallback(["m1", "m2"], invoke, config, deadline=deadline_after(0.5))

    with pytest.raises(DeadlineExceededError):
        asyncio.run(run())
    assert invoke.calls == ["m1"]
