"""Exponential backoff settings for retried backend calls."""

from pydantic import BaseModel, ConfigDict, Field, model_validator

from skill_gap_ai.config import (
    RETRY_BACKOFF_FACTOR,
    RETRY_INITIAL_DELAY_SECONDS,
    RETRY_MAX_DELAY_SECONDS,
    RETRY_MAX_RETRIES,
)


class RetryConfig(BaseModel):
    """Delays are in seconds. An operation runs at most max_retries + 1 times."""

    model_config = ConfigDict(frozen=True)

    max_retries: int = Field(default=3, ge=0, description="Retries after the first attempt")
    initial_delay: float = Field(default=1.0, ge=0.0, description="Delay before the first retry")
    max_delay: float = Field(default=10.0, ge=0.0, description="Upper bound for any single delay")
    backoff_factor: float = Field(default=2.0, gt=1.0, description="Multiplier applied per attempt")
    jitter: bool = Field(default=False, description="Randomize each delay within [delay/2, delay]")

    @model_validator(mode="after")
    def _check_bounds(self) -> "RetryConfig":
        if self.max_delay < self.initial_delay:
            raise ValueError("max_delay must be >= initial_delay")
        return self

    @classmethod
    def from_settings(cls) -> "RetryConfig":
        return cls(
            max_retries=RETRY_MAX_RETRIES,
            initial_delay=RETRY_INITIAL_DELAY_SECONDS,
            max_delay=max(RETRY_MAX_DELAY_SECONDS, RETRY_INITIAL_DELAY_SECONDS),
            backoff_factor=RETRY_BACKOFF_FACTOR,
        )

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1

    def delay_for(self, attempt: int) -> float:
        """Delay after the failed attempt with zero-based index `attempt`."""
        return min(self.initial_delay * (self.backoff_factor ** attempt), self.max_delay)
