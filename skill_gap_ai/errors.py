"""Error taxonomy for backend calls, parsing and pipeline execution."""

from typing import Optional

RATE_LIMIT_MARKERS = (
    "rate limit",
    "rate_limit",
    "429",
    "too many requests",
    "tokens per minute",
)
TRANSIENT_STATUS_CODES = frozenset({408, 409, 425, 429, 500, 502, 503, 504})


class SkillGapError(Exception):
    """Base class for all errors raised by this package."""


class BackendError(SkillGapError):
    """The LLM backend rejected the call (auth, bad request, unknown model...).

    Not retried; the fallback executor moves on to the next model candidate.
    """

    def __init__(self, message: str, *, model: Optional[str] = None, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.model = model
        self.status_code = status_code


class TransientBackendError(BackendError):
    """Rate limit, timeout or temporary outage: retried in place, then model-switched."""


class RateLimitedError(TransientBackendError):
    """Backend signalled throttling (HTTP 429 or equivalent)."""


class BackendTimeoutError(TransientBackendError):
    """Backend call timed out or the connection dropped."""


class AuthError(BackendError):
    """Credentials missing or rejected."""


class SchemaValidationError(SkillGapError):
    """Model output did not decode into the expected schema."""


class AllCandidatesExhaustedError(SkillGapError):
    """No model candidate returned any text at all."""

    def __init__(self, message: str = "all candidates exhausted", last_error: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.last_error = last_error


class DeadlineExceededError(SkillGapError):
    """The caller's overall deadline expired; no further attempt was started."""


class ChainStepError(SkillGapError):
    """A chain step failed; carries the step name for diagnostics."""

    def __init__(self, step_name: str, cause: BaseException) -> None:
        super().__init__(f"step '{step_name}' failed: {cause}")
        self.step_name = step_name
        self.cause = cause


def is_transient_error(error: BaseException) -> bool:
    """True for throttling/timeout style failures that are worth retrying on the same model."""
    if isinstance(error, TransientBackendError):
        return True
    if isinstance(error, BackendError):
        # Classified non-transient by the backend adapter
        return False
    status = getattr(error, "status_code", None)
    if isinstance(status, int) and status in TRANSIENT_STATUS_CODES:
        return True
    message = str(error).lower()
    return any(marker in message for marker in RATE_LIMIT_MARKERS)
