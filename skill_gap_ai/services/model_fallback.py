"""Model fallback executor: try model candidates in order, each under the retry policy."""

import time
from functools import partial
from typing import Any, Awaitable, Callable, Optional, Sequence, TypeVar

from skill_gap_ai.errors import AllCandidatesExhaustedError, DeadlineExceededError, is_transient_error
from skill_gap_ai.schemas.retry_config import RetryConfig
from skill_gap_ai.services.retry_policy import retry
from skill_gap_ai.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

_MISSING: Any = object()


async def run_with_fallback(
    candidates: Sequence[str],
    invoke: Callable[[str], Awaitable[T]],
    retry_config: Optional[RetryConfig] = None,
    *,
    accept: Optional[Callable[[T], bool]] = None,
    deadline: Optional[float] = None,
) -> T:
    """
    Call invoke(candidate) for each candidate in order until one output passes `accept`.

    Transient errors are retried on the same candidate; any error left after retries
    moves on to the next candidate. Outputs rejected by `accept` are soft failures:
    the first one is kept and returned if no candidate is accepted. Raises
    AllCandidatesExhaustedError only when no candidate returned anything.
    Candidates are tried strictly one at a time.
    """
    if not candidates:
        raise AllCandidatesExhaustedError("no model candidates configured")

    retained: Any = _MISSING
    retained_from: Optional[str] = None
    last_error: Optional[Exception] = None
    logger.info("Model fallback starting with candidates [%s]", ", ".join(candidates))

    for candidate in candidates:
        start = time.perf_counter()
        try:
            output = await retry(
                partial(invoke, candidate),
                retry_config,
                deadline=deadline,
                label=f"model '{candidate}'",
            )
        except DeadlineExceededError:
            logger.error("Deadline expired while trying model '%s'", candidate)
            raise
        except Exception as e:
            last_error = e
            kind = "transient" if is_transient_error(e) else "non-transient"
            logger.warning("Model '%s' failed (%s): %s", candidate, kind, e)
            continue

        elapsed_ms = (time.perf_counter() - start) * 1000
        if accept is None or accept(output):
            logger.info("Model '%s' succeeded in %.0fms", candidate, elapsed_ms)
            return output
        logger.warning("Model '%s' output lacks structured content; trying next candidate", candidate)
        if retained is _MISSING:
            retained, retained_from = output, candidate

    if retained is not _MISSING:
        logger.warning("No candidate produced structured content; using best-effort output from '%s'", retained_from)
        return retained

    logger.error("All model candidates failed; last error: %s", last_error)
    raise AllCandidatesExhaustedError(f"all candidates exhausted: {last_error}", last_error=last_error)
