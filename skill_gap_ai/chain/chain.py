"""Named sequence of processing steps; each step's output feeds the next."""

import inspect
import time
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence, Tuple

from skill_gap_ai.errors import ChainStepError
from skill_gap_ai.utils.logger import get_logger

logger = get_logger(__name__)

StepFn = Callable[[Any], Any]


@dataclass(frozen=True)
class PipelineStep:
    """A named step. `fn` may be a plain function or a coroutine function."""

    name: str
    fn: StepFn

    async def __call__(self, value: Any) -> Any:
        result = self.fn(value)
        if inspect.isawaitable(result):
            result = await result
        return result


class Chain:
    """Runs steps in order. A failing step aborts the run with ChainStepError."""

    def __init__(self, name: str = "unnamed-chain", steps: Optional[Sequence[PipelineStep]] = None) -> None:
        self.name = name
        self._steps: List[PipelineStep] = list(steps or [])

    def add_step(self, fn: StepFn, name: Optional[str] = None) -> "Chain":
        step_name = name or getattr(fn, "__name__", None) or f"step-{len(self._steps) + 1}"
        self._steps.append(PipelineStep(step_name, fn))
        return self

    @property
    def steps(self) -> Tuple[PipelineStep, ...]:
        return tuple(self._steps)

    def __len__(self) -> int:
        return len(self._steps)

    async def run(self, initial_input: Any) -> Any:
        """Feed `initial_input` through every step. An empty chain returns the input unchanged."""
        value = initial_input
        total = len(self._steps)
        logger.info("Chain '%s' starting (%s steps)", self.name, total)
        for index, step in enumerate(self._steps, start=1):
            start = time.perf_counter()
            try:
                value = await step(value)
            except Exception as e:
                logger.error("Chain '%s' step %s/%s '%s' failed: %s", self.name, index, total, step.name, e)
                raise ChainStepError(step.name, e) from e
            logger.debug(
                "Chain '%s' step %s/%s '%s' done in %.0fms",
                self.name,
                index,
                total,
                step.name,
                (time.perf_counter() - start) * 1000,
            )
        logger.info("Chain '%s' finished", self.name)
        return value
