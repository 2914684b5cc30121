"""Decode model text into a pydantic model, with an optional fallback creator."""

import json
from typing import Any, Callable, Generic, NamedTuple, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from skill_gap_ai.errors import SchemaValidationError
from skill_gap_ai.repair.json_repair import strip_code_fences
from skill_gap_ai.utils.logger import get_logger

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class ParseOutcome(NamedTuple):
    value: Any
    used_fallback: bool
    # False only when the fallback's result itself failed schema validation
    validated: bool


class OutputParser(Generic[ModelT]):
    """
    Strict path: strip code fences, json-decode, validate against `schema`.
    On failure, `fallback_creator(text)` supplies the value if configured;
    otherwise SchemaValidationError is raised.
    """

    def __init__(
        self,
        schema: Type[ModelT],
        name: str = "unnamed-parser",
        fallback_creator: Optional[Callable[[str], Any]] = None,
    ) -> None:
        self.schema = schema
        self.name = name
        self.fallback_creator = fallback_creator

    def _validate(self, data: Any) -> ModelT:
        if isinstance(data, self.schema):
            return data
        return self.schema.model_validate(data)

    def parse(self, text: str) -> Any:
        return self.parse_with_report(text).value

    def parse_with_report(self, text: str) -> ParseOutcome:
        try:
            value = self._validate(json.loads(strip_code_fences(text or "")))
            return ParseOutcome(value, used_fallback=False, validated=True)
        except (ValueError, RecursionError, ValidationError) as e:
            # RecursionError: pathologically nested input
            error: Exception = e

        if self.fallback_creator is None:
            raise SchemaValidationError(f"{self.name}: {error}") from error

        logger.warning("%s: direct decode failed, using fallback creator: %s", self.name, error)
        fallback = self.fallback_creator(text)
        try:
            return ParseOutcome(self._validate(fallback), used_fallback=True, validated=True)
        except ValidationError as e:
            logger.warning("%s: fallback result failed validation, returning it as is: %s", self.name, e)
            return ParseOutcome(fallback, used_fallback=True, validated=False)
