"""
Output repair cascade: turn arbitrary model text into a SkillTaxonomy.

Strategies run in order, stopping at the first one that yields a usable result:

1. direct-parse      the text (minus code fences) is JSON conforming to the schema
2. embedded-object   a balanced {...} inside prose decodes and has category keys
3. syntax-repair     the object decodes after repair_json_syntax()
4. labeled-arrays    regex mining of `<category> ... [ items ]` fragments
5. keyword-fallback  quoted strings / loose words sorted by keyword patterns

repair() never raises; when everything fails it returns the empty taxonomy.
"""

import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from pydantic import ValidationError

from skill_gap_ai.repair.json_repair import (
    iter_object_spans,
    loads_or_none,
    repair_json_syntax,
    strip_code_fences,
)
from skill_gap_ai.repair.keyword_categorizer import categorize_keywords
from skill_gap_ai.schemas.category_schema import SKILL_TAXONOMY_SCHEMA, CategorySchema, item_name
from skill_gap_ai.schemas.skill_taxonomy import SkillTaxonomy
from skill_gap_ai.utils.logger import get_logger

logger = get_logger(__name__)

CategoryItems = Dict[str, List[Any]]

_NAME_FIELD_RE = re.compile(r'"name"\s*:\s*"([^"]+)"')
_INLINE_OBJECT_RE = re.compile(r"\{[^{}]*\}")
_DOUBLE_QUOTED_RE = re.compile(r'"([^"\n]+)"')
_SINGLE_QUOTED_RE = re.compile(r"'([^'\n]+)'")
_MAX_ITEM_LENGTH = 80


@dataclass(frozen=True)
class RepairStage:
    name: str
    run: Callable[[str, CategorySchema], Optional[CategoryItems]]
    confidence: float
    # Structural stages trust an explicitly empty result; heuristic ones do not
    accept_empty: bool


def parse_direct(raw_text: str, schema: CategorySchema) -> Optional[CategoryItems]:
    data = loads_or_none(strip_code_fences(raw_text))
    if data is None:
        return None
    problems = schema.problems(data)
    if problems:
        logger.debug("Direct parse rejected: %s", "; ".join(problems))
        return None
    return schema.extract(data)


def parse_embedded(raw_text: str, schema: CategorySchema) -> Optional[CategoryItems]:
    for span in iter_object_spans(raw_text):
        data = loads_or_none(span)
        if isinstance(data, dict) and schema.present_keys(data):
            return schema.extract(data)
    return None


def parse_repaired(raw_text: str, schema: CategorySchema) -> Optional[CategoryItems]:
    for span in iter_object_spans(raw_text):
        data = loads_or_none(repair_json_syntax(span))
        if isinstance(data, dict) and schema.present_keys(data):
            return schema.extract(data)
    return None


def _array_items(body: str) -> List[str]:
    """Items of an array body: object names, then quoted strings, else comma-separated."""
    names = _NAME_FIELD_RE.findall(body)
    rest = _INLINE_OBJECT_RE.sub(" ", body)
    quoted = _DOUBLE_QUOTED_RE.findall(rest) or _SINGLE_QUOTED_RE.findall(rest)
    if not names and not quoted:
        quoted = [part.strip(" \t\r\n\"'") for part in rest.split(",")]
    items = [item.strip() for item in names + quoted]
    return [item for item in items if item and len(item) <= _MAX_ITEM_LENGTH]


def mine_labeled_arrays(raw_text: str, schema: CategorySchema) -> Optional[CategoryItems]:
    result: CategoryItems = {key: [] for key in schema.required_keys}
    for key in schema.required_keys:
        pattern = re.compile(
            rf"(?<![\w-]){re.escape(key)}(?![\w-])[^\[\]{{}}\n]{{0,40}}\[([^\]]*)(?:\]|$)",
            re.IGNORECASE,
        )
        for match in pattern.finditer(raw_text):
            items = _array_items(match.group(1))
            if items:
                result[key] = items
                break
    return result


def keyword_fallback(raw_text: str, schema: CategorySchema) -> Optional[CategoryItems]:
    categorized = categorize_keywords(raw_text)
    return {key: categorized.get(key, []) for key in schema.required_keys}


STAGES = (
    RepairStage("direct-parse", parse_direct, 1.0, accept_empty=True),
    RepairStage("embedded-object", parse_embedded, 1.0, accept_empty=True),
    RepairStage("syntax-repair", parse_repaired, 0.9, accept_empty=True),
    RepairStage("labeled-arrays", mine_labeled_arrays, 0.7, accept_empty=False),
    RepairStage("keyword-fallback", keyword_fallback, 0.5, accept_empty=False),
)


def _dedupe_items(items: List[Any]) -> List[Any]:
    seen: set = set()
    result: List[Any] = []
    for item in items:
        key = item_name(item).casefold()
        if key not in seen:
            seen.add(key)
            result.append(item)
    return result


def _to_taxonomy(items: CategoryItems, stage: RepairStage) -> Optional[SkillTaxonomy]:
    cleaned = {key: _dedupe_items(values) for key, values in items.items()}
    if not stage.accept_empty and not any(cleaned.values()):
        return None
    try:
        return SkillTaxonomy.from_names(cleaned, confidence=stage.confidence)
    except ValidationError as e:
        logger.warning("Repair stage '%s' produced an invalid taxonomy: %s", stage.name, e)
        return None


def has_structured_content(text: str) -> bool:
    """Cheap pre-check used to accept model output: any object with a category key, repaired or not."""
    if not text or "{" not in text:
        return False
    schema = SKILL_TAXONOMY_SCHEMA
    return parse_embedded(text, schema) is not None or parse_repaired(text, schema) is not None


def repair(raw_text: Any, schema: CategorySchema = SKILL_TAXONOMY_SCHEMA) -> SkillTaxonomy:
    """Run the cascade. Total: any input (including None) yields a SkillTaxonomy."""
    if raw_text is None:
        text = ""
    elif isinstance(raw_text, str):
        text = raw_text
    else:
        text = str(raw_text)

    if not text.strip():
        logger.warning("Repair cascade received empty text; returning empty taxonomy")
        return SkillTaxonomy.empty()

    for stage in STAGES:
        try:
            items = stage.run(text, schema)
        except Exception:
            logger.exception("Repair stage '%s' raised; trying next stage", stage.name)
            continue
        if items is None:
            continue
        taxonomy = _to_taxonomy(items, stage)
        if taxonomy is None:
            continue
        if stage.name != "direct-parse":
            logger.info("Recovered %s skills via '%s'", taxonomy.total(), stage.name)
        return taxonomy

    logger.warning("All repair stages failed; returning empty taxonomy")
    return SkillTaxonomy.empty()
