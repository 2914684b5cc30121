"""Explicit structural description of the taxonomy transport shape.

Used by the repair cascade to check decoded JSON without relying on model
introspection: a top-level object whose category keys hold arrays of skill
names (strings) or {"name": ..., "confidence": ...} objects.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from skill_gap_ai.config import SKILL_CATEGORIES


def _coerce_item(item: Any) -> Optional[Any]:
    """Return a usable item (str or entry dict) or None if the item is not a skill."""
    if isinstance(item, str):
        return item.strip() or None
    if isinstance(item, dict):
        name = item.get("name")
        if not isinstance(name, str) or not name.strip():
            return None
        entry: Dict[str, Any] = {"name": name.strip()}
        confidence = item.get("confidence")
        if isinstance(confidence, (int, float)) and not isinstance(confidence, bool):
            entry["confidence"] = min(1.0, max(0.0, float(confidence)))
        return entry
    return None


def item_name(item: Any) -> str:
    return item["name"] if isinstance(item, dict) else item


@dataclass(frozen=True)
class CategorySchema:
    """Required category keys; every key maps to an array of skill items."""

    required_keys: Tuple[str, ...] = SKILL_CATEGORIES

    def problems(self, data: Any) -> List[str]:
        """Strict check. An empty list means `data` conforms exactly."""
        if not isinstance(data, dict):
            return [f"expected object, got {type(data).__name__}"]
        issues: List[str] = []
        for key in self.required_keys:
            if key not in data:
                issues.append(f"missing key '{key}'")
            elif not isinstance(data[key], list):
                issues.append(f"'{key}' is not an array")
            elif any(_coerce_item(item) is None for item in data[key]):
                issues.append(f"'{key}' holds a non-skill item")
        for key in data:
            if key not in self.required_keys:
                issues.append(f"unexpected key '{key}'")
        return issues

    def conforms(self, data: Any) -> bool:
        return not self.problems(data)

    def present_keys(self, data: Any) -> List[str]:
        """Category keys that exist in `data` and hold arrays."""
        if not isinstance(data, dict):
            return []
        return [key for key in self.required_keys if isinstance(data.get(key), list)]

    def extract(self, data: Dict[str, Any]) -> Dict[str, List[Any]]:
        """Keep valid items of every category key; missing or malformed keys become empty."""
        result: Dict[str, List[Any]] = {}
        for key in self.required_keys:
            raw = data.get(key)
            items = raw if isinstance(raw, list) else []
            result[key] = [c for c in (_coerce_item(item) for item in items) if c is not None]
        return result


SKILL_TAXONOMY_SCHEMA = CategorySchema()
