"""Nine-category skill taxonomy produced by the extraction pipeline."""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from skill_gap_ai.config import SKILL_CATEGORIES


class SkillEntry(BaseModel):
    """A single extracted skill; plain strings from legacy sources imply confidence 1.0."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Skill name as extracted")
    confidence: float = Field(default=1.0, ge=0.0, le=1.0, description="Extraction confidence in [0, 1]")

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value


SkillList = Tuple[SkillEntry, ...]


class SkillTaxonomy(BaseModel):
    """Skills grouped by the closed category set. All nine keys are always present."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    technical: SkillList = Field(default=(), description="Core technical abilities and knowledge areas")
    soft: SkillList = Field(default=(), description="Interpersonal and non-technical professional skills")
    tools: SkillList = Field(default=(), description="Software applications and utilities")
    frameworks: SkillList = Field(default=(), description="Programming frameworks and libraries")
    languages: SkillList = Field(default=(), description="Programming and markup languages")
    databases: SkillList = Field(default=(), description="Database technologies and data stores")
    methodologies: SkillList = Field(default=(), description="Work approaches and processes")
    platforms: SkillList = Field(default=(), description="Operating systems, cloud platforms, infrastructure")
    other: SkillList = Field(default=(), description="Skills that fit no other category")

    @field_validator(*SKILL_CATEGORIES, mode="before")
    @classmethod
    def _coerce_entries(cls, value: Any) -> Any:
        """Accept plain strings as entries; null becomes an empty category."""
        if value is None:
            return ()
        if not isinstance(value, (list, tuple)):
            return value
        return tuple({"name": item} if isinstance(item, str) else item for item in value)

    @classmethod
    def empty(cls) -> "SkillTaxonomy":
        return cls()

    @classmethod
    def from_names(
        cls,
        mapping: Mapping[str, Iterable[Any]],
        confidence: Optional[float] = None,
    ) -> "SkillTaxonomy":
        """
        Build from a category -> items mapping, ignoring unknown categories.
        confidence, when given, is applied to items that do not carry their own.
        """
        data: Dict[str, List[Any]] = {}
        for category in SKILL_CATEGORIES:
            items = []
            for item in mapping.get(category) or []:
                if isinstance(item, str):
                    if not item.strip():
                        continue
                    entry: Dict[str, Any] = {"name": item}
                    if confidence is not None:
                        entry["confidence"] = confidence
                    items.append(entry)
                elif isinstance(item, SkillEntry):
                    items.append(item)
                elif isinstance(item, dict):
                    entry = dict(item)
                    if confidence is not None:
                        entry.setdefault("confidence", confidence)
                    items.append(entry)
            data[category] = items
        return cls(**data)

    def entries(self, category: str) -> SkillList:
        if category not in SKILL_CATEGORIES:
            raise KeyError(category)
        return getattr(self, category)

    def names(self, category: str) -> List[str]:
        return [e.name for e in self.entries(category)]

    def all_names(self) -> List[str]:
        """Every skill name across categories, in category order."""
        return [e.name for category in SKILL_CATEGORIES for e in self.entries(category)]

    def total(self) -> int:
        return sum(len(self.entries(c)) for c in SKILL_CATEGORIES)

    def is_empty(self) -> bool:
        return self.total() == 0

    def to_record(self, include_confidence: bool = True) -> Dict[str, List[Any]]:
        """Transport shape: exactly the nine category keys."""
        if include_confidence:
            return {c: [e.model_dump() for e in self.entries(c)] for c in SKILL_CATEGORIES}
        return {c: self.names(c) for c in SKILL_CATEGORIES}
