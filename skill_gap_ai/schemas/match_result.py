"""Result of matching a reference skill set against a candidate skill set."""

from typing import Any, Dict, FrozenSet

from pydantic import BaseModel, ConfigDict, Field, model_validator


class MatchResult(BaseModel):
    """Matched/missing reference skills and the match percentage (0-100)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    match_percentage: float = Field(default=0.0, ge=0.0, le=100.0, alias="matchPercentage")
    matched_skills: FrozenSet[str] = Field(default_factory=frozenset, alias="matchedSkills")
    missing_skills: FrozenSet[str] = Field(default_factory=frozenset, alias="missingSkills")

    @model_validator(mode="after")
    def _check_disjoint(self) -> "MatchResult":
        overlap = self.matched_skills & self.missing_skills
        if overlap:
            raise ValueError(f"skills cannot be both matched and missing: {sorted(overlap)}")
        return self

    def to_record(self) -> Dict[str, Any]:
        """Transport shape with the camelCase field names used by stored data."""
        return {
            "matchPercentage": self.match_percentage,
            "matchedSkills": sorted(self.matched_skills, key=str.lower),
            "missingSkills": sorted(self.missing_skills, key=str.lower),
        }
