"""Schema exports."""

from .category_schema import SKILL_TAXONOMY_SCHEMA, CategorySchema
from .extraction_result import ExtractionResult
from .gap_report import SkillGapReport
from .match_result import MatchResult
from .retry_config import RetryConfig
from .skill_taxonomy import SkillEntry, SkillTaxonomy

__all__ = [
    "SkillEntry",
    "SkillTaxonomy",
    "MatchResult",
    "RetryConfig",
    "SkillGapReport",
    "ExtractionResult",
    "CategorySchema",
    "SKILL_TAXONOMY_SCHEMA",
]
