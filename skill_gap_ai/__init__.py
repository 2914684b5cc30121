"""Skill Gap AI: resilient LLM skill extraction and skills-gap matching."""

from .agents import extract_skill_taxonomy, extract_skill_taxonomy_sync, run_gap_analysis, run_gap_analysis_sync
from .matching import are_equivalent, compute_match, match, normalize
from .repair import repair
from .schemas import ExtractionResult, MatchResult, RetryConfig, SkillEntry, SkillGapReport, SkillTaxonomy

__version__ = "0.1.0"

__all__ = [
    "extract_skill_taxonomy",
    "extract_skill_taxonomy_sync",
    "run_gap_analysis",
    "run_gap_analysis_sync",
    "normalize",
    "are_equivalent",
    "match",
    "compute_match",
    "repair",
    "SkillEntry",
    "SkillTaxonomy",
    "MatchResult",
    "RetryConfig",
    "SkillGapReport",
    "ExtractionResult",
]
