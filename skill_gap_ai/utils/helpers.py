"""Helper utilities for the Skill Gap AI system."""

from typing import Iterable, List, Sequence

from skill_gap_ai.config import SKILL_CATEGORIES
from skill_gap_ai.schemas.skill_taxonomy import SkillEntry, SkillTaxonomy


def dedupe_entries(entries: Iterable[SkillEntry]) -> List[SkillEntry]:
    """Remove duplicate entries by case-insensitive name; first occurrence wins."""
    seen: set[str] = set()
    result: List[SkillEntry] = []
    for e in entries:
        key = e.name.casefold()
        if key not in seen:
            seen.add(key)
            result.append(e)
    return result


def merge_taxonomies(results: Sequence[SkillTaxonomy]) -> SkillTaxonomy:
    """Merge several taxonomies (e.g. one per chunk) into a new one without duplicates."""
    merged = {
        category: dedupe_entries(e for t in results for e in t.entries(category))
        for category in SKILL_CATEGORIES
    }
    return SkillTaxonomy(**merged)
