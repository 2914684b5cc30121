"""Set-level skill matching: matched / missing skills and match percentage."""

import math
from typing import Dict, Iterable, List, Optional

from skill_gap_ai.config import SKILL_CATEGORIES
from skill_gap_ai.matching.abbreviations import AbbreviationTable, get_abbreviation_table
from skill_gap_ai.matching.skill_normalizer import are_equivalent, canonical_key, normalize
from skill_gap_ai.schemas.match_result import MatchResult
from skill_gap_ai.schemas.skill_taxonomy import SkillTaxonomy
from skill_gap_ai.utils.logger import get_logger

logger = get_logger(__name__)


def _round_half_up(value: float) -> float:
    return float(math.floor(value + 0.5))


def match(
    reference: Iterable[str],
    candidate: Iterable[str],
    table: Optional[AbbreviationTable] = None,
) -> MatchResult:
    """
    For each reference skill (e.g. job requirement), look for an equivalent
    candidate skill (e.g. résumé). Reference skills that normalize to the same
    form count once. Percentage = matched / distinct reference skills, rounded
    half-up to a whole number; 0 when the reference side is empty.
    """
    table = table or get_abbreviation_table()
    candidates = [c.strip() for c in candidate if c and c.strip()]
    matched: Dict[str, str] = {}
    missing: Dict[str, str] = {}

    for skill in reference:
        label = (skill or "").strip()
        if not label:
            continue
        key = canonical_key(label, table)
        if key in matched or key in missing:
            continue
        if any(are_equivalent(label, other, table) for other in candidates):
            matched[key] = label
        else:
            missing[key] = label

    total = len(matched) + len(missing)
    percentage = _round_half_up(100.0 * len(matched) / total) if total else 0.0
    return MatchResult(
        match_percentage=percentage,
        matched_skills=frozenset(matched.values()),
        missing_skills=frozenset(missing.values()),
    )


def compute_match(reference: SkillTaxonomy, candidate: SkillTaxonomy) -> MatchResult:
    """Match over all categories of both taxonomies."""
    result = match(reference.all_names(), candidate.all_names())
    logger.info(
        "Skill match: %s%% (matched=%s missing=%s)",
        int(result.match_percentage),
        len(result.matched_skills),
        len(result.missing_skills),
    )
    return result


def compute_category_matches(reference: SkillTaxonomy, candidate: SkillTaxonomy) -> Dict[str, MatchResult]:
    """
    Per-category match for every category with reference skills. The candidate
    side spans all categories, since the same skill may be filed differently.
    """
    candidate_names = candidate.all_names()
    return {
        category: match(reference.names(category), candidate_names)
        for category in SKILL_CATEGORIES
        if reference.entries(category)
    }


def find_matching_skills(list_a: Iterable[str], list_b: Iterable[str]) -> List[str]:
    """Normalized names from list_a that have an equivalent in list_b, without duplicates."""
    others = [b for b in list_b if b and b.strip()]
    matches: List[str] = []
    for a in list_a:
        if not a or not a.strip():
            continue
        name = normalize(a)
        if name not in matches and any(are_equivalent(a, b) for b in others):
            matches.append(name)
    return matches
