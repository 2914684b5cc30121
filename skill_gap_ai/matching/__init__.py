"""Skill normalization, equivalence and matching."""

from .abbreviations import ABBREVIATIONS, AbbreviationTable, get_abbreviation_table
from .skill_graph import (
    SkillGraph,
    SkillNode,
    find_all_matches,
    find_exact_matches,
    find_implied_matches,
    find_semantic_matches,
    get_skill_graph,
    match_with_graph,
)
from .skill_matcher import compute_category_matches, compute_match, find_matching_skills, match
from .skill_normalizer import are_equivalent, canonical_key, normalize

__all__ = [
    "ABBREVIATIONS",
    "AbbreviationTable",
    "get_abbreviation_table",
    "normalize",
    "canonical_key",
    "are_equivalent",
    "match",
    "compute_match",
    "compute_category_matches",
    "find_matching_skills",
    "SkillGraph",
    "SkillNode",
    "get_skill_graph",
    "find_exact_matches",
    "find_semantic_matches",
    "find_implied_matches",
    "find_all_matches",
    "match_with_graph",
]
