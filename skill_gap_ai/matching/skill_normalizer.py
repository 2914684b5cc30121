"""Skill name normalization and pairwise equivalence."""

from typing import Dict, Optional

from skill_gap_ai.matching.abbreviations import AbbreviationTable, get_abbreviation_table

# Lowercased variants -> canonical display form
SYNONYMS: Dict[str, str] = {
    "javascript": "JavaScript",
    "js": "JavaScript",
    "typescript": "TypeScript",
    "ts": "TypeScript",
    "react": "React",
    "reactjs": "React",
    "react.js": "React",
    "node": "Node.js",
    "nodejs": "Node.js",
    "node.js": "Node.js",
    "vue": "Vue.js",
    "vuejs": "Vue.js",
    "vue.js": "Vue.js",
    "angular": "Angular",
    "angularjs": "Angular",
    "angular.js": "Angular",
    "aws": "Amazon Web Services",
    "gcp": "Google Cloud Platform",
    "azure": "Microsoft Azure",
    "ml": "Machine Learning",
    "ai": "Artificial Intelligence",
    "nlp": "Natural Language Processing",
    "cv": "Computer Vision",
    "ci/cd": "CI/CD",
    "cicd": "CI/CD",
    "devops": "DevOps",
}


def normalize(skill: str, table: Optional[AbbreviationTable] = None) -> str:
    """
    Canonical form of a skill name: known abbreviation (exact key) -> full form,
    else a synonym collapse, else the trimmed name with its first letter upper-cased.
    """
    table = table or get_abbreviation_table()
    trimmed = (skill or "").strip()
    if not trimmed:
        return ""
    full = table.full_form(trimmed)
    if full is not None:
        return full
    synonym = SYNONYMS.get(trimmed.lower())
    if synonym is not None:
        return synonym
    return trimmed[0].upper() + trimmed[1:]


def canonical_key(skill: str, table: Optional[AbbreviationTable] = None) -> str:
    """Case-insensitive key of the normalized name, used for de-duplication."""
    return normalize(skill, table).casefold()


def _same(a: str, b: str) -> bool:
    return a.casefold() == b.casefold()


def _matches_one_way(raw: str, normalized_other: str, table: AbbreviationTable) -> bool:
    return (
        _same(normalize(raw, table), normalized_other)
        or _same(table.resolve(raw), normalized_other)
        or _same(table.abbreviation_of(raw), normalized_other)
    )


def are_equivalent(a: str, b: str, table: Optional[AbbreviationTable] = None) -> bool:
    """
    True if the names normalize to the same form, or one resolves (as an
    abbreviation or as a full form) to the other's normalized form. Checked in
    both directions, so the relation is reflexive and symmetric. It is pairwise
    and not transitive.
    """
    table = table or get_abbreviation_table()
    return _matches_one_way(a, normalize(b, table), table) or _matches_one_way(b, normalize(a, table), table)
