from skill_gap_ai.matching.abbreviations import ABBREVIATIONS, AbbreviationTable, get_abbreviation_table
from skill_gap_ai.matching.skill_matcher import (
    compute_category_matches,
    compute_match,
    find_matching_skills,
    match,
)
from skill_gap_ai.matching.skill_normalizer import are_equivalent, normalize
from skill_gap_ai.schemas.skill_taxonomy import SkillTaxonomy


def test_normalize_resolves_abbreviations_synonyms_and_capitalizes() -> None:
    assert normalize("  AWS ") == "Amazon Web Services"
    assert normalize("reactjs") == "React"
    assert normalize("node.js") == "Node.js"
    assert normalize("cicd") == "CI/CD"
    assert normalize("docker") == "Docker"
    assert normalize("") == ""


def test_abbreviation_lookup_is_case_sensitive() -> None:
    table = get_abbreviation_table()
    assert table.full_form("K8s") == "Kubernetes"
    assert table.full_form("k8s") is None
    assert table.abbreviation_of("kubernetes") == "K8s"
    assert table.resolve("Rust") == "Rust"


def test_abbreviation_table_is_read_only_and_shared() -> None:
    table = get_abbreviation_table()
    assert table is get_abbreviation_table()
    assert len(table) == len(ABBREVIATIONS)
    try:
        table._forward["NEW"] = "thing"
    except TypeError:
        pass
    else:
        raise AssertionError("table should not be mutable")


def test_abbreviation_pairs_are_equivalent_in_both_directions() -> None:
    for abbreviation, full in ABBREVIATIONS.items():
        assert are_equivalent(full, abbreviation)
        assert are_equivalent(abbreviation, full)


def test_equivalence_is_reflexive_and_case_insensitive() -> None:
    for skill in ["Python", "CI/CD", "js", "Machine Learning", "c++"]:
        assert are_equivalent(skill, skill)
    assert are_equivalent("python", "Python")
    assert are_equivalent("JS", "javascript")
    assert are_equivalent("ci/cd", "Continuous Integration/Continuous Deployment")
    assert not are_equivalent("Java", "JavaScript")


def test_custom_table_can_be_injected() -> None:
    table = AbbreviationTable({"PG": "PostgreSQL"})
    assert are_equivalent("PG", "postgresql", table)
    assert not are_equivalent("PG", "postgresql")


def test_match_scenario_python_aws_docker() -> None:
    result = match({"Python", "AWS", "Docker"}, {"python", "Amazon Web Services"})

    assert result.matched_skills == {"Python", "AWS"}
    assert result.missing_skills == {"Docker"}
    assert result.match_percentage == 67


def test_match_against_itself_is_full_match() -> None:
    skills = ["Python", "Kubernetes", "communication", "ML"]
    result = match(skills, skills)

    assert result.match_percentage == 100
    assert result.missing_skills == frozenset()


def test_match_of_empty_sets_is_zero() -> None:
    result = match([], [])
    assert result.match_percentage == 0
    assert result.matched_skills == frozenset()


def test_match_counts_equivalent_reference_skills_once() -> None:
    result = match(["JS", "JavaScript", "Go"], ["javascript"])

    assert len(result.matched_skills) == 1
    assert result.missing_skills == {"Go"}
    assert result.match_percentage == 50


def test_match_rounds_half_up() -> None:
    # 1 of 8 = 12.5%
    reference = ["Python"] + [f"Skill{i}" for i in range(7)]
    assert match(reference, ["python"]).match_percentage == 13


def test_compute_match_over_taxonomies() -> None:
    job = SkillTaxonomy.from_names({"languages": ["Python", "Go"], "platforms": ["AWS"], "soft": ["Leadership"]})
    resume = SkillTaxonomy.from_names({"technical": ["python"], "tools": ["Amazon Web Services"]})

    overall = compute_match(job, resume)
    assert overall.matched_skills == {"Python", "AWS"}
    assert overall.match_percentage == 50

    per_category = compute_category_matches(job, resume)
    assert set(per_category) == {"languages", "platforms", "soft"}
    assert per_category["platforms"].match_percentage == 100
    assert per_category["soft"].missing_skills == {"Leadership"}


def test_find_matching_skills_returns_normalized_names() -> None:
    assert find_matching_skills(["js", "Rust", "aws"], ["JavaScript", "AWS"]) == ["JavaScript", "Amazon Web Services"]
