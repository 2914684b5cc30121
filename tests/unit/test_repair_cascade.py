import json

from skill_gap_ai.config import SKILL_CATEGORIES
from skill_gap_ai.repair.keyword_categorizer import categorize_keywords
from skill_gap_ai.repair.repair_cascade import (
    has_structured_content,
    mine_labeled_arrays,
    parse_direct,
    parse_embedded,
    parse_repaired,
    repair,
)
from skill_gap_ai.schemas.category_schema import SKILL_TAXONOMY_SCHEMA
from skill_gap_ai.schemas.skill_taxonomy import SkillTaxonomy


def _record(**categories):
    return {c: list(categories.get(c, [])) for c in SKILL_CATEGORIES}


def test_direct_parse_returns_well_formed_input_unchanged() -> None:
    record = _record(technical=["API design"], languages=["Python", "Go"], soft=["communication"])

    taxonomy = repair(json.dumps(record))

    assert taxonomy.to_record(include_confidence=False) == record
    assert all(e.confidence == 1.0 for e in taxonomy.entries("languages"))


def test_direct_parse_accepts_code_fenced_output_and_confidence_objects() -> None:
    record = _record(tools=[{"name": "Git", "confidence": 0.8}])
    taxonomy = repair(f"```json\n{json.dumps(record)}\n```")

    assert taxonomy.entries("tools")[0].name == "Git"
    assert taxonomy.entries("tools")[0].confidence == 0.8


def test_embedded_object_in_prose_is_extracted() -> None:
    raw = (
        'Here are the skills: {"technical":["ML"],"soft":[],"tools":[],"frameworks":[],'
        '"languages":[],"databases":[],"methodologies":[],"platforms":[],"other":[]}'
    )

    assert parse_direct(raw, SKILL_TAXONOMY_SCHEMA) is None
    assert parse_embedded(raw, SKILL_TAXONOMY_SCHEMA) is not None
    taxonomy = repair(raw)
    assert taxonomy.names("technical") == ["ML"]
    assert taxonomy.total() == 1


def test_trailing_comma_is_repaired_and_missing_keys_backfilled() -> None:
    raw = '{"technical": ["Python", "AWS",], "soft": []}'

    assert parse_embedded(raw, SKILL_TAXONOMY_SCHEMA) is None
    assert parse_repaired(raw, SKILL_TAXONOMY_SCHEMA) is not None
    taxonomy = repair(raw)
    assert taxonomy.names("technical") == ["Python", "AWS"]
    assert set(taxonomy.to_record()) == set(SKILL_CATEGORIES)
    assert all(not taxonomy.entries(c) for c in SKILL_CATEGORIES if c != "technical")


def test_labeled_arrays_are_mined_from_non_json_text() -> None:
    raw = "Technical skills: ['Python', 'Airflow']\nSoft: [teamwork, mentoring]\nnothing else"

    mined = mine_labeled_arrays(raw, SKILL_TAXONOMY_SCHEMA)
    assert mined["technical"] == ["Python", "Airflow"]
    assert mined["soft"] == ["teamwork", "mentoring"]
    taxonomy = repair(raw)
    assert taxonomy.names("technical") == ["Python", "Airflow"]
    assert taxonomy.entries("soft")[0].confidence == 0.7


def test_keyword_fallback_categorizes_free_text() -> None:
    taxonomy = repair("I know Python and leadership, plus Docker and Kubernetes.")

    assert taxonomy.names("languages") == ["Python"]
    assert taxonomy.names("soft") == ["leadership"]
    assert taxonomy.names("tools") == ["Docker", "Kubernetes"]


def test_keyword_fallback_prefers_quoted_items_and_skips_labels() -> None:
    result = categorize_keywords('"technical" -> "React" and "PostgreSQL" and "Negotiation skills"')

    assert result["frameworks"] == ["React"]
    assert result["databases"] == ["PostgreSQL"]
    assert result["soft"] == ["Negotiation skills"]
    assert "technical" not in result["technical"]


def test_keyword_fallback_caps_loose_words_per_category() -> None:
    words = " ".join(f"Widget{i}" for i in range(30))
    assert len(categorize_keywords(words, limit=5)["technical"]) == 5


def test_repair_never_raises_and_always_has_nine_keys() -> None:
    samples = [None, "", "   ", "}{", "[1, 2, 3]", '{"unrelated": true}', "null", 42, "{" * 500, '"', "a: [b"]
    for raw in samples:
        taxonomy = repair(raw)
        assert isinstance(taxonomy, SkillTaxonomy)
        assert list(taxonomy.to_record()) == list(SKILL_CATEGORIES)


def test_duplicates_are_removed_case_insensitively() -> None:
    taxonomy = repair('{"technical": ["Python", "python", "PYTHON",], "soft": []}')
    assert taxonomy.names("technical") == ["Python"]


def test_has_structured_content() -> None:
    assert has_structured_content('prefix {"technical": ["Go"]} suffix')
    assert has_structured_content('{"technical": ["Go",]')
    assert not has_structured_content("Python, Go and Rust")
    assert not has_structured_content('{"unrelated": 1}')
    assert not has_structured_content("")
