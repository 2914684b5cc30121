import pytest
from pydantic import ValidationError

from skill_gap_ai.config import SKILL_CATEGORIES
from skill_gap_ai.schemas.match_result import MatchResult
from skill_gap_ai.schemas.retry_config import RetryConfig
from skill_gap_ai.schemas.skill_taxonomy import SkillTaxonomy
from skill_gap_ai.utils.helpers import merge_taxonomies


def test_taxonomy_accepts_plain_strings_and_null_categories() -> None:
    taxonomy = SkillTaxonomy.model_validate({"technical": [" Python ", {"name": "Go", "confidence": 0.4}], "soft": None})

    assert taxonomy.names("technical") == ["Python", "Go"]
    assert taxonomy.entries("technical")[0].confidence == 1.0
    assert taxonomy.entries("technical")[1].confidence == 0.4
    assert taxonomy.entries("soft") == ()


def test_taxonomy_rejects_unknown_keys_and_bad_confidence() -> None:
    with pytest.raises(ValidationError):
        SkillTaxonomy.model_validate({"technical": [], "hobbies": ["chess"]})
    with pytest.raises(ValidationError):
        SkillTaxonomy.model_validate({"technical": [{"name": "Go", "confidence": 1.5}]})


def test_empty_taxonomy_has_all_nine_keys() -> None:
    record = SkillTaxonomy.empty().to_record()
    assert list(record) == list(SKILL_CATEGORIES)
    assert all(values == [] for values in record.values())
    assert SkillTaxonomy.empty().is_empty()


def test_entries_rejects_unknown_category() -> None:
    with pytest.raises(KeyError):
        SkillTaxonomy.empty().entries("hobbies")


def test_merge_taxonomies_dedupes_per_category() -> None:
    first = SkillTaxonomy.from_names({"languages": ["Python"], "tools": ["Git"]})
    second = SkillTaxonomy.from_names({"languages": ["python", "Rust"]})

    merged = merge_taxonomies([first, second])

    assert merged.names("languages") == ["Python", "Rust"]
    assert merged.names("tools") == ["Git"]


def test_match_result_matched_and_missing_must_be_disjoint() -> None:
    with pytest.raises(ValidationError):
        MatchResult(match_percentage=50, matched_skills={"Go"}, missing_skills={"Go"})


def test_match_result_record_uses_camel_case_names() -> None:
    record = MatchResult(match_percentage=50, matched_skills={"b", "A"}, missing_skills={"c"}).to_record()
    assert record == {"matchPercentage": 50, "matchedSkills": ["A", "b"], "missingSkills": ["c"]}
    assert MatchResult.model_validate(record).matched_skills == {"A", "b"}


def test_retry_config_bounds() -> None:
    with pytest.raises(ValidationError):
        RetryConfig(backoff_factor=1.0)
    with pytest.raises(ValidationError):
        RetryConfig(initial_delay=5.0, max_delay=1.0)
    with pytest.raises(ValidationError):
        RetryConfig(max_retries=-1)


def test_retry_delays_grow_and_are_capped() -> None:
    config = RetryConfig(initial_delay=2.0, max_delay=15.0, backoff_factor=1.5)
    assert [config.delay_for(i) for i in range(3)] == [2.0, 3.0, 4.5]
    assert config.delay_for(10) == 15.0
    assert config.max_attempts == 4
