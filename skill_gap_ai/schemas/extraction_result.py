"""Result of one extraction pipeline run."""

from typing import NamedTuple

from skill_gap_ai.schemas.skill_taxonomy import SkillTaxonomy


class ExtractionResult(NamedTuple):
    taxonomy: SkillTaxonomy
    elapsed_ms: float
