"""Skills-gap report: résumé vs job taxonomies and their match results."""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field

from skill_gap_ai.schemas.match_result import MatchResult
from skill_gap_ai.schemas.skill_taxonomy import SkillTaxonomy


class SkillGapReport(BaseModel):
    """Output of the gap analysis agent. Job skills are the reference side."""

    model_config = ConfigDict(frozen=True)

    match: MatchResult = Field(default_factory=MatchResult, description="Match over all categories")
    category_matches: Dict[str, MatchResult] = Field(
        default_factory=dict, description="Match per category that has reference skills"
    )
    resume_skills: SkillTaxonomy = Field(default_factory=SkillTaxonomy, description="Candidate-side taxonomy")
    job_skills: SkillTaxonomy = Field(default_factory=SkillTaxonomy, description="Reference-side taxonomy")
    processing_time_ms: float = Field(default=0.0, ge=0.0, description="Wall-clock time of both extractions")

    def to_record(self) -> Dict[str, Any]:
        return {
            "match": self.match.to_record(),
            "categoryMatches": {k: v.to_record() for k, v in self.category_matches.items()},
            "resumeSkills": self.resume_skills.to_record(),
            "jobSkills": self.job_skills.to_record(),
            "processingTimeMs": self.processing_time_ms,
        }
