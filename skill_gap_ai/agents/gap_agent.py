"""Gap Agent: extract résumé and job taxonomies concurrently and compare them."""

import asyncio
import time
from typing import Optional, Sequence

from skill_gap_ai.agents.extractor_agent import extract_skill_taxonomy
from skill_gap_ai.matching.skill_matcher import compute_category_matches, compute_match
from skill_gap_ai.schemas.gap_report import SkillGapReport
from skill_gap_ai.schemas.retry_config import RetryConfig
from skill_gap_ai.services.llm_backend import LLMBackend
from skill_gap_ai.utils.logger import get_logger

logger = get_logger(__name__)


async def run_gap_analysis(
    resume_text: str,
    job_text: str,
    *,
    backend: Optional[LLMBackend] = None,
    candidates: Optional[Sequence[str]] = None,
    retry_config: Optional[RetryConfig] = None,
    deadline_seconds: Optional[float] = None,
) -> SkillGapReport:
    """
    Run both extractions in parallel (each keeps its own sequential model/retry
    flow), then match job skills (reference) against résumé skills (candidate).
    """
    start = time.perf_counter()
    options = dict(
        backend=backend,
        candidates=candidates,
        retry_config=retry_config,
        deadline_seconds=deadline_seconds,
    )
    resume_result, job_result = await asyncio.gather(
        extract_skill_taxonomy(resume_text, "resume", **options),
        extract_skill_taxonomy(job_text, "job", **options),
    )
    if job_result.taxonomy.is_empty():
        logger.warning("No job skills extracted; match percentage will be 0")

    report = SkillGapReport(
        match=compute_match(job_result.taxonomy, resume_result.taxonomy),
        category_matches=compute_category_matches(job_result.taxonomy, resume_result.taxonomy),
        resume_skills=resume_result.taxonomy,
        job_skills=job_result.taxonomy,
        processing_time_ms=(time.perf_counter() - start) * 1000,
    )
    logger.info(
        "Gap Agent finished: match=%s%% missing=%s elapsed_ms=%.0f",
        int(report.match.match_percentage),
        len(report.match.missing_skills),
        report.processing_time_ms,
    )
    return report


def run_gap_analysis_sync(resume_text: str, job_text: str, **kwargs) -> SkillGapReport:
    """Sync wrapper for scripts and non-async callers."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(run_gap_analysis(resume_text, job_text, **kwargs))
    finally:
        loop.close()
