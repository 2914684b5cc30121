"""Extractor Agent: clean document text, run the extraction chain, return a SkillTaxonomy."""

import asyncio
import time
from typing import List, Optional, Sequence

from skill_gap_ai.agents.prompts import EXTRACTION_SYSTEM_PROMPT, build_extraction_prompt
from skill_gap_ai.chain.chain import Chain
from skill_gap_ai.chain.output_parser import OutputParser
from skill_gap_ai.config import (
    DOCUMENT_KINDS,
    EXTRACTION_DEADLINE_SECONDS,
    LLM_MAX_TOKENS,
    LLM_TEMPERATURE,
    MAX_CHUNK_CHARS,
    MIN_DOCUMENT_CHARS,
    MODEL_CANDIDATES,
    OPENAI_API_KEY,
)
from skill_gap_ai.errors import ChainStepError
from skill_gap_ai.repair.repair_cascade import has_structured_content, repair
from skill_gap_ai.schemas.extraction_result import ExtractionResult
from skill_gap_ai.schemas.retry_config import RetryConfig
from skill_gap_ai.schemas.skill_taxonomy import SkillTaxonomy
from skill_gap_ai.services.llm_backend import LLMBackend, OpenAIChatBackend
from skill_gap_ai.services.model_fallback import run_with_fallback
from skill_gap_ai.services.retry_policy import deadline_after
from skill_gap_ai.services.text_cleaner import clean_document_text, split_into_chunks
from skill_gap_ai.utils.helpers import merge_taxonomies
from skill_gap_ai.utils.logger import get_logger

logger = get_logger(__name__)


def build_extraction_chain(
    document_kind: str,
    backend: LLMBackend,
    candidates: Sequence[str],
    retry_config: RetryConfig,
    deadline: Optional[float] = None,
    chunk_index: Optional[int] = None,
    total_chunks: Optional[int] = None,
) -> Chain:
    """
    Two steps: "generate-skills-text" (prompt + model fallback) and
    "parse-skills" (strict parse, repair cascade as fallback).
    """
    parser = OutputParser(SkillTaxonomy, f"{document_kind}-skills-parser", fallback_creator=repair)

    async def generate_skills_text(text: str) -> str:
        prompt = build_extraction_prompt(document_kind, text, chunk_index, total_chunks)

        async def invoke(model_id: str) -> str:
            return await backend.generate(
                model_id,
                prompt,
                EXTRACTION_SYSTEM_PROMPT,
                LLM_TEMPERATURE,
                LLM_MAX_TOKENS,
            )

        return await run_with_fallback(
            candidates,
            invoke,
            retry_config,
            accept=has_structured_content,
            deadline=deadline,
        )

    def parse_skills(raw_text: str) -> SkillTaxonomy:
        outcome = parser.parse_with_report(raw_text)
        if outcome.used_fallback:
            logger.info("%s output needed repair", document_kind)
        if isinstance(outcome.value, SkillTaxonomy):
            # Valid JSON skips the cascade, so de-duplicate here as well
            return merge_taxonomies([outcome.value])
        return outcome.value

    chain = Chain(f"{document_kind}-skills-extraction-chain")
    chain.add_step(generate_skills_text, "generate-skills-text")
    chain.add_step(parse_skills, "parse-skills")
    return chain


async def extract_skill_taxonomy(
    document_text: str,
    document_kind: str = "resume",
    *,
    backend: Optional[LLMBackend] = None,
    candidates: Optional[Sequence[str]] = None,
    retry_config: Optional[RetryConfig] = None,
    deadline_seconds: Optional[float] = None,
) -> ExtractionResult:
    """
    Run the Extractor Agent on one document. Never raises for backend or parse
    failures: those yield the empty taxonomy, which callers must treat as valid.
    Long documents are split into chunks, extracted in order, and merged.
    """
    if document_kind not in DOCUMENT_KINDS:
        raise ValueError(f"document_kind must be one of {DOCUMENT_KINDS}, got {document_kind!r}")

    start = time.perf_counter()

    def finish(taxonomy: SkillTaxonomy) -> ExtractionResult:
        return ExtractionResult(taxonomy, (time.perf_counter() - start) * 1000)

    text = clean_document_text(document_text)
    if len(text) < MIN_DOCUMENT_CHARS:
        logger.warning("Document too short for extraction (%s chars); returning empty taxonomy", len(text))
        return finish(SkillTaxonomy.empty())

    if backend is None:
        if not OPENAI_API_KEY:
            logger.error("OPENAI_API_KEY is not set; cannot run extractor")
            return finish(SkillTaxonomy.empty())
        backend = OpenAIChatBackend()

    model_ids = list(candidates) if candidates is not None else list(MODEL_CANDIDATES)
    config = retry_config or RetryConfig.from_settings()
    deadline = deadline_after(EXTRACTION_DEADLINE_SECONDS if deadline_seconds is None else deadline_seconds)
    chunks = split_into_chunks(text, MAX_CHUNK_CHARS)
    multi = len(chunks) > 1

    results: List[SkillTaxonomy] = []
    try:
        for index, chunk in enumerate(chunks, start=1):
            chain = build_extraction_chain(
                document_kind,
                backend,
                model_ids,
                config,
                deadline=deadline,
                chunk_index=index if multi else None,
                total_chunks=len(chunks) if multi else None,
            )
            results.append(await chain.run(chunk))
    except ChainStepError as e:
        logger.error("Skill extraction failed at step '%s': %s", e.step_name, e.cause)
        return finish(SkillTaxonomy.empty())
    except Exception as e:
        logger.exception("Skill extraction failed: %s", e)
        return finish(SkillTaxonomy.empty())

    taxonomy = merge_taxonomies(results) if multi else results[0]
    result = finish(taxonomy)
    logger.info(
        "Extractor Agent finished: kind=%s chunks=%s skills=%s elapsed_ms=%.0f",
        document_kind,
        len(chunks),
        taxonomy.total(),
        result.elapsed_ms,
    )
    return result


def extract_skill_taxonomy_sync(
    document_text: str,
    document_kind: str = "resume",
    **kwargs,
) -> ExtractionResult:
    """Sync wrapper for scripts and non-async callers."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(extract_skill_taxonomy(document_text, document_kind, **kwargs))
    finally:
        loop.close()
