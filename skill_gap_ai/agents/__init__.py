"""Agent exports."""

from .extractor_agent import build_extraction_chain, extract_skill_taxonomy, extract_skill_taxonomy_sync
from .gap_agent import run_gap_analysis, run_gap_analysis_sync

__all__ = [
    "build_extraction_chain",
    "extract_skill_taxonomy",
    "extract_skill_taxonomy_sync",
    "run_gap_analysis",
    "run_gap_analysis_sync",
]
