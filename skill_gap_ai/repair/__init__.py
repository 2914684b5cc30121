"""Repair of malformed model output into a SkillTaxonomy."""

from .json_repair import extract_embedded_object, repair_json_syntax, strip_code_fences
from .keyword_categorizer import categorize_keywords
from .repair_cascade import STAGES, has_structured_content, repair

__all__ = [
    "repair",
    "has_structured_content",
    "STAGES",
    "strip_code_fences",
    "extract_embedded_object",
    "repair_json_syntax",
    "categorize_keywords",
]
