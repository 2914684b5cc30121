"""Service exports."""

from .llm_backend import LLMBackend, OpenAIChatBackend, classify_backend_error, get_llm_backend
from .model_fallback import run_with_fallback
from .retry_policy import deadline_after, retry
from .text_cleaner import clean_document_text, split_into_chunks

__all__ = [
    "LLMBackend",
    "OpenAIChatBackend",
    "classify_backend_error",
    "get_llm_backend",
    "run_with_fallback",
    "retry",
    "deadline_after",
    "clean_document_text",
    "split_into_chunks",
]
