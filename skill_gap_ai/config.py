"""Configuration loaded from environment variables."""

import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv

# Load .env: try package dir then project root
_base = Path(__file__).resolve().parent
for _env_path in (_base / ".env", _base.parent / ".env"):
    if load_dotenv(_env_path):
        break
load_dotenv()  # also allow process env


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    try:
        return float(raw) if raw else default
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    try:
        return int(raw) if raw else default
    except ValueError:
        return default


def _env_list(name: str, default: List[str]) -> List[str]:
    raw = os.getenv(name, "")
    items = [part.strip() for part in raw.split(",") if part.strip()]
    return items or list(default)


# API keys – never hardcode
OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")
# Any OpenAI-compatible endpoint (Groq, Together, local gateways); empty = api.openai.com
OPENAI_BASE_URL: str = os.getenv("OPENAI_BASE_URL", "")

# Model candidates in preference order (fastest/cheapest first)
MODEL_CANDIDATES: List[str] = _env_list(
    "MODEL_CANDIDATES", ["gpt-4o-mini", "gpt-4o", "gpt-3.5-turbo"]
)
LLM_TEMPERATURE: float = _env_float("LLM_TEMPERATURE", 0.2)
LLM_MAX_TOKENS: int = _env_int("LLM_MAX_TOKENS", 2048)

# HTTP settings
HTTP_TIMEOUT_SECONDS: float = _env_float("HTTP_TIMEOUT_SECONDS", 30.0)
HTTP_CONNECT_TIMEOUT_SECONDS: float = 10.0

# Retry / backoff for each model candidate
RETRY_MAX_RETRIES: int = _env_int("RETRY_MAX_RETRIES", 3)
RETRY_INITIAL_DELAY_SECONDS: float = _env_float("RETRY_INITIAL_DELAY_SECONDS", 2.0)
RETRY_MAX_DELAY_SECONDS: float = _env_float("RETRY_MAX_DELAY_SECONDS", 15.0)
RETRY_BACKOFF_FACTOR: float = _env_float("RETRY_BACKOFF_FACTOR", 2.0)

# Overall budget for one extraction call; 0 disables the deadline
EXTRACTION_DEADLINE_SECONDS: float = _env_float("EXTRACTION_DEADLINE_SECONDS", 0.0)

# Documents longer than this are split into chunks and extracted sequentially
MAX_CHUNK_CHARS: int = _env_int("MAX_CHUNK_CHARS", 12000)
MIN_DOCUMENT_CHARS: int = 20

# Keyword fallback: cap per category when only loose words are available
KEYWORD_FALLBACK_LIMIT: int = _env_int("KEYWORD_FALLBACK_LIMIT", 10)

# Closed set of taxonomy categories; order is the transport order
SKILL_CATEGORIES: tuple = (
    "technical",
    "soft",
    "tools",
    "frameworks",
    "languages",
    "databases",
    "methodologies",
    "platforms",
    "other",
)

DOCUMENT_KINDS: tuple = ("resume", "job")

# Logging
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"
