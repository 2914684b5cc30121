"""LLM backend: generate text from a prompt with a given model id (OpenAI-compatible)."""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional

import httpx
import openai
from openai import AsyncOpenAI

from skill_gap_ai.config import (
    HTTP_CONNECT_TIMEOUT_SECONDS,
    HTTP_TIMEOUT_SECONDS,
    LLM_MAX_TOKENS,
    LLM_TEMPERATURE,
    OPENAI_API_KEY,
    OPENAI_BASE_URL,
)
from skill_gap_ai.errors import (
    TRANSIENT_STATUS_CODES,
    AuthError,
    BackendError,
    BackendTimeoutError,
    RateLimitedError,
    TransientBackendError,
    is_transient_error,
)
from skill_gap_ai.utils.logger import get_logger

logger = get_logger(__name__)


class LLMBackend(ABC):
    """Abstract text-generation provider."""

    @abstractmethod
    async def generate(
        self,
        model_id: str,
        prompt: str,
        system_instruction: Optional[str] = None,
        temperature: float = LLM_TEMPERATURE,
        max_tokens: int = LLM_MAX_TOKENS,
    ) -> str:
        """Return the raw completion text. Raises BackendError subclasses on failure."""
        ...


def classify_backend_error(error: BaseException, model: Optional[str] = None) -> BackendError:
    """Map SDK / transport exceptions onto the package error taxonomy."""
    if isinstance(error, BackendError):
        return error
    message = str(error) or error.__class__.__name__
    if isinstance(error, openai.RateLimitError):
        return RateLimitedError(message, model=model, status_code=429)
    # APITimeoutError subclasses APIConnectionError; check it first
    if isinstance(error, (openai.APITimeoutError, httpx.TimeoutException)):
        return BackendTimeoutError(message, model=model)
    if isinstance(error, (openai.APIConnectionError, httpx.TransportError)):
        return BackendTimeoutError(message, model=model)
    if isinstance(error, (openai.AuthenticationError, openai.PermissionDeniedError)):
        return AuthError(message, model=model, status_code=error.status_code)
    if isinstance(error, openai.APIStatusError):
        if error.status_code in TRANSIENT_STATUS_CODES:
            return TransientBackendError(message, model=model, status_code=error.status_code)
        return BackendError(message, model=model, status_code=error.status_code)
    if is_transient_error(error):
        return TransientBackendError(message, model=model)
    return BackendError(message, model=model)


class OpenAIChatBackend(LLMBackend):
    """Chat completions via AsyncOpenAI; works with any OpenAI-compatible base URL."""

    def __init__(
        self,
        api_key: str = OPENAI_API_KEY,
        base_url: str = OPENAI_BASE_URL,
        timeout_seconds: float = HTTP_TIMEOUT_SECONDS,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url
        self._timeout_seconds = timeout_seconds
        self._client: Optional[AsyncOpenAI] = None

    def _get_client(self) -> AsyncOpenAI:
        if self._client is None:
            if not self._api_key:
                raise AuthError("OPENAI_API_KEY is not set")
            # Retries are owned by the retry policy, not the SDK
            self._client = AsyncOpenAI(
                api_key=self._api_key,
                base_url=self._base_url or None,
                timeout=httpx.Timeout(self._timeout_seconds, connect=HTTP_CONNECT_TIMEOUT_SECONDS),
                max_retries=0,
            )
        return self._client

    async def generate(
        self,
        model_id: str,
        prompt: str,
        system_instruction: Optional[str] = None,
        temperature: float = LLM_TEMPERATURE,
        max_tokens: int = LLM_MAX_TOKENS,
    ) -> str:
        client = self._get_client()
        messages: List[Dict[str, str]] = []
        if system_instruction:
            messages.append({"role": "system", "content": system_instruction})
        messages.append({"role": "user", "content": prompt})
        try:
            response = await client.chat.completions.create(
                model=model_id,
                messages=messages,
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except Exception as e:
            raise classify_backend_error(e, model_id) from e
        choice = response.choices[0] if response.choices else None
        if not choice or not choice.message or not choice.message.content:
            logger.warning("Model '%s' returned an empty completion", model_id)
            return ""
        return choice.message.content


def get_llm_backend() -> LLMBackend:
    """Return the configured backend (dependency injection point)."""
    return OpenAIChatBackend()
