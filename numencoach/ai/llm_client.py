import asyncio
import logging
from typing import Dict, List, Optional

from openai import AsyncOpenAI
from openai.types.chat import ChatCompletion

from numencoach.config import settings

logger = logging.getLogger(__name__)


class LLMClientError(Exception):
    """Base exception for LLM client errors."""


class LLMClient:
    """
    Low-level async LLM client.

    This class:
    - talks to an OpenAI-compatible provider (Groq by default)
    - handles retries & timeouts
    - returns raw text only
    """

    def __init__(
        self,
        *,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        client: Optional[AsyncOpenAI] = None,
    ):
        self.client = client or AsyncOpenAI(
            api_key=settings.GROQ_API_KEY,
            base_url=settings.LLM_BASE_URL,
        )

        self.model = model or settings.LLM_MODEL
        self.temperature = (
            temperature
            if temperature is not None
            else settings.LLM_TEMPERATURE
        )
        self.max_tokens = (
            max_tokens
            if max_tokens is not None
            else settings.LLM_MAX_TOKENS
        )

        self.timeout = settings.LLM_TIMEOUT
        self.retries = settings.LLM_RETRIES

    # ─────────────────────────────────────────────
    # Public API
    # ─────────────────────────────────────────────

    async def complete(
        self,
        *,
        system_prompt: str,
        user_prompt: str,
    ) -> str:
        """
        Generate a completion from a system + user prompt pair.
        """
        return await self.chat([
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ])

    async def chat(self, messages: List[Dict[str, str]]) -> str:
        """
        Generate a completion from a full message list.
        """
        for attempt in range(1, self.retries + 1):
            try:
                return await asyncio.wait_for(
                    self._call_llm(messages),
                    timeout=self.timeout,
                )

            except asyncio.TimeoutError:
                if attempt == self.retries:
                    raise LLMClientError("LLM request timed out")
                logger.warning(f"LLM request timed out (attempt {attempt}), retrying")
                await asyncio.sleep(self._backoff(attempt))

            except Exception as exc:
                if attempt == self.retries:
                    raise LLMClientError(str(exc)) from exc
                logger.warning(f"LLM request failed (attempt {attempt}): {exc}")
                await asyncio.sleep(self._backoff(attempt))

        raise LLMClientError("LLM request failed")

    # ─────────────────────────────────────────────
    # Internal helpers
    # ─────────────────────────────────────────────

    async def _call_llm(self, messages: List[Dict[str, str]]) -> str:
        """
        Perform the actual LLM call.
        """
        completion: ChatCompletion = await self.client.chat.completions.create(
            model=self.model,
            messages=messages,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )

        content = completion.choices[0].message.content
        if not content:
            raise LLMClientError("LLM returned an empty response")
        return content.strip()

    def _backoff(self, attempt: int) -> float:
        """
        Exponential backoff (simple).
        """
        return min(2 ** attempt, 10)


def get_llm_client() -> Optional[LLMClient]:
    """
    Configured client, or None when no API key is set.
    """
    if not settings.GROQ_API_KEY:
        logger.warning("GROQ_API_KEY not set. AI features will use fallback responses.")
        return None
    return LLMClient()
