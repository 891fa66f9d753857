import logging
from typing import Any, Awaitable, Callable, Dict, Optional

from numencoach.ai.guardrails import enforce_guardrails
from numencoach.ai.llm_client import LLMClient, LLMClientError, get_llm_client
from numencoach.ai.prompt_templates.compatibility import build_compatibility_prompt
from numencoach.ai.prompt_templates.kundali import build_kundali_prompt
from numencoach.ai.prompt_templates.numerology import build_numerology_prompt
from numencoach.ai.response_parser import (
    ReadingParseError,
    parse_llm_response,
    parse_reading,
)
from numencoach.cache.base import BaseCache, MemoryCache, build_cache
from numencoach.cache.keys import CacheKeys
from numencoach.cache.rate_limit import RateLimiter, RateLimitExceededError
from numencoach.cache.ttl import CacheTTL
from numencoach.config import settings
from numencoach.domain.numerology.calculator import number_meaning
from numencoach.domain.numerology.schemas import NumerologyProfile
from numencoach.services.interpretation_service import VedicReading

logger = logging.getLogger(__name__)


# Score bands for template compatibility insights, highest first
COMPATIBILITY_FALLBACKS = (
    (85, "Excellent match! आप दोनों के stars perfectly aligned हैं। Marriage के लिए very auspicious time है।"),
    (70, "Good compatibility! थोड़ी understanding और patience से perfect relationship बन सकती है।"),
    (55, "Average match. Communication और mutual respect से relationship को improve कर सकते हैं।"),
)
CHALLENGING_FALLBACK = (
    "Challenging compatibility. Extra effort और understanding की जरूरत है "
    "successful relationship के लिए।"
)


def compatibility_fallback(score: int) -> str:
    for threshold, text in COMPATIBILITY_FALLBACKS:
        if score >= threshold:
            return text
    return CHALLENGING_FALLBACK


class InsightService:
    """
    AI commentary on top of the deterministic readings.

    Every insight falls back to template text when the LLM client is
    missing, fails, returns something unusable, or the user has hit
    the rate limit. Successful replies are cached by request
    fingerprint for 24 hours.
    """

    def __init__(
        self,
        llm: Optional[LLMClient],
        cache: Optional[BaseCache] = None,
        rate_limiter: Optional[RateLimiter] = None,
        word_limit: Optional[int] = None,
    ):
        self.llm = llm
        self.cache = cache if cache is not None else MemoryCache()
        self.rate_limiter = rate_limiter or RateLimiter()
        self.word_limit = word_limit or settings.INSIGHT_WORD_LIMIT

    @classmethod
    def from_settings(cls) -> "InsightService":
        return cls(llm=get_llm_client(), cache=build_cache())

    # ─────────────────────────────────────────────
    # Public API
    # ─────────────────────────────────────────────

    async def numerology_insight(
        self,
        name: str,
        profile: NumerologyProfile,
        *,
        user_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        prompt = build_numerology_prompt(name=name, profile=profile)

        async def generate() -> Dict[str, Any]:
            raw = await self.llm.complete(
                system_prompt=prompt["system"],
                user_prompt=prompt["user"],
            )
            return parse_llm_response(enforce_guardrails(raw, question=""))

        return await self._generate(
            kind="numerology",
            payload={"name": name, "profile": profile.model_dump(mode="json")},
            user_id=user_id,
            generate=generate,
            fallback=lambda: {
                "text": self._numerology_fallback(name, profile),
                "confidence": "medium",
            },
        )

    async def compatibility_insight(
        self,
        name1: str,
        life_path1: int,
        name2: str,
        life_path2: int,
        score: int,
        *,
        context: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        prompt = build_compatibility_prompt(
            name1=name1,
            life_path1=life_path1,
            name2=name2,
            life_path2=life_path2,
            score=score,
            context=context,
        )

        async def generate() -> Dict[str, Any]:
            raw = await self.llm.complete(
                system_prompt=prompt["system"],
                user_prompt=prompt["user"],
            )
            return parse_llm_response(
                enforce_guardrails(raw, question="marriage compatibility")
            )

        return await self._generate(
            kind="compatibility",
            payload={
                "partners": sorted([[name1, life_path1], [name2, life_path2]]),
                "score": score,
                "context": context,
            },
            user_id=user_id,
            generate=generate,
            fallback=lambda: {
                "text": compatibility_fallback(score),
                "confidence": "medium",
            },
        )

    async def kundali_insight(
        self,
        name: str,
        nakshatra: str,
        reading: VedicReading,
        *,
        user_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        prompt = build_kundali_prompt(
            name=name,
            nakshatra=nakshatra,
            summary=reading.summary,
            details=reading.details,
            word_limit=self.word_limit,
        )

        async def generate() -> Dict[str, Any]:
            raw = await self.llm.complete(
                system_prompt=prompt["system"],
                user_prompt=prompt["user"],
            )
            return parse_reading(raw, word_limit=self.word_limit)

        return await self._generate(
            kind="kundali",
            payload={
                "name": name,
                "nakshatra": nakshatra,
                "summary": reading.summary,
                "details": reading.details,
            },
            user_id=user_id,
            generate=generate,
            fallback=lambda: self._kundali_fallback(name),
        )

    # ─────────────────────────────────────────────
    # Internal helpers
    # ─────────────────────────────────────────────

    async def _generate(
        self,
        *,
        kind: str,
        payload: Dict[str, Any],
        user_id: Optional[str],
        generate: Callable[[], Awaitable[Dict[str, Any]]],
        fallback: Callable[[], Dict[str, Any]],
    ) -> Dict[str, Any]:
        key = CacheKeys.insight(kind, payload)

        cached = await self.cache.get(key)
        if cached is not None:
            return {**cached, "source": "cache"}

        if self.llm is None:
            return {**fallback(), "source": "fallback"}

        try:
            if user_id:
                self.rate_limiter.ensure(user_id)
            result = await generate()
        except RateLimitExceededError:
            return {**fallback(), "source": "fallback"}
        except (LLMClientError, ReadingParseError) as exc:
            logger.warning(f"{kind} insight unavailable, using fallback: {exc}")
            return {**fallback(), "source": "fallback"}

        await self.cache.set(key, result, ttl=CacheTTL.INSIGHT)
        if user_id:
            self.rate_limiter.record(user_id)

        return {**result, "source": "ai"}

    def _numerology_fallback(self, name: str, profile: NumerologyProfile) -> str:
        meaning = number_meaning(profile.life_path_number)
        return (
            f"{name}, Life Path {profile.life_path_number} aapko "
            f"{meaning['keyword']} banata hai - {meaning['trait']}. "
            f"Expression {profile.expression_number} aur Soul Urge "
            f"{profile.soul_urge_number} ke saath apni strengths par focus karein."
        )

    def _kundali_fallback(self, name: str) -> Dict[str, str]:
        return {
            "summary": f"{name}, aapka chart mein positive energy hai.",
            "details": "Patience aur hard work se success milegi. Family support strong hai.",
            "confidence": "medium",
            "basis": "Traditional Vedic principles",
            "cta": "Detailed analysis ke liye full report available hai",
            "disclaimer": "Ye guidance hai, professional advice nahin",
        }
