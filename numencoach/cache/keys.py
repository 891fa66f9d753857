import hashlib
import json
from typing import Any, Dict


class CacheKeys:
    """
    Centralized cache key builders.
    """

    @staticmethod
    def fingerprint(payload: Dict[str, Any]) -> str:
        """
        Stable sha256 of a JSON-serialisable request.
        """
        raw = json.dumps(payload, sort_keys=True, ensure_ascii=False, default=str)
        return hashlib.sha256(raw.encode("utf-8")).hexdigest()

    # ─────────────────────────────────────────────
    # Insights
    # ─────────────────────────────────────────────

    @staticmethod
    def insight(kind: str, payload: Dict[str, Any]) -> str:
        return f"insight:{kind}:{CacheKeys.fingerprint(payload)}"

    # ─────────────────────────────────────────────
    # Chat
    # ─────────────────────────────────────────────

    @staticmethod
    def question_hash(question: str) -> str:
        return hashlib.sha256(question.strip().lower().encode()).hexdigest()

    @staticmethod
    def chat(user_id: str, question: str) -> str:
        return f"chat:{user_id}:{CacheKeys.question_hash(question)}"
