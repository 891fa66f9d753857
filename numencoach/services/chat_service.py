import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from numencoach.ai.guardrails import enforce_guardrails
from numencoach.ai.llm_client import LLMClient, LLMClientError, get_llm_client
from numencoach.ai.prompt_templates.chat import build_chat_messages
from numencoach.cache.base import BaseCache, MemoryCache, build_cache
from numencoach.cache.keys import CacheKeys
from numencoach.cache.ttl import CacheTTL
from numencoach.config import settings

logger = logging.getLogger(__name__)


FALLBACK_REPLY = "Sorry, मैं अभी available नहीं हूं। कुछ देर बाद try करें।"
PREVIEW_LENGTH = 50


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ChatSessionNotFoundError(LookupError):
    """Raised when a session does not exist or belongs to another user."""


class ChatMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    role: str
    content: str
    timestamp: datetime


class ChatSession(BaseModel):
    id: str
    user_id: str
    name: str
    messages: List[ChatMessage] = Field(default_factory=list)
    created_at: datetime
    last_message_at: Optional[datetime] = None

    def preview(self) -> str:
        """
        The last user message, shortened for listings.
        """
        if not self.messages:
            return "No messages"

        for message in reversed(self.messages):
            if message.role == "user":
                content = message.content
                if len(content) > PREVIEW_LENGTH:
                    return content[:PREVIEW_LENGTH] + "..."
                return content

        return "Chat session"


class ChatSessionStore:
    """
    In-memory chat sessions, owned by whoever constructs the store.
    """

    def __init__(self, clock: Callable[[], datetime] = _utcnow):
        self._clock = clock
        self._sessions: Dict[str, ChatSession] = {}

    def create(self, user_id: str) -> ChatSession:
        now = self._clock()
        session = ChatSession(
            id=uuid4().hex,
            user_id=user_id,
            name=f"Chat {now.date().isoformat()}",
            created_at=now,
        )
        self._sessions[session.id] = session
        return session

    def get(self, user_id: str, session_id: str) -> ChatSession:
        session = self._sessions.get(session_id)
        if session is None or session.user_id != user_id:
            raise ChatSessionNotFoundError("Chat session not found or access denied")
        return session

    def list_for_user(self, user_id: str, limit: int = 10) -> List[ChatSession]:
        sessions = [s for s in self._sessions.values() if s.user_id == user_id]
        sessions.sort(
            key=lambda s: s.last_message_at or s.created_at,
            reverse=True,
        )
        return sessions[:limit]

    def delete(self, user_id: str, session_id: str) -> None:
        self.get(user_id, session_id)
        del self._sessions[session_id]


class ChatService:
    """
    NumenCoach chat assistant.

    Only the last CHAT_HISTORY_LIMIT messages of a session are sent to
    the LLM; the session itself keeps every message.
    """

    def __init__(
        self,
        llm: Optional[LLMClient],
        store: Optional[ChatSessionStore] = None,
        cache: Optional[BaseCache] = None,
        history_limit: Optional[int] = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.llm = llm
        self.store = store or ChatSessionStore(clock=clock)
        self.cache = cache if cache is not None else MemoryCache()
        self.history_limit = history_limit or settings.CHAT_HISTORY_LIMIT
        self._clock = clock

    @classmethod
    def from_settings(cls) -> "ChatService":
        return cls(llm=get_llm_client(), cache=build_cache())

    # ─────────────────────────────────────────────
    # Public API
    # ─────────────────────────────────────────────

    async def send_message(
        self,
        user_id: str,
        message: str,
        session_id: Optional[str] = None,
        *,
        user_name: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Append the user's message, get a reply, and return the session.

        An unknown or foreign `session_id` starts a new session.
        """
        message = message.strip()
        if not message:
            raise ValueError("Message is required")

        session = self._session_for(user_id, session_id)
        history = session.messages[-self.history_limit:]

        session.messages.append(self._message("user", message))

        reply = await self._reply(user_id, message, history, user_name)

        session.messages.append(self._message("assistant", reply))
        session.last_message_at = self._clock()

        return {
            "response": reply,
            "session_id": session.id,
            "messages": [m.model_dump(mode="json") for m in session.messages],
        }

    def get_history(self, user_id: str, limit: int = 10) -> List[Dict[str, Any]]:
        return [
            {
                "id": s.id,
                "name": s.name,
                "message_count": len(s.messages),
                "last_message_at": s.last_message_at,
                "preview": s.preview(),
            }
            for s in self.store.list_for_user(user_id, limit)
        ]

    def get_session(self, user_id: str, session_id: str) -> List[ChatMessage]:
        return list(self.store.get(user_id, session_id).messages)

    def delete_session(self, user_id: str, session_id: str) -> None:
        self.store.delete(user_id, session_id)

    # ─────────────────────────────────────────────
    # Internal helpers
    # ─────────────────────────────────────────────

    def _session_for(self, user_id: str, session_id: Optional[str]) -> ChatSession:
        if session_id:
            try:
                return self.store.get(user_id, session_id)
            except ChatSessionNotFoundError:
                logger.info(f"Session {session_id} unavailable for {user_id}, starting a new one")
        return self.store.create(user_id)

    async def _reply(
        self,
        user_id: str,
        message: str,
        history: List[ChatMessage],
        user_name: Optional[str],
    ) -> str:
        if self.llm is None:
            return FALLBACK_REPLY

        # Only a session's first question is cached
        cache_key = CacheKeys.chat(user_id, message) if not history else None
        if cache_key:
            cached = await self.cache.get(cache_key)
            if cached is not None:
                return cached

        messages = build_chat_messages(
            message=message,
            history=[{"role": m.role, "content": m.content} for m in history],
            user_name=user_name,
        )

        try:
            raw = await self.llm.chat(messages)
        except LLMClientError as exc:
            logger.warning(f"Chat reply unavailable, using fallback: {exc}")
            return FALLBACK_REPLY

        reply = enforce_guardrails(raw, question=message)

        if cache_key:
            await self.cache.set(cache_key, reply, ttl=CacheTTL.CHAT)

        return reply

    def _message(self, role: str, content: str) -> ChatMessage:
        return ChatMessage(
            id=f"msg_{uuid4().hex}_{role}",
            role=role,
            content=content,
            timestamp=self._clock(),
        )
