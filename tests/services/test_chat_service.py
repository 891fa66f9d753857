import unittest
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

from numencoach.ai.guardrails import GUIDANCE_NOTE
from numencoach.ai.llm_client import LLMClientError
from numencoach.cache.base import MemoryCache
from numencoach.services.chat_service import (
    FALLBACK_REPLY,
    ChatService,
    ChatSessionNotFoundError,
)


class TickingClock:
    def __init__(self):
        self.now = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self.now += timedelta(seconds=1)
        return self.now


class TestChatService(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.llm = AsyncMock()
        self.llm.chat.return_value = "Aapka samay achha hai."
        self.service = ChatService(
            self.llm,
            cache=MemoryCache(),
            history_limit=2,
            clock=TickingClock(),
        )

    async def test_new_session(self):
        result = await self.service.send_message("u1", "  Namaste  ")

        self.assertEqual(result["response"], "Aapka samay achha hai.")
        self.assertEqual(
            [(m["role"], m["content"]) for m in result["messages"]],
            [("user", "Namaste"), ("assistant", "Aapka samay achha hai.")],
        )

        messages = self.llm.chat.await_args.args[0]
        self.assertEqual([m["role"] for m in messages], ["system", "user"])

    async def test_history_is_capped(self):
        first = await self.service.send_message("u1", "one")
        session_id = first["session_id"]
        await self.service.send_message("u1", "two", session_id)
        result = await self.service.send_message("u1", "three", session_id)

        self.assertEqual(len(result["messages"]), 6)
        messages = self.llm.chat.await_args.args[0]
        self.assertEqual(
            [m["content"] for m in messages[1:]],
            ["two", "Aapka samay achha hai.", "three"],
        )

    async def test_foreign_session_starts_new_one(self):
        mine = await self.service.send_message("u1", "hello")
        theirs = await self.service.send_message("u2", "hello", mine["session_id"])

        self.assertNotEqual(mine["session_id"], theirs["session_id"])
        with self.assertRaises(ChatSessionNotFoundError):
            self.service.get_session("u2", mine["session_id"])

    async def test_first_question_is_cached(self):
        await self.service.send_message("u1", "Lucky number?")
        again = await self.service.send_message("u1", "lucky number?")

        self.assertEqual(again["response"], "Aapka samay achha hai.")
        self.llm.chat.assert_awaited_once()

    async def test_guardrails_applied(self):
        self.llm.chat.return_value = "Career mein definitely growth hai."
        result = await self.service.send_message("u1", "Career kaisa rahega?")

        self.assertTrue(result["response"].startswith("Career mein likely growth hai."))
        self.assertTrue(result["response"].endswith(GUIDANCE_NOTE))

    async def test_llm_failure_and_missing_llm(self):
        self.llm.chat.side_effect = LLMClientError("down")
        with self.assertLogs("numencoach.services.chat_service", level="WARNING"):
            result = await self.service.send_message("u1", "hello")
        self.assertEqual(result["response"], FALLBACK_REPLY)

        offline = ChatService(None)
        result = await offline.send_message("u1", "hello")
        self.assertEqual(result["response"], FALLBACK_REPLY)

    async def test_empty_message(self):
        with self.assertRaises(ValueError):
            await self.service.send_message("u1", "   ")

    async def test_history_listing(self):
        first = await self.service.send_message("u1", "x" * 60)
        second = await self.service.send_message("u1", "short")
        await self.service.send_message("u2", "not mine")

        history = self.service.get_history("u1")

        self.assertEqual([h["id"] for h in history], [second["session_id"], first["session_id"]])
        self.assertEqual(history[0]["preview"], "short")
        self.assertEqual(history[1]["preview"], "x" * 50 + "...")
        self.assertEqual(history[1]["message_count"], 2)

    async def test_delete_session(self):
        result = await self.service.send_message("u1", "hello")

        with self.assertRaises(ChatSessionNotFoundError):
            self.service.delete_session("u2", result["session_id"])

        self.service.delete_session("u1", result["session_id"])
        with self.assertRaises(ChatSessionNotFoundError):
            self.service.get_session("u1", result["session_id"])


if __name__ == "__main__":
    unittest.main()
