import unittest
from datetime import date
from unittest.mock import AsyncMock, MagicMock, patch

from numencoach.cache import redis as redis_module
from numencoach.cache.base import MemoryCache, RedisCache, build_cache
from numencoach.cache.redis import close_redis, decode_value, encode_value, get_redis
from numencoach.domain.numerology.schemas import BirthDate, CompatibilityCategory


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class TestMemoryCache(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.clock = FakeClock()
        self.cache = MemoryCache(clock=self.clock, purge_interval=60)

    async def test_set_and_get(self):
        await self.cache.set("k", {"text": "Namaste", "score": 82}, ttl=60)

        self.assertEqual(await self.cache.get("k"), {"text": "Namaste", "score": 82})
        self.assertTrue(await self.cache.exists("k"))
        self.assertIsNone(await self.cache.get("missing"))

    async def test_entries_expire(self):
        await self.cache.set("k", "v", ttl=60)

        self.clock.now += 59
        self.assertEqual(await self.cache.get("k"), "v")

        self.clock.now += 1
        self.assertIsNone(await self.cache.get("k"))
        self.assertEqual(len(self.cache), 0)

    async def test_unread_expired_entries_are_purged_on_set(self):
        for i in range(5):
            await self.cache.set(f"old{i}", i, ttl=10)
        await self.cache.set("long", "kept", ttl=3600)

        self.clock.now += 30
        await self.cache.set("early", 1, ttl=10)
        self.assertEqual(len(self.cache), 7)

        self.clock.now += 30
        await self.cache.set("fresh", 2, ttl=10)

        self.assertEqual(len(self.cache), 2)
        self.assertEqual(await self.cache.get("long"), "kept")
        self.assertEqual(await self.cache.get("fresh"), 2)

    async def test_values_come_back_as_json(self):
        await self.cache.set("k", {"born": date(1990, 5, 15), "nums": (1, 2)}, ttl=60)
        self.assertEqual(await self.cache.get("k"), {"born": "1990-05-15", "nums": [1, 2]})

    async def test_delete(self):
        await self.cache.set("k", "v", ttl=60)
        await self.cache.delete("k")
        await self.cache.delete("never-set")

        self.assertFalse(await self.cache.exists("k"))


class TestRedisCache(unittest.IsolatedAsyncioTestCase):
    async def test_round_trip_through_client(self):
        client = AsyncMock()
        cache = RedisCache(client=client)

        await cache.set("k", {"a": 1}, ttl=30)
        client.setex.assert_awaited_once_with("k", 30, encode_value({"a": 1}))

        client.get.return_value = '{"a": 1}'
        self.assertEqual(await cache.get("k"), {"a": 1})

        client.get.return_value = None
        self.assertIsNone(await cache.get("k"))

        client.exists.return_value = 0
        self.assertFalse(await cache.exists("k"))


class TestRedisConnection(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        patcher = patch.object(redis_module, "_client", None)
        patcher.start()
        self.addCleanup(patcher.stop)

    async def test_client_is_shared_until_closed(self):
        with patch("numencoach.cache.redis.redis.Redis") as redis_cls:
            redis_cls.side_effect = lambda **kwargs: MagicMock(aclose=AsyncMock())

            first = get_redis()
            self.assertIs(get_redis(), first)

            await close_redis()
            first.aclose.assert_awaited_once()

            self.assertIsNot(get_redis(), first)
            self.assertEqual(redis_cls.call_count, 2)
            self.assertTrue(redis_cls.call_args.kwargs["decode_responses"])

    async def test_url_takes_precedence(self):
        with patch.object(redis_module.settings, "REDIS_URL", "redis://cache:6380/2"):
            with patch("numencoach.cache.redis.redis.Redis") as redis_cls:
                get_redis()

        redis_cls.from_url.assert_called_once_with("redis://cache:6380/2", decode_responses=True)
        redis_cls.assert_not_called()

    async def test_close_without_client(self):
        await close_redis()


class TestBuildCache(unittest.TestCase):
    def test_backends(self):
        self.assertIsInstance(build_cache("memory"), MemoryCache)
        self.assertIsInstance(build_cache("MEMORY"), MemoryCache)

        with patch("numencoach.cache.base.get_redis") as connect:
            self.assertIsInstance(build_cache("redis"), RedisCache)
        connect.assert_called_once()

    def test_unknown_backend(self):
        with self.assertRaises(ValueError):
            build_cache("memcached")


class TestValueCodec(unittest.TestCase):
    def test_models_and_enums(self):
        encoded = encode_value({
            "birth": BirthDate.parse("1990-05-15"),
            "category": CompatibilityCategory("Excellent"),
        })

        self.assertEqual(
            decode_value(encoded),
            {"birth": {"day": 15, "month": 5, "year": 1990}, "category": "Excellent"},
        )

    def test_bytes_are_decoded(self):
        self.assertEqual(decode_value('{"naam": "Rāj"}'.encode("utf-8")), {"naam": "Rāj"})

    def test_unsupported_type(self):
        with self.assertRaises(TypeError):
            encode_value({"x": object()})


if __name__ == "__main__":
    unittest.main()
