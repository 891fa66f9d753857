import unittest

from numencoach.cache.rate_limit import RateLimiter, RateLimitExceededError


class FakeClock:
    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class TestRateLimiter(unittest.TestCase):
    def setUp(self):
        self.clock = FakeClock()
        self.limiter = RateLimiter(limit=2, window=60, clock=self.clock)

    def test_allows_up_to_limit(self):
        for _ in range(2):
            self.assertTrue(self.limiter.check("u1"))
            self.limiter.record("u1")

        self.assertFalse(self.limiter.check("u1"))
        self.assertEqual(self.limiter.remaining("u1"), 0)

    def test_checks_do_not_count(self):
        for _ in range(5):
            self.assertTrue(self.limiter.check("u1"))
        self.assertEqual(self.limiter.remaining("u1"), 2)

    def test_users_are_independent(self):
        self.limiter.record("u1")
        self.limiter.record("u1")

        self.assertFalse(self.limiter.check("u1"))
        self.assertTrue(self.limiter.check("u2"))

    def test_window_resets(self):
        self.limiter.record("u1")
        self.limiter.record("u1")

        self.clock.now = 61
        self.assertTrue(self.limiter.check("u1"))
        self.assertEqual(self.limiter.remaining("u1"), 2)

    def test_closed_windows_are_purged(self):
        for user_id in ("u1", "u2", "u3"):
            self.limiter.check(user_id)
        self.limiter.record("u1")
        self.assertEqual(len(self.limiter), 3)

        self.clock.now = 61
        self.limiter.check("u4")

        self.assertEqual(len(self.limiter), 1)
        self.assertEqual(self.limiter.remaining("u1"), 2)

    def test_ensure_raises_and_logs(self):
        self.limiter.record("u1")
        self.limiter.record("u1")

        with self.assertLogs("numencoach.cache.rate_limit", level="WARNING"):
            with self.assertRaises(RateLimitExceededError):
                self.limiter.ensure("u1")


if __name__ == "__main__":
    unittest.main()
