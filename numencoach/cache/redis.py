"""
Redis connection and the JSON value codec shared by every cache backend.

Values cross the cache boundary as JSON text, so a cached insight reads
back the same from memory as from Redis: dates become ISO strings,
enums their value, pydantic models their JSON dump, tuples lists.
"""

import json
from datetime import date, datetime
from enum import Enum
from typing import Any, Optional, Union

import redis.asyncio as redis
from pydantic import BaseModel

from numencoach.config import settings


_client: Optional[redis.Redis] = None


def get_redis() -> redis.Redis:
    """
    Process-wide client for the configured Redis, created on first use.
    """
    global _client

    if _client is None:
        if settings.REDIS_URL:
            _client = redis.Redis.from_url(settings.REDIS_URL, decode_responses=True)
        else:
            _client = redis.Redis(
                host=settings.REDIS_HOST,
                port=settings.REDIS_PORT,
                db=settings.REDIS_DB,
                password=settings.REDIS_PASSWORD,
                decode_responses=True,
                socket_timeout=settings.REDIS_TIMEOUT,
                socket_connect_timeout=settings.REDIS_TIMEOUT,
            )
    return _client


async def close_redis() -> None:
    """
    Close the shared client; the next get_redis() reconnects.
    """
    global _client

    if _client is not None:
        await _client.aclose()
        _client = None


# ─────────────────────────────────────────────
# Value codec
# ─────────────────────────────────────────────

def encode_value(value: Any) -> str:
    return json.dumps(value, default=_jsonable, ensure_ascii=False)


def decode_value(raw: Union[str, bytes]) -> Any:
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8")
    return json.loads(raw)


def _jsonable(obj: Any) -> Any:
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json")
    if isinstance(obj, (date, datetime)):
        return obj.isoformat()
    if isinstance(obj, Enum):
        return obj.value
    raise TypeError(f"Cannot cache a value of type {type(obj).__name__}")
