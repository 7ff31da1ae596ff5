from __future__ import annotations

from typing import Optional

from redis.asyncio import Redis

from codegate.settings import get_settings

_client: Optional[Redis] = None


def get_redis(url: str | None = None) -> Redis:
    """
    Process-wide Redis client for the session code store, created on first use.
    `url` only matters for that first call; it defaults to REDIS_URL.
    Responses are decoded, so stored codes come back as str.
    """
    global _client
    if _client is None:
        _client = Redis.from_url(
            url or get_settings().redis_url, encoding="utf-8", decode_responses=True
        )
    return _client


async def close_redis() -> None:
    global _client
    if _client is None:
        return
    client, _client = _client, None
    await client.aclose()
