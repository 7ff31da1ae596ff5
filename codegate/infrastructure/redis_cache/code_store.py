from __future__ import annotations

import json
from datetime import datetime
from typing import Optional

from redis.asyncio import Redis

from codegate.domain.entities import CodeKind, ValidateCode
from codegate.domain.ports.code_store import CodeStorePort


def _dump(code: ValidateCode) -> str:
    # Image bytes are not persisted; only what validation needs.
    return json.dumps(
        {
            "value": code.value,
            "expire_time": code.expire_time.isoformat(),
            "kind": code.kind.value,
        }
    )


def _load(raw: str) -> ValidateCode:
    data = json.loads(raw)
    return ValidateCode(
        value=data["value"],
        expire_time=datetime.fromisoformat(data["expire_time"]),
        kind=CodeKind(data["kind"]),
    )


class RedisCodeStore(CodeStorePort):
    """
    One Redis hash per session: `<key_prefix><session_id>` -> {session key: code}.
    The hash TTL is refreshed to the session lifetime on every write.
    """

    def __init__(
        self, redis: Redis, *, key_prefix: str = "codes:", ttl_seconds: int = 1800
    ) -> None:
        self._redis = redis
        self._prefix = key_prefix
        self._ttl = ttl_seconds

    def _key(self, session_id: str) -> str:
        return f"{self._prefix}{session_id}"

    async def put(self, session_id: str, key: str, code: ValidateCode) -> None:
        redis_key = self._key(session_id)
        pipe = self._redis.pipeline(transaction=True)
        pipe.hset(redis_key, key, _dump(code))
        pipe.expire(redis_key, self._ttl)
        await pipe.execute()

    async def get(self, session_id: str, key: str) -> Optional[ValidateCode]:
        raw = await self._redis.hget(self._key(session_id), key)
        if raw is None:
            return None
        return _load(raw)

    async def remove(self, session_id: str, key: str) -> None:
        await self._redis.hdel(self._key(session_id), key)
