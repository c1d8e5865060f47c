from __future__ import annotations

import json
import logging
import time
from typing import Any, Dict, Optional, Protocol

from redis.asyncio import Redis

from scrapejobs.config import settings
from scrapejobs.models import Platform


logger = logging.getLogger("scrape-sink")


class JobResultSink(Protocol):
    async def store(self, platform: Platform, social_id: str, payload: Any) -> None: ...


class RedisResultSink:
    """Latest scrape payload per social profile, one Redis hash each.

    Falls back to process memory when Redis cannot be reached.
    """

    def __init__(self, redis_url: Optional[str] = None, key_prefix: Optional[str] = None) -> None:
        self._redis = Redis.from_url(redis_url or settings.scrape_redis_url, decode_responses=True)
        self._prefix = key_prefix or settings.scrape_result_key_prefix
        self._memory: dict[str, dict[str, Any]] = {}
        self._redis_available: Optional[bool] = None

    async def _use_redis(self) -> bool:
        if self._redis_available is not None:
            return self._redis_available
        try:
            await self._redis.ping()
            self._redis_available = True
        except Exception as exc:  # noqa: BLE001
            logger.warning("Redis unavailable, result sink falls back to memory: %s", exc)
            self._redis_available = False
        return self._redis_available

    def _key(self, platform: Platform, social_id: str) -> str:
        return f"{self._prefix}:{platform.value.lower()}:{social_id}"

    async def store(self, platform: Platform, social_id: str, payload: Any) -> None:
        key = self._key(platform, social_id)
        row = {
            "platform": platform.value,
            "social_id": social_id,
            "stored_at": str(int(time.time())),
            "payload": json.dumps(payload, ensure_ascii=False),
        }
        if await self._use_redis():
            await self._redis.hset(key, mapping=row)
        else:
            self._memory[key] = row
        logger.info("Stored %s results for social %s", platform.value, social_id)

    async def get(self, platform: Platform, social_id: str) -> Optional[Dict[str, Any]]:
        key = self._key(platform, social_id)
        if await self._use_redis():
            data = await self._redis.hgetall(key)
        else:
            data = self._memory.get(key)
        if not data:
            return None
        return {**data, "payload": json.loads(data["payload"])}


_result_sink: Optional[RedisResultSink] = None


def get_result_sink() -> RedisResultSink:
    global _result_sink
    if _result_sink is None:
        _result_sink = RedisResultSink()
    return _result_sink
