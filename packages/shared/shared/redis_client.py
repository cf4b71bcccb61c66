from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

import redis.asyncio as redis


@dataclass(frozen=True)
class RedisConfig:
    url: str
    socket_timeout: float = 1.0
    socket_connect_timeout: float = 1.0
    health_check_interval: int = 15


class RedisClient:
    """
    Lazily-connected async Redis client used as a small string key-value store.
    """

    def __init__(self, cfg: RedisConfig):
        self._cfg = cfg
        self._client: Optional[redis.Redis] = None

    @classmethod
    def from_env(cls, var: str = "REDIS_URL") -> "RedisClient":
        return cls(RedisConfig(url=os.getenv(var, "redis://localhost:6379/0")))

    def client(self) -> redis.Redis:
        if self._client is None:
            self._client = redis.from_url(
                self._cfg.url,
                decode_responses=True,
                socket_timeout=self._cfg.socket_timeout,
                socket_connect_timeout=self._cfg.socket_connect_timeout,
                health_check_interval=self._cfg.health_check_interval,
            )
        return self._client

    async def get_str(self, key: str) -> Optional[str]:
        return await self.client().get(key)

    async def set_str(self, key: str, value: str) -> None:
        await self.client().set(key, value)

    async def ping(self) -> bool:
        try:
            return bool(await self.client().ping())
        except redis.RedisError:
            return False

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
