"""Redis stream message producer."""

import logging
from typing import Optional

import redis.asyncio as redis_lib

from stamp_health.config import RedisConfig
from stamp_health.core.messages import Message
from stamp_health.exceptions import ServiceNotStartedError

logger = logging.getLogger(__name__)


class RedisMessageProducer:
    """Publishes messages to a Redis stream and reports broker reachability."""

    def __init__(self, config: RedisConfig) -> None:
        self._config = config
        self._redis: Optional[redis_lib.Redis] = None

    @property
    def redis(self) -> redis_lib.Redis:
        """Native redis-py async client."""
        if self._redis is None:
            raise ServiceNotStartedError("RedisMessageProducer not started. Call start() first.")
        return self._redis

    async def start(self) -> None:
        cfg = self._config
        self._redis = redis_lib.Redis(
            host=cfg.host,
            port=cfg.port,
            db=cfg.db,
            password=cfg.password,
        )
        logger.debug("Redis producer targeting %s:%s stream %r", cfg.host, cfg.port, cfg.stream)

    async def stop(self) -> None:
        if self._redis:
            await self._redis.aclose()
            self._redis = None

    async def send(self, message: Message) -> str:
        """Append message to the configured stream."""
        message_id = await self.redis.xadd(
            self._config.stream,
            {"body": message.to_json()},
            maxlen=self._config.maxlen,
            approximate=True,
        )
        if isinstance(message_id, bytes):
            message_id = message_id.decode()
        logger.debug("Sent %s message %s", message.action, message_id)
        return message_id

    async def is_healthy(self) -> bool:
        if self._redis is None:
            return False
        return bool(await self._redis.ping())
