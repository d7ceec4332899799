"""StampHealthService façade - client lifecycle + health aggregation."""

import logging
import time
from types import TracebackType
from typing import Optional, Self

from stamp_health.config import StampHealthConfig
from stamp_health.core.aggregator import StampHealthCheck
from stamp_health.core.cache import Clock, ResultCache
from stamp_health.core.health import AggregateResult, ProbeIdentity
from stamp_health.core.probes import ServiceProbe, StorageProbe, TelemetryScoreProbe
from stamp_health.adapters.elasticsearch import TelemetryClient
from stamp_health.adapters.postgres import CatalogDatabase
from stamp_health.adapters.redis import RedisMessageProducer
from stamp_health.adapters.storage import BlobStore

logger = logging.getLogger(__name__)


class StampHealthService:
    """Owns the probed clients and the cached health check built on them."""

    def __init__(self, config: StampHealthConfig, clock: Optional[Clock] = None) -> None:
        self._config = config
        self._blobs = BlobStore(config.storage)
        self._producer = RedisMessageProducer(config.redis)
        self._database = CatalogDatabase(config.postgres)
        self._telemetry = TelemetryClient(config.telemetry)

        cache = ResultCache(config.cache_duration_seconds, clock=clock or time.monotonic)
        self._check = StampHealthCheck(
            probes={
                ProbeIdentity.STORAGE: StorageProbe(
                    self._blobs,
                    config.storage.object_key,
                    expected_state=config.storage.expected_state,
                ),
                ProbeIdentity.PRODUCER: ServiceProbe("Message producer", self._producer),
                ProbeIdentity.DATABASE: ServiceProbe("Database", self._database),
                ProbeIdentity.TELEMETRY: TelemetryScoreProbe(
                    self._telemetry,
                    config.telemetry.workspace_id,
                    threshold=config.telemetry.threshold,
                    lookback=config.telemetry.lookback,
                ),
            },
            cache=cache,
        )

    @property
    def blobs(self) -> BlobStore:
        return self._blobs

    @property
    def producer(self) -> RedisMessageProducer:
        return self._producer

    @property
    def database(self) -> CatalogDatabase:
        return self._database

    @property
    def telemetry(self) -> TelemetryClient:
        return self._telemetry

    @property
    def health_check(self) -> StampHealthCheck:
        return self._check

    async def start(self) -> None:
        """Connect all clients.

        If one fails, the clients already started are stopped again before the
        error propagates.
        """
        started = []
        try:
            for client in self._clients():
                await client.start()
                started.append(client)
        except BaseException:
            for client in reversed(started):
                try:
                    await client.stop()
                except Exception:
                    logger.exception("Failed to stop %s during startup rollback", type(client).__name__)
            raise

    async def stop(self) -> None:
        """Graceful shutdown."""
        for client in self._clients():
            await client.stop()

    def _clients(self) -> tuple:
        return (self._blobs, self._producer, self._database, self._telemetry)

    async def check_health(self) -> AggregateResult:
        """Aggregate health check across all probed dependencies."""
        return await self._check.check_health()

    async def __aenter__(self) -> Self:
        await self.start()
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        await self.stop()
