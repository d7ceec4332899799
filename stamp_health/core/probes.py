"""Dependency probes.

Every probe is a failure boundary: faults from the underlying client are
logged and reported as unhealthy (False). asyncio.CancelledError is not an
Exception subclass and always propagates to the caller.
"""

import logging
from datetime import timedelta
from typing import Optional, Protocol, Sequence

from stamp_health.core.health import HealthScoreSample

logger = logging.getLogger(__name__)

HEALTHSCORE_THRESHOLD = 0.5
HEALTHSCORE_LOOKBACK = timedelta(minutes=10)


class Probe(Protocol):
    """A parameterless async check returning a healthy verdict."""

    async def probe(self) -> bool:
        ...


class ObjectStore(Protocol):
    async def exists(self, key: str) -> bool:
        ...

    async def read_text(self, key: str) -> str:
        ...


class HealthReporting(Protocol):
    """A collaborator that can judge its own health."""

    async def is_healthy(self) -> bool:
        ...


class TelemetrySource(Protocol):
    async def query_recent_scores(
        self, workspace_id: str, lookback: timedelta
    ) -> Sequence[HealthScoreSample]:
        """Samples within lookback, most recent first."""
        ...


class StorageProbe:
    """Healthy iff the state marker object exists (and, optionally, reads as expected)."""

    def __init__(
        self,
        store: ObjectStore,
        object_key: str,
        expected_state: Optional[str] = None,
    ) -> None:
        self._store = store
        self._object_key = object_key
        self._expected_state = expected_state

    async def probe(self) -> bool:
        try:
            if not await self._store.exists(self._object_key):
                logger.warning("State object %r not found", self._object_key)
                return False
            if self._expected_state is None:
                return True

            state = (await self._store.read_text(self._object_key)).strip()
            if state != self._expected_state:
                logger.info(
                    "State object %r reads %r, expected %r. Reporting stamp as unhealthy",
                    self._object_key,
                    state,
                    self._expected_state,
                )
                return False
            return True
        except Exception:
            # Unreachable storage may well mean a regional storage outage
            logger.exception("Could not check health state object. Responding with UNHEALTHY state")
            return False


class ServiceProbe:
    """Delegates to a collaborator's own is_healthy()."""

    def __init__(self, name: str, service: HealthReporting) -> None:
        self._name = name
        self._service = service

    @property
    def name(self) -> str:
        return self._name

    async def probe(self) -> bool:
        try:
            return bool(await self._service.is_healthy())
        except Exception:
            logger.exception("%s health check failed. Responding with UNHEALTHY state", self._name)
            return False


class TelemetryScoreProbe:
    """Checks the most recent stamp health score against a threshold.

    A score at or below the threshold is unhealthy. No sample within the
    lookback window is also unhealthy: a lagging telemetry pipeline must not
    report the stamp as healthy.
    """

    def __init__(
        self,
        client: TelemetrySource,
        workspace_id: str,
        threshold: float = HEALTHSCORE_THRESHOLD,
        lookback: timedelta = HEALTHSCORE_LOOKBACK,
    ) -> None:
        self._client = client
        self._workspace_id = workspace_id
        self._threshold = threshold
        self._lookback = lookback

    async def probe(self) -> bool:
        try:
            samples = await self._client.query_recent_scores(self._workspace_id, self._lookback)
        except Exception:
            logger.exception("Could not query health score. Responding with UNHEALTHY state")
            return False

        if not samples:
            logger.warning(
                "No health score in the last %s for workspace %r. Responding with UNHEALTHY state",
                self._lookback,
                self._workspace_id,
            )
            return False

        latest = samples[0]
        logger.debug("TimeGenerated: [%s] HealthScore: %s", latest.timestamp.isoformat(), latest.score)
        # NaN compares false both ways and must count as unhealthy
        if not latest.score > self._threshold:
            logger.info(
                "HealthScore of %s is <= %s. Reporting stamp as unhealthy",
                latest.score,
                self._threshold,
            )
            return False
        return True
