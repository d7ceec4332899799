"""Concurrent fan-out over the cached probes."""

import asyncio
import logging
from typing import Mapping

from stamp_health.core.cache import ResultCache
from stamp_health.core.health import AggregateResult, ProbeIdentity
from stamp_health.core.probes import Probe

logger = logging.getLogger(__name__)


class StampHealthCheck:
    """Runs every probe through the result cache and reduces the outcomes.

    No retries, timeouts or exception handling happen here: each probe has
    already normalized its faults to False, and cancellation of the calling
    task cancels all in-flight probes.
    """

    def __init__(self, probes: Mapping[ProbeIdentity, Probe], cache: ResultCache) -> None:
        missing = [identity.value for identity in ProbeIdentity if identity not in probes]
        if missing:
            raise ValueError(f"No probe configured for: {', '.join(missing)}")
        self._probes = dict(probes)
        self._cache = cache

    @property
    def cache(self) -> ResultCache:
        return self._cache

    async def check_health(self) -> AggregateResult:
        """Probe all dependencies concurrently and return the overall verdict."""
        identities = list(ProbeIdentity)
        results = await asyncio.gather(
            *(
                self._cache.get_or_refresh(identity, self._probes[identity].probe)
                for identity in identities
            )
        )
        result = AggregateResult.from_outcomes(dict(zip(identities, results)))
        if not result.ok:
            logger.debug("Stamp unhealthy: %s", dict(result.details))
        return result
