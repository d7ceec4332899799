"""Time-bounded memoization of probe results."""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from stamp_health.core.health import ProbeIdentity

logger = logging.getLogger(__name__)

# Parameterless async probe, e.g. StorageProbe.probe
RefreshFn = Callable[[], Awaitable[bool]]
Clock = Callable[[], float]


@dataclass(frozen=True)
class CacheEntry:
    """Cached verdict for one probe."""

    value: bool
    created_at: float
    expires_at: float

    def is_live(self, now: float) -> bool:
        return now < self.expires_at


class _RefreshAbandoned(Exception):
    """The caller running a refresh was cancelled before it finished."""


class ResultCache:
    """Per-probe result cache with single-flight refresh.

    While a refresh for an identity is running, its pending result is kept
    as a future; concurrent callers for that identity await it instead of
    calling the probe again, whatever the TTL. The probe runs in the task of
    the caller that started it, so cancelling that caller cancels the probe
    I/O, stores nothing, and sends the waiters back to refresh on their own.
    Identities never wait on each other.
    """

    def __init__(self, ttl_seconds: float, clock: Clock = time.monotonic) -> None:
        if ttl_seconds < 0:
            raise ValueError(f"ttl_seconds must be >= 0, got {ttl_seconds}")
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[ProbeIdentity, CacheEntry] = {}
        self._inflight: dict[ProbeIdentity, asyncio.Future[bool]] = {}

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def peek(self, identity: ProbeIdentity) -> Optional[CacheEntry]:
        """Return the live entry for identity, if any."""
        entry = self._entries.get(identity)
        if entry is not None and entry.is_live(self._clock()):
            return entry
        return None

    def is_refreshing(self, identity: ProbeIdentity) -> bool:
        return identity in self._inflight

    def invalidate(self, identity: Optional[ProbeIdentity] = None) -> None:
        """Drop one entry, or all entries when identity is None."""
        if identity is None:
            self._entries.clear()
        else:
            self._entries.pop(identity, None)

    async def get_or_refresh(
        self,
        identity: ProbeIdentity,
        refresh: RefreshFn,
        ttl_seconds: Optional[float] = None,
    ) -> bool:
        """Return the cached verdict for identity, invoking refresh on a miss."""
        while True:
            entry = self.peek(identity)
            if entry is not None:
                return entry.value

            pending = self._inflight.get(identity)
            if pending is None:
                break
            try:
                # shield: a cancelled waiter must not cancel the shared refresh
                return await asyncio.shield(pending)
            except _RefreshAbandoned:
                continue

        pending = asyncio.get_running_loop().create_future()
        self._inflight[identity] = pending
        try:
            logger.debug("Probing %s health state - cache empty or expired", identity.value)
            value = bool(await refresh())
        except asyncio.CancelledError:
            _fail(pending, _RefreshAbandoned())
            raise
        except BaseException as e:
            _fail(pending, e)
            raise
        finally:
            if self._inflight.get(identity) is pending:
                del self._inflight[identity]

        ttl = self._ttl if ttl_seconds is None else ttl_seconds
        now = self._clock()
        self._entries[identity] = CacheEntry(value=value, created_at=now, expires_at=now + ttl)
        pending.set_result(value)
        return value


def _fail(pending: "asyncio.Future[bool]", error: BaseException) -> None:
    pending.set_exception(error)
    # Mark retrieved; with no waiters asyncio would log it as never retrieved
    pending.exception()
