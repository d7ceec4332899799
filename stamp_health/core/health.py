"""Health check types."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class ProbeIdentity(str, Enum):
    """Identifies a probe and its cache slot."""

    STORAGE = "storage"
    PRODUCER = "producer"
    DATABASE = "database"
    TELEMETRY = "telemetry"

    @property
    def key(self) -> str:
        """Detail key reported on the health endpoint."""
        return _DETAIL_KEYS[self]


_DETAIL_KEYS = {
    ProbeIdentity.STORAGE: "StateBlobHealthy",
    ProbeIdentity.PRODUCER: "MessageProducerServiceHealthy",
    ProbeIdentity.DATABASE: "DatabaseServiceHealthy",
    ProbeIdentity.TELEMETRY: "StampHealthScoreOk",
}


@dataclass(frozen=True)
class HealthScoreSample:
    """A single telemetry-derived health score."""

    timestamp: datetime
    score: float


@dataclass(frozen=True)
class AggregateResult:
    """Overall stamp health plus the outcome of every check."""

    ok: bool
    details: Mapping[str, bool] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Read-only copy
        object.__setattr__(self, "details", MappingProxyType(dict(self.details)))

    @property
    def status(self) -> str:
        return "Healthy" if self.ok else "Unhealthy"

    @classmethod
    def from_outcomes(cls, outcomes: Mapping[ProbeIdentity, bool]) -> "AggregateResult":
        """Reduce per-probe outcomes to one verdict (logical AND)."""
        details = {identity.key: bool(outcomes[identity]) for identity in ProbeIdentity}
        return cls(ok=all(details.values()), details=details)
