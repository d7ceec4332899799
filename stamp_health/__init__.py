"""Composite health aggregation for a regional deployment stamp."""

from stamp_health.config import (
    StampHealthConfig,
    StorageConfig,
    RedisConfig,
    PostgresConfig,
    TelemetryConfig,
)
from stamp_health.core import (
    StampHealthService,
    StampHealthCheck,
    ResultCache,
    CacheEntry,
    AggregateResult,
    HealthScoreSample,
    ProbeIdentity,
    Message,
    MessageProducer,
    Probe,
    ServiceProbe,
    StorageProbe,
    TelemetryScoreProbe,
)
from stamp_health.exceptions import (
    StampHealthError,
    ServiceNotStartedError,
    StorageUnavailableError,
    TelemetryQueryError,
)

__all__ = [
    # Façade
    "StampHealthService",
    # Config
    "StampHealthConfig",
    "StorageConfig",
    "RedisConfig",
    "PostgresConfig",
    "TelemetryConfig",
    # Aggregation
    "StampHealthCheck",
    "ResultCache",
    "CacheEntry",
    "AggregateResult",
    "HealthScoreSample",
    "ProbeIdentity",
    # Probes
    "Probe",
    "ServiceProbe",
    "StorageProbe",
    "TelemetryScoreProbe",
    # Messaging
    "Message",
    "MessageProducer",
    # Errors
    "StampHealthError",
    "ServiceNotStartedError",
    "StorageUnavailableError",
    "TelemetryQueryError",
]
