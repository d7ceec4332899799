"""Core components for stamp health."""

from stamp_health.core.aggregator import StampHealthCheck
from stamp_health.core.cache import CacheEntry, ResultCache
from stamp_health.core.facade import StampHealthService
from stamp_health.core.health import AggregateResult, HealthScoreSample, ProbeIdentity
from stamp_health.core.messages import Message, MessageProducer
from stamp_health.core.probes import Probe, ServiceProbe, StorageProbe, TelemetryScoreProbe

__all__ = [
    "StampHealthCheck",
    "CacheEntry",
    "ResultCache",
    "StampHealthService",
    "AggregateResult",
    "HealthScoreSample",
    "ProbeIdentity",
    "Message",
    "MessageProducer",
    "Probe",
    "ServiceProbe",
    "StorageProbe",
    "TelemetryScoreProbe",
]
