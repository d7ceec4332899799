from stamp_health.adapters.elasticsearch.telemetry import TelemetryClient

__all__ = ["TelemetryClient"]
