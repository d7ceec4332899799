"""Configuration dataclasses for stamp health probes."""

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Optional


@dataclass
class StorageConfig:
    """S3-compatible object storage holding the stamp state marker."""

    endpoint_url: Optional[str] = None
    region: str = "us-east-1"
    access_key_id: Optional[str] = None
    secret_access_key: Optional[str] = None
    bucket: str = "health"
    object_key: str = "stamp.health.state"
    expected_state: Optional[str] = None  # e.g. "HEALTHY"; None = existence only


@dataclass
class RedisConfig:
    """Redis connection configuration for the message producer."""

    host: str = "localhost"
    port: int = 6379
    db: int = 0
    password: Optional[str] = None
    stream: str = "stamp-messages"
    maxlen: int = 10_000


@dataclass
class PostgresConfig:
    """Postgres connection configuration."""

    host: str = "localhost"
    port: int = 5432
    database: str = "catalog"
    user: str = "postgres"
    password: Optional[str] = None
    min_connections: int = 2
    max_connections: int = 10


@dataclass
class TelemetryConfig:
    """Regional telemetry backend (Elasticsearch) holding health scores."""

    hosts: list[str] = field(default_factory=lambda: ["http://localhost:9200"])
    workspace_id: str = "default"
    api_key: Optional[str] = None
    index_prefix: str = "stamp-health-score"
    threshold: float = 0.5
    lookback_minutes: int = 10

    @property
    def lookback(self) -> timedelta:
        return timedelta(minutes=self.lookback_minutes)


@dataclass
class StampHealthConfig:
    """Aggregate configuration for the stamp health service."""

    storage: StorageConfig = field(default_factory=StorageConfig)
    redis: RedisConfig = field(default_factory=RedisConfig)
    postgres: PostgresConfig = field(default_factory=PostgresConfig)
    telemetry: TelemetryConfig = field(default_factory=TelemetryConfig)
    cache_duration_seconds: float = 10.0
