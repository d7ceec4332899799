"""Tests for configuration dataclasses."""

from datetime import timedelta

from stamp_health.config import (
    PostgresConfig,
    RedisConfig,
    StampHealthConfig,
    StorageConfig,
    TelemetryConfig,
)


def test_storage_config_defaults():
    config = StorageConfig()
    assert config.bucket == "health"
    assert config.object_key == "stamp.health.state"
    assert config.expected_state is None


def test_redis_config_defaults():
    config = RedisConfig()
    assert config.host == "localhost"
    assert config.port == 6379
    assert config.stream == "stamp-messages"


def test_postgres_config_defaults():
    config = PostgresConfig()
    assert config.port == 5432
    assert config.min_connections == 2
    assert config.max_connections == 10


def test_telemetry_config_defaults():
    config = TelemetryConfig()
    assert config.hosts == ["http://localhost:9200"]
    assert config.threshold == 0.5
    assert config.lookback == timedelta(minutes=10)


def test_stamp_health_config():
    config = StampHealthConfig()
    assert config.cache_duration_seconds == 10.0
    assert config.postgres.database == "catalog"


def test_config_override():
    config = StampHealthConfig(
        redis=RedisConfig(host="redis.prod.internal", port=6380, password="secret"),
        cache_duration_seconds=2.5,
    )
    assert config.redis.host == "redis.prod.internal"
    assert config.redis.password == "secret"
    assert config.cache_duration_seconds == 2.5
