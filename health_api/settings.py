"""Environment-driven settings for running the health service."""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from stamp_health import (
    PostgresConfig,
    RedisConfig,
    StampHealthConfig,
    StorageConfig,
    TelemetryConfig,
)


class Settings(BaseSettings):
    """Central configuration loaded from STAMP_* environment variables / .env file."""

    model_config = SettingsConfigDict(
        env_prefix="STAMP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    debug: bool = False
    log_level: str = "INFO"

    # Health result cache
    health_cache_duration_seconds: float = 10.0

    # State object storage
    storage_endpoint_url: Optional[str] = None
    storage_region: str = "us-east-1"
    storage_access_key_id: Optional[str] = None
    storage_secret_access_key: Optional[str] = None
    storage_bucket: str = "health"
    storage_object_key: str = "stamp.health.state"
    storage_expected_state: Optional[str] = None

    # Message producer
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: Optional[str] = None
    redis_stream: str = "stamp-messages"
    redis_maxlen: int = 10_000

    # Catalog database
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_database: str = "catalog"
    postgres_user: str = "postgres"
    postgres_password: Optional[str] = None
    postgres_min_connections: int = 2
    postgres_max_connections: int = 10

    # Regional telemetry
    telemetry_hosts: list[str] = ["http://localhost:9200"]
    telemetry_workspace_id: str = "default"
    telemetry_api_key: Optional[str] = None
    telemetry_threshold: float = 0.5
    telemetry_lookback_minutes: int = 10

    def to_config(self) -> StampHealthConfig:
        return StampHealthConfig(
            storage=StorageConfig(
                endpoint_url=self.storage_endpoint_url,
                region=self.storage_region,
                access_key_id=self.storage_access_key_id,
                secret_access_key=self.storage_secret_access_key,
                bucket=self.storage_bucket,
                object_key=self.storage_object_key,
                expected_state=self.storage_expected_state,
            ),
            redis=RedisConfig(
                host=self.redis_host,
                port=self.redis_port,
                db=self.redis_db,
                password=self.redis_password,
                stream=self.redis_stream,
                maxlen=self.redis_maxlen,
            ),
            postgres=PostgresConfig(
                host=self.postgres_host,
                port=self.postgres_port,
                database=self.postgres_database,
                user=self.postgres_user,
                password=self.postgres_password,
                min_connections=self.postgres_min_connections,
                max_connections=self.postgres_max_connections,
            ),
            telemetry=TelemetryConfig(
                hosts=self.telemetry_hosts,
                workspace_id=self.telemetry_workspace_id,
                api_key=self.telemetry_api_key,
                threshold=self.telemetry_threshold,
                lookback_minutes=self.telemetry_lookback_minutes,
            ),
            cache_duration_seconds=self.health_cache_duration_seconds,
        )
