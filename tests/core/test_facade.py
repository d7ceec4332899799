"""Tests for StampHealthService façade."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, patch

import pytest

from stamp_health.config import StampHealthConfig, StorageConfig, TelemetryConfig
from stamp_health.core.facade import StampHealthService
from stamp_health.core.health import HealthScoreSample
from stamp_health.exceptions import ServiceNotStartedError


@pytest.fixture
def config() -> StampHealthConfig:
    return StampHealthConfig(
        storage=StorageConfig(object_key="marker"),
        telemetry=TelemetryConfig(workspace_id="west-1"),
        cache_duration_seconds=30,
    )


def _wire_healthy(service: StampHealthService, sample: HealthScoreSample) -> None:
    service.blobs.exists = AsyncMock(return_value=True)
    service.producer.is_healthy = AsyncMock(return_value=True)
    service.database.is_healthy = AsyncMock(return_value=True)
    service.telemetry.query_recent_scores = AsyncMock(return_value=[sample])


def test_clients_unavailable_before_start(config: StampHealthConfig):
    service = StampHealthService(config)

    with pytest.raises(ServiceNotStartedError):
        service.blobs.client
    with pytest.raises(ServiceNotStartedError):
        service.producer.redis
    with pytest.raises(ServiceNotStartedError):
        service.database.pool
    with pytest.raises(ServiceNotStartedError):
        service.telemetry.elasticsearch


def test_cache_uses_configured_ttl(config: StampHealthConfig):
    service = StampHealthService(config)
    assert service.health_check.cache.ttl_seconds == 30


async def test_start_stop(config: StampHealthConfig):
    service = StampHealthService(config)

    with patch.object(service.blobs, "start", new_callable=AsyncMock) as blobs_start, \
         patch.object(service.producer, "start", new_callable=AsyncMock) as producer_start, \
         patch.object(service.database, "start", new_callable=AsyncMock) as database_start, \
         patch.object(service.telemetry, "start", new_callable=AsyncMock) as telemetry_start:

        await service.start()

        blobs_start.assert_called_once()
        producer_start.assert_called_once()
        database_start.assert_called_once()
        telemetry_start.assert_called_once()

    with patch.object(service.blobs, "stop", new_callable=AsyncMock) as blobs_stop, \
         patch.object(service.producer, "stop", new_callable=AsyncMock) as producer_stop, \
         patch.object(service.database, "stop", new_callable=AsyncMock) as database_stop, \
         patch.object(service.telemetry, "stop", new_callable=AsyncMock) as telemetry_stop:

        await service.stop()

        blobs_stop.assert_called_once()
        producer_stop.assert_called_once()
        database_stop.assert_called_once()
        telemetry_stop.assert_called_once()


async def test_context_manager(config: StampHealthConfig):
    with patch.object(StampHealthService, "start", new_callable=AsyncMock) as mock_start, \
         patch.object(StampHealthService, "stop", new_callable=AsyncMock) as mock_stop:

        async with StampHealthService(config) as service:
            assert service is not None

        mock_start.assert_called_once()
        mock_stop.assert_called_once()


async def test_check_health_wires_all_probes(config: StampHealthConfig, clock):
    service = StampHealthService(config, clock=clock)
    _wire_healthy(service, HealthScoreSample(timestamp=datetime.now(timezone.utc), score=0.9))

    result = await service.check_health()

    assert result.ok is True
    assert set(result.details) == {
        "StateBlobHealthy",
        "MessageProducerServiceHealthy",
        "DatabaseServiceHealthy",
        "StampHealthScoreOk",
    }
    service.blobs.exists.assert_awaited_once_with("marker")
    service.telemetry.query_recent_scores.assert_awaited_once()
    assert service.telemetry.query_recent_scores.await_args.args[0] == "west-1"


async def test_unstarted_clients_report_unhealthy(config: StampHealthConfig, clock):
    service = StampHealthService(config, clock=clock)

    result = await service.check_health()

    assert result.ok is False
    assert not any(result.details.values())


async def test_check_health_cached_across_calls(config: StampHealthConfig, clock):
    service = StampHealthService(config, clock=clock)
    _wire_healthy(service, HealthScoreSample(timestamp=datetime.now(timezone.utc), score=0.9))

    await service.check_health()
    clock.advance(29)
    await service.check_health()

    service.database.is_healthy.assert_awaited_once()
    clock.advance(1)
    await service.check_health()
    assert service.database.is_healthy.await_count == 2


async def test_failed_start_stops_started_clients(config: StampHealthConfig):
    service = StampHealthService(config)

    with patch.object(service.blobs, "start", new_callable=AsyncMock), \
         patch.object(service.producer, "start", new_callable=AsyncMock), \
         patch.object(service.database, "start", new_callable=AsyncMock), \
         patch.object(service.telemetry, "start", new_callable=AsyncMock) as telemetry_start, \
         patch.object(service.blobs, "stop", new_callable=AsyncMock) as blobs_stop, \
         patch.object(service.producer, "stop", new_callable=AsyncMock) as producer_stop, \
         patch.object(service.database, "stop", new_callable=AsyncMock) as database_stop, \
         patch.object(service.telemetry, "stop", new_callable=AsyncMock) as telemetry_stop:
        telemetry_start.side_effect = ValueError("bad hosts")

        with pytest.raises(ValueError, match="bad hosts"):
            await service.start()

        blobs_stop.assert_awaited_once()
        producer_stop.assert_awaited_once()
        database_stop.assert_awaited_once()
        telemetry_stop.assert_not_awaited()


async def test_start_with_database_down_reports_database_unhealthy(config: StampHealthConfig, clock):
    service = StampHealthService(config, clock=clock)
    sample = HealthScoreSample(timestamp=datetime.now(timezone.utc), score=0.9)

    with patch.object(service.blobs, "start", new_callable=AsyncMock), \
         patch.object(service.producer, "start", new_callable=AsyncMock), \
         patch.object(service.telemetry, "start", new_callable=AsyncMock), \
         patch(
             "stamp_health.adapters.postgres.catalog.asyncpg.create_pool",
             new_callable=AsyncMock,
             side_effect=ConnectionRefusedError("connection refused"),
         ) as create_pool:
        await service.start()

        service.blobs.exists = AsyncMock(return_value=True)
        service.producer.is_healthy = AsyncMock(return_value=True)
        service.telemetry.query_recent_scores = AsyncMock(return_value=[sample])
        result = await service.check_health()

    assert result.ok is False
    assert result.details["DatabaseServiceHealthy"] is False
    assert result.details["StateBlobHealthy"] is True
    # One attempt during start, one more from the health check
    assert create_pool.await_count == 2
