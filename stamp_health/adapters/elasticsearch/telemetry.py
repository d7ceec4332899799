"""Health score queries against the regional telemetry store."""

import logging
from datetime import datetime, timedelta
from typing import Any, Mapping, Optional

from elasticsearch import AsyncElasticsearch

from stamp_health.config import TelemetryConfig
from stamp_health.core.health import HealthScoreSample
from stamp_health.exceptions import ServiceNotStartedError, TelemetryQueryError

logger = logging.getLogger(__name__)

TIME_FIELD = "TimeGenerated"
SCORE_FIELD = "HealthScore"


def _lookback_expr(lookback: timedelta) -> str:
    """Elasticsearch date-math for 'now minus lookback', second resolution."""
    return f"now-{max(int(lookback.total_seconds()), 0)}s"


def parse_sample(hit: Mapping[str, Any]) -> HealthScoreSample:
    """Turn one search hit into a HealthScoreSample."""
    try:
        source = hit["_source"]
        timestamp = datetime.fromisoformat(str(source[TIME_FIELD]).replace("Z", "+00:00"))
        score = float(source[SCORE_FIELD])
    except (KeyError, TypeError, ValueError) as e:
        raise TelemetryQueryError(f"Malformed health score document: {hit!r}") from e
    return HealthScoreSample(timestamp=timestamp, score=score)


class TelemetryClient:
    """Reads stamp health scores written by the telemetry pipeline."""

    def __init__(self, config: TelemetryConfig) -> None:
        self._config = config
        self._elasticsearch: Optional[AsyncElasticsearch] = None

    @property
    def elasticsearch(self) -> AsyncElasticsearch:
        """Native Elasticsearch async client."""
        if self._elasticsearch is None:
            raise ServiceNotStartedError("TelemetryClient not started. Call start() first.")
        return self._elasticsearch

    def index_for(self, workspace_id: str) -> str:
        return f"{self._config.index_prefix}-{workspace_id}"

    async def start(self) -> None:
        cfg = self._config
        self._elasticsearch = AsyncElasticsearch(hosts=cfg.hosts, api_key=cfg.api_key)

    async def stop(self) -> None:
        if self._elasticsearch:
            await self._elasticsearch.close()
            self._elasticsearch = None

    async def query_recent_scores(
        self, workspace_id: str, lookback: timedelta, limit: int = 1
    ) -> list[HealthScoreSample]:
        """Most recent health scores within lookback, newest first."""
        response = await self.elasticsearch.search(
            index=self.index_for(workspace_id),
            query={"range": {TIME_FIELD: {"gte": _lookback_expr(lookback)}}},
            sort=[{TIME_FIELD: {"order": "desc"}}],
            source=[TIME_FIELD, SCORE_FIELD],
            size=limit,
        )
        try:
            hits = response["hits"]["hits"]
        except (KeyError, TypeError) as e:
            raise TelemetryQueryError("Health score response has no hits") from e
        return [parse_sample(hit) for hit in hits]
