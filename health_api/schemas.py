"""Pydantic models for health responses."""

from enum import Enum

from pydantic import BaseModel, Field

from stamp_health import AggregateResult


class HealthState(str, Enum):
    """Wire-level health state."""

    HEALTHY = "Healthy"
    UNHEALTHY = "Unhealthy"


class StampHealthDetails(BaseModel):
    """Per-check outcomes of a stamp health evaluation."""

    StateBlobHealthy: bool
    MessageProducerServiceHealthy: bool
    DatabaseServiceHealthy: bool
    StampHealthScoreOk: bool


class HealthResponse(BaseModel):
    """Response body of the stamp health endpoint."""

    status: HealthState
    details: StampHealthDetails

    @classmethod
    def from_result(cls, result: AggregateResult) -> "HealthResponse":
        return cls(
            status=HealthState.HEALTHY if result.ok else HealthState.UNHEALTHY,
            details=StampHealthDetails(**result.details),
        )


class LivenessResponse(BaseModel):
    status: HealthState = Field(default=HealthState.HEALTHY)
