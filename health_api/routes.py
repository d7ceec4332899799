"""FastAPI routes for stamp health."""

from fastapi import APIRouter, Response, status

from health_api.dependencies import HealthServiceDep
from health_api.schemas import HealthResponse, LivenessResponse

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/stamp", response_model=HealthResponse)
async def stamp_health(service: HealthServiceDep, response: Response) -> HealthResponse:
    """Aggregate stamp health. 200 when healthy, 503 when any check fails."""
    result = await service.check_health()
    if not result.ok:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return HealthResponse.from_result(result)


@router.get("/liveness", response_model=LivenessResponse)
async def liveness() -> LivenessResponse:
    """Process is up. Probes nothing."""
    return LivenessResponse()
