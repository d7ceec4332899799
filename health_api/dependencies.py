"""FastAPI dependency injection."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from stamp_health import StampHealthService


async def get_health_service(request: Request) -> StampHealthService:
    """Get the StampHealthService instance from app state."""
    service = getattr(request.app.state, "health_service", None)
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Health service not configured",
        )
    return service


HealthServiceDep = Annotated[StampHealthService, Depends(get_health_service)]
