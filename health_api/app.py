"""FastAPI application factory."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from stamp_health import StampHealthConfig, StampHealthService
from health_api.config import ApiConfig


def create_app(
    api_config: ApiConfig | None = None,
    service_config: StampHealthConfig | None = None,
    service: StampHealthService | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Pass ``service_config`` to have the app own a StampHealthService for its
    lifetime, or ``service`` to use an already-built one (not started or
    stopped by the app).
    """

    api_config = api_config or ApiConfig()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup: connect probed clients
        owned = None
        if service is None and service_config:
            owned = StampHealthService(service_config)
            await owned.start()
            app.state.health_service = owned
        yield
        # Shutdown: disconnect probed clients
        if owned is not None:
            await owned.stop()

    app = FastAPI(
        title=api_config.title,
        lifespan=lifespan,
        debug=api_config.debug,
    )
    app.state.api_config = api_config
    if service is not None:
        app.state.health_service = service

    from health_api.routes import router as health_router

    app.include_router(health_router)

    return app
