"""Health API - stamp health endpoint for load balancers and orchestrators."""

from health_api.app import create_app
from health_api.config import ApiConfig

__all__ = ["create_app", "ApiConfig"]
