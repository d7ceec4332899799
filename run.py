#!/usr/bin/env python3
"""Development server for the stamp health API."""

import logging

import uvicorn

from health_api import ApiConfig, create_app
from health_api.settings import Settings

if __name__ == "__main__":
    settings = Settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = create_app(
        api_config=ApiConfig(debug=settings.debug),
        service_config=settings.to_config(),
    )

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
