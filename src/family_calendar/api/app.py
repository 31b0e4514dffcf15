"""FastAPI application factory.

Run with ``uvicorn family_calendar.api.app:create_app --factory``.
"""

from __future__ import annotations

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from family_calendar import __version__
from family_calendar.api.events import router as events_router
from family_calendar.config import Settings, get_settings
from family_calendar.exceptions import ConfigurationError
from family_calendar.utils import configure_logging

logger = structlog.get_logger()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the API application.

    Args:
        settings: Application settings. If None, uses default settings.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(title="Family Calendar", version=__version__, debug=settings.debug)
    app.dependency_overrides[get_settings] = lambda: settings
    app.include_router(events_router)

    @app.exception_handler(ConfigurationError)
    async def _configuration_error(request: Request, exc: ConfigurationError) -> JSONResponse:
        logger.error("event_source_unavailable", path=request.url.path, error=str(exc))
        return JSONResponse(status_code=503, content={"detail": "Event source unavailable"})

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    return app
