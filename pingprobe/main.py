"""FastAPI application entry point for the ping service.

Build the application around a `PingController`, register middleware, and
configure logging inside the lifespan so that side effects happen in a
predictable order at startup rather than at import time.
"""

import logging.config
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI

from pingprobe.api.middleware import RequestCorrelationMiddleware
from pingprobe.api.routes import build_ping_router
from pingprobe.config import Settings, get_settings
from pingprobe.core.controller import PingController, load_check
from pingprobe.core.invoker import Probe
from pingprobe.core.logger import ProbeLogger, StructlogProbeLogger
from pingprobe.core.logging_config import (
    configure_structlog_wrapper,
    get_logger,
    get_logging_config,
)


def build_lifespan(settings: Settings):
    """Return a lifespan context manager bound to `settings`."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Configure logging on startup and mark the app as serving."""
        logging.config.dictConfig(get_logging_config(settings))
        configure_structlog_wrapper()

        logger = get_logger("lifespan")
        logger.info(
            "Ping service startup",
            env=settings.ENVIRONMENT,
            ping_path=settings.PING_PATH,
            check=settings.PING_CHECK,
        )
        app.state.is_ready = True

        yield

        app.state.is_ready = False
        logger.info("Ping service shutdown")

    return lifespan


def create_app(
    settings: Optional[Settings] = None,
    check: Optional[Probe] = None,
    logger: Optional[ProbeLogger] = None,
) -> FastAPI:
    """Assemble the ping application.

    Args:
        settings: Defaults to the cached `get_settings()` instance.
        check: Health check to run on each ping. Defaults to the callable
            named by ``PING_CHECK``, or no check.
        logger: Defaults to a structlog-backed logger.

    Returns:
        FastAPI: The configured application.

    Raises:
        CheckImportError: If ``PING_CHECK`` cannot be resolved.
    """
    settings = settings if settings is not None else get_settings()

    if check is None and settings.PING_CHECK:
        check = load_check(settings.PING_CHECK)

    controller = PingController(
        check=check,
        logger=logger if logger is not None else StructlogProbeLogger(),
        expires_http10_only=settings.PING_EXPIRES_HTTP10_ONLY,
    )

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="Liveness/readiness ping endpoint",
        lifespan=build_lifespan(settings),
    )
    app.add_middleware(RequestCorrelationMiddleware)
    app.include_router(build_ping_router(controller, settings.PING_PATH))

    return app


app = create_app()
