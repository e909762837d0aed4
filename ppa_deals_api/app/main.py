"""
Main entrypoint for the PPA Deals API.

This module assembles the FastAPI application, sets up logging,
registers error handlers and includes the API router under ``/api``.
The ``create_app`` function builds and configures the app, which is
then instantiated at module import time as ``app``, e.g.::

    uvicorn ppa_deals_api.app.main:app --reload

The application title and version are provided via ``Settings`` from
``core.config``.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse

from .core.config import settings
from .core.db import init_db
from .core.exceptions import DealError
from .core.logging_config import setup_logging
from .api.router import router as api_router
from .services.deal_service import DealStore

logger = logging.getLogger(__name__)


def create_app(store: Optional[DealStore] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    store : Optional[DealStore]
        Deal store served by the API.  When omitted a new store is
        created, seeded with the mock deals unless ``SEED_DEALS`` is
        disabled.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    # Initialise logging before anything else so that the handlers
    # below can log.  DEBUG only raises verbosity; it is not passed to
    # FastAPI, whose debug mode bypasses the 500 handler below.
    setup_logging("DEBUG" if settings.debug else settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version)
    app.state.deal_store = store if store is not None else init_db(seed=settings.seed_deals)

    @app.exception_handler(DealError)
    async def deal_error_handler(request: Request, exc: DealError) -> JSONResponse:
        logger.debug("%s %s rejected: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": exc.message})

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )

    @app.get("/", response_class=PlainTextResponse, include_in_schema=False)
    async def hello() -> str:
        return "Hello World!"

    app.include_router(api_router, prefix="/api")

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
