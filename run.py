"""Entry point for the PPA Deals API.

Launches the FastAPI application with Uvicorn.  Host, port and log
level come from the environment (``HOST``, ``PORT``, ``LOG_LEVEL``);
see ``ppa_deals_api.app.core.config`` for all supported variables.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from ppa_deals_api.app.core.config import settings
from ppa_deals_api.app.main import app

logger = logging.getLogger(__name__)


async def main() -> None:
    """Serve the API until interrupted."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    logger.info("Server listening at http://%s:%s", settings.host, settings.port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
