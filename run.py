"""Entry point for the Marketplace API.

Starts the FastAPI application with Uvicorn.  It is intended to be
executed from the project root, for example under Docker, where you
only specify a single Python file to run.

Configuration such as PORT, LISTINGS_FILE and RESEND_API_KEY may be
placed in a `.env` file in the same directory.

Usage:
    python run.py
"""
import asyncio

from uvicorn import Config, Server

from marketplace_api.app.core.config import settings
from marketplace_api.app.main import app


async def main() -> None:
    """Serve the API on ``settings.host``:``settings.port``."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
        access_log=settings.access_log,
    )
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
