"""
Main entrypoint for the Marketplace API.

This module assembles the FastAPI application, sets up logging,
creates the listings store and includes the API router.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``.  Importing the app
here makes it easy to run with uvicorn or another ASGI server, e.g.::

    uvicorn marketplace_api.app.main:app --reload

Every error response, whether raised by an endpoint or produced by
request validation, is rendered as ``{"success": false, "message": ...}``.
"""

import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import Settings, settings
from .core.logging_config import setup_logging
from .core.store import FileBackend, ListingStore
from .api.router import router as api_router
from .services.contact_service import ContactService


def create_app(
    app_settings: Optional[Settings] = None,
    store: Optional[ListingStore] = None,
    contact_service: Optional[ContactService] = None,
) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    app_settings : Optional[Settings]
        Settings to use instead of the module level ``settings``.
    store : Optional[ListingStore]
        Listings store.  Defaults to a file‑backed store at
        ``app_settings.get_listings_path()``.
    contact_service : Optional[ContactService]
        Contact relay.  Defaults to one built from ``app_settings``.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    app_settings = app_settings or settings
    # Initialise logging before anything else so that the store and
    # services can log during startup.
    setup_logging(
        app_settings.log_level,
        app_settings.log_file,
        fmt=app_settings.log_format,
        access_log=app_settings.access_log,
    )
    logger = logging.getLogger(__name__)

    app = FastAPI(title=app_settings.project_name, version=app_settings.api_version)

    app.state.settings = app_settings
    app.state.store = store or ListingStore(
        FileBackend(app_settings.get_listings_path()),
        read_failure=app_settings.store_read_failure,
    )
    app.state.contact_service = contact_service or ContactService.from_settings(app_settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.info("Rejected request to %s: %s", request.url.path, exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "message": "Invalid request body"},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "message": "Internal server error"},
        )

    app.include_router(api_router)

    # Static files are mounted last so that API routes take precedence.
    if app_settings.static_dir:
        static_path = Path(app_settings.static_dir)
        if static_path.is_dir():
            app.mount("/", StaticFiles(directory=str(static_path), html=True), name="static")
        else:
            logger.warning("Static directory %s does not exist; not serving static files", static_path)

    @app.on_event("startup")
    async def startup_event() -> None:
        # Create the listings document if this is the first start.
        app.state.store.ensure_exists()
        logger.info("%s %s ready", app_settings.project_name, app_settings.api_version)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
