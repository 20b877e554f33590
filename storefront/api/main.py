"""FastAPI application main module.

This module builds the Storefront application: it wires the JSON stores and
upload sink into the services, registers the routers and error handlers,
and mounts the static directories. It also serves as the entry point for
the API server.
"""

import logging
from typing import Dict, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from storefront import __version__
from storefront.api.exceptions import StorefrontException
from storefront.api.logging_config import RequestLoggingMiddleware, setup_logging
from storefront.api.routes import ai, auth, products
from storefront.config import Settings, get_settings
from storefront.services.auth import AuthService
from storefront.services.catalog import CatalogService
from storefront.services.simulation import SimulationService
from storefront.storage.json_store import JsonStore
from storefront.storage.uploads import UPLOADS_URL_PREFIX, UploadSink

# Configure module logger
logger = logging.getLogger(__name__)


async def storefront_exception_handler(
    request: Request, exc: StorefrontException
) -> JSONResponse:
    """Render a StorefrontException with its own status code."""
    level = logging.ERROR if exc.status_code >= 500 else logging.INFO
    logger.log(
        level,
        "Request rejected",
        extra={
            "path": str(request.url.path),
            "status_code": exc.status_code,
            "error_type": type(exc).__name__,
            "error": exc.message,
        },
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": type(exc).__name__,
            "message": exc.message,
            "details": exc.details,
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Turn any other failure (I/O errors included) into a 500 response."""
    logger.error(
        "Unhandled error",
        extra={
            "path": str(request.url.path),
            "error": str(exc),
            "error_type": type(exc).__name__,
        },
        exc_info=exc,
    )
    return JSONResponse(
        status_code=500,
        content={
            "error": "InternalServerError",
            "message": "Internal server error",
            "details": {},
        },
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the Storefront application.

    Creates the store files and upload directory if they are missing, so the
    app is ready to serve as soon as this returns.

    Args:
        settings: Configuration to use; read from the environment if omitted.

    Returns:
        Configured FastAPI application.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Storefront API",
        description="Product catalog backend with simulated recommendations",
        version=__version__,
    )

    users_store = JsonStore(settings.users_path)
    products_store = JsonStore(settings.products_path)
    upload_sink = UploadSink(settings.UPLOAD_DIR)

    users_store.ensure_exists()
    products_store.ensure_exists()
    upload_sink.ensure_exists()

    app.state.settings = settings
    app.state.auth_service = AuthService(users_store)
    app.state.catalog_service = CatalogService(products_store, upload_sink)
    app.state.simulation_service = SimulationService()

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StorefrontException, storefront_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(auth.router)
    app.include_router(products.router)
    app.include_router(ai.router)

    @app.get("/ping")
    def ping() -> Dict[str, str]:
        """Health check endpoint.

        Example:
            >>> response = client.get("/ping")
            >>> assert response.json() == {"status": "ok"}
        """
        return {"status": "ok"}

    # Mounts go last: "/" would otherwise shadow the API routes
    app.mount(
        UPLOADS_URL_PREFIX,
        StaticFiles(directory=settings.UPLOAD_DIR),
        name="uploads",
    )
    if settings.PUBLIC_DIR.is_dir():
        app.mount(
            "/",
            StaticFiles(directory=settings.PUBLIC_DIR, html=True),
            name="public",
        )
    else:
        logger.info(
            "Public directory missing, static site not served",
            extra={"public_dir": str(settings.PUBLIC_DIR)},
        )

    logger.info(
        "Application created",
        extra={
            "users_file": str(settings.users_path),
            "products_file": str(settings.products_path),
            "upload_dir": str(settings.UPLOAD_DIR),
        },
    )
    return app


def main() -> None:
    """Run the API server with uvicorn."""
    import uvicorn

    settings = get_settings()
    setup_logging(settings.LOG_LEVEL)

    logger.info(
        "Starting server",
        extra={"host": settings.HOST, "port": settings.PORT},
    )
    uvicorn.run(
        "storefront.api.main:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
    )


if __name__ == "__main__":
    main()
