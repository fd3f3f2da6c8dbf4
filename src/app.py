"""Main FastAPI application module.

This module builds the FastAPI application, wires the database handle and
registers all route handlers.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.database import Database
from core.logging_config import setup_logging
from config import (
    API_HOST,
    API_PORT,
    CORS_ALLOWED_METHODS,
    CORS_ALLOWED_ORIGINS,
)
from api.routes import class_route, departments, subjects, users

logger = logging.getLogger(__name__)

API_TITLE = "Academic Administration API"
API_VERSION = "1.0.0"
API_DESCRIPTION = (
    "CRUD API for users, departments, subjects, classes and enrollments."
)

CREATE_FAILURE_MESSAGES = {
    departments.router.prefix: departments.CREATE_FAILURE_MESSAGE,
    subjects.router.prefix: subjects.CREATE_FAILURE_MESSAGE,
    class_route.router.prefix: class_route.CREATE_FAILURE_MESSAGE,
}


def _register_exception_handlers(app: FastAPI) -> None:
    """Render every error as ``{"error": message}``."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        # Create endpoints do not distinguish bad input from database failures
        create_message = None
        if request.method == "POST":
            create_message = CREATE_FAILURE_MESSAGES.get(request.url.path.rstrip("/"))
        if create_message:
            logger.error(
                "%s %s failed: %s", request.method, request.url.path, exc.errors()
            )
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"error": create_message},
            )

        logger.info("%s %s rejected: %s", request.method, request.url.path, exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid request body"},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )


def create_app(
    database_url: Optional[str] = None,
    database: Optional[Database] = None,
) -> FastAPI:
    """Build the application.

    Args:
        database_url: SQLAlchemy URL. Defaults to ``config.DATABASE_URL``.
        database: Pre-built database handle; takes precedence over the URL.

    Returns:
        Configured FastAPI application. The database is initialised on the
        startup event and disposed on the shutdown event.
    """
    setup_logging()

    app = FastAPI(
        title=API_TITLE,
        description=API_DESCRIPTION,
        version=API_VERSION,
    )
    app.state.database = database or Database(database_url)

    # Configure CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=CORS_ALLOWED_METHODS,
        allow_headers=["*"],
    )

    _register_exception_handlers(app)

    # Register route handlers
    app.include_router(users.router)
    app.include_router(departments.router)
    app.include_router(subjects.router)
    app.include_router(class_route.router)

    @app.on_event("startup")
    def startup_tasks() -> None:
        """Create missing tables before serving requests."""
        app.state.database.init()

    @app.on_event("shutdown")
    def shutdown_tasks() -> None:
        """Release pooled connections."""
        app.state.database.dispose()

    @app.get("/", summary="API root", tags=["Info"])
    def root() -> dict:
        """API root, returns API information and documentation links.

        Returns:
            Dictionary with API information and documentation links.
        """
        return {
            "name": API_TITLE,
            "version": API_VERSION,
            "description": API_DESCRIPTION,
            "docs": {
                "swagger": "/docs",
                "redoc": "/redoc",
            },
            "health": "/api/health",
        }

    @app.get("/api/health", summary="Health check", tags=["Health"])
    def health() -> dict:
        """Health check endpoint.

        Returns:
            Dictionary with status "ok".
        """
        return {"status": "ok"}

    return app


app = create_app()


# --- Startup code for direct execution ---
if __name__ == "__main__":
    import uvicorn

    server_url = f"http://{API_HOST}:{API_PORT}"
    logger.info("Starting %s at %s (docs: %s/docs)", API_TITLE, server_url, server_url)

    # uvicorn turns SIGINT/SIGTERM into a graceful shutdown, which fires the
    # shutdown event above.
    uvicorn.run("app:app", host=API_HOST, port=API_PORT, reload=True)
