"""
Student API — FastAPI Application Factory
==========================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes configuration validation, dependency wiring, middleware,
       route mounting, error translation and lifecycle in one place.
How:   create_app(settings) validates the settings, builds the DocumentStore,
       TokenService and PasswordHasher, attaches them to app.state, then
       registers middleware, exception handlers and routers.
Who:   The `student-api` console script (run()), or uvicorn in factory mode:
           uvicorn student_api.main:create_app --factory

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  Request ID → Logging → CORS           │
    │                                                     │
    │  Routes:  /   /health   /auth/*   /students*        │
    │           /courses*                                 │
    │                                                     │
    │  Exception Handler (one, keyed on ErrorKind):       │
    │  VALIDATION/MALFORMED_ID/ALREADY_EXISTS → 400       │
    │  UNAUTHENTICATED → 401   NOT_FOUND → 404            │
    │  INTERNAL → 500                                     │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, ping MongoDB
    Shutdown: close the MongoDB client
"""

import logging
import sys
from contextlib import asynccontextmanager
from datetime import timedelta
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

from student_api import __version__
from student_api.auth.passwords import PasswordHasher
from student_api.auth.tokens import TokenService
from student_api.config import Settings, load_settings
from student_api.database import DocumentStore
from student_api.exceptions import InternalError, StudentApiError, ValidationError
from student_api.middleware.logging import RequestLoggingMiddleware
from student_api.middleware.request_id import RequestIDMiddleware, request_id_var
from student_api.routes import auth, courses, health, root, students

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Output: stdout (containers capture it)
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup:
        1. Configure logging at the configured level
        2. Ping MongoDB so connection problems show up in the logs at boot

    Shutdown:
        1. Close the MongoDB client (drains the connection pool)

    A failed ping does not abort startup: the driver keeps reconnecting in
    the background and each request reports its own failure.
    """
    settings: Settings = app.state.settings
    store: DocumentStore = app.state.store

    setup_logging(settings.log_level)
    logger.info("Student API %s starting up...", __version__)

    try:
        await store.ping()
        logger.info("Connected to MongoDB (%s)", store.database_name)
    except PyMongoError as e:
        logger.error("MongoDB connection failed: %s", e)

    logger.info("Server ready at http://%s:%d", settings.host, settings.port)

    yield

    logger.info("Student API shutting down...")
    await store.close()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def error_response(exc: StudentApiError) -> JSONResponse:
    """Translates an application error into its HTTP response."""
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register the error-to-response translation layer.

    Handler hierarchy:
        StudentApiError         → status from exc.kind, body from exc.to_body()
        RequestValidationError  → treated as ValidationError (400)
        HTTPException           → routing errors (404, 405) as {"message": detail}
        Exception (fallback)    → InternalError (500) with the raw message
    """

    @app.exception_handler(StudentApiError)
    async def handle_app_error(request: Request, exc: StudentApiError):
        rid = request_id_var.get("")
        if exc.status_code >= 500:
            logger.error("[%s] %s: %s | Context: %s", rid, exc.kind.value, exc.message, exc.context)
        else:
            logger.warning("[%s] %s: %s", rid, exc.kind.value, exc.message)
        return error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        """Undecodable JSON or wrongly typed fields are a client error like any other."""
        rid = request_id_var.get("")
        logger.warning("[%s] Request body rejected: %d error(s)", rid, len(exc.errors()))
        return error_response(ValidationError(message="Invalid request body"))

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        """Unknown paths and unsupported methods, raised by the router itself."""
        rid = request_id_var.get("")
        logger.warning("[%s] %d %s %s", rid, exc.status_code, request.method, request.url.path)
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return error_response(InternalError(detail=str(exc)))


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    settings: Optional[Settings] = None,
    store: Optional[DocumentStore] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Validated configuration; read from the environment if omitted
        store:    Document store to use; built from settings.mongo_uri if omitted

    Raises:
        ValueError: configuration is missing JWT_SECRET (no app is built)
    """
    if settings is None:
        settings = load_settings()
    else:
        settings.validate_required()

    app = FastAPI(
        title="Student API",
        description="CRUD API for student and course records backed by MongoDB.",
        version=__version__,
        lifespan=lifespan,
    )

    # ── Wire Dependencies ─────────────────────────────────────────────────
    app.state.settings = settings
    app.state.store = store or DocumentStore.from_uri(settings.mongo_uri, settings.database_name)
    app.state.tokens = TokenService(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        ttl=timedelta(minutes=settings.jwt_expires_minutes),
    )
    app.state.hasher = PasswordHasher(rounds=settings.bcrypt_rounds)

    # ── Register Middleware ───────────────────────────────────────────────
    # Executes in reverse order of addition: RequestID → Logging → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(root.router)
    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(students.router)
    app.include_router(courses.router)

    return app


def run() -> None:
    """
    Console entry point: load settings, build the app, serve with uvicorn.

    A missing JWT_SECRET ends the process with exit status 1 before the
    server binds its port.
    """
    setup_logging()
    try:
        settings = load_settings()
    except ValueError as e:
        logger.critical("Configuration error: %s", e)
        logger.critical("Fix the configuration and restart the server.")
        raise SystemExit(1)

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
