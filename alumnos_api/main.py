"""
Alumnos API: FastAPI Application Factory
========================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance;
       the module-level `app` is what uvicorn serves (alumnos_api.main:app).

Application Architecture:
    ┌──────────────────────────────────────────────────────┐
    │                    FastAPI App                       │
    │                                                      │
    │  Middleware:  Request ID → Logging → GZip → CORS     │
    │                                                      │
    │  Routes:                                             │
    │    /dalumn, /Alumno     student records (same code)  │
    │    /api-docs            Swagger UI                   │
    │    /api-docs-json       generated OpenAPI document   │
    │    /options             raw API description          │
    │    /upload              multipart file upload        │
    │    /health              store connectivity           │
    │                                                      │
    │  Exception Handlers:                                 │
    │    NotFound→404 │ Validation→400 │ Database→500      │
    └──────────────────────────────────────────────────────┘

Every error body is {"message": "..."}; database errors carry the
driver's own message text.
"""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from alumnos_api import __version__
from alumnos_api.config import Settings, settings as default_settings
from alumnos_api.exceptions import (
    AlumnosError,
    DatabaseError,
    FileStorageError,
    NotFoundError,
    ValidationError,
)
from alumnos_api.middleware.logging import ACCESS_LOGGER_NAME, RequestLoggingMiddleware
from alumnos_api.middleware.request_id import RequestIDMiddleware, request_id_var
from alumnos_api.routes import docs, health, uploads
from alumnos_api.routes.students import STUDENT_PREFIXES, build_student_router
from alumnos_api.services.file_service import FileService
from alumnos_api.services.student_repository import StudentRepository

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%S"


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(app_settings: Settings) -> None:
    """
    Configure logging for the entire application.

    Root logger → stdout at LOG_LEVEL. When ACCESS_LOG_PATH is set, the
    access logger additionally appends to that file.
    """
    logging.basicConfig(
        level=getattr(logging, app_settings.log_level, logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)

    if app_settings.access_log_path:
        access_logger = logging.getLogger(ACCESS_LOGGER_NAME)
        log_file = Path(app_settings.access_log_path).resolve()
        already_attached = any(
            isinstance(h, logging.FileHandler) and Path(h.baseFilename) == log_file
            for h in access_logger.handlers
        )
        if not already_attached:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            handler = logging.FileHandler(log_file, encoding="utf-8")
            handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT))
            access_logger.addHandler(handler)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: logging, upload directory. Shutdown: close pooled connections.
    """
    app_settings: Settings = app.state.settings

    setup_logging(app_settings)
    logger.info("=" * 60)
    logger.info("Alumnos API %s starting up...", __version__)

    upload_dir = Path(app_settings.upload_dir)
    upload_dir.mkdir(parents=True, exist_ok=True)
    logger.info("Upload directory: %s", upload_dir.resolve())

    logger.info("Listening on port %d", app_settings.port)
    logger.info("API docs: http://%s:%d/api-docs", app_settings.host, app_settings.port)
    logger.info("=" * 60)

    yield

    logger.info("Alumnos API shutting down...")
    await app.state.student_repository.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map application exceptions to status codes and `{"message": ...}` bodies.

        ValidationError  → 400
        RequestValidationError → 400 (malformed multipart upload)
        NotFoundError    → 404
        DatabaseError    → 500 (driver message, verbatim)
        FileStorageError → 500
        AlumnosError     → 500
        Exception        → 500 (generic message; traceback logged)
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return JSONResponse(status_code=400, content={"message": exc.message})

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        # Only multipart uploads can fail here; record bodies are read without validation
        message = "Invalid request"
        errors = exc.errors()
        if errors:
            first = errors[0]
            message = first.get("msg", message)
            location = ".".join(str(part) for part in first.get("loc", ())[1:])
            if location:
                message = f"{location}: {message}"
        logger.warning("[%s] Request rejected: %s", request_id_var.get(""), message)
        return JSONResponse(status_code=400, content={"message": message})

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"message": exc.message})

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(status_code=500, content={"message": exc.message})

    @app.exception_handler(FileStorageError)
    async def handle_file_storage_error(request: Request, exc: FileStorageError):
        rid = request_id_var.get("")
        logger.error("[%s] File storage error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(status_code=500, content={"message": exc.message})

    @app.exception_handler(AlumnosError)
    async def handle_application_error(request: Request, exc: AlumnosError):
        rid = request_id_var.get("")
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(status_code=500, content={"message": exc.message})

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"message": "An unexpected error occurred"},
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    app_settings: Optional[Settings] = None,
    repository: Optional[StudentRepository] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings: Settings to use (defaults to the environment-loaded singleton)
        repository:   Pre-built repository (tests pass one bound to SQLite);
                      otherwise one is built from app_settings.store_config()
    """
    app_settings = app_settings or default_settings
    api_options = docs.load_api_options(app_settings.options_path)
    info = api_options.get("info", {})

    app = FastAPI(
        title=info.get("title", "Alumnos API"),
        description=info.get("description", ""),
        version=info.get("version", __version__),
        servers=api_options.get("servers"),
        docs_url="/api-docs",
        redoc_url=None,
        openapi_url="/api-docs-json",
        lifespan=lifespan,
    )

    app.state.settings = app_settings
    app.state.api_options = api_options
    app.state.student_repository = repository or StudentRepository(app_settings.store_config())
    app.state.file_service = FileService(app_settings.upload_dir)

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    for prefix, tag in STUDENT_PREFIXES:
        app.include_router(build_student_router(prefix, tag))
    app.include_router(docs.router)
    app.include_router(uploads.router)
    app.include_router(health.router)

    return app


app = create_app()
