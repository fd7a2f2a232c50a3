"""
Jobmatch API - Main Application

FastAPI backend with:
- PostgreSQL for jobseekers, employers and their profile sections
- Raw parameterized SQL through a pooled SQLAlchemy engine
- Optional bearer token verification

Run: uvicorn jobmatch.main:app --reload
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from loguru import logger
from sqlalchemy.exc import IntegrityError

from jobmatch.api.routes import api_router
from jobmatch.core.config import Settings, get_settings
from jobmatch.core.errors import ApiError, send_error
from jobmatch.core.logging_config import log_requests, setup_logging
from jobmatch.db.postgres import Database
from jobmatch.db.schema import create_schema


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the connection pool at startup and dispose it at shutdown."""
    db: Database = app.state.db
    logger.info("Starting Jobmatch API...")
    db.connect()
    if app.state.settings.db_create_schema:
        create_schema(db)
    try:
        yield
    finally:
        logger.info("Shutting down Jobmatch API...")
        db.dispose()


async def api_error_handler(request: Request, exc: ApiError):
    return PlainTextResponse(exc.message, status_code=exc.status_code)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies get the same plain-text 400 as failed field checks."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        message = f"Invalid request: {location} {first.get('msg', '')}".strip()
    else:
        message = "Invalid request"
    return PlainTextResponse(message, status_code=400)


async def integrity_error_handler(request: Request, exc: IntegrityError):
    """Constraint violations are client errors, not server failures."""
    detail = str(exc.orig).lower()
    if "foreign key" in detail:
        message = "Jobseeker could not be found"
    elif "unique" in detail or "duplicate" in detail:
        message = "Entry already exists"
    else:
        message = "Entry violates a database constraint"
    logger.warning(f"{request.method} {request.url.path} rejected: {exc.orig}")
    return PlainTextResponse(message, status_code=400)


async def unhandled_error_handler(request: Request, exc: Exception):
    """Handle all unhandled exceptions"""
    logger.exception(f"Unhandled exception on {request.method} {request.url.path}")
    settings: Settings = request.app.state.settings
    reason = str(exc) if settings.expose_errors else exc.__class__.__name__
    return JSONResponse(
        status_code=500,
        content=send_error(500, f"{request.url.path} error {reason}")
    )


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """Build the application; tests pass their own settings or database."""
    settings = settings or get_settings()
    setup_logging(settings)

    app = FastAPI(
        title="Jobmatch API",
        description="""
        REST backend for a job-matching platform.

        ## Resources
        - **Jobseekers**: account, profile, skills, education, certifications,
          dream careers, dream companies, experiences, resumes
        - **Employers**: account
        """,
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.db = database or Database.from_settings(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(log_requests)

    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(api_router)

    @app.get("/health", tags=["Health"])
    def health_check(request: Request):
        """Detailed health check."""
        db: Database = request.app.state.db
        return {
            "status": "healthy",
            "database": "connected" if db.ping() else "disconnected"
        }

    return app


app = create_app()
