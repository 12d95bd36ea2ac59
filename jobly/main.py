"""
Jobly - Main Application

FastAPI backend with:
- PostgreSQL (SQLAlchemy, raw parameterized SQL) for companies, jobs, users, applications
- JWT bearer authentication with per-route policies
- Uniform error responses: {"detail": ...}

Run: uvicorn jobly.main:app --reload
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from jobly.api.routes import api_router
from jobly.core.config import Settings, get_settings
from jobly.core.errors import InternalError, JoblyError
from jobly.core.logging import configure_logging
from jobly.db.session import Database
from jobly.schemas.schemas import HealthResponse

logger = logging.getLogger(__name__)


def _validation_messages(exc: RequestValidationError) -> list:
    return [
        f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
    ]


def create_app(settings: Optional[Settings] = None, db: Optional[Database] = None) -> FastAPI:
    """
    Build the application.

    If db is given the caller owns it; otherwise one is created from settings
    at startup and disposed at shutdown.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = app.state.db is None
        if owned:
            app.state.db = Database(settings.sqlalchemy_url, echo=settings.debug)
        logger.info("Jobly API started")
        yield
        if owned:
            app.state.db.dispose()
            app.state.db = None

    app = FastAPI(
        title="Jobly",
        description="""
        Staffing record API.

        ## Features
        - **Companies**: search by name and size; admins create, update, delete
        - **Jobs**: search by title, salary and equity; admins create, update, delete
        - **Users**: registration, login, profiles, job applications
        """,
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.db = db

    # CORS middleware (allow all for development)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(JoblyError)
    async def jobly_error_handler(request: Request, exc: JoblyError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
            return JSONResponse(status_code=exc.status_code, content={"detail": InternalError.default_message})
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"detail": _validation_messages(exc)})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        error = InternalError()
        return JSONResponse(status_code=error.status_code, content={"detail": error.message})

    app.include_router(api_router)

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    def health_check():
        """Detailed health check."""
        connected = app.state.db is not None and app.state.db.ping()
        return {"status": "healthy", "database": "connected" if connected else "disconnected"}

    return app


app = create_app()
