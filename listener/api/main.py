"""
FastAPI Application — Blocked URL Report Listener

Receives blocked-URL events from browser extension instances and serves
them back from a bounded in-memory log.

CORS: Configured via environment variables.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from listener.config import Settings, settings as default_settings
from listener.exceptions import EventValidationError
from listener.store import EventLog
from .routes import router


# Configure logging
logging.basicConfig(level=default_settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


ENDPOINTS = [
    ("POST", "/", "Receive blocked URL requests"),
    ("GET", "/", "Retrieve blocked URLs (use ?latest=true for latest only)"),
    ("GET", "/ping", "Health check"),
    ("DELETE", "/cleanup", "Clear all requests"),
]


def _log_startup(config: Settings) -> None:
    path = config.properties_path
    if path.is_file():
        logger.info(f"Loaded configuration from: {path}")
    else:
        logger.warning(f"app.properties not found at {path}, using defaults")
    logger.info(f"🚀 {config.PROJECT_NAME} is running on {config.HOST}:{config.PORT}")
    logger.info(f"📍 Running in {config.ENVIRONMENT} mode")
    logger.info(f"Maximum requests to retain: {config.MAX_REQUESTS}")
    logger.info("Endpoints:")
    for method, route, description in ENDPOINTS:
        logger.info(f"  {method:<6} {route} - {description}")


def create_app(config: Optional[Settings] = None) -> FastAPI:
    """
    Build the listener application.

    Each application owns exactly one EventLog sized by MAX_REQUESTS.
    """
    config = config or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan events."""
        # Startup
        _log_startup(config)
        yield
        # Shutdown
        discarded = app.state.event_log.clear()
        logger.info(f"👋 Shutting down {config.PROJECT_NAME} ({discarded} event(s) discarded)")

    # Application metadata
    app = FastAPI(
        title=config.PROJECT_NAME,
        description="Companion listener that records blocked URL events",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.event_log = EventLog(capacity=config.MAX_REQUESTS)

    # Unhandled faults become a generic 500, logged once here
    @app.middleware("http")
    async def internal_error_middleware(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            logger.error(f"Error processing {request.method} {request.url.path}", exc_info=exc)
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"error": "Internal server error"},
            )

    # CORS Configuration — loaded from settings
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=False,
        allow_methods=["GET", "POST", "DELETE"],
        allow_headers=["Content-Type"],
    )

    @app.exception_handler(EventValidationError)
    async def event_validation_handler(request: Request, exc: EventValidationError):
        logger.warning(f"Rejected report from {_client(request)}: {exc}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": str(exc)},
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        reason = errors[0]["msg"] if errors else "malformed body"
        logger.warning(f"Rejected malformed request from {_client(request)}: {reason}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": f"Invalid request body: {reason}"},
        )

    # Include API routes
    app.include_router(router, tags=["Blocked URLs"])

    return app


def _client(request: Request) -> str:
    return request.client.host if request.client else "unknown"


app = create_app()
