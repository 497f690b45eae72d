"""FastAPI application entry point."""

import logging
import time
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from todo_api import __version__
from todo_api.api import categories, metrics, todos
from todo_api.config import get_settings
from todo_api.database import get_db
from todo_api.exceptions import NotFoundError, TodoAppError
from todo_api.services.metrics import request_metrics

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    request_metrics.reset(settings.metrics_history_size)
    logger.info(f"Todo API {__version__} started ({settings.environment})")
    yield


app = FastAPI(
    title="Todo API",
    description="Todo tracking with categories, soft delete, search and batch operations",
    version=__version__,
    lifespan=lifespan,
)

# CORS middleware for development
if settings.is_development:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log every request and feed the request metrics."""
    started = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - started) * 1000

    request_metrics.record(request.method, response.status_code, duration_ms)
    logger.info(
        f"{request.method} {request.url.path} -> {response.status_code} ({duration_ms:.2f}ms)"
    )
    return response


@app.exception_handler(TodoAppError)
async def handle_app_error(request: Request, exc: TodoAppError):
    """Map domain errors to their HTTP status."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")

    content = {"detail": exc.message}
    if isinstance(exc, NotFoundError) and exc.missing_ids:
        content["missing_ids"] = exc.missing_ids
    return JSONResponse(status_code=exc.status_code, content=content)


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(request: Request, exc: RequestValidationError):
    """Malformed bodies and path parameters are client errors like any other."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


# Register routers
app.include_router(todos.router)
app.include_router(categories.router)
app.include_router(metrics.router)


@app.get("/health")
def health_check(db: Annotated[Session, Depends(get_db)]):
    """Health check endpoint that also probes the database."""
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Health check database probe failed: {e}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "error", "database": "disconnected", "version": __version__},
        )

    return {
        "status": "healthy",
        "environment": settings.environment,
        "version": __version__,
        "uptime_seconds": metrics.uptime_seconds(),
        "database": "connected",
    }
