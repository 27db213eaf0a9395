"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.api import adoptions, auth, cats
from src.config import get_settings
from src.database import engine
from src.exceptions import AppError, UnauthorizedError
from src.schemas.common import ErrorResponse, HealthResponse

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)-5s %(name)s %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    logger.info(f"Cats API starting ({settings.environment}, auth={settings.auth_strategy})")
    yield
    # Return pooled connections on shutdown
    engine.dispose()
    logger.info("Cats API shutdown complete")


app = FastAPI(
    title="Cats API",
    description="Cats, user accounts and adoptions",
    version="0.1.0",
    lifespan=lifespan,
)

@app.middleware("http")
async def answer_options(request: Request, call_next):
    """Answer every OPTIONS request with an empty 200.

    Registered before CORSMiddleware, which therefore wraps it and still
    handles real preflights that carry an Origin header.
    """
    if request.method == "OPTIONS":
        return Response(status_code=200)
    return await call_next(request)


# Reflect any origin when "*" is configured so credentialed requests keep working
allow_all_origins = "*" in settings.cors_origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=[] if allow_all_origins else settings.cors_origins,
    allow_origin_regex=".*" if allow_all_origins else None,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


def error_response(status_code: int, error: str, details: str | None = None) -> JSONResponse:
    """Render the error envelope shared by every failure response."""
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error, details=details).model_dump(exclude_none=True),
    )


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Map the application error taxonomy onto HTTP responses."""
    response = error_response(exc.status_code, exc.message, exc.details)
    if isinstance(exc, UnauthorizedError):
        response.headers["WWW-Authenticate"] = "Bearer"
        if settings.session_cookie_name in request.cookies:
            response.delete_cookie(settings.session_cookie_name)
    return response


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Return 400 when path or query parameters fail validation."""
    return error_response(400, "Invalid request parameters", str(exc.errors()))


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Wrap routing errors (404, 405) in the error envelope."""
    return error_response(exc.status_code, str(exc.detail))


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Storage failures become 500s; no retries are attempted."""
    logger.exception(f"Database error on {request.method} {request.url.path}")
    details = str(exc) if settings.expose_error_details and not settings.is_production else None
    return error_response(500, "Database error", details)


# Register routers
app.include_router(cats.router)
app.include_router(auth.router)
app.include_router(auth.users_router)
app.include_router(adoptions.router)


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(
        status="ok",
        timestamp=datetime.now(UTC),
        environment=settings.environment,
    )
