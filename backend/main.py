"""
Main FastAPI application entry point
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.routes import (comments, communities, events, health, likes,
                            media, metrics, posts)
from app.core.config import get_settings
from app.core.exceptions import ContentServiceError
from app.core.logging_config import LoggingConfig
from app.core.middleware import LoggingContextMiddleware, MetricsMiddleware
from app.schemas.common import ErrorResponse

# Configure logging first
LoggingConfig.configure()

logger = LoggingConfig.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan events for FastAPI app"""
    settings = get_settings()
    logger.info(f"Starting {settings.app_name} in {settings.app_env} mode...")
    if not settings.media_host.is_configured:
        logger.warning("Media host credentials are not configured; uploads will fail")

    yield

    logger.info(f"Shutting down {settings.app_name}...")


_settings = get_settings()
app = FastAPI(
    title=_settings.app_name,
    description="Community content service: communities, posts, comments, likes, events and media",
    version=_settings.app_version,
    lifespan=lifespan,
)

app.add_middleware(LoggingContextMiddleware)
app.add_middleware(MetricsMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_response(status_code: int, message: str, errors=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message, "errors": errors},
    )


@app.exception_handler(ContentServiceError)
async def content_service_error_handler(request: Request, exc: ContentServiceError):
    """Domain errors carry their own status code"""
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        exc.message,
        extra={
            "error_type": exc.error_type,
            "status_code": exc.status_code,
            "cause": getattr(exc, "cause", None),
        }
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed requests are reported as 400 with per-field messages"""
    errors = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ())]
        if location and location[0] in ("body", "query", "path", "header"):
            location = location[1:]
        errors.append({
            "field": ".".join(location) or None,
            "message": error.get("msg", "Invalid value"),
            "type": error.get("type"),
        })
    logger.warning("Request validation failed", extra={"errors": errors})
    return _error_response(400, "Validation failed", errors)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return _error_response(exc.status_code, message)


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    """Constraint violations not caught by the services"""
    logger.warning("Integrity constraint violated", extra={"error": str(exc.orig)})
    return _error_response(409, "Resource conflicts with existing data")


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler to log all unhandled errors"""
    logger.error(
        "Unhandled exception",
        exc_info=True,
        extra={
            "error": str(exc),
            "error_type": type(exc).__name__,
            "path": request.url.path,
            "method": request.method,
        }
    )
    message = str(exc) if get_settings().app_env == "development" else "Internal server error"
    return _error_response(500, message)


# Include routers
app.include_router(health.router)
app.include_router(metrics.router)

# Error envelope documented for every content route
_ERROR_RESPONSES = {
    code: {"model": ErrorResponse} for code in (400, 404, 409, 500)
}
app.include_router(communities.router, prefix=_settings.api_prefix, responses=_ERROR_RESPONSES)
app.include_router(posts.router, prefix=_settings.api_prefix, responses=_ERROR_RESPONSES)
app.include_router(comments.router, prefix=_settings.api_prefix, responses=_ERROR_RESPONSES)
app.include_router(likes.router, prefix=_settings.api_prefix, responses=_ERROR_RESPONSES)
app.include_router(events.router, prefix=_settings.api_prefix, responses=_ERROR_RESPONSES)
app.include_router(media.router, prefix=_settings.api_prefix, responses=_ERROR_RESPONSES)


@app.get("/api")
async def root():
    """Root API endpoint"""
    settings = get_settings()
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "status": "running",
        "environment": settings.app_env,
        "api_prefix": settings.api_prefix,
    }


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(
        "main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.app_env == "development",
    )
