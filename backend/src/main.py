"""Main FastAPI Application

Wires middleware, rate limiting, global exception handlers and the API
routers from `presentation`.

Run locally for development with:

    uvicorn main:app --reload

Keep application logic in `application`, `domain` and `infrastructure`;
this module only assembles the HTTP surface.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from core.config import settings
from core.database import init_db, close_db, health_check as database_health_check
from core.logging_config import configure_logging  # noqa: F401
from core.exceptions import (
    DomainException,
    AuthenticationException,
    AuthorizationException,
    ValidationException,
    ResourceNotFoundException,
    DuplicateResourceException,
    BusinessRuleException,
    RepositoryException,
)
from presentation.api.v1.dependencies import limiter
from presentation.api.v1.endpoints import (
    auth_router,
    users_router,
    job_history_router,
    jobs_router,
    applications_router,
    offers_router,
    interviews_router,
    verification_router,
    subscription_router,
    admin_router,
)


API_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info(f"Starting {settings.APP_NAME} ({settings.ENVIRONMENT})...")

    await init_db()
    logger.info("Database initialized")

    yield

    logger.info("Shutting down gracefully...")
    await close_db()
    logger.info("Database connections closed")


app = FastAPI(
    title=settings.APP_NAME,
    description="Job marketplace API: postings, applications, offers, interviews and verification",
    version=API_VERSION,
    lifespan=lifespan,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None
)


# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, lambda request, exc: JSONResponse(
    status_code=status.HTTP_429_TOO_MANY_REQUESTS,
    content={"detail": "Rate limit exceeded. Please try again later."}
))
app.add_middleware(SlowAPIMiddleware)


def _status_for(exc: DomainException) -> int:
    if isinstance(exc, AuthenticationException):
        return status.HTTP_401_UNAUTHORIZED
    if isinstance(exc, AuthorizationException):
        return status.HTTP_403_FORBIDDEN
    if isinstance(exc, ValidationException):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, ResourceNotFoundException):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, (DuplicateResourceException, BusinessRuleException)):
        return status.HTTP_409_CONFLICT
    return status.HTTP_500_INTERNAL_SERVER_ERROR


# Global Exception Handlers
@app.exception_handler(DomainException)
async def domain_exception_handler(request: Request, exc: DomainException):
    """Handle domain-level exceptions"""
    status_code = _status_for(exc)

    if status_code >= 500:
        # Repository failures carry driver details; keep them in the logs
        logger.error(f"{type(exc).__name__} on {request.method} {request.url.path}: {str(exc)}")
        detail = "Internal server error" if isinstance(exc, RepositoryException) else str(exc)
        return JSONResponse(status_code=status_code, content={"detail": detail})

    logger.warning(f"Domain exception on {request.method} {request.url.path}: {str(exc)}")

    content = {"detail": exc.message if isinstance(exc, ValidationException) else str(exc)}
    if isinstance(exc, ValidationException):
        content["field"] = exc.field

    return JSONResponse(status_code=status_code, content=content)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies and query strings become 400 with the offending field"""
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    field = ".".join(location) or None

    logger.warning(f"Request validation failed on {request.url.path}: {field} - {first.get('msg')}")

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": first.get("msg", "Invalid request"), "field": field}
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch-all exception handler"""
    logger.opt(exception=exc).error(f"Unhandled exception on {request.method} {request.url.path}: {str(exc)}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"}
    )


# Include API routes
for router in (
    auth_router,
    users_router,
    job_history_router,
    jobs_router,
    applications_router,
    offers_router,
    interviews_router,
    verification_router,
    subscription_router,
    admin_router,
):
    app.include_router(router, prefix="/api")


@app.get("/health")
async def health():
    """Liveness plus database reachability"""
    database_ok = await database_health_check()
    return JSONResponse(
        status_code=status.HTTP_200_OK if database_ok else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "healthy" if database_ok else "degraded",
            "database": database_ok,
            "version": API_VERSION,
        }
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
