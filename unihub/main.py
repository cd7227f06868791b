"""
UniHub API - FastAPI application entry point.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import get_settings
from .database import engine, Base, SessionLocal
from .exceptions import UniHubError
from .limiter import limiter
from .logging_config import api_logger
from .middleware import SecurityHeadersMiddleware, RequestLoggingMiddleware
from .responses import (
    domain_exception_handler,
    http_exception_handler,
    request_validation_handler,
    unexpected_exception_handler,
)
from .routes import (
    auth_router,
    posts_router,
    events_router,
    resources_router,
    mentorship_router,
    calendar_router,
    departments_router,
)
from .services.campus import DepartmentDirectory
from . import models  # noqa: F401  registers tables on Base.metadata

settings = get_settings()


def init_db():
    """Create tables and seed reference data (in production, use Alembic migrations instead)."""
    Base.metadata.create_all(bind=engine)
    if not settings.seed_departments:
        return
    db = SessionLocal()
    try:
        added = DepartmentDirectory(db).seed()
        if added:
            api_logger.info("Seeded departments", count=added)
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle - startup and shutdown"""
    init_db()
    yield


app = FastAPI(
    title="UniHub API",
    description="University community feed, events, resources and mentorship",
    version="1.0.0",
    docs_url="/api/docs" if settings.debug else None,
    redoc_url="/api/redoc" if settings.debug else None,
    lifespan=lifespan,
)

# Add rate limiter to app state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_exception_handler(UniHubError, domain_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, request_validation_handler)
app.add_exception_handler(Exception, unexpected_exception_handler)

# Security headers middleware
app.add_middleware(SecurityHeadersMiddleware)

# Request logging middleware (only in debug mode)
if settings.debug:
    app.add_middleware(RequestLoggingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=[
        "Authorization",
        "Content-Type",
        "Accept",
        "Origin",
        "X-Requested-With",
    ],
    max_age=3600,  # Cache preflight requests for 1 hour
)

# Routes
app.include_router(auth_router)
app.include_router(posts_router)
app.include_router(events_router)
app.include_router(resources_router)
app.include_router(mentorship_router)
app.include_router(calendar_router)
app.include_router(departments_router)


@app.get("/api/health")
def health_check():
    """Health check endpoint for load balancers and monitoring."""
    return {
        "status": "healthy",
        "environment": settings.environment,
        "version": "1.0.0",
    }


@app.get("/")
def root():
    return {
        "message": "UniHub API",
        "docs": "/api/docs" if settings.debug else "Disabled in production",
    }
