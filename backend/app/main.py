import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from app.config import settings
from app.exceptions import SolariaAPIException, ValidationError
from app.limiter import limiter
from app.routers import admin, customers, facturas, transactions
from app.utils.logger import LoggerContextMiddleware, configure_logging

configure_logging(enable_cloud_logging=settings.enable_cloud_logging)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description=settings.app_description,
)

# Add rate limiter to app state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


# Global exception handlers
@app.exception_handler(SolariaAPIException)
async def solaria_exception_handler(request: Request, exc: SolariaAPIException):
    """Handle custom Solaria API exceptions."""
    content = {"error": exc.detail, "type": type(exc).__name__}
    if isinstance(exc, ValidationError):
        content["errors"] = exc.errors
    return JSONResponse(status_code=exc.status_code, content=content)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle unhandled exceptions."""
    logger.exception(f"Unhandled exception: {exc}")
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "type": "InternalError"},
    )

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
    expose_headers=["Content-Disposition", "x-request-id"],
)

if settings.enable_request_logging:
    app.add_middleware(LoggerContextMiddleware)

# Routers - v1 API
app.include_router(admin.router, prefix="/api/v1/admin", tags=["admin"])
app.include_router(customers.router, prefix="/api/v1/admin/customers", tags=["customers"])
app.include_router(transactions.router, prefix="/api/v1/admin/transactions", tags=["transactions"])
app.include_router(facturas.router, prefix="/api/v1/admin/facturas", tags=["facturas"])


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.get("/")
async def root():
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "api_version": "v1",
        "docs": "/docs",
        "endpoints": {
            "admin": "/api/v1/admin/me",
            "customers": "/api/v1/admin/customers",
            "transactions": "/api/v1/admin/transactions",
            "facturas": "/api/v1/admin/facturas",
            "health": "/health",
        },
    }
