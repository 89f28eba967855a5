"""
Deal Requirements Service — Main Application

FastAPI application entry point.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import logging
import structlog
from datetime import datetime

from config import settings

# Configure structured logging
logging.basicConfig(format="%(message)s", level=settings.log_level)

structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.JSONRenderer() if settings.is_production 
            else structlog.dev.ConsoleRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.
    
    Startup: Report configuration state
    Shutdown: Log only (no pooled resources)
    """
    # Startup
    logger.info(
        "application_starting",
        environment=settings.environment,
        debug=settings.debug,
        hubspot_configured=settings.hubspot_configured,
        requirements_url=settings.requirements_url,
        substring_fallback=settings.sku_substring_fallback
    )
    
    if not settings.hubspot_configured:
        logger.warning("hubspot_token_missing")
    
    yield
    
    # Shutdown
    logger.info("application_shutting_down")


# Create FastAPI app
app = FastAPI(
    title="Deal Requirements Service",
    description="Matches deal line items to product requirements and edits the related deal properties",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)


# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://localhost:5173",
        "https://app.hubspot.com",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ===================
# ROUTES
# ===================

@app.get("/health")
async def health_check():
    """
    Health check endpoint.
    
    Returns:
        Basic health status and configuration state
    """
    return {
        "status": "healthy" if settings.hubspot_configured else "degraded",
        "timestamp": datetime.utcnow().isoformat(),
        "environment": settings.environment,
        "hubspot_configured": settings.hubspot_configured
    }


@app.get("/")
async def root():
    """
    Root endpoint.
    
    Returns:
        API information and available endpoints
    """
    return {
        "name": "Deal Requirements API",
        "version": "0.1.0",
        "docs": "/docs" if settings.debug else "Disabled in production",
        "health": "/health",
        "endpoints": {
            "deal_requirements": "/api/deal-requirements",
            "deal_properties": "/api/deal-properties/update",
            "requirements": "/api/requirements"
        }
    }


# ===================
# ERROR HANDLERS
# ===================

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Global exception handler.
    
    Catches unhandled exceptions and returns standard error format.
    """
    logger.error(
        "unhandled_exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        error_type=type(exc).__name__
    )
    
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred",
                "details": str(exc) if settings.debug else None,
                "timestamp": datetime.utcnow().isoformat()
            }
        }
    )


# ===================
# INCLUDE ROUTERS
# ===================
from routes import (
    deal_requirements_router,
    deal_properties_router,
    requirements_router,
)

app.include_router(deal_requirements_router, prefix="/api/deal-requirements", tags=["Deal Requirements"])
app.include_router(deal_properties_router, prefix="/api/deal-properties", tags=["Deal Properties"])
app.include_router(requirements_router, prefix="/api/requirements", tags=["Requirements"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug
    )
