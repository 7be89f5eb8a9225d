"""
FastAPI application entry point
"""
from fastapi import Depends, FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from sqlalchemy.orm import Session
import logging
import time

from comtrans.core.config import settings
from comtrans.core.database import engine, Base, SessionLocal, get_db
from comtrans.core.logging_config import setup_logging
from comtrans.core.health import VERSION, get_health_status
from comtrans.core.redis import cache

# Register all models on Base.metadata
from comtrans import models  # noqa: F401

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables and connect the stats cache"""
    logger.info(f"Starting {settings.APP_NAME}...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Debug mode: {settings.DEBUG}")

    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created/verified")

    cache.connect()

    db = SessionLocal()
    try:
        health = get_health_status(db)
    finally:
        db.close()
    if health["status"] == "healthy":
        logger.info("All systems healthy")
    else:
        logger.warning(f"Health check issues: {health}")

    yield

    logger.info(f"Shutting down {settings.APP_NAME}...")
    cache.disconnect()


app = FastAPI(
    title=settings.APP_NAME,
    description="Community translation import and review",
    version=VERSION,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": f"{settings.APP_NAME} API",
        "version": VERSION,
        "status": "running"
    }


@app.get("/health")
def health(db: Session = Depends(get_db)):
    """
    Health check endpoint.
    Returns status of all components.
    """
    return get_health_status(db)


@app.get("/health/ready")
def readiness(db: Session = Depends(get_db)):
    """
    Readiness probe.
    Returns 200 if the translation tables can be queried.
    """
    health_status = get_health_status(db)

    if health_status["status"] == "healthy":
        return JSONResponse(content=health_status, status_code=status.HTTP_200_OK)
    return JSONResponse(content=health_status, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)


@app.get("/health/live")
async def liveness():
    """
    Liveness probe.
    Returns 200 if application is alive.
    """
    return {"status": "alive"}


# Request logging middleware
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all requests"""
    start_time = time.time()

    logger.info(f"{request.method} {request.url.path} - {request.client.host if request.client else 'unknown'}")

    try:
        response = await call_next(request)
    except Exception as e:
        logger.error(
            f"{request.method} {request.url.path} - "
            f"Error: {str(e)} - "
            f"Time: {time.time() - start_time:.3f}s",
            exc_info=True
        )
        raise

    logger.info(
        f"{request.method} {request.url.path} - "
        f"Status: {response.status_code} - "
        f"Time: {time.time() - start_time:.3f}s"
    )
    return response


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle all unhandled exceptions"""
    logger.error(
        f"Unhandled exception: {exc}",
        exc_info=True,
        extra={
            "path": request.url.path,
            "method": request.method,
        }
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "message": str(exc) if settings.DEBUG else "An error occurred"
        }
    )


# Include routers
from comtrans.api.v1 import translations

app.include_router(translations.router, prefix="/api/v1", tags=["translations"])
