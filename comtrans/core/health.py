"""
Health check utilities.

The checks are blocking (SQLAlchemy, redis-py); endpoints calling them are
plain functions so FastAPI runs them in its threadpool.
"""
from typing import Dict, Any, Optional
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from comtrans.core.config import settings
from comtrans.core.redis import RedisCache, cache as default_cache
from comtrans.models.locale import Locale
from comtrans.models.translation import Translation
import redis
import logging

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


def check_database(db: Session) -> Dict[str, Any]:
    """
    Check that the locale and translation tables can be queried.

    Returns:
        Dictionary with status, details and the number of approved locales
    """
    try:
        approved = db.execute(
            select(Locale.id).where(Locale.is_approved.is_(True), Locale.is_source.is_(False))
        ).scalars().all()
        db.execute(select(Translation.id).limit(1)).first()
        return {
            "status": "healthy",
            "message": "Translation tables reachable",
            "approved_locales": len(approved),
        }
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        return {
            "status": "unhealthy",
            "message": f"Database query failed: {str(e)}"
        }


def check_redis(cache: Optional[RedisCache] = None) -> Dict[str, Any]:
    """
    Check the statistics cache. Imports work without it (invalidation is
    skipped), so a failure is reported as "degraded", never "unhealthy".
    """
    cache = cache or default_cache
    if not cache.is_connected:
        return {
            "status": "degraded",
            "message": "Statistics cache disabled"
        }
    try:
        cache.ping()
        return {
            "status": "healthy",
            "message": "Redis connection successful"
        }
    except redis.RedisError as e:
        logger.warning(f"Redis health check failed: {e}")
        return {
            "status": "degraded",
            "message": f"Redis connection failed: {str(e)}"
        }


def get_health_status(db: Session, cache: Optional[RedisCache] = None) -> Dict[str, Any]:
    """
    Get overall health status.

    Returns:
        Dictionary with health status of all components
    """
    db_status = check_database(db)
    redis_status = check_redis(cache)

    return {
        "status": "healthy" if db_status["status"] == "healthy" else "unhealthy",
        "version": VERSION,
        "environment": settings.ENVIRONMENT,
        "components": {
            "database": db_status,
            "redis": redis_status,
        }
    }
