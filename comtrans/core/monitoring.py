"""
Monitoring utilities for import metrics and error tracking
"""
from typing import Dict, Any, Optional
from contextlib import contextmanager
from datetime import datetime, timezone
import logging
import time

from comtrans.core.exceptions import TranslationImportError

logger = logging.getLogger(__name__)


def track_error(
    error_type: str,
    locale_id: Optional[str] = None,
    user_id: Optional[int] = None,
    metadata: Optional[Dict[str, Any]] = None,
    level: int = logging.ERROR
):
    """
    Track error for monitoring.

    Args:
        error_type: Type of error
        locale_id: Locale the import targeted
        user_id: Acting user id
        metadata: Additional metadata
        level: Log level (rejected input is a warning, storage failures are errors)
    """
    error_data = {
        "error_type": error_type,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "locale_id": locale_id,
        "user_id": user_id,
        "metadata": metadata or {},
    }

    logger.log(level, f"Error tracked: {error_data}")


def track_metric(
    metric_name: str,
    value: float,
    locale_id: Optional[str] = None,
    tags: Optional[Dict[str, str]] = None
):
    """Log a metric sample for one locale."""
    metric_data = {
        "metric": metric_name,
        "value": value,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "locale_id": locale_id,
        "tags": tags or {},
    }

    logger.info(f"Metric: {metric_data}")


@contextmanager
def monitor_performance(operation: str, locale_id: Optional[str] = None, user_id: Optional[int] = None):
    """
    Time a block and record its duration as `{operation}.duration`.

    Usage:
        with monitor_performance("import_translations", locale_id="it_IT", user_id=7):
            ...

    Validation failures are tagged "rejected" and tracked at WARNING;
    anything else is tagged "error" and tracked at ERROR. The exception
    always propagates.
    """
    start_time = time.time()

    try:
        yield
    except TranslationImportError as e:
        duration = time.time() - start_time
        track_error(
            f"{operation}.rejected",
            locale_id=locale_id,
            user_id=user_id,
            metadata={"error": e.message, "duration": duration},
            level=logging.WARNING
        )
        track_metric(f"{operation}.duration", duration, locale_id=locale_id, tags={"status": "rejected"})
        raise
    except Exception as e:
        duration = time.time() - start_time
        track_error(
            f"{operation}.error",
            locale_id=locale_id,
            user_id=user_id,
            metadata={"error": str(e), "duration": duration}
        )
        track_metric(f"{operation}.duration", duration, locale_id=locale_id, tags={"status": "error"})
        raise

    track_metric(f"{operation}.duration", time.time() - start_time, locale_id=locale_id, tags={"status": "success"})
