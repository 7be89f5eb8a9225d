"""
Stats Service - invalidation of cached translation statistics
"""
import logging
from typing import Iterable, Optional

from comtrans.core.config import settings
from comtrans.core.redis import RedisCache, cache as default_cache

logger = logging.getLogger(__name__)


class StatsInvalidator:
    """
    Drops cached statistics that depend on changed translations.

    Keys:
        {prefix}:{locale_id}:translatable:{id}   per-string progress
        {prefix}:{locale_id}:package:*            per-package aggregates
    """

    def __init__(self, cache: Optional[RedisCache] = None, prefix: Optional[str] = None):
        self.cache = cache or default_cache
        self.prefix = prefix or settings.STATS_CACHE_PREFIX

    def notify_changed(self, locale_id: str, translatable_ids: Iterable[int]) -> int:
        """
        Invalidate statistics of a locale for the given source strings.

        Returns:
            Number of cache keys removed
        """
        ids = sorted(set(translatable_ids))
        if not ids:
            return 0

        deleted = self.cache.delete(
            *(f"{self.prefix}:{locale_id}:translatable:{translatable_id}" for translatable_id in ids)
        )
        deleted += self.cache.delete_pattern(f"{self.prefix}:{locale_id}:package:*")

        logger.info(f"Stats invalidated for {locale_id}: {len(ids)} strings, {deleted} keys")
        return deleted
