"""Freshness policy for the discover page.

Results for a compiled discover query stay fresh for ``max_age`` seconds.
Within that window the page is served from memory; the first request after
it expires runs the fetch again. Downstream caches get the same lifetime
through the ``Cache-Control`` header.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Hashable, Optional

from cachetools import TTLCache

from app.core.config import get_settings
from app.models.discover import DiscoverFilters, DiscoverResult
from app.services.discover_params import build_discover_params, discover_cache_key
from app.services.tmdb import discover

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RevalidationPolicy:
    max_age: int
    stale_while_revalidate: int = 0

    def cache_control(self) -> str:
        """Header value for a successful discover response."""
        value = f"public, s-maxage={self.max_age}"
        if self.stale_while_revalidate:
            value += f", stale-while-revalidate={self.stale_while_revalidate}"
        return value


@lru_cache
def get_revalidation_policy() -> RevalidationPolicy:
    settings = get_settings()
    return RevalidationPolicy(
        max_age=settings.discover_revalidate_seconds,
        stale_while_revalidate=settings.discover_stale_seconds,
    )


class DiscoverPageCache:
    """In-process page cache keyed by compiled discover query.

    Only touched from the event loop, so it needs no lock. Identical
    requests that miss at the same time each run their own fetch.
    """

    def __init__(self, policy: RevalidationPolicy, maxsize: int = 256):
        self.policy = policy
        self._cache: TTLCache = TTLCache(maxsize=maxsize, ttl=policy.max_age)

    def get(self, key: Hashable) -> Optional[DiscoverResult]:
        return self._cache.get(key)

    def put(self, key: Hashable, result: DiscoverResult) -> None:
        self._cache[key] = result

    def clear(self) -> None:
        self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)

    async def fetch(self, filters: DiscoverFilters) -> DiscoverResult:
        """Return cached results for ``filters``, fetching them if stale.

        Fetch failures propagate and are never cached.
        """
        params = build_discover_params(filters)
        key = discover_cache_key(filters.media_type, params)

        cached = self.get(key)
        if cached is not None:
            logger.debug("Discover cache hit for %s", key)
            return cached

        logger.debug("Discover cache miss for %s", key)
        result = await discover(filters.media_type, params)
        self.put(key, result)
        return result


@lru_cache
def get_page_cache() -> DiscoverPageCache:
    """Get the process-wide discover page cache."""
    settings = get_settings()
    return DiscoverPageCache(
        get_revalidation_policy(), maxsize=settings.discover_cache_size
    )
