from unittest.mock import AsyncMock, patch

import pytest

from app.models.discover import DiscoverFilters, DiscoverResult, MediaType
from app.services.discover_params import build_discover_params
from app.services.revalidation import (
    DiscoverPageCache,
    RevalidationPolicy,
    get_page_cache,
    get_revalidation_policy,
)
from app.services.tmdb import UpstreamError


def test_default_policy_is_four_hours():
    policy = get_revalidation_policy()
    assert policy.max_age == 14400
    assert policy.cache_control() == (
        "public, s-maxage=14400, stale-while-revalidate=86400"
    )


def test_policy_from_environment(monkeypatch):
    monkeypatch.setenv("DISCOVER_REVALIDATE_SECONDS", "600")
    monkeypatch.setenv("DISCOVER_STALE_SECONDS", "0")

    assert get_revalidation_policy().cache_control() == "public, s-maxage=600"
    assert get_page_cache().policy.max_age == 600


@pytest.mark.anyio
async def test_cache_hit_skips_fetch():
    cache = DiscoverPageCache(RevalidationPolicy(max_age=60))
    page = DiscoverResult(page=1, total_pages=1, total_results=0)
    filters = DiscoverFilters(genres=(18, 35))

    with patch(
        "app.services.revalidation.discover", new=AsyncMock(return_value=page)
    ) as mock_discover:
        first = await cache.fetch(filters)
        second = await cache.fetch(DiscoverFilters(genres=(35, 18)))

    assert first is page
    assert second is page
    mock_discover.assert_awaited_once_with(
        MediaType.MOVIE, build_discover_params(filters)
    )


@pytest.mark.anyio
async def test_different_queries_fetch_separately():
    cache = DiscoverPageCache(RevalidationPolicy(max_age=60))

    with patch(
        "app.services.revalidation.discover",
        new=AsyncMock(return_value=DiscoverResult()),
    ) as mock_discover:
        await cache.fetch(DiscoverFilters(page=1))
        await cache.fetch(DiscoverFilters(page=2))
        await cache.fetch(DiscoverFilters(media_type=MediaType.TV))

    assert mock_discover.await_count == 3
    assert len(cache) == 3


@pytest.mark.anyio
async def test_failures_are_not_cached():
    cache = DiscoverPageCache(RevalidationPolicy(max_age=60))
    error = UpstreamError(MediaType.MOVIE, 503)

    with patch(
        "app.services.revalidation.discover", new=AsyncMock(side_effect=error)
    ) as mock_discover:
        with pytest.raises(UpstreamError):
            await cache.fetch(DiscoverFilters())
        with pytest.raises(UpstreamError):
            await cache.fetch(DiscoverFilters())

    assert mock_discover.await_count == 2
    assert len(cache) == 0


@pytest.mark.anyio
async def test_expired_entries_are_fetched_again():
    cache = DiscoverPageCache(RevalidationPolicy(max_age=60))
    filters = DiscoverFilters()

    with patch(
        "app.services.revalidation.discover",
        new=AsyncMock(return_value=DiscoverResult()),
    ) as mock_discover:
        await cache.fetch(filters)
        # Expire everything as if the revalidation window had passed
        cache._cache.expire(cache._cache.timer() + 61)
        await cache.fetch(filters)

    assert mock_discover.await_count == 2
