"""API routes returning JSON for the discover page and external tools."""

import logging
from typing import Dict, List, Optional

from fastapi import APIRouter, Query, Request, Response
from pydantic import BaseModel

from app.models.catalog import (
    LANGUAGES,
    REGIONS,
    STREAMING_PROVIDERS,
    STUDIOS,
    VOTE_COUNT_PRESETS,
    CatalogEntry,
    Option,
    certifications_for,
    genres_for,
    sort_options,
)
from app.models.discover import DiscoverFilters, DiscoverResult, MediaType
from app.services.filters import parse_filters, serialize_filters
from app.services.revalidation import get_page_cache, get_revalidation_policy
from app.services.tmdb import DiscoverError

router = APIRouter()
logger = logging.getLogger(__name__)


class DiscoverResponse(BaseModel):
    """Decoded filters and the page of results they produced."""

    filters: DiscoverFilters
    query: str
    results: DiscoverResult
    error: Optional[str] = None


class DiscoverOptions(BaseModel):
    """Choices for building discover filter controls."""

    media_type: MediaType
    sort_options: List[Option]
    genres: List[CatalogEntry]
    certifications: List[str]
    providers: List[CatalogEntry]
    studios: List[CatalogEntry]
    languages: List[Option]
    regions: List[str]
    vote_count_presets: List[int]


@router.get("/discover", response_model=DiscoverResponse)
async def api_discover(request: Request, response: Response):
    """Discover movies or TV series from URL filters.

    Any query string is accepted; unusable values are ignored. Upstream
    failures yield an empty page with ``error`` set instead of an HTTP error.
    """
    filters = parse_filters(request.query_params)
    error = None

    try:
        results = await get_page_cache().fetch(filters)
    except DiscoverError as exc:
        logger.warning("Discover failed for %s: %s", filters.media_type.value, exc)
        results = DiscoverResult(page=filters.page)
        error = str(exc)
        response.headers["Cache-Control"] = "no-store"
    else:
        response.headers["Cache-Control"] = get_revalidation_policy().cache_control()

    return DiscoverResponse(
        filters=filters,
        query=serialize_filters(filters),
        results=results,
        error=error,
    )


@router.get("/discover/options", response_model=DiscoverOptions)
async def discover_options(
    media_type: MediaType = Query(MediaType.MOVIE, alias="mediaType"),
):
    """List sort keys, genres, certifications and other filter choices."""
    genres: Dict[int, str] = genres_for(media_type)
    return DiscoverOptions(
        media_type=media_type,
        sort_options=sort_options(),
        genres=[CatalogEntry(id=gid, name=name) for gid, name in genres.items()],
        certifications=certifications_for(media_type),
        providers=STREAMING_PROVIDERS,
        studios=STUDIOS,
        languages=LANGUAGES,
        regions=REGIONS,
        vote_count_presets=VOTE_COUNT_PRESETS,
    )


@router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok", "service": "reelscout"}
