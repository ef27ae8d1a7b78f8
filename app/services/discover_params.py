"""Compile DiscoverFilters into TMDB discover query parameters."""

from typing import Dict, Iterable, Mapping, Tuple

from app.models.discover import DiscoverFilters, MediaType, SortBy
from app.services.filters import format_number

# Sent with every discover request
BASE_PARAMS: Dict[str, str] = {
    "include_adult": "false",
    "language": "en-US",
}

# Date-range keys differ between /discover/movie and /discover/tv
DATE_KEYS: Dict[MediaType, Tuple[str, str]] = {
    MediaType.MOVIE: ("primary_release_date.gte", "primary_release_date.lte"),
    MediaType.TV: ("first_air_date.gte", "first_air_date.lte"),
}


def _sort_key(sort_by: SortBy, media_type: MediaType) -> str:
    """TV results have no release date; TMDB sorts them by first air date."""
    if media_type == MediaType.TV and sort_by.value.startswith("release_date."):
        return sort_by.value.replace("release_date.", "first_air_date.", 1)
    return sort_by.value


def _join_sorted(ids: Iterable[int]) -> str:
    return ",".join(str(i) for i in sorted(set(ids)))


def build_discover_params(filters: DiscoverFilters) -> Dict[str, str]:
    """Map filters to the parameters TMDB expects for ``filters.media_type``.

    Absent fields are omitted entirely. ID lists are sorted so equal
    filters always compile to the same query, which keeps cache keys stable.
    Certification is only sent together with a region.
    """
    params: Dict[str, str] = dict(BASE_PARAMS)
    params["sort_by"] = _sort_key(filters.sort_by, filters.media_type)

    if filters.genres:
        params["with_genres"] = _join_sorted(filters.genres)
    if filters.with_companies:
        params["with_companies"] = _join_sorted(filters.with_companies)

    # Rating range
    if filters.min_rating is not None:
        params["vote_average.gte"] = format_number(filters.min_rating)
    if filters.max_rating is not None:
        params["vote_average.lte"] = format_number(filters.max_rating)
    if filters.min_votes is not None:
        params["vote_count.gte"] = str(filters.min_votes)

    date_gte_key, date_lte_key = DATE_KEYS[filters.media_type]
    if filters.release_date_gte is not None:
        params[date_gte_key] = filters.release_date_gte.isoformat()
    if filters.release_date_lte is not None:
        params[date_lte_key] = filters.release_date_lte.isoformat()

    # Streaming availability
    if filters.with_providers:
        params["with_watch_providers"] = _join_sorted(filters.with_providers)
    if filters.region:
        params["watch_region"] = filters.region
        if filters.certification:
            params["certification_country"] = filters.region
            params["certification"] = filters.certification

    if filters.original_language:
        params["with_original_language"] = filters.original_language

    if filters.runtime_gte is not None:
        params["with_runtime.gte"] = str(filters.runtime_gte)
    if filters.runtime_lte is not None:
        params["with_runtime.lte"] = str(filters.runtime_lte)

    params["page"] = str(filters.page)
    return params


def discover_cache_key(
    media_type: MediaType, params: Mapping[str, str]
) -> Tuple[str, Tuple[Tuple[str, str], ...]]:
    """Stable key identifying one compiled discover query."""
    return media_type.value, tuple(sorted(params.items()))
