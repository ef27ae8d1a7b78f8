"""TMDB service for discovering movies and TV series."""

import asyncio
import logging
from typing import Any, Dict, Mapping, Optional

import requests
import tmdbsimple as tmdb

from app.core.config import get_settings
from app.models.catalog import genres_for
from app.models.discover import DiscoverItem, DiscoverResult, MediaType

logger = logging.getLogger(__name__)

POSTER_SIZE = "w500"
BACKDROP_SIZE = "w780"
MAX_GENRE_NAMES = 3


class DiscoverError(Exception):
    """Domain exception for TMDB discover failures."""

    def __init__(self, message: str, original_exception: Exception = None):
        super().__init__(message)
        self.original_exception = original_exception


class UpstreamError(DiscoverError):
    """TMDB answered with a non-2xx status, or could not be reached."""

    def __init__(
        self,
        media_type: MediaType,
        status_code: Optional[int] = None,
        original_exception: Exception = None,
    ):
        if status_code is None:
            message = f"TMDB discover/{media_type.value} request failed"
        else:
            message = f"TMDB discover/{media_type.value} returned HTTP {status_code}"
        super().__init__(message, original_exception)
        self.media_type = media_type
        self.status_code = status_code


class DecodeError(DiscoverError):
    """TMDB answered, but the body is not a discover page."""


# Initialize TMDB
settings = get_settings()
tmdb.API_KEY = settings.tmdb_api_key
tmdb.REQUESTS_TIMEOUT = settings.request_timeout
tmdb.REQUESTS_SESSION = requests.Session()
if settings.proxy:
    tmdb.REQUESTS_SESSION.proxies = {"http": settings.proxy, "https": settings.proxy}


def close_session() -> None:
    """Close the shared session tmdbsimple sends requests through."""
    if tmdb.REQUESTS_SESSION is not None:
        tmdb.REQUESTS_SESSION.close()


def _image_url(path: Optional[str], size: str) -> Optional[str]:
    if not path:
        return None
    return f"{get_settings().tmdb_image_base_url}/{size}{path}"


def _release_year(release_date: Optional[str]) -> Optional[int]:
    if not release_date or len(release_date) < 4:
        return None
    try:
        return int(release_date[:4])
    except ValueError:
        return None


def _common_fields(item: Dict[str, Any], media_type: MediaType) -> Dict[str, Any]:
    """Fields TMDB names the same way for movies and series."""
    genre_ids = item.get("genre_ids") or []
    names = genres_for(media_type)
    genres = [names[g] for g in genre_ids if g in names]

    return {
        "id": item["id"],
        "overview": item.get("overview") or "",
        "poster_url": _image_url(item.get("poster_path"), POSTER_SIZE),
        "backdrop_url": _image_url(item.get("backdrop_path"), BACKDROP_SIZE),
        "vote_average": round(float(item.get("vote_average") or 0.0), 1),
        "vote_count": item.get("vote_count") or 0,
        "popularity": item.get("popularity"),
        "genre_ids": genre_ids,
        "genres": genres[:MAX_GENRE_NAMES],
        "original_language": item.get("original_language"),
    }


def _parse_movie(movie: Dict[str, Any]) -> DiscoverItem:
    """Parse a movie discover result from TMDB."""
    release_date = movie.get("release_date") or None

    return DiscoverItem(
        **_common_fields(movie, MediaType.MOVIE),
        media_type=MediaType.MOVIE,
        title=movie.get("title") or "Unknown",
        original_title=movie.get("original_title"),
        release_date=release_date,
        release_year=_release_year(release_date),
        adult=movie.get("adult"),
        video=movie.get("video"),
    )


def _parse_series(series: Dict[str, Any]) -> DiscoverItem:
    """Parse a TV series discover result from TMDB."""
    first_air_date = series.get("first_air_date") or None

    return DiscoverItem(
        **_common_fields(series, MediaType.TV),
        media_type=MediaType.TV,
        title=series.get("name") or "Unknown",
        original_title=series.get("original_name"),
        release_date=first_air_date,
        release_year=_release_year(first_air_date),
        origin_country=series.get("origin_country"),
    )


def parse_discover_page(payload: Any, media_type: MediaType) -> DiscoverResult:
    """Normalize a TMDB discover page, keeping the provider's result order."""
    if not isinstance(payload, dict) or not isinstance(payload.get("results"), list):
        raise DecodeError(f"Unexpected discover/{media_type.value} response shape")

    parse_item = _parse_movie if media_type == MediaType.MOVIE else _parse_series
    try:
        results = []
        for item in payload["results"]:
            if not isinstance(item, dict):
                raise TypeError(f"result entry is {type(item).__name__}, not an object")
            results.append(parse_item(item))

        return DiscoverResult(
            results=results,
            page=payload.get("page", 1),
            total_pages=payload.get("total_pages", 0),
            total_results=payload.get("total_results", 0),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise DecodeError(
            f"Malformed discover/{media_type.value} response: {exc}", exc
        ) from exc


def fetch_discover(media_type: MediaType, params: Mapping[str, str]) -> DiscoverResult:
    """Run one TMDB discover request (synchronous).

    Makes exactly one HTTP call and never retries.
    """
    discover_api = tmdb.Discover()
    endpoint = discover_api.movie if media_type == MediaType.MOVIE else discover_api.tv

    try:
        payload = endpoint(**params)
    except requests.exceptions.HTTPError as exc:
        status_code = exc.response.status_code if exc.response is not None else None
        logger.warning(
            "TMDB discover/%s returned %s: %s", media_type.value, status_code, exc
        )
        raise UpstreamError(media_type, status_code, exc) from exc
    except ValueError as exc:
        # requests' JSONDecodeError is also a RequestException
        logger.error("TMDB discover/%s returned invalid JSON", media_type.value)
        raise DecodeError(
            f"Invalid JSON from discover/{media_type.value}", exc
        ) from exc
    except requests.exceptions.RequestException as exc:
        logger.warning("Error calling TMDB discover/%s: %s", media_type.value, exc)
        raise UpstreamError(media_type, original_exception=exc) from exc

    try:
        return parse_discover_page(payload, media_type)
    except DecodeError as exc:
        logger.error("Could not decode TMDB discover/%s page: %s", media_type.value, exc)
        raise


async def discover(media_type: MediaType, params: Mapping[str, str]) -> DiscoverResult:
    """Run one TMDB discover request (async)."""
    return await asyncio.to_thread(fetch_discover, media_type, params)
