"""URL codec for discover filters.

Parsing never fails: a value that does not validate is dropped and its
field falls back to the default. Serializing emits only non-default fields,
using the same formats parsing accepts, so a parsed filter survives a round
trip through the URL unchanged.
"""

import logging
import re
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Type, Union
from urllib.parse import urlencode

from app.models.discover import (
    DEFAULT_MEDIA_TYPE,
    DEFAULT_SORT_BY,
    MAX_RATING,
    MIN_RATING,
    RANGE_PAIRS,
    DiscoverFilters,
    MediaType,
    SortBy,
)

logger = logging.getLogger(__name__)

QueryValue = Union[str, Sequence[str], None]
QueryParams = Mapping[str, QueryValue]

_RATING_RE = re.compile(r"^\d{1,2}(\.\d{1,6})?$", re.ASCII)
_INT_RE = re.compile(r"^\d{1,9}$", re.ASCII)
_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$", re.ASCII)
_ALPHA2_RE = re.compile(r"^[A-Za-z]{2}$", re.ASCII)
_CERTIFICATION_RE = re.compile(r"^[A-Za-z0-9+\-. ]{1,16}$", re.ASCII)


def _get_values(params: Any, key: str) -> List[str]:
    """Return every string value for ``key``, whatever the container."""
    if params is None:
        return []

    getlist = getattr(params, "getlist", None)
    if callable(getlist):
        raw = getlist(key)
    elif hasattr(params, "get"):
        raw = params.get(key)
    else:
        return []

    if raw is None:
        return []
    if isinstance(raw, str):
        return [raw]
    if isinstance(raw, (list, tuple)):
        return [value for value in raw if isinstance(value, str)]
    return []


def _first(params: Any, key: str) -> Optional[str]:
    """Return the first non-blank value for ``key``."""
    for value in _get_values(params, key):
        if value.strip():
            return value
    return None


def _parse_enum(value: Optional[str], enum_cls: Type[Enum], default: Enum) -> Enum:
    if value is None:
        return default
    try:
        return enum_cls(value)
    except ValueError:
        return default


def _parse_int(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    value = value.strip()
    if not _INT_RE.match(value):
        return None
    return int(value)


def _parse_rating(value: Optional[str]) -> Optional[float]:
    if value is None:
        return None
    value = value.strip()
    if not _RATING_RE.match(value):
        return None
    rating = float(value)
    if not MIN_RATING <= rating <= MAX_RATING:
        return None
    return rating


def _parse_date(value: Optional[str]) -> Optional[date]:
    if value is None:
        return None
    value = value.strip()
    if not _DATE_RE.match(value):
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def _parse_alpha2(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    if not _ALPHA2_RE.match(value):
        return None
    return value


def _parse_certification(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    if not _CERTIFICATION_RE.match(value):
        return None
    return value


def _parse_id_list(values: List[str]) -> Tuple[int, ...]:
    """Split comma lists, keep numeric tokens, dedupe in first-seen order."""
    ids: List[int] = []
    for value in values:
        for token in value.split(","):
            parsed = _parse_int(token)
            if parsed is not None and parsed not in ids:
                ids.append(parsed)
    return tuple(ids)


def _drop_inverted_ranges(fields: Dict[str, Any]) -> None:
    for low_name, high_name in RANGE_PAIRS:
        low = fields.get(low_name)
        high = fields.get(high_name)
        if low is not None and high is not None and low > high:
            logger.debug(
                "Dropping inverted range %s=%s > %s=%s", low_name, low, high_name, high
            )
            fields[low_name] = None
            fields[high_name] = None


def parse_filters(params: QueryParams) -> DiscoverFilters:
    """Decode query parameters into a valid DiscoverFilters.

    Accepts a plain mapping of str or list-of-str values, or a Starlette
    ``QueryParams``. Repeated keys contribute all their values to list
    fields; scalar fields use the first non-blank value.
    """
    region = _parse_alpha2(_first(params, "region"))
    language = _parse_alpha2(_first(params, "language"))
    page = _parse_int(_first(params, "page"))

    fields: Dict[str, Any] = {
        "media_type": _parse_enum(
            _first(params, "mediaType"), MediaType, DEFAULT_MEDIA_TYPE
        ),
        "sort_by": _parse_enum(_first(params, "sortBy"), SortBy, DEFAULT_SORT_BY),
        "genres": _parse_id_list(_get_values(params, "genres")),
        "with_companies": _parse_id_list(_get_values(params, "studios")),
        "with_providers": _parse_id_list(_get_values(params, "providers")),
        "min_rating": _parse_rating(_first(params, "minRating")),
        "max_rating": _parse_rating(_first(params, "maxRating")),
        "min_votes": _parse_int(_first(params, "minVotes")),
        "release_date_gte": _parse_date(_first(params, "releaseDateGte")),
        "release_date_lte": _parse_date(_first(params, "releaseDateLte")),
        "region": region.upper() if region else None,
        "original_language": language.lower() if language else None,
        "certification": _parse_certification(_first(params, "certification")),
        "runtime_gte": _parse_int(_first(params, "runtimeGte")),
        "runtime_lte": _parse_int(_first(params, "runtimeLte")),
        "page": page if page and page >= 1 else 1,
    }
    _drop_inverted_ranges(fields)

    return DiscoverFilters(**fields)


def format_number(value: float) -> str:
    """Render a rating without exponent notation or a trailing ``.0``."""
    return format(value, "f").rstrip("0").rstrip(".") or "0"


def _format_ids(ids: Sequence[int]) -> str:
    return ",".join(str(i) for i in ids)


def filters_to_params(filters: DiscoverFilters) -> Dict[str, str]:
    """Encode the non-default fields of ``filters`` as URL query parameters."""
    params: Dict[str, str] = {}

    if filters.media_type != DEFAULT_MEDIA_TYPE:
        params["mediaType"] = filters.media_type.value
    if filters.sort_by != DEFAULT_SORT_BY:
        params["sortBy"] = filters.sort_by.value
    if filters.genres:
        params["genres"] = _format_ids(filters.genres)
    if filters.with_companies:
        params["studios"] = _format_ids(filters.with_companies)
    if filters.min_rating is not None:
        params["minRating"] = format_number(filters.min_rating)
    if filters.max_rating is not None:
        params["maxRating"] = format_number(filters.max_rating)
    if filters.min_votes is not None:
        params["minVotes"] = str(filters.min_votes)
    if filters.release_date_gte is not None:
        params["releaseDateGte"] = filters.release_date_gte.isoformat()
    if filters.release_date_lte is not None:
        params["releaseDateLte"] = filters.release_date_lte.isoformat()
    if filters.with_providers:
        params["providers"] = _format_ids(filters.with_providers)
    if filters.region:
        params["region"] = filters.region
    if filters.original_language:
        params["language"] = filters.original_language
    if filters.certification:
        params["certification"] = filters.certification
    if filters.runtime_gte is not None:
        params["runtimeGte"] = str(filters.runtime_gte)
    if filters.runtime_lte is not None:
        params["runtimeLte"] = str(filters.runtime_lte)
    if filters.page > 1:
        params["page"] = str(filters.page)

    return params


def serialize_filters(filters: DiscoverFilters) -> str:
    """Return the shareable query string for ``filters`` (no leading ``?``)."""
    return urlencode(filters_to_params(filters), safe=",")
