"""Discover filter and result models."""

from datetime import date
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator


class MediaType(str, Enum):
    """Which TMDB discover endpoint a query targets."""

    MOVIE = "movie"
    TV = "tv"


class SortBy(str, Enum):
    """Sort keys accepted by TMDB discover."""

    POPULARITY_DESC = "popularity.desc"
    POPULARITY_ASC = "popularity.asc"
    RELEASE_DATE_DESC = "release_date.desc"
    RELEASE_DATE_ASC = "release_date.asc"
    VOTE_AVERAGE_DESC = "vote_average.desc"
    VOTE_AVERAGE_ASC = "vote_average.asc"
    VOTE_COUNT_DESC = "vote_count.desc"
    VOTE_COUNT_ASC = "vote_count.asc"


DEFAULT_MEDIA_TYPE = MediaType.MOVIE
DEFAULT_SORT_BY = SortBy.POPULARITY_DESC

MIN_RATING = 0.0
MAX_RATING = 10.0

# (low field, high field) pairs that must be ordered when both are set
RANGE_PAIRS = (
    ("min_rating", "max_rating"),
    ("release_date_gte", "release_date_lte"),
    ("runtime_gte", "runtime_lte"),
)


class DiscoverFilters(BaseModel):
    """Canonical, immutable discover query.

    Built fresh for every request by the URL codec. Empty tuples and None
    both mean "no constraint" for their field.
    """

    model_config = ConfigDict(frozen=True)

    media_type: MediaType = DEFAULT_MEDIA_TYPE
    sort_by: SortBy = DEFAULT_SORT_BY
    genres: Tuple[int, ...] = ()
    with_companies: Tuple[int, ...] = ()
    with_providers: Tuple[int, ...] = ()
    min_rating: Optional[float] = Field(default=None, ge=MIN_RATING, le=MAX_RATING)
    max_rating: Optional[float] = Field(default=None, ge=MIN_RATING, le=MAX_RATING)
    min_votes: Optional[int] = Field(default=None, ge=0)
    release_date_gte: Optional[date] = None
    release_date_lte: Optional[date] = None
    region: Optional[str] = Field(default=None, pattern=r"^[A-Z]{2}$")
    original_language: Optional[str] = Field(default=None, pattern=r"^[a-z]{2}$")
    certification: Optional[str] = Field(default=None, min_length=1)
    runtime_gte: Optional[int] = Field(default=None, ge=0)
    runtime_lte: Optional[int] = Field(default=None, ge=0)
    page: int = Field(default=1, ge=1)

    @model_validator(mode="after")
    def check_ranges(self) -> "DiscoverFilters":
        for low_name, high_name in RANGE_PAIRS:
            low = getattr(self, low_name)
            high = getattr(self, high_name)
            if low is not None and high is not None and low > high:
                raise ValueError(f"{low_name} must not exceed {high_name}")
        return self


def get_default_filters() -> DiscoverFilters:
    """Return the filters used when a request carries no query parameters."""
    return DiscoverFilters()


class DiscoverItem(BaseModel):
    """A movie or TV discover result in one shape.

    Fields that only exist for one media type stay None for the other.
    """

    id: int
    media_type: MediaType
    title: str
    original_title: Optional[str] = None
    overview: str = ""
    release_date: Optional[str] = None
    release_year: Optional[int] = None
    poster_url: Optional[str] = None
    backdrop_url: Optional[str] = None
    vote_average: float = 0.0
    vote_count: int = 0
    popularity: Optional[float] = None
    genre_ids: List[int] = []
    genres: List[str] = []
    original_language: Optional[str] = None
    # TV only
    origin_country: Optional[List[str]] = None
    # Movie only
    adult: Optional[bool] = None
    video: Optional[bool] = None


class DiscoverResult(BaseModel):
    """One page of discover results, in provider order."""

    results: List[DiscoverItem] = []
    page: int = 1
    total_pages: int = 0
    total_results: int = 0
