from datetime import date

import pytest
from pydantic import ValidationError

from app.models.discover import DiscoverFilters, MediaType, SortBy, get_default_filters


def test_defaults():
    filters = get_default_filters()

    assert filters.media_type == MediaType.MOVIE
    assert filters.sort_by == SortBy.POPULARITY_DESC
    assert filters.genres == ()
    assert filters.page == 1
    assert filters.region is None


def test_filters_are_immutable():
    filters = DiscoverFilters()
    with pytest.raises(ValidationError):
        filters.page = 2


@pytest.mark.parametrize(
    "kwargs",
    [
        {"min_rating": 8, "max_rating": 3},
        {"release_date_gte": date(2020, 1, 1), "release_date_lte": date(2019, 1, 1)},
        {"runtime_gte": 120, "runtime_lte": 60},
        {"min_rating": 10.5},
        {"min_votes": -1},
        {"page": 0},
        {"region": "us"},
        {"original_language": "ENG"},
    ],
)
def test_invalid_direct_construction_is_rejected(kwargs):
    with pytest.raises(ValidationError):
        DiscoverFilters(**kwargs)
