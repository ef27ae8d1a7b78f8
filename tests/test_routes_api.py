from unittest.mock import AsyncMock, patch

from fastapi.testclient import TestClient

from app.main import app
from app.models.discover import (
    DiscoverItem,
    DiscoverResult,
    MediaType,
    get_default_filters,
)
from app.services.tmdb import DecodeError, UpstreamError

client = TestClient(app)

# Mock data
mock_page = DiscoverResult(
    results=[
        DiscoverItem(id=1, media_type=MediaType.TV, title="Test Show", vote_average=8.0),
        DiscoverItem(id=2, media_type=MediaType.TV, title="Other Show"),
    ],
    page=1,
    total_pages=3,
    total_results=60,
)


@patch("app.services.revalidation.discover", new_callable=AsyncMock)
def test_discover_returns_filters_and_results(mock_discover):
    mock_discover.return_value = mock_page

    response = client.get(
        "/api/discover?mediaType=tv&genres=18,10765,abc&minRating=9&maxRating=5&page=0"
    )

    assert response.status_code == 200, response.text
    data = response.json()
    assert data["error"] is None
    assert data["filters"]["media_type"] == "tv"
    assert data["filters"]["genres"] == [18, 10765]
    assert data["filters"]["min_rating"] is None
    assert data["filters"]["max_rating"] is None
    assert data["filters"]["page"] == 1
    assert data["query"] == "mediaType=tv&genres=18,10765"
    assert [item["title"] for item in data["results"]["results"]] == [
        "Test Show",
        "Other Show",
    ]
    assert response.headers["Cache-Control"] == (
        "public, s-maxage=14400, stale-while-revalidate=86400"
    )

    media_type, params = mock_discover.await_args.args
    assert media_type == MediaType.TV
    assert params["with_genres"] == "18,10765"
    assert "vote_average.gte" not in params


@patch("app.services.revalidation.discover", new_callable=AsyncMock)
def test_repeated_request_is_served_from_cache(mock_discover):
    mock_discover.return_value = mock_page

    client.get("/api/discover?genres=35,18")
    client.get("/api/discover?genres=18,35")

    assert mock_discover.await_count == 1


@patch("app.services.revalidation.discover", new_callable=AsyncMock)
def test_upstream_failure_renders_empty_state(mock_discover):
    mock_discover.side_effect = UpstreamError(MediaType.MOVIE, 503)

    response = client.get("/api/discover?page=4")

    assert response.status_code == 200
    data = response.json()
    assert data["results"]["results"] == []
    assert data["results"]["page"] == 4
    assert "503" in data["error"]
    assert response.headers["Cache-Control"] == "no-store"


@patch("app.services.revalidation.discover", new_callable=AsyncMock)
def test_decode_failure_renders_empty_state(mock_discover):
    mock_discover.side_effect = DecodeError("Unexpected discover/movie response shape")

    response = client.get("/api/discover")

    assert response.status_code == 200
    assert response.json()["error"] == "Unexpected discover/movie response shape"


def test_discover_options_for_tv():
    response = client.get("/api/discover/options?mediaType=tv")

    assert response.status_code == 200
    data = response.json()
    assert data["media_type"] == "tv"
    assert "TV-MA" in data["certifications"]
    assert {"id": 10765, "name": "Sci-Fi & Fantasy", "logo_path": None} in data["genres"]
    assert data["sort_options"][0] == {"value": "popularity.desc", "label": "Popularity ↓"}


def test_discover_options_default_to_movies():
    data = client.get("/api/discover/options").json()

    assert data["media_type"] == "movie"
    assert data["certifications"] == ["G", "PG", "PG-13", "R", "NC-17"]


def test_health_check():
    response = client.get("/api/health")
    assert response.json() == {"status": "ok", "service": "reelscout"}


@patch("app.services.revalidation.discover", new_callable=AsyncMock)
def test_discover_routes_need_no_credentials(mock_discover, monkeypatch):
    # Authentication happens in front of this service
    monkeypatch.setenv("AUTH_USERNAME", "admin")
    monkeypatch.setenv("AUTH_PASSWORD", "s3cret")
    mock_discover.return_value = mock_page

    for path in ("/api/discover", "/api/discover/options", "/api/health"):
        response = client.get(path)
        assert response.status_code == 200, path
        assert "WWW-Authenticate" not in response.headers


def test_regions_are_offered_but_none_is_preselected():
    options = client.get("/api/discover/options").json()

    assert "US" in options["regions"]
    assert all(len(code) == 2 and code.isupper() for code in options["regions"])
    assert get_default_filters().region is None
