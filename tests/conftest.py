import os

import pytest

# Settings require a key; tests never reach the real TMDB
os.environ["TMDB_API_KEY"] = "test-key"

from app.core.config import get_settings  # noqa: E402
from app.services.revalidation import get_page_cache, get_revalidation_policy  # noqa: E402


@pytest.fixture(autouse=True)
def reset_caches():
    """Give every test fresh settings and an empty page cache."""
    get_settings.cache_clear()
    get_revalidation_policy.cache_clear()
    get_page_cache.cache_clear()
    yield
    get_settings.cache_clear()
    get_revalidation_policy.cache_clear()
    get_page_cache.cache_clear()
