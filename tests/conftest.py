"""Shared fixtures for the SEO app tests."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from seo import routes
from seo.behaviors import clear_options_cache


@pytest.fixture(autouse=True)
def _fresh_seo_caches() -> Iterator[None]:
    """Options and route stop names are cached per class/namespace; reset between tests."""
    clear_options_cache()
    routes.clear_cache()
    yield
    clear_options_cache()
    routes.clear_cache()
