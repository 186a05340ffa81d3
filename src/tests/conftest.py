"""
Shared fixtures.
"""

import pytest

from src.tests.helpers import FakeYouTube, make_captions_json, make_watch_page


@pytest.fixture
def captions_json() -> dict:
    return make_captions_json()


@pytest.fixture
def watch_page(captions_json) -> str:
    return make_watch_page(captions_json)


@pytest.fixture
def youtube(watch_page) -> FakeYouTube:
    """A fake YouTube serving one regular watch page."""
    return FakeYouTube([watch_page])
