"""
Tests for watch page scraping and failure disambiguation.
"""

import httpx
import pytest

from src.tests.helpers import (
    CONSENT_PAGE,
    CONSENT_TOKEN,
    VIDEO_ID,
    FakeYouTube,
    make_watch_page,
)
from src.ytcaptions.errors import CouldNotRetrieveTranscript, ErrorKind
from src.ytcaptions.fetcher import WatchPageFetcher


def _fetch_error(fake: FakeYouTube) -> CouldNotRetrieveTranscript:
    with pytest.raises(CouldNotRetrieveTranscript) as exc_info:
        WatchPageFetcher(fake.client()).fetch(VIDEO_ID)
    return exc_info.value


def test_fetch_catalog(youtube):
    """The escaped page is normalized and the caption JSON extracted."""
    catalog = WatchPageFetcher(youtube.client()).fetch(VIDEO_ID)

    assert catalog.video_id == VIDEO_ID
    assert len(catalog) == 3
    track = catalog.find_transcript(["en"])
    assert "\\" not in track.url
    assert track.url.endswith("&lang=en&name=manual")
    assert len(youtube.requests) == 1
    assert youtube.requests[0].url.params["v"] == VIDEO_ID


def test_consent_cookie_created(watch_page):
    """A consent page is answered once with CONSENT=YES+<token>."""
    fake = FakeYouTube([CONSENT_PAGE, watch_page])
    client = fake.client()

    catalog = WatchPageFetcher(client).fetch(VIDEO_ID)

    assert len(catalog) == 3
    assert len(fake.requests) == 2
    assert client.cookies.get("CONSENT", domain=".youtube.com") == f"YES+{CONSENT_TOKEN}"
    assert f"CONSENT=YES+{CONSENT_TOKEN}" in fake.requests[1].headers["cookie"]


def test_consent_cookie_missing_token():
    page = '<form action="https://consent.youtube.com/s" method="POST"></form>'

    err = _fetch_error(FakeYouTube([page]))

    assert err.kind is ErrorKind.FAILED_TO_CREATE_CONSENT_COOKIE


def test_consent_redirect_persists():
    """The consent retry happens exactly once."""
    fake = FakeYouTube([CONSENT_PAGE])

    err = _fetch_error(fake)

    assert err.kind is ErrorKind.FAILED_TO_CREATE_CONSENT_COOKIE
    assert len(fake.requests) == 2


def test_too_many_requests_takes_priority():
    """A captcha page wins even though it carries a playability status."""
    page = make_watch_page(None, playability=True) + '<div class="g-recaptcha"></div>'

    err = _fetch_error(FakeYouTube([page]))

    assert err.kind is ErrorKind.TOO_MANY_REQUESTS


def test_video_unavailable():
    err = _fetch_error(FakeYouTube([make_watch_page(None, playability=False)]))

    assert err.kind is ErrorKind.VIDEO_UNAVAILABLE
    assert err.video_id == VIDEO_ID
    assert "The video is no longer available" in str(err)


def test_transcripts_disabled():
    err = _fetch_error(FakeYouTube([make_watch_page(None, playability=True)]))

    assert err.kind is ErrorKind.TRANSCRIPTS_DISABLED


@pytest.mark.parametrize(
    "captions",
    [
        {"translationLanguages": []},
        {},
    ],
)
def test_no_transcript_available(captions):
    """Caption JSON without a track list."""
    err = _fetch_error(FakeYouTube([make_watch_page(captions)]))

    assert err.kind is ErrorKind.NO_TRANSCRIPT_AVAILABLE


def test_http_error_is_request_failed():
    client = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(429)))

    with pytest.raises(CouldNotRetrieveTranscript) as exc_info:
        WatchPageFetcher(client).fetch(VIDEO_ID)

    assert exc_info.value.kind is ErrorKind.REQUEST_FAILED
    assert isinstance(exc_info.value.__cause__, httpx.HTTPStatusError)


def test_fetch_unescapes_javascript_page():
    """Escaped slashes lose their backslashes and newlines inside the blob are dropped."""
    page = (
        '<script>var ytInitialPlayerResponse = {"playabilityStatus":{"status":"OK"},'
        '"captions":{"playerCaptionsTracklistRenderer":{"captionTracks":[{'
        '"baseUrl":"https:\\/\\/www.youtube.com\\/api\\/timed\ntext?v=x\\u0026lang=en",'
        '"name":{"simpleText":"English"},\n"languageCode":"en"}]}},'
        '"videoDetails":{"videoId":"x"}};</script>'
    )

    catalog = WatchPageFetcher(FakeYouTube([page]).client()).fetch(VIDEO_ID)

    track = catalog.find_transcript(["en"])
    assert track.url == "https://www.youtube.com/api/timedtext?v=x&lang=en"
    assert track.language == "English"
