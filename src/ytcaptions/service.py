"""
Outward-facing entry point: catalogs and cues by video id.
"""

import logging
from collections.abc import Iterable, Sequence
from http.cookiejar import CookieJar
from pathlib import Path
from typing import Optional, Union

import httpx

from .catalog import TranscriptCatalog
from .cookies import load_cookies
from .errors import CouldNotRetrieveTranscript
from .fetcher import WatchPageFetcher
from .models import Cue

logger = logging.getLogger("ytcaptions")

DEFAULT_HEADERS = {
    "Accept-Language": "en-US",
    "User-Agent": "Mozilla/5.0 (X11; Linux x86_64) ytcaptions/0.1",
}


class TranscriptService:
    """
    Fetch transcript catalogs and cues for YouTube videos.

    Pass your own ``httpx.Client`` to control proxies, headers or transports;
    otherwise one is created (and closed by ``close``/the context manager).
    ``cookies`` is either a loaded CookieJar or the path of a cookies.txt file.
    """

    def __init__(
        self,
        client: Optional[httpx.Client] = None,
        *,
        cookies: Union[str, Path, CookieJar, None] = None,
        timeout: float = 30.0,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.Client(
            headers=DEFAULT_HEADERS, timeout=timeout, follow_redirects=True
        )
        self._cookies = cookies
        self._cookies_loaded = cookies is None

    def __enter__(self) -> "TranscriptService":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def _merge_cookies(self, video_id: str) -> None:
        if self._cookies_loaded:
            return
        jar = self._cookies
        if not isinstance(jar, CookieJar):
            jar = load_cookies(jar, video_id)
        for cookie in jar:
            self._client.cookies.jar.set_cookie(cookie)
        self._cookies_loaded = True

    def list_transcripts(self, video_id: str) -> TranscriptCatalog:
        """Return the catalog of every caption track the video offers."""
        if not video_id:
            raise ValueError("video_id must be a non-empty string")
        self._merge_cookies(video_id)
        catalog = WatchPageFetcher(self._client).fetch(video_id)
        logger.info("Found %d caption tracks for %s", len(catalog), video_id)
        return catalog

    def get_transcript(self, video_id: str, languages: Sequence[str] = ("en",)) -> list[Cue]:
        """
        Fetch the cues of the best track for ``languages`` (descending priority,
        manually created tracks preferred per language).
        """
        return self.list_transcripts(video_id).find_transcript(languages).fetch()

    def get_transcripts(
        self,
        video_ids: Iterable[str],
        languages: Sequence[str] = ("en",),
        continue_after_error: bool = False,
    ) -> tuple[dict[str, list[Cue]], list[str]]:
        """
        Fetch transcripts for several videos. Returns the cues by video id and
        the ids that failed (only non-empty with ``continue_after_error``).
        """
        data: dict[str, list[Cue]] = {}
        failed: list[str] = []
        for video_id in video_ids:
            try:
                data[video_id] = self.get_transcript(video_id, languages)
            except CouldNotRetrieveTranscript as e:
                if not continue_after_error:
                    raise
                logger.warning("Skipping %s: %s", video_id, e.kind.name)
                failed.append(video_id)
        return data, failed
