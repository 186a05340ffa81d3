"""
Watch page scraping: consent handling and caption JSON extraction.
"""

import json
import logging
import re

import httpx

from .catalog import TranscriptCatalog, build_catalog
from .errors import WATCH_URL, CouldNotRetrieveTranscript, ErrorKind

logger = logging.getLogger("ytcaptions")

CAPTIONS_MARKER = '"captions":'
VIDEO_DETAILS_MARKER = ',"videoDetails'
RECAPTCHA_MARKER = 'class="g-recaptcha"'
PLAYABILITY_MARKER = '"playabilityStatus":'
CONSENT_MARKER = 'action="https://consent.youtube.com/s"'
CONSENT_COOKIE_DOMAIN = ".youtube.com"

_CONSENT_VALUE_RE = re.compile(r'name="v" value="(.*?)"')


class WatchPageFetcher:
    """
    Loads a video's watch page and turns it into a TranscriptCatalog.

    The consent cookie is written into the client's cookie jar, so one client
    must not be used for concurrent fetches.
    """

    def __init__(self, client: httpx.Client) -> None:
        self._client = client

    def fetch(self, video_id: str) -> TranscriptCatalog:
        html = self._fetch_video_html(video_id)
        captions_json = self._extract_captions_json(html, video_id)
        return build_catalog(self._client, video_id, captions_json)

    def _fetch_video_html(self, video_id: str) -> str:
        html = self._fetch_html(video_id)
        if CONSENT_MARKER in html:
            logger.info("Consent page served for %s, retrying with consent cookie", video_id)
            self._create_consent_cookie(html, video_id)
            html = self._fetch_html(video_id)
            if CONSENT_MARKER in html:
                raise CouldNotRetrieveTranscript(ErrorKind.FAILED_TO_CREATE_CONSENT_COOKIE, video_id)
        return html

    def _fetch_html(self, video_id: str) -> str:
        url = WATCH_URL.format(video_id=video_id)
        logger.debug("GET %s", url)
        try:
            response = self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise CouldNotRetrieveTranscript(
                ErrorKind.REQUEST_FAILED, video_id, f"{ErrorKind.REQUEST_FAILED.message}: {e}"
            ) from e
        # The page is served JavaScript-escaped
        return response.text.replace("\\u0026", "&").replace("\\", "")

    def _create_consent_cookie(self, html: str, video_id: str) -> None:
        match = _CONSENT_VALUE_RE.search(html)
        if match is None:
            raise CouldNotRetrieveTranscript(ErrorKind.FAILED_TO_CREATE_CONSENT_COOKIE, video_id)
        self._client.cookies.set("CONSENT", "YES+" + match.group(1), domain=CONSENT_COOKIE_DOMAIN)

    def _extract_captions_json(self, html: str, video_id: str) -> dict:
        parts = html.split(CAPTIONS_MARKER)
        if len(parts) <= 1:
            # Order matters: a captcha page may also carry a playability status
            if RECAPTCHA_MARKER in html:
                raise CouldNotRetrieveTranscript(ErrorKind.TOO_MANY_REQUESTS, video_id)
            if PLAYABILITY_MARKER not in html:
                raise CouldNotRetrieveTranscript(ErrorKind.VIDEO_UNAVAILABLE, video_id)
            raise CouldNotRetrieveTranscript(ErrorKind.TRANSCRIPTS_DISABLED, video_id)

        raw = parts[1].split(VIDEO_DETAILS_MARKER)[0].replace("\n", "")
        captions_json = json.loads(raw).get("playerCaptionsTracklistRenderer")
        if not captions_json or "captionTracks" not in captions_json:
            raise CouldNotRetrieveTranscript(ErrorKind.NO_TRANSCRIPT_AVAILABLE, video_id)
        return captions_json
