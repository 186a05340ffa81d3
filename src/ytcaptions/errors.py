"""
Error taxonomy for transcript retrieval.

Every failure raised by the pipeline is a ``CouldNotRetrieveTranscript``;
callers tell causes apart by its ``kind`` rather than by subclass.
"""

from __future__ import annotations

from enum import Enum, auto
from typing import TYPE_CHECKING, Optional, Sequence

if TYPE_CHECKING:
    from .catalog import TranscriptCatalog

WATCH_URL = "https://www.youtube.com/watch?v={video_id}"


class ErrorKind(Enum):
    VIDEO_UNAVAILABLE = auto()
    TOO_MANY_REQUESTS = auto()
    TRANSCRIPTS_DISABLED = auto()
    NO_TRANSCRIPT_AVAILABLE = auto()
    NO_TRANSCRIPT_FOUND = auto()
    NOT_TRANSLATABLE = auto()
    TRANSLATION_LANGUAGE_NOT_AVAILABLE = auto()
    FAILED_TO_CREATE_CONSENT_COOKIE = auto()
    COOKIE_PATH_INVALID = auto()
    COOKIES_INVALID = auto()
    REQUEST_FAILED = auto()

    @property
    def message(self) -> str:
        return _MESSAGES[self]


_MESSAGES = {
    ErrorKind.VIDEO_UNAVAILABLE: "The video is no longer available",
    ErrorKind.TOO_MANY_REQUESTS: (
        "YouTube is receiving too many requests from this IP and now requires solving a captcha "
        "to continue. One of the following things can be done to work around this:\n"
        "- Manually solve the captcha in a browser and export the cookie file "
        "(pass it with --cookies)\n"
        "- Use a different IP address\n"
        "- Wait until the ban on your IP has been lifted"
    ),
    ErrorKind.TRANSCRIPTS_DISABLED: "Subtitles are disabled for this video",
    ErrorKind.NO_TRANSCRIPT_AVAILABLE: "No transcripts are available for this video",
    ErrorKind.NO_TRANSCRIPT_FOUND: "No transcripts were found for any of the requested language codes",
    ErrorKind.NOT_TRANSLATABLE: "The requested language is not translatable",
    ErrorKind.TRANSLATION_LANGUAGE_NOT_AVAILABLE: "The requested translation language is not available",
    ErrorKind.FAILED_TO_CREATE_CONSENT_COOKIE: "Failed to automatically give consent to saving cookies",
    ErrorKind.COOKIE_PATH_INVALID: "The provided cookie file was unable to be loaded",
    ErrorKind.COOKIES_INVALID: "The cookies provided are not valid (may have expired)",
    ErrorKind.REQUEST_FAILED: "Request to YouTube failed",
}


class CouldNotRetrieveTranscript(RuntimeError):
    """
    Raised if a transcript could not be retrieved.

    ``requested_language_codes`` and ``catalog`` are only filled in for
    NO_TRANSCRIPT_FOUND; other kinds carry ``()`` and ``None``.
    """

    def __init__(
        self,
        kind: ErrorKind,
        video_id: str,
        cause: Optional[str] = None,
        *,
        requested_language_codes: Sequence[str] = (),
        catalog: Optional["TranscriptCatalog"] = None,
    ) -> None:
        self.kind = kind
        self.video_id = video_id
        self.cause = cause if cause is not None else kind.message
        self.requested_language_codes = tuple(requested_language_codes)
        self.catalog = catalog
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        msg = f"Could not retrieve a transcript for the video {WATCH_URL.format(video_id=self.video_id)}!"
        if self.cause:
            msg += f" This is most likely caused by:\n\n{self.cause}"
        return msg


def no_transcript_found(
    video_id: str, requested_language_codes: Sequence[str], catalog: "TranscriptCatalog"
) -> CouldNotRetrieveTranscript:
    """Build the NO_TRANSCRIPT_FOUND error, listing what the video does offer."""
    cause = (
        f"{ErrorKind.NO_TRANSCRIPT_FOUND.message}: {list(requested_language_codes)}\n\n"
        f"{catalog.describe()}"
    )
    return CouldNotRetrieveTranscript(
        ErrorKind.NO_TRANSCRIPT_FOUND,
        video_id,
        cause,
        requested_language_codes=requested_language_codes,
        catalog=catalog,
    )
