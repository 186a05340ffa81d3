"""
ytcaptions - fetch YouTube caption tracks without an API key.

A small scraping pipeline for:
- Loading the watch page and passing the EU consent interstitial
- Extracting the embedded caption track list
- Searching manually created and generated tracks by language priority
- Deriving machine-translated variants of a track
- Parsing timedtext XML into ordered, timed cues
"""

from .catalog import TranscriptCatalog, TranscriptTrack, build_catalog
from .errors import CouldNotRetrieveTranscript, ErrorKind
from .fetcher import WatchPageFetcher
from .models import CaptionTrack, Cue, TranslationLanguage
from .parser import parse_cues
from .service import TranscriptService

__version__ = "0.1.0"

__all__ = [
    "CaptionTrack",
    "CouldNotRetrieveTranscript",
    "Cue",
    "ErrorKind",
    "TranscriptCatalog",
    "TranscriptService",
    "TranscriptTrack",
    "TranslationLanguage",
    "WatchPageFetcher",
    "build_catalog",
    "parse_cues",
]
