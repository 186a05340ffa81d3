"""
Data models for the caption retrieval pipeline.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Cue:
    """A single timed caption fragment."""

    text: str
    start: float  # seconds
    duration: float = 0.0  # seconds

    @property
    def end(self) -> float:
        return self.start + self.duration


@dataclass(frozen=True)
class TranslationLanguage:
    """A language a track can be machine translated into."""

    language_code: str
    language: str  # display name, e.g. "Afrikaans"


@dataclass(frozen=True)
class CaptionTrack:
    """Descriptor of one caption track as listed on the watch page."""

    video_id: str
    url: str
    language: str
    language_code: str
    is_generated: bool
    translation_languages: tuple[TranslationLanguage, ...] = ()
