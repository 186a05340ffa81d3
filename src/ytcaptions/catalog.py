"""
Caption track catalog: building it from the watch page JSON, searching it by
language priority, and realizing individual tracks.
"""

import logging
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import replace

import httpx

from .errors import CouldNotRetrieveTranscript, ErrorKind, no_transcript_found
from .models import CaptionTrack, Cue, TranslationLanguage
from .parser import parse_cues

logger = logging.getLogger("ytcaptions")


class TranscriptTrack:
    """
    One selectable caption track of a video.

    You probably don't want to create these yourself; get them from a
    TranscriptCatalog. A track is immutable: ``translate`` returns a new track.
    """

    def __init__(self, client: httpx.Client, descriptor: CaptionTrack) -> None:
        self._client = client
        self._descriptor = descriptor
        self._translation_languages_dict = {
            tl.language_code: tl.language for tl in descriptor.translation_languages
        }

    @property
    def descriptor(self) -> CaptionTrack:
        return self._descriptor

    @property
    def video_id(self) -> str:
        return self._descriptor.video_id

    @property
    def url(self) -> str:
        return self._descriptor.url

    @property
    def language(self) -> str:
        return self._descriptor.language

    @property
    def language_code(self) -> str:
        return self._descriptor.language_code

    @property
    def is_generated(self) -> bool:
        return self._descriptor.is_generated

    @property
    def translation_languages(self) -> tuple[TranslationLanguage, ...]:
        return self._descriptor.translation_languages

    @property
    def is_translatable(self) -> bool:
        return len(self._descriptor.translation_languages) > 0

    def fetch(self) -> list[Cue]:
        """Download the track's timedtext document and parse it into cues."""
        logger.debug("Fetching %s track for %s", self.language_code, self.video_id)
        try:
            response = self._client.get(self.url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise CouldNotRetrieveTranscript(
                ErrorKind.REQUEST_FAILED, self.video_id, f"{ErrorKind.REQUEST_FAILED.message}: {e}"
            ) from e
        cues = list(parse_cues(response.text))
        logger.debug("Parsed %d cues (%s, %s)", len(cues), self.video_id, self.language_code)
        return cues

    def translate(self, language_code: str) -> "TranscriptTrack":
        """Return the machine-translated variant of this track."""
        if not self.is_translatable:
            raise CouldNotRetrieveTranscript(ErrorKind.NOT_TRANSLATABLE, self.video_id)
        if language_code not in self._translation_languages_dict:
            raise CouldNotRetrieveTranscript(
                ErrorKind.TRANSLATION_LANGUAGE_NOT_AVAILABLE, self.video_id
            )
        translated = replace(
            self._descriptor,
            url=f"{self.url}&tlang={language_code}",
            language=self._translation_languages_dict[language_code],
            language_code=language_code,
            is_generated=True,
            translation_languages=(),
        )
        return TranscriptTrack(self._client, translated)

    def __str__(self) -> str:
        flag = "[TRANSLATABLE]" if self.is_translatable else ""
        return f'{self.language_code} ("{self.language}"){flag}'

    def __repr__(self) -> str:
        return f"TranscriptTrack({self._descriptor!r})"


class TranscriptCatalog:
    """
    All caption tracks available for one video.

    Iterating yields every track, manually created ones first. The find_*
    methods search by language codes in descending priority, e.g. ['de', 'en']
    tries German before English.
    """

    def __init__(
        self,
        video_id: str,
        manually_created: Mapping[str, TranscriptTrack],
        generated: Mapping[str, TranscriptTrack],
        translation_languages: Sequence[TranslationLanguage],
    ) -> None:
        self.video_id = video_id
        self._manually_created = dict(manually_created)
        self._generated = dict(generated)
        self._translation_languages = tuple(translation_languages)

    @property
    def translation_languages(self) -> tuple[TranslationLanguage, ...]:
        return self._translation_languages

    def __iter__(self) -> Iterator[TranscriptTrack]:
        yield from self._manually_created.values()
        yield from self._generated.values()

    def __len__(self) -> int:
        return len(self._manually_created) + len(self._generated)

    def find_transcript(self, language_codes: Sequence[str]) -> TranscriptTrack:
        """
        Find a track for the given language codes. For each code, a manually
        created track wins over a generated one before the next code is tried.
        """
        return self._find(language_codes, (self._manually_created, self._generated))

    def find_manually_created_transcript(self, language_codes: Sequence[str]) -> TranscriptTrack:
        """Find a manually created track for the given language codes."""
        return self._find(language_codes, (self._manually_created,))

    def find_generated_transcript(self, language_codes: Sequence[str]) -> TranscriptTrack:
        """Find an automatically generated track for the given language codes."""
        return self._find(language_codes, (self._generated,))

    def _find(
        self,
        language_codes: Sequence[str],
        collections: Sequence[Mapping[str, TranscriptTrack]],
    ) -> TranscriptTrack:
        for code in language_codes:
            for tracks in collections:
                if code in tracks:
                    return tracks[code]
        raise no_transcript_found(self.video_id, language_codes, self)

    def describe(self) -> str:
        """Human readable summary, for logs and the CLI."""
        translations = (
            '{} ("{}")'.format(tl.language_code, tl.language) for tl in self._translation_languages
        )
        return (
            f"For this video ({self.video_id}) transcripts are available in the following languages:\n\n"
            "(MANUALLY CREATED)\n"
            f"{_describe_lines(str(t) for t in self._manually_created.values())}\n\n"
            "(GENERATED)\n"
            f"{_describe_lines(str(t) for t in self._generated.values())}\n\n"
            "(TRANSLATION LANGUAGES)\n"
            f"{_describe_lines(translations)}"
        )

    def __str__(self) -> str:
        return self.describe()


def _describe_lines(lines) -> str:
    items = [f" - {line}" for line in lines]
    return "\n".join(items) if items else "None"


def _display_name(node: Mapping) -> str:
    """Read a YouTube text node, either {"simpleText": ...} or {"runs": [{"text": ...}]}."""
    if "simpleText" in node:
        return node["simpleText"]
    return "".join(run.get("text", "") for run in node.get("runs", []))


def build_catalog(client: httpx.Client, video_id: str, captions_json: Mapping) -> TranscriptCatalog:
    """
    Build a TranscriptCatalog from the ``playerCaptionsTracklistRenderer``
    object of the watch page. Malformed input raises KeyError/ValueError.
    """
    translation_languages = tuple(
        TranslationLanguage(
            language_code=tl["languageCode"],
            language=_display_name(tl["languageName"]),
        )
        for tl in captions_json.get("translationLanguages", [])
    )

    manually_created: dict[str, TranscriptTrack] = {}
    generated: dict[str, TranscriptTrack] = {}

    for caption in captions_json["captionTracks"]:
        kind = caption.get("kind", "")
        is_translatable = bool(caption.get("isTranslatable", False))
        language_code = caption["languageCode"]
        descriptor = CaptionTrack(
            video_id=video_id,
            url=caption["baseUrl"],
            language=_display_name(caption["name"]),
            language_code=language_code,
            is_generated=kind == "asr",
            translation_languages=translation_languages if is_translatable else (),
        )
        target = generated if descriptor.is_generated else manually_created
        if language_code in target:
            msg = f"Duplicate caption track for language {language_code!r} in video {video_id}"
            raise ValueError(msg)
        target[language_code] = TranscriptTrack(client, descriptor)

    logger.debug(
        "Built catalog for %s: %d manual, %d generated, %d translation languages",
        video_id,
        len(manually_created),
        len(generated),
        len(translation_languages),
    )
    return TranscriptCatalog(video_id, manually_created, generated, translation_languages)
