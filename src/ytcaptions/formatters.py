"""
Rendering cues as plain text, JSON, SRT or WebVTT.
"""

import json
import logging
from collections.abc import Callable, Sequence
from pathlib import Path

from .models import Cue

logger = logging.getLogger("ytcaptions")


def format_timestamp(t: float, sep: str = ",") -> str:
    """Format seconds as HH:MM:SS,mmm (SRT) or HH:MM:SS.mmm with sep='.' (WebVTT)."""
    total_ms = int(round(max(0.0, t) * 1000))
    h, rest = divmod(total_ms, 3_600_000)
    m, rest = divmod(rest, 60_000)
    s, ms = divmod(rest, 1000)
    return f"{h:02}:{m:02}:{s:02}{sep}{ms:03}"


def _cue_end(cues: Sequence[Cue], i: int) -> float:
    """End of cue i, clipped so it never runs past the start of the next cue."""
    end = cues[i].end
    if i + 1 < len(cues) and cues[i + 1].start < end:
        end = cues[i + 1].start
    return end


def format_text(cues: Sequence[Cue]) -> str:
    return "\n".join(c.text for c in cues)


def format_json(cues: Sequence[Cue]) -> str:
    return json.dumps(
        [{"text": c.text, "start": c.start, "duration": c.duration} for c in cues],
        ensure_ascii=False,
        indent=2,
    )


def format_srt(cues: Sequence[Cue]) -> str:
    blocks = []
    for i, c in enumerate(cues):
        blocks.append(
            f"{i + 1}\n{format_timestamp(c.start)} --> {format_timestamp(_cue_end(cues, i))}\n{c.text}\n"
        )
    return "\n".join(blocks)


def format_webvtt(cues: Sequence[Cue]) -> str:
    blocks = ["WEBVTT\n"]
    for i, c in enumerate(cues):
        start = format_timestamp(c.start, ".")
        end = format_timestamp(_cue_end(cues, i), ".")
        blocks.append(f"{start} --> {end}\n{c.text}\n")
    return "\n".join(blocks)


FORMATTERS: dict[str, Callable[[Sequence[Cue]], str]] = {
    "text": format_text,
    "json": format_json,
    "srt": format_srt,
    "webvtt": format_webvtt,
}

EXTENSIONS = {"text": "txt", "json": "json", "srt": "srt", "webvtt": "vtt"}


def write_cues(cues: Sequence[Cue], path: str, fmt: str = "srt") -> None:
    """Write cues to a file in the given format."""
    if fmt not in FORMATTERS:
        msg = f"Unknown format {fmt!r}, expected one of {sorted(FORMATTERS)}"
        raise ValueError(msg)
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    Path(path).write_text(FORMATTERS[fmt](cues), encoding="utf-8")
    logger.info("Wrote %d cues -> %s", len(cues), path)
