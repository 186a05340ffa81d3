"""
Timedtext XML parsing into ordered cues.
"""

import html
import logging
import math
import re
from collections.abc import Iterator

from defusedxml import ElementTree

from .models import Cue

logger = logging.getLogger("ytcaptions")

_HTML_TAG_RE = re.compile(r"<[^>]*>", re.IGNORECASE)
# Plain decimal numbers only; float() would also take "1_5", "nan" and "inf"
_NUMBER_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")


def _seconds(value: str | None) -> float:
    if value is None or not _NUMBER_RE.match(value.strip()):
        return 0.0
    seconds = float(value)
    return seconds if math.isfinite(seconds) else 0.0


def parse_cues(payload: str) -> Iterator[Cue]:
    """
    Yield one Cue per non-empty <text> element of a timedtext document.

    Cues come out in document order. Entities are decoded (YouTube escapes the
    text twice, so ElementTree's pass is followed by html.unescape) and any
    markup left in the text, such as <font> tags, is removed. Missing or
    malformed ``start``/``dur`` attributes read as 0.0.
    """
    root = ElementTree.fromstring(payload)
    for node in root.findall("text"):
        text = "".join(node.itertext())
        if not text:
            continue
        text = _HTML_TAG_RE.sub("", html.unescape(text))
        yield Cue(
            text=text,
            start=_seconds(node.get("start")),
            duration=_seconds(node.get("dur")),
        )
