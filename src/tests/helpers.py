"""
Fake YouTube pages and a MockTransport handler shared by the tests.
"""

import json

import httpx

VIDEO_ID = "GJLlxj_dtq8"
TIMEDTEXT_URL = f"https://www.youtube.com/api/timedtext?v={VIDEO_ID}"

TIMEDTEXT_XML = (
    '<?xml version="1.0" encoding="utf-8" ?><transcript>'
    '<text start="0" dur="1.54">Hey, this is just a test</text>'
    '<text start="1.54" dur="4.16">this is &lt;i&gt;not&lt;/i&gt; the real transcript</text>'
    '<text start="5.7" dur="3.239"></text>'
    '<text start="8.94">just something shorter, I made up for testing</text>'
    "</transcript>"
)

CONSENT_TOKEN = "cb.20210328-17-p0.de+FX+119"
CONSENT_PAGE = (
    '<html><body><form action="https://consent.youtube.com/s" method="POST">'
    f'<input type="hidden" name="v" value="{CONSENT_TOKEN}">'
    "</form></body></html>"
)


def make_captions_json() -> dict:
    return {
        "captionTracks": [
            {
                "baseUrl": f"{TIMEDTEXT_URL}&lang=en&name=manual",
                "name": {"simpleText": "English"},
                "languageCode": "en",
            },
            {
                "baseUrl": f"{TIMEDTEXT_URL}&lang=en&kind=asr",
                "name": {"simpleText": "English (auto-generated)"},
                "languageCode": "en",
                "kind": "asr",
                "isTranslatable": True,
            },
            {
                "baseUrl": f"{TIMEDTEXT_URL}&lang=de&kind=asr",
                "name": {"runs": [{"text": "German (auto-generated)"}]},
                "languageCode": "de",
                "kind": "asr",
            },
        ],
        "translationLanguages": [
            {"languageCode": "af", "languageName": {"simpleText": "Afrikaans"}},
            {"languageCode": "de", "languageName": {"simpleText": "German"}},
        ],
    }


def make_watch_page(captions: dict | None = None, *, playability: bool = True) -> str:
    """A JavaScript-escaped watch page, the way YouTube serves it."""
    parts = ["<html><script>var ytInitialPlayerResponse = {"]
    if playability:
        parts.append('"playabilityStatus":{"status":"OK"},')
    if captions is not None:
        parts.append('"captions":' + json.dumps({"playerCaptionsTracklistRenderer": captions}))
        parts.append(",")
    parts.append('"videoDetails":{"videoId":"%s"}};</script></html>' % VIDEO_ID)
    return "".join(parts).replace("&", "\\u0026")


class FakeYouTube:
    """Serves queued watch pages (the last one repeats) and one timedtext body."""

    def __init__(self, watch_pages: list[str], timedtext: str = TIMEDTEXT_XML) -> None:
        self.watch_pages = list(watch_pages)
        self.timedtext = timedtext
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == "/watch":
            body = self.watch_pages.pop(0) if len(self.watch_pages) > 1 else self.watch_pages[0]
            return httpx.Response(200, text=body)
        if request.url.path == "/api/timedtext":
            return httpx.Response(200, text=self.timedtext)
        return httpx.Response(404, text="not found")

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self))


