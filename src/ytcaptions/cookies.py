"""
Loading Netscape-format cookie files (as exported by browser extensions).
"""

import logging
from http.cookiejar import CookieJar, LoadError, MozillaCookieJar
from pathlib import Path
from typing import Union

from .errors import CouldNotRetrieveTranscript, ErrorKind

logger = logging.getLogger("ytcaptions")


def load_cookies(path: Union[str, Path], video_id: str) -> CookieJar:
    """
    Load a cookies.txt file. Expired cookies are dropped; a file that cannot be
    read or parsed raises COOKIE_PATH_INVALID, one without any usable cookie
    raises COOKIES_INVALID.
    """
    jar = MozillaCookieJar()
    try:
        jar.load(str(path))
    except (OSError, LoadError) as e:
        raise CouldNotRetrieveTranscript(ErrorKind.COOKIE_PATH_INVALID, video_id) from e
    if not jar:
        raise CouldNotRetrieveTranscript(ErrorKind.COOKIES_INVALID, video_id)
    logger.info("Loaded %d cookies from %s", len(jar), path)
    return jar
