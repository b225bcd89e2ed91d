"""URL allow-list for links written into rendered markup.

Escaping keeps a URL inside its attribute but does not stop a
``javascript:`` or ``data:`` link from running, so every href, src and
link template is checked against an allowed scheme first.
"""

import logging
import re
from typing import Optional
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)

ALLOWED_SCHEMES = frozenset({"http", "https", ""})

# Browsers ignore these inside a URL, so "java\tscript:" still runs.
_IGNORED_CHARS = re.compile(r"[\x00-\x1f\x7f]")


def safe_url(raw: Optional[str], fallback: str = "") -> str:
    """Return ``raw`` when it is an http(s) or relative URL, else ``fallback``."""
    url = _IGNORED_CHARS.sub("", (raw or "")).strip()
    if not url:
        return fallback
    try:
        scheme = urlsplit(url).scheme.lower()
    except ValueError:
        scheme = None
    if scheme not in ALLOWED_SCHEMES:
        logger.debug(f"Rejected URL {raw!r}")
        return fallback
    return url
