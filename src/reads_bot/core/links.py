"""Link normalization and domain lookups."""

import re
from typing import Optional
from urllib.parse import urlsplit

from reads_bot.core.entities import DEFAULT_TAGS_FOR_DOMAIN, Tag

CANONICAL_SOCIAL_HOST = "x.com"
SOCIAL_HOST_ALIASES = frozenset({
    "twitter.com",
    "www.twitter.com",
    "mobile.twitter.com",
    "vxtwitter.com",
    "fxtwitter.com",
    "www.x.com",
})

_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)
_HTTP_RE = re.compile(r"^http://", re.IGNORECASE)
_URL_LIKE_RE = re.compile(r"^https?:", re.IGNORECASE)


def looks_like_url(text: str) -> bool:
    """Check whether a chat message should be treated as a pasted link."""
    return bool(_URL_LIKE_RE.match(text.strip()))


def _hostname(url: str) -> Optional[str]:
    try:
        return urlsplit(url).hostname
    except ValueError:
        return None


def normalize_url(raw: str) -> str:
    """Canonicalize a pasted link.

    Rules are applied in order:
        1. prepend ``https://`` when no http(s) scheme is present
        2. force ``http://`` to ``https://``
        3. rewrite twitter alias hosts to ``x.com``
        4. drop query string and fragment from ``x.com`` links

    Never raises: garbage in gives a best-effort string out.
    """
    url = raw.strip()

    if not _SCHEME_RE.match(url):
        url = f"https://{url}"

    url = _HTTP_RE.sub("https://", url)

    try:
        parts = urlsplit(url)
        host = (parts.hostname or "").lower()
        port = parts.port
    except ValueError:
        # Unparseable netloc (stray brackets, bad port), leave it to downstream
        return url

    if host in SOCIAL_HOST_ALIASES:
        host = CANONICAL_SOCIAL_HOST

    # Always the lowercase canonical host, whatever casing was pasted
    if host == CANONICAL_SOCIAL_HOST:
        netloc = f"{host}:{port}" if port else host
        return f"{parts.scheme}://{netloc}{parts.path}"

    return url


def default_tags_for_url(url: str) -> list[Tag]:
    """Seed tags from the link's host, empty when no known domain matches."""
    host = (_hostname(url) or "").lower()
    if not host:
        return []

    for domain, tags in DEFAULT_TAGS_FOR_DOMAIN.items():
        if host == domain or host.endswith(f".{domain}"):
            return list(tags)

    return []
