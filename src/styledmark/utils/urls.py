#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/styledmark/utils/urls.py
"""URL resolution for link and image destinations.

Destinations that cannot be turned into a URL are reported as ``None``
rather than raising: the renderer shows such links as inert text and such
images as nothing at all.

"""

from __future__ import annotations

import logging
import re
from urllib.parse import urljoin, urlsplit

logger = logging.getLogger(__name__)

# Characters that may not appear unescaped anywhere in a URL (RFC 3986)
_INVALID_URL_CHARS = re.compile(r"[\s<>\"{}|\\^`\x00-\x1f\x7f]")


def _is_well_formed(url: str) -> bool:
    if _INVALID_URL_CHARS.search(url):
        return False
    try:
        parts = urlsplit(url)
        # Accessing the port validates it
        _ = parts.port
    except ValueError:
        return False
    return True


def resolve_url(destination: str | None, base_url: str | None = None) -> str | None:
    """Resolve a link or image destination against an optional base URL.

    Parameters
    ----------
    destination : str or None
        Destination as written in the document
    base_url : str or None, default None
        Base URL for relative destinations; ignored if malformed

    Returns
    -------
    str or None
        The resolved URL, or None if the destination is missing or malformed

    Examples
    --------
        >>> resolve_url("/x", "https://e.org")
        'https://e.org/x'
        >>> resolve_url("has space", "https://e.org") is None
        True

    """
    if not destination:
        return None
    destination = destination.strip()
    if not destination or not _is_well_formed(destination):
        logger.debug(f"Unresolvable destination {destination!r}")
        return None

    if base_url and not urlsplit(destination).scheme:
        if not _is_well_formed(base_url):
            logger.debug(f"Ignoring malformed base URL {base_url!r}")
            return destination
        resolved = urljoin(base_url, destination)
        return resolved if _is_well_formed(resolved) else None
    return destination


def url_scheme(url: str) -> str:
    """Return the lower-cased scheme of ``url`` (empty for relative URLs)."""
    try:
        return urlsplit(url).scheme.lower()
    except ValueError:
        return ""
