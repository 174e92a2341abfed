#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbtree/utils/security.py
"""URL safety checks used by the HTML renderer.

BBCode attributes such as ``[url=...]`` and ``[img]...[/img]`` end up in
``href``/``src`` attributes, so URLs with script-capable schemes are dropped
before rendering.
"""

from __future__ import annotations

import re
from urllib.parse import urlparse

from bbtree.constants import DANGEROUS_SCHEMES

# Browsers ignore ASCII whitespace and control characters inside a scheme
_IGNORED_URL_CHARS = re.compile(r"[\x00-\x20\x7f]+")


def is_relative_url(url: str) -> bool:
    """Check if a URL is relative (no scheme).

    Examples
    --------
    >>> is_relative_url("/path/to/file")
    True
    >>> is_relative_url("https://example.com")
    False

    """
    if url.startswith(("#", "/", "./", "../", "?")):
        return True
    return ":" not in url.split("/", 1)[0]


def is_url_scheme_dangerous(url: str) -> bool:
    """Check if a URL uses a dangerous scheme.

    Dangerous schemes include ``javascript:``, ``vbscript:`` and ``data:``
    URLs carrying HTML or script content.

    Examples
    --------
    >>> is_url_scheme_dangerous("https://example.com")
    False
    >>> is_url_scheme_dangerous("javascript:alert('xss')")
    True
    >>> is_url_scheme_dangerous("data:text/html,<script>alert('xss')</script>")
    True

    """
    if not url or not url.strip():
        return False

    url_lower = _IGNORED_URL_CHARS.sub("", url).lower()

    if is_relative_url(url_lower):
        return False

    for dangerous_scheme in DANGEROUS_SCHEMES:
        if url_lower.startswith(dangerous_scheme):
            return True

    try:
        scheme = urlparse(url_lower).scheme
    except ValueError:
        return True

    return scheme in ("javascript", "vbscript", "about")


def sanitize_url(url: str) -> str:
    """Return ``url`` stripped of surrounding whitespace, or ``""`` if it is dangerous.

    Examples
    --------
    >>> sanitize_url("https://example.com")
    'https://example.com'
    >>> sanitize_url("javascript:alert('xss')")
    ''

    """
    url = url.strip()
    if is_url_scheme_dangerous(url):
        return ""
    return url
