#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Security utilities for the bbcode2html renderer.

Functions
---------
- sanitize_null_bytes: Remove null bytes and zero-width characters
- is_relative_url: Check whether a URL is relative
- is_url_scheme_dangerous: Detect javascript:, vbscript: and script-bearing data: URLs
- is_url_safe: Inverse of is_url_scheme_dangerous with empty-URL handling
"""

import logging
from urllib.parse import urlparse

from bbcode2html.constants import DANGEROUS_NULL_LIKE_CHARS, DANGEROUS_SCHEMES

logger = logging.getLogger(__name__)


def sanitize_null_bytes(content: str) -> str:
    r"""Remove null bytes and zero-width characters that can bypass XSS filters.

    Removed characters:
    - \x00 (NULL byte)
    - \ufeff (BOM/Zero Width No-Break Space)
    - \u200b (Zero Width Space)
    - \u200c (Zero Width Non-Joiner)
    - \u200d (Zero Width Joiner)
    - \u2060 (Word Joiner)

    Parameters
    ----------
    content : str
        Content to sanitize

    Returns
    -------
    str
        Sanitized content with dangerous characters removed

    Examples
    --------
    >>> sanitize_null_bytes("java\u200bscript:alert(1)")
    'javascript:alert(1)'
    >>> sanitize_null_bytes("Normal text")
    'Normal text'

    """
    if not content:
        return content

    for char in DANGEROUS_NULL_LIKE_CHARS:
        if char in content:
            content = content.replace(char, "")

    return content


def is_relative_url(url: str) -> bool:
    """Check if a URL is a relative URL.

    Relative URLs do not have a scheme and typically start with #, /, ./, ../, or ?.

    Parameters
    ----------
    url : str
        URL to check

    Returns
    -------
    bool
        True if URL is relative, False otherwise

    Examples
    --------
    >>> is_relative_url("#section")
    True
    >>> is_relative_url("/path/to/file")
    True
    >>> is_relative_url("https://example.com")
    False

    """
    if not url or not url.strip():
        return True

    return url.strip().startswith(("#", "/", "./", "../", "?"))


def is_url_scheme_dangerous(url: str) -> bool:
    """Check if a URL uses a dangerous scheme.

    Null bytes and zero-width characters are removed before the check so that
    payloads such as ``java\\u200bscript:`` cannot slip through.

    Parameters
    ----------
    url : str
        URL to check

    Returns
    -------
    bool
        True if URL uses a dangerous scheme, False otherwise

    Examples
    --------
    >>> is_url_scheme_dangerous("https://example.com")
    False
    >>> is_url_scheme_dangerous("javascript:alert('xss')")
    True
    >>> is_url_scheme_dangerous("data:text/html,<script>alert('xss')</script>")
    True
    >>> is_url_scheme_dangerous("/relative/path")
    False

    """
    if not url or not url.strip():
        return False

    url_lower = "".join(sanitize_null_bytes(url).lower().split())

    if is_relative_url(url_lower) and not url_lower.startswith("//"):
        return False

    for dangerous_scheme in DANGEROUS_SCHEMES:
        if url_lower.startswith(dangerous_scheme):
            return True

    try:
        scheme = urlparse(url_lower).scheme
    except ValueError:
        # Unparseable URLs are treated as hostile
        return True

    if scheme in ("javascript", "vbscript", "about"):
        return True

    return False


def is_url_safe(url: str) -> bool:
    """Check if a URL is safe (no dangerous schemes).

    Parameters
    ----------
    url : str
        URL to validate

    Returns
    -------
    bool
        True if URL is safe, False if it uses a dangerous scheme

    """
    if not url or not url.strip():
        return True

    safe = not is_url_scheme_dangerous(url)
    if not safe:
        logger.debug("Rejected URL with dangerous scheme: %r", url)
    return safe


__all__ = [
    "sanitize_null_bytes",
    "is_relative_url",
    "is_url_scheme_dangerous",
    "is_url_safe",
]
