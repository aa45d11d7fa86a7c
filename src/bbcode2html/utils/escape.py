#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbcode2html/utils/escape.py
"""HTML escaping for user-sourced BBCode text.

Every fragment of user input is escaped exactly once on its way into the
output: either as part of the working string before the rule table runs, or
as the verbatim body of a literal (``[code]`` / ``[pre]``) region.
"""

from __future__ import annotations

import html


def escape_html(text: str) -> str:
    """Escape the five HTML-significant characters.

    Parameters
    ----------
    text : str
        Text to escape

    Returns
    -------
    str
        Text safe for use as element content or a double-quoted attribute value

    Examples
    --------
        >>> escape_html("<b>Tom & Jerry's</b>")
        '&lt;b&gt;Tom &amp; Jerry&#039;s&lt;/b&gt;'

    Notes
    -----
    The replacements are:
    - & -> &amp;
    - < -> &lt;
    - > -> &gt;
    - " -> &quot;
    - ' -> &#039;

    """
    if not text:
        return text

    return html.escape(text, quote=True).replace("&#x27;", "&#039;")


def unescape_html(text: str) -> str:
    """Reverse :func:`escape_html` for inspection of already-escaped values."""
    if not text:
        return text

    return html.unescape(text)


__all__ = ["escape_html", "unescape_html"]
