#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbcode2html/postprocess.py
"""Finishing passes applied once to the fully resolved document.

The passes run in a fixed order: leftover sentinels are removed, mentions are
linked, newlines become ``<br />``, literal regions are restored, and breaks
that would add stray spacing around block elements are dropped. Restoring
literal regions after the newline pass keeps their raw newlines intact
inside ``<pre>``.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from bbcode2html.constants import BLOCK_TAG_NAMES, LINE_BREAK, MENTION_CLASS, MENTION_NAME_PATTERN
from bbcode2html.lists import strip_list_sentinels

if TYPE_CHECKING:
    from bbcode2html.literal import LiteralStash
    from bbcode2html.options import BBCodeRendererOptions

logger = logging.getLogger(__name__)

# A mention must follow whitespace, '>', '(', '[' or the end of a literal-region
# token, and must not sit inside a tag.
MENTION_PATTERN = re.compile(rf"(^|[\s>(\[\x00])@({MENTION_NAME_PATTERN})(?![^<]*>)")
ANCHOR_TAG_PATTERN = re.compile(r"<(/?)a\b[^>]*>", re.IGNORECASE)

_BLOCK_NAMES = "|".join(BLOCK_TAG_NAMES)
_OPENING_TAG = rf"<(?:{_BLOCK_NAMES})(?:\s[^>]*?)?>"
_CLOSING_TAG = rf"</(?:{_BLOCK_NAMES})>"
_BREAK = re.escape(LINE_BREAK)

_BREAK_BEFORE_OPENING = re.compile(rf"{_BREAK}(?={_OPENING_TAG})", re.IGNORECASE)
_BREAK_AFTER_CLOSING = re.compile(rf"({_CLOSING_TAG}){_BREAK}", re.IGNORECASE)
_BREAK_AS_ONLY_CONTENT = re.compile(
    rf"(<({_BLOCK_NAMES})(?:\s[^>]*?)?>){_BREAK}(</\2>)",
    re.IGNORECASE,
)
_BREAK_BEFORE_CLOSING = re.compile(rf"{_BREAK}(?={_CLOSING_TAG})", re.IGNORECASE)


def _link_segment(segment: str) -> str:
    return MENTION_PATTERN.sub(
        lambda match: f'{match.group(1)}<span class="{MENTION_CLASS}">@{match.group(2)}</span>',
        segment,
    )


def link_mentions(html: str) -> str:
    """Wrap ``@username`` tokens in a mention span.

    Text inside ``<a>`` elements is skipped at any depth, including text
    wrapped in further inline elements within the link.
    """
    pieces: list[str] = []
    depth = 0
    position = 0
    for tag in ANCHOR_TAG_PATTERN.finditer(html):
        segment = html[position : tag.start()]
        pieces.append(segment if depth else _link_segment(segment))
        pieces.append(tag.group(0))
        depth = max(depth - 1, 0) if tag.group(1) else depth + 1
        position = tag.end()

    tail = html[position:]
    pieces.append(tail if depth else _link_segment(tail))
    return "".join(pieces)


def convert_newlines(html: str) -> str:
    return html.replace("\n", LINE_BREAK)


def suppress_block_breaks(html: str) -> str:
    """Drop line breaks that only pad block elements.

    Removes a break directly before an opening block tag, directly after a
    closing block tag, when it is the sole content of a block element, and
    directly before a closing block tag.
    """
    html = _BREAK_BEFORE_OPENING.sub("", html)
    html = _BREAK_AFTER_CLOSING.sub(r"\1", html)
    html = _BREAK_AS_ONLY_CONTENT.sub(r"\1\3", html)
    return _BREAK_BEFORE_CLOSING.sub("", html)


def finalize(html: str, stash: LiteralStash, options: BBCodeRendererOptions) -> str:
    """Run every finishing pass over the resolved document.

    Parameters
    ----------
    html : str
        Output of the convergence passes
    stash : LiteralStash
        Rendered ``[code]`` / ``[pre]`` regions to restore
    options : BBCodeRendererOptions
        Controls mention linking and newline conversion

    Returns
    -------
    str
        The final HTML fragment

    """
    html = strip_list_sentinels(html)

    if options.link_mentions:
        html = link_mentions(html)

    if not options.convert_newlines:
        return stash.restore(html)

    html = convert_newlines(html)
    html = stash.restore(html)
    return suppress_block_breaks(html)


__all__ = [
    "MENTION_PATTERN",
    "convert_newlines",
    "finalize",
    "link_mentions",
    "suppress_block_breaks",
]
