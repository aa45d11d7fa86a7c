#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbcode2html/lists.py
"""List handling for ``[list]``, ``[list=1]`` and ``[*]``.

A list body has its ``[*]`` markers replaced by an internal sentinel before
being resolved. The item rule then turns each sentinel-delimited run into an
``<li>``. Because the sentinels of a nested list are only planted once that
list itself is matched (innermost first), an item never spans into a
sibling or parent list.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from bbcode2html.constants import (
    LIST_ITEM_CLASS,
    LIST_ITEM_SENTINEL,
    ORDERED_LIST_CLASS,
    UNORDERED_LIST_CLASS,
)

if TYPE_CHECKING:
    from bbcode2html.rules import RuleEngine

_SENTINEL = re.escape(LIST_ITEM_SENTINEL)

LIST_ITEM_MARKER = re.compile(r"\[\*\]")
LIST_ITEM_PATTERN = re.compile(rf"{_SENTINEL}(?P<body>[\s\S]*?)(?={_SENTINEL}|\Z)")

_LEADING_SENTINEL_RUN = re.compile(rf"^(\s*){_SENTINEL}(?:\s*{_SENTINEL})+")
_TRAILING_SENTINEL_RUN = re.compile(rf"(?:{_SENTINEL}\s*)+\Z")


def mark_list_items(body: str) -> str:
    """Replace ``[*]`` markers in a list body with item sentinels.

    A run of markers at the very start collapses to one, so ``[*][*]a``
    yields a single item. Markers with nothing but whitespace after them at
    the end of the body are dropped.
    """
    body = LIST_ITEM_MARKER.sub(LIST_ITEM_SENTINEL, body)
    body = _LEADING_SENTINEL_RUN.sub(lambda match: match.group(1) + LIST_ITEM_SENTINEL, body)
    return _TRAILING_SENTINEL_RUN.sub("", body)


def strip_list_sentinels(text: str) -> str:
    """Remove any item sentinel that was never consumed by a list."""
    return text.replace(LIST_ITEM_SENTINEL, "")


def render_list_item(match: re.Match[str], engine: RuleEngine) -> str:
    return f'<li class="{LIST_ITEM_CLASS}">{engine.resolve(match.group("body").strip())}</li>'


def render_unordered_list(match: re.Match[str], engine: RuleEngine) -> str:
    return f'<ul class="{UNORDERED_LIST_CLASS}">{engine.resolve(mark_list_items(match.group("body")))}</ul>'


def render_ordered_list(match: re.Match[str], engine: RuleEngine) -> str:
    return f'<ol class="{ORDERED_LIST_CLASS}">{engine.resolve(mark_list_items(match.group("body")))}</ol>'


__all__ = [
    "LIST_ITEM_MARKER",
    "LIST_ITEM_PATTERN",
    "mark_list_items",
    "render_list_item",
    "render_ordered_list",
    "render_unordered_list",
    "strip_list_sentinels",
]
