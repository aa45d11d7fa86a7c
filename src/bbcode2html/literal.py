#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbcode2html/literal.py
"""Literal (non-parsed) BBCode regions.

``[code]`` and ``[pre]`` bodies are shown verbatim: they are rendered to
their final markup before any tag rule runs, and the markup is parked behind
an opaque token so no later rule, mention pass or newline pass can touch it.
The tokens are swapped back by :meth:`LiteralStash.restore` once the rest of
the document is final.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from bbcode2html.constants import (
    CODE_BLOCK_CLASS,
    LITERAL_TOKEN_PATTERN,
    LITERAL_TOKEN_TEMPLATE,
    PRE_BLOCK_CLASS,
)
from bbcode2html.utils.escape import escape_html

logger = logging.getLogger(__name__)

# Whichever region opens first wins, so [code] inside [pre] stays literal.
LITERAL_REGION_PATTERN = re.compile(r"\[(code|pre)\]([\s\S]*?)\[/\1\]", re.IGNORECASE)
LITERAL_TOKEN_RE = re.compile(LITERAL_TOKEN_PATTERN)


def render_code_block(content: str) -> str:
    """Render a ``[code]`` body, trimmed and escaped."""
    return f'<pre class="{CODE_BLOCK_CLASS}"><code class="language-none">{escape_html(content.strip())}</code></pre>'


def render_preformatted_block(content: str) -> str:
    """Render a ``[pre]`` body.

    Outer whitespace is trimmed as for ``[code]``; the indentation of the
    second and later lines is kept as authored.
    """
    return f'<pre class="{PRE_BLOCK_CLASS}">{escape_html(content.strip())}</pre>'


@dataclass
class LiteralStash:
    """Rendered literal regions, addressed by their position in ``blocks``."""

    blocks: list[str] = field(default_factory=list)

    def add(self, markup: str) -> str:
        """Store rendered markup and return the token standing in for it."""
        token = LITERAL_TOKEN_TEMPLATE.format(index=len(self.blocks))
        self.blocks.append(markup)
        return token

    def restore(self, text: str) -> str:
        """Replace every token in ``text`` with its rendered markup."""
        if not self.blocks:
            return text

        def _lookup(match: re.Match[str]) -> str:
            index = int(match.group(1))
            return self.blocks[index] if index < len(self.blocks) else ""

        return LITERAL_TOKEN_RE.sub(_lookup, text)


def strip_literal_tokens(text: str) -> str:
    """Drop literal-region tokens, e.g. from a value headed for an attribute."""
    return LITERAL_TOKEN_RE.sub("", text)


def extract_literal_regions(text: str) -> tuple[str, LiteralStash]:
    """Render ``[code]`` and ``[pre]`` regions and replace them with tokens.

    Parameters
    ----------
    text : str
        Normalized BBCode source (no NUL characters)

    Returns
    -------
    tuple of (str, LiteralStash)
        The source with each literal region replaced by a token, and the stash
        holding the rendered regions

    """
    stash = LiteralStash()

    def _render(match: re.Match[str]) -> str:
        kind = match.group(1).lower()
        body = match.group(2)
        markup = render_code_block(body) if kind == "code" else render_preformatted_block(body)
        return stash.add(markup)

    text = LITERAL_REGION_PATTERN.sub(_render, text)

    if stash.blocks:
        logger.debug("Extracted %d literal region(s)", len(stash.blocks))

    return text, stash


__all__ = [
    "LiteralStash",
    "extract_literal_regions",
    "render_code_block",
    "render_preformatted_block",
    "strip_literal_tokens",
]
