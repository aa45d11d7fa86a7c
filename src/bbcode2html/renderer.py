#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbcode2html/renderer.py
"""BBCode to HTML renderer.

This module converts forum-style BBCode into a styled HTML fragment. The
pipeline is:

1. Normalize line endings and drop NUL characters.
2. Render ``[code]``/``[pre]`` regions and park them behind tokens.
3. Escape the remaining text once.
4. Apply the tag rule table repeatedly until nothing changes (or the pass
   ceiling is reached).
5. Strip sentinels, link mentions, convert newlines, restore literal regions
   and suppress breaks around block elements.

Rendering never fails on malformed markup: unmatched tags stay as escaped
literal text and unusable parameters degrade to safe output.
"""

from __future__ import annotations

import logging
import re
from typing import Optional, Sequence

from bbcode2html.document import wrap_in_document
from bbcode2html.exceptions import InvalidOptionsError, OutputWriteError
from bbcode2html.literal import extract_literal_regions
from bbcode2html.options import BBCodeRendererOptions
from bbcode2html.postprocess import finalize
from bbcode2html.rules import DEFAULT_RULES, TagRule
from bbcode2html.utils.escape import escape_html
from bbcode2html.utils.io_utils import TextDestination, write_text

logger = logging.getLogger(__name__)

_LINE_ENDINGS = re.compile(r"\r\n?")


def normalize_source(text: str) -> str:
    """Normalize line endings to ``\\n`` and remove NUL characters."""
    return _LINE_ENDINGS.sub("\n", text).replace("\x00", "")


class BBCodeRenderer:
    """Render BBCode markup to HTML.

    Parameters
    ----------
    options : BBCodeRendererOptions or None, default = None
        Rendering options; defaults are used when omitted
    rules : sequence of TagRule or None, default = None
        Rule table to apply, in order; the standard table when omitted

    Raises
    ------
    InvalidOptionsError
        If ``options`` is not a :class:`BBCodeRendererOptions`

    Examples
    --------
        >>> renderer = BBCodeRenderer()
        >>> renderer.render_to_string("[b]Hello[/b]")
        '<strong class="font-bold">Hello</strong>'

    """

    def __init__(self, options: BBCodeRendererOptions | None = None, rules: Optional[Sequence[TagRule]] = None):
        """Initialize the renderer with optional configuration."""
        if options is not None and not isinstance(options, BBCodeRendererOptions):
            raise InvalidOptionsError(
                converter_name="bbcode",
                expected_type=BBCodeRendererOptions,
                received_type=type(options),
            )
        self.options: BBCodeRendererOptions = options or BBCodeRendererOptions()
        self.rules: tuple[TagRule, ...] = tuple(rules) if rules is not None else DEFAULT_RULES

    def resolve(self, text: str) -> str:
        """Apply the rule table to ``text`` until it reaches a fixed point.

        Each pass applies every rule once, in table order. Tag transforms
        call back into this method for their bodies, so every captured body
        gets its own pass budget.

        Parameters
        ----------
        text : str
            Escaped working text

        Returns
        -------
        str
            Text with every resolvable tag converted; anything left after
            ``options.max_passes`` passes is returned as is

        """
        for _ in range(self.options.max_passes):
            previous = text
            for rule in self.rules:
                text = rule.apply(text, self)
            if text == previous:
                return text

        logger.debug("Stopped after %d passes without reaching a fixed point", self.options.max_passes)
        return text

    def render_fragment(self, text: str) -> str:
        """Render BBCode to an HTML fragment, ignoring ``standalone``."""
        source = normalize_source(text)
        source, stash = extract_literal_regions(source)
        html = self.resolve(escape_html(source))
        return finalize(html, stash, self.options)

    def render_to_string(self, text: str) -> str:
        """Render BBCode to HTML.

        Parameters
        ----------
        text : str
            BBCode source

        Returns
        -------
        str
            HTML fragment, or a complete preview document when
            ``options.standalone`` is set

        Raises
        ------
        RenderingError
            Only for standalone output through a template that cannot be
            loaded or rendered

        """
        fragment = self.render_fragment(text)
        if self.options.standalone:
            return wrap_in_document(fragment, self.options)
        return fragment

    def render(self, text: str, output: TextDestination) -> None:
        """Render BBCode and write the result to a path or stream.

        Raises
        ------
        OutputWriteError
            If the output cannot be written

        """
        html = self.render_to_string(text)
        try:
            write_text(html, output)
        except (OSError, TypeError) as e:
            target = str(output) if isinstance(output, str) or hasattr(output, "__fspath__") else None
            raise OutputWriteError(f"Failed to write output: {e}", output_path=target, original_error=e) from e


# Built once at import; it only holds immutable options and rules.
_DEFAULT_RENDERER = BBCodeRenderer()


def transform(text: str) -> str:
    """Convert BBCode to an HTML fragment using default options.

    Parameters
    ----------
    text : str
        BBCode source

    Returns
    -------
    str
        HTML fragment

    Examples
    --------
        >>> transform("[i]hi[/i] & bye")
        '<em class="italic">hi</em> &amp; bye'

    """
    return _DEFAULT_RENDERER.render_fragment(text)


__all__ = ["BBCodeRenderer", "normalize_source", "transform"]
