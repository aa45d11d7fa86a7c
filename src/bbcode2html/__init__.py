"""bbcode2html - Forum BBCode to styled HTML.

bbcode2html converts the BBCode dialect used by MyAnimeList-style forums into
an HTML fragment styled with Tailwind utility classes, ready to drop into a
preview pane. All user text is escaped, ``[code]``/``[pre]`` regions are shown
verbatim, and malformed markup degrades to literal text instead of raising.

Examples
--------
Quick conversion with default options:

    >>> from bbcode2html import transform
    >>> transform("[b]Hello[/b] & welcome")
    '<strong class="font-bold">Hello</strong> &amp; welcome'

Custom options and a standalone preview page:

    >>> from bbcode2html import BBCodeRenderer, BBCodeRendererOptions
    >>> renderer = BBCodeRenderer(BBCodeRendererOptions(standalone=True, dark_mode=True))
    >>> page = renderer.render_to_string("[center]Welcome[/center]")

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

from bbcode2html.exceptions import (
    Bbcode2HtmlError,
    InvalidOptionsError,
    OutputWriteError,
    RenderingError,
    ValidationError,
)
from bbcode2html.options import BBCodeRendererOptions
from bbcode2html.renderer import BBCodeRenderer, transform

__version__ = "1.0.0"

__all__ = [
    "BBCodeRenderer",
    "BBCodeRendererOptions",
    "Bbcode2HtmlError",
    "InvalidOptionsError",
    "OutputWriteError",
    "RenderingError",
    "ValidationError",
    "__version__",
    "transform",
]
