#  Copyright (c) 2025 Tom Villani, Ph.D.

# bbcode2html/options/bbcode.py
"""Configuration options for BBCode to HTML rendering.

This module defines the options class controlling the BBCode rendering
engine (pass ceiling, size clamping, mention linking, line breaks, URL safety)
and the optional standalone preview document around the rendered fragment.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from bbcode2html.constants import (
    DEFAULT_ALLOW_REMOTE_SCRIPTS,
    DEFAULT_BLOCK_DANGEROUS_URLS,
    DEFAULT_CONVERT_NEWLINES,
    DEFAULT_DARK_MODE,
    DEFAULT_DOCUMENT_LANGUAGE,
    DEFAULT_DOCUMENT_TITLE,
    DEFAULT_INVALID_IMAGE_PLACEHOLDER,
    DEFAULT_LINK_MENTIONS,
    DEFAULT_MAX_PASSES,
    DEFAULT_SIZE_MAX,
    DEFAULT_SIZE_MIN,
    DEFAULT_STANDALONE,
)
from bbcode2html.options.base import BaseRendererOptions


@dataclass(frozen=True)
class BBCodeRendererOptions(BaseRendererOptions):
    """Configuration options for BBCode-to-HTML rendering.

    Parameters
    ----------
    max_passes : int, default 15
        Ceiling on convergence passes per resolution. Each pass applies every
        tag rule once; rendering stops early when a pass changes nothing.
    size_min : int, default 50
        Lower bound (percent) that ``[size=N]`` values are clamped to.
    size_max : int, default 300
        Upper bound (percent) that ``[size=N]`` values are clamped to.
    link_mentions : bool, default True
        Wrap bare ``@username`` tokens in a styled mention span.
    convert_newlines : bool, default True
        Convert newlines to ``<br />`` and suppress breaks adjacent to block
        elements.
    block_dangerous_urls : bool, default True
        Refuse ``javascript:``, ``vbscript:`` and script-bearing ``data:``
        targets for links and images.
    invalid_image_placeholder : str, default "[Invalid Image]"
        Text emitted in place of an image whose source is empty or unusable.
    standalone : bool, default False
        Wrap the rendered fragment in a complete preview HTML document.
    title : str, default "BBCode Preview"
        Title of the standalone preview document.
    language : str, default "en"
        Language attribute of the standalone preview document.
    dark_mode : bool, default False
        Enable the ``dark`` class on the standalone preview document.
    allow_remote_scripts : bool, default True
        Include the Tailwind CDN script so the emitted utility classes are
        styled in the standalone preview document.
    template_file : str or None, default None
        Path to a Jinja2 template used instead of the built-in preview
        document. The template receives ``content``, ``title``, ``language``
        and ``dark_mode``.

    Examples
    --------
    Basic usage:
        >>> from bbcode2html.options import BBCodeRendererOptions
        >>> from bbcode2html.renderer import BBCodeRenderer
        >>> renderer = BBCodeRenderer(BBCodeRendererOptions(link_mentions=False))
        >>> html = renderer.render_to_string("[b]Bold[/b] @nobody")

    Full preview page:
        >>> options = BBCodeRendererOptions(standalone=True, dark_mode=True)

    """

    max_passes: int = field(
        default=DEFAULT_MAX_PASSES,
        metadata={"help": "Maximum rule-table passes per resolution", "type": int, "importance": "advanced"},
    )
    size_min: int = field(
        default=DEFAULT_SIZE_MIN,
        metadata={"help": "Minimum [size] percentage", "type": int, "importance": "advanced"},
    )
    size_max: int = field(
        default=DEFAULT_SIZE_MAX,
        metadata={"help": "Maximum [size] percentage", "type": int, "importance": "advanced"},
    )
    link_mentions: bool = field(
        default=DEFAULT_LINK_MENTIONS,
        metadata={"help": "Do not style @username mentions", "cli_name": "no-mentions", "importance": "core"},
    )
    convert_newlines: bool = field(
        default=DEFAULT_CONVERT_NEWLINES,
        metadata={"help": "Keep raw newlines instead of <br /> elements", "cli_name": "no-newlines", "importance": "core"},
    )
    block_dangerous_urls: bool = field(
        default=DEFAULT_BLOCK_DANGEROUS_URLS,
        metadata={
            "help": "Allow javascript:/vbscript:/data: link and image targets (unsafe)",
            "cli_name": "allow-dangerous-urls",
            "importance": "security",
        },
    )
    invalid_image_placeholder: str = field(
        default=DEFAULT_INVALID_IMAGE_PLACEHOLDER,
        metadata={"help": "Placeholder text for images with an unusable source", "importance": "advanced"},
    )
    standalone: bool = field(
        default=DEFAULT_STANDALONE,
        metadata={"help": "Emit a complete HTML preview document", "importance": "core"},
    )
    title: str = field(
        default=DEFAULT_DOCUMENT_TITLE,
        metadata={"help": "Title of the preview document", "importance": "core"},
    )
    language: str = field(
        default=DEFAULT_DOCUMENT_LANGUAGE,
        metadata={"help": "Language attribute of the preview document", "importance": "advanced"},
    )
    dark_mode: bool = field(
        default=DEFAULT_DARK_MODE,
        metadata={"help": "Render the preview document in dark mode", "cli_name": "dark", "importance": "core"},
    )
    allow_remote_scripts: bool = field(
        default=DEFAULT_ALLOW_REMOTE_SCRIPTS,
        metadata={
            "help": "Do not load the Tailwind CDN script in the preview document",
            "cli_name": "no-remote-scripts",
            "importance": "security",
        },
    )
    template_file: str | None = field(
        default=None,
        metadata={"help": "Jinja2 template for the preview document", "cli_name": "template", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        super().__post_init__()

        if self.max_passes < 1:
            raise ValueError(f"max_passes must be at least 1, got {self.max_passes}")

        if self.size_min <= 0:
            raise ValueError(f"size_min must be positive, got {self.size_min}")

        if self.size_max < self.size_min:
            raise ValueError(f"size_max ({self.size_max}) must not be less than size_min ({self.size_min})")
