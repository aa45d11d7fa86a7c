#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbcode2html/document.py
"""Standalone preview documents around a rendered fragment.

The built-in page mirrors the live preview pane of the forum editor: the
fragment sits in a container styled with the same utility classes the tag
rules emit, and the Tailwind CDN script (when remote scripts are allowed)
makes those classes take effect. A user-supplied Jinja2 template can replace
the built-in page entirely.
"""

from __future__ import annotations

import logging
from pathlib import Path

from bbcode2html.constants import PREVIEW_CONTAINER_CLASS, TAILWIND_CDN_URL
from bbcode2html.exceptions import RenderingError
from bbcode2html.options import BBCodeRendererOptions
from bbcode2html.utils.escape import escape_html

logger = logging.getLogger(__name__)


def wrap_in_document(content: str, options: BBCodeRendererOptions) -> str:
    """Wrap a rendered fragment in a complete HTML document.

    Parameters
    ----------
    content : str
        Rendered HTML fragment
    options : BBCodeRendererOptions
        Supplies the title, language, dark mode and remote-script settings,
        or the template file to use instead

    Returns
    -------
    str
        Complete HTML document

    Raises
    ------
    RenderingError
        If a template file is configured and cannot be loaded or rendered

    """
    if options.template_file:
        return render_template(content, options)

    html_class = ' class="dark"' if options.dark_mode else ""
    parts = [
        "<!DOCTYPE html>",
        f'<html lang="{escape_html(options.language)}"{html_class}>',
        "<head>",
        '<meta charset="UTF-8">',
        '<meta name="viewport" content="width=device-width, initial-scale=1.0">',
        f"<title>{escape_html(options.title)}</title>",
    ]

    if options.allow_remote_scripts:
        parts.append(f'<script src="{TAILWIND_CDN_URL}"></script>')
        if options.dark_mode:
            parts.append("<script>tailwind.config = { darkMode: 'class' };</script>")
    else:
        logger.debug("Remote scripts disabled; preview utility classes will be unstyled")

    parts.extend(
        [
            "</head>",
            '<body class="bg-gray-100 dark:bg-gray-900 p-4">',
            f'<main class="{PREVIEW_CONTAINER_CLASS}">',
            content,
            "</main>",
            "</body>",
            "</html>",
        ]
    )
    return "\n".join(parts)


def render_template(content: str, options: BBCodeRendererOptions) -> str:
    """Render a fragment through the configured Jinja2 template.

    The template is rendered with autoescaping for ``.html``/``.xml`` files.
    ``content`` is passed as markup that is already safe; ``title``,
    ``language`` and ``dark_mode`` are passed as plain values.
    """
    from jinja2 import Environment, FileSystemLoader, TemplateError, select_autoescape
    from markupsafe import Markup

    assert options.template_file is not None
    template_path = Path(options.template_file)

    if not template_path.is_file():
        raise RenderingError(f"Template file not found: {template_path}", rendering_stage="template")

    env = Environment(
        loader=FileSystemLoader(str(template_path.parent)),
        autoescape=select_autoescape(["html", "htm", "xml"]),
    )

    try:
        template = env.get_template(template_path.name)
        return template.render(
            content=Markup(content),
            title=options.title,
            language=options.language,
            dark_mode=options.dark_mode,
        )
    except TemplateError as e:
        raise RenderingError(
            f"Failed to render template {template_path}: {e}", rendering_stage="template", original_error=e
        ) from e


__all__ = ["render_template", "wrap_in_document"]
