#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbcode2html/rules.py
"""BBCode tag rules.

Each :class:`TagRule` recognizes one complete tag occurrence in the working
string and turns it into HTML. Paired tags capture their body non-greedily up
to the nearest close tag of the same name; a body may not contain another
opening tag of that name, so nested same-name pairs resolve innermost first
and their parent matches on a later convergence pass.

The working string reaching these rules is already HTML-escaped, so captured
parameter values (URLs, colours, authors, alt/title text, font names) are
attribute-safe as they stand and are never escaped a second time. Authoring
syntax that uses literal quotes, e.g. ``[quote="Some User"]``, is matched in
its escaped form (``&quot;``).

Supported tags:
- Formatting: [b], [i], [u], [s], [sub], [sup]
- Styling: [size=N], [color=...], [font=...]
- Alignment: [center], [right], [justify]
- Links and media: [url], [url=...], [img ...], [yt]
- Blocks: [quote ...], [spoiler], [spoiler=...], [list], [list=1], [*],
  [table], [tr], [td], [hr]
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional, Protocol

from bbcode2html.constants import (
    ALIGNMENT_CLASSES,
    DEFAULT_URL_SCHEME,
    HORIZONTAL_RULE,
    IMAGE_ALIGN_CLASSES,
    IMAGE_CLASS,
    INLINE_STYLE_TAGS,
    LINK_CLASS,
    LINK_REL,
    LIST_ITEM_SENTINEL,
    QUOTE_BODY_CLASS,
    QUOTE_CLASS,
    QUOTE_HEADER_CLASS,
    SPOILER_BUTTON_CLASS,
    SPOILER_CLASS,
    SPOILER_CONTENT_CLASS,
    SPOILER_DEFAULT_LABEL,
    SPOILER_REVEAL_SCRIPT,
    TABLE_CELL_CLASS,
    TABLE_CLASS,
    TABLE_ROW_CLASS,
    YOUTUBE_ALLOW,
    YOUTUBE_EMBED_URL,
    YOUTUBE_WRAPPER_CLASS,
)
from bbcode2html.lists import (
    LIST_ITEM_PATTERN,
    render_list_item,
    render_ordered_list,
    render_unordered_list,
)
from bbcode2html.literal import strip_literal_tokens
from bbcode2html.utils.escape import escape_html, unescape_html
from bbcode2html.utils.security import is_url_safe

if TYPE_CHECKING:
    from bbcode2html.options import BBCodeRendererOptions

logger = logging.getLogger(__name__)


class RuleEngine(Protocol):
    """What a rule transform may call back into."""

    options: BBCodeRendererOptions

    def resolve(self, text: str) -> str:
        """Run the full rule table over ``text`` until it stops changing."""
        ...


RuleTransform = Callable[[re.Match[str], RuleEngine], str]


@dataclass(frozen=True)
class TagRule:
    """A single tag-transform rule.

    Parameters
    ----------
    name : str
        Rule name, used for logging and lookup
    pattern : re.Pattern
        Compiled pattern matching one complete tag occurrence
    transform : callable
        ``transform(match, engine) -> str`` producing the replacement markup

    """

    name: str
    pattern: re.Pattern[str]
    transform: RuleTransform

    def apply(self, text: str, engine: RuleEngine) -> str:
        """Replace every occurrence of this rule's tag in ``text``."""
        return self.pattern.sub(lambda match: self.transform(match, engine), text)


def paired_tag_pattern(name: str, params: str = "") -> re.Pattern[str]:
    """Compile the pattern for ``[name PARAMS]BODY[/name]``.

    The body is captured in the ``body`` group. It is non-greedy and may not
    contain another opening ``[name]``, ``[name=...`` or ``[name ...`` tag.
    """
    return re.compile(
        rf"\[{name}{params}\](?P<body>(?:(?!\[{name}[\]=\s])[\s\S])*?)\[/{name}\]",
        re.IGNORECASE,
    )


def clean_parameter(value: Optional[str]) -> str:
    """Strip internal tokens from a captured parameter value."""
    if not value:
        return ""
    return strip_literal_tokens(value).replace(LIST_ITEM_SENTINEL, "")


_MARKUP = re.compile(r"<[^>]*>")


def attribute_value(value: Optional[str]) -> str:
    """Prepare a captured parameter for use inside an HTML attribute.

    Markup produced by earlier passes is dropped, and brackets become
    character references so that later passes cannot rewrite the value
    into markup inside the attribute.
    """
    value = _MARKUP.sub("", clean_parameter(value))
    return value.replace("[", "&#91;").replace("]", "&#93;")


# =============================================================================
# Transforms
# =============================================================================


def render_spoiler(match: re.Match[str], engine: RuleEngine) -> str:
    title = attribute_value(match.group("title")).strip()
    label = f"Show {title}" if title else SPOILER_DEFAULT_LABEL
    body = engine.resolve(match.group("body"))
    return (
        f'<div class="{SPOILER_CLASS}">'
        f'<input type="button" class="{SPOILER_BUTTON_CLASS}" value="{label}" onclick="{SPOILER_REVEAL_SCRIPT}">'
        f'<span class="{SPOILER_CONTENT_CLASS}" style="display:none;">{body}</span>'
        "</div>"
    )


_QUOTED_VALUE = r"&quot;(?:(?!&quot;)[^\n])*&quot;"
IMAGE_PATTERN = re.compile(
    rf"\[img(?P<attrs>(?:=\d+x\d+|\s+(?:width|height)=\d+|\s+align=(?:left|right)|\s+(?:alt|title)={_QUOTED_VALUE})*)\]"
    r"(?P<src>.*?)\[/img\]",
    re.IGNORECASE,
)
_IMAGE_ATTRIBUTE = re.compile(
    r"=(?P<dim_width>\d+)x(?P<dim_height>\d+)"
    r"|(?P<size_name>width|height)=(?P<size>\d+)"
    r"|align=(?P<align>left|right)"
    r"|(?P<text_name>alt|title)=&quot;(?P<text>(?:(?!&quot;)[^\n])*)&quot;",
    re.IGNORECASE,
)


def parse_image_attributes(attrs: str) -> dict[str, str]:
    """Collect ``[img]`` attributes, given in any order.

    ``width=``/``height=`` take precedence over the ``=WxH`` short form; for
    repeated attributes the last one wins.
    """
    parsed: dict[str, str] = {}
    short_form: dict[str, str] = {}
    for part in _IMAGE_ATTRIBUTE.finditer(attrs):
        if part.group("dim_width"):
            short_form = {"width": part.group("dim_width"), "height": part.group("dim_height")}
        elif part.group("size_name"):
            parsed[part.group("size_name").lower()] = part.group("size")
        elif part.group("align"):
            parsed["align"] = part.group("align").lower()
        else:
            parsed[part.group("text_name").lower()] = part.group("text")
    return {**short_form, **parsed}


def render_image(match: re.Match[str], engine: RuleEngine) -> str:
    """Render ``[img]`` with optional dimensions, alignment, alt and title.

    Sizes come from ``width=``/``height=`` or the ``=WxH`` short form and are
    emitted as pixel values in an inline style. Left/right alignment floats
    the image.
    """
    src = attribute_value(match.group("src")).strip()
    if not src or src.lower() in ("http://", "https://"):
        return escape_html(engine.options.invalid_image_placeholder)

    if engine.options.block_dangerous_urls and not is_url_safe(unescape_html(src)):
        logger.debug("Replaced image with dangerous source")
        return escape_html(engine.options.invalid_image_placeholder)

    attributes = parse_image_attributes(match.group("attrs"))
    align = attributes.get("align")

    styles: list[str] = []
    if "width" in attributes:
        styles.append(f"width: {attributes['width']}px")
    if "height" in attributes:
        styles.append(f"height: {attributes['height']}px")
    if align:
        styles.append(f"float: {align};")

    alt = attribute_value(attributes.get("alt"))
    title = attribute_value(attributes.get("title"))
    image_class = f"{IMAGE_CLASS} {IMAGE_ALIGN_CLASSES[align]}"

    return (
        f'<img src="{src}" class="{image_class}" style="{"; ".join(styles)}" alt="{alt}" title="{title}" />'
    )


_HAS_SCHEME = re.compile(r"^(?:[a-z]+:)?//", re.IGNORECASE)


def render_link(match: re.Match[str], engine: RuleEngine) -> str:
    """Render ``[url]`` / ``[url=target]``.

    Without an explicit target the body is both the target and the link
    text. Targets with no ``scheme://`` that are not paths, fragments or
    ``mailto:`` links get ``http://``. A target with a dangerous scheme
    loses its anchor and only the link text is kept.
    """
    target = match.group("target")
    body = match.group("body")

    if target and target.strip():
        href, text = target.strip(), body
    else:
        href = text = body.strip()

    href = attribute_value(href)
    content = engine.resolve(text)

    if engine.options.block_dangerous_urls and not is_url_safe(unescape_html(href)):
        logger.debug("Dropped link with dangerous target")
        return content

    if not _HAS_SCHEME.match(href) and not href.startswith(("/", "#", "mailto:")):
        href = DEFAULT_URL_SCHEME + href

    return f'<a href="{href}" target="_blank" rel="{LINK_REL}" class="{LINK_CLASS}">{content}</a>'


def render_youtube(match: re.Match[str], engine: RuleEngine) -> str:
    src = YOUTUBE_EMBED_URL.format(video_id=match.group("video_id"))
    return (
        f'<div class="{YOUTUBE_WRAPPER_CLASS}">'
        f'<iframe class="w-full h-full" src="{src}" frameborder="0" allow="{YOUTUBE_ALLOW}" allowfullscreen></iframe>'
        "</div>"
    )


def render_quote(match: re.Match[str], engine: RuleEngine) -> str:
    """Render ``[quote]`` with an optional ``AUTHOR wrote:`` header."""
    author = clean_parameter(match.group("quoted_author") or match.group("author")).strip()
    message_id = match.group("message_id")
    if message_id:
        logger.debug("Quote references message %s", message_id)

    header = f'<div class="{QUOTE_HEADER_CLASS}">{author} wrote:</div>' if author else ""
    body = engine.resolve(match.group("body"))
    return f'<blockquote class="{QUOTE_CLASS}">{header}<div class="{QUOTE_BODY_CLASS}">{body}</div></blockquote>'


def clamp_size(digits: str, minimum: int, maximum: int) -> int:
    """Clamp a ``[size]`` digit string to ``[minimum, maximum]``.

    Arbitrarily long digit runs are accepted and simply clamp to the maximum.
    """
    digits = digits.lstrip("0") or "0"
    if len(digits) > len(str(maximum)):
        return maximum
    return min(max(int(digits), minimum), maximum)


def render_size(match: re.Match[str], engine: RuleEngine) -> str:
    size = clamp_size(match.group("size"), engine.options.size_min, engine.options.size_max)
    return f'<span style="font-size: {size}%;">{engine.resolve(match.group("body"))}</span>'


def render_color(match: re.Match[str], engine: RuleEngine) -> str:
    return f'<span style="color: {match.group("color")};">{engine.resolve(match.group("body"))}</span>'


def render_font(match: re.Match[str], engine: RuleEngine) -> str:
    # Quotes arrive escaped; a CSS backslash keeps them from closing anything.
    family = match.group("font").replace("&#039;", "\\&#039;").replace("&quot;", "\\&quot;")
    return f'<span style="font-family: {family};">{engine.resolve(match.group("body"))}</span>'


def render_horizontal_rule(match: re.Match[str], engine: RuleEngine) -> str:
    return HORIZONTAL_RULE


def wrapper(open_markup: str, close_markup: str) -> RuleTransform:
    """Build a transform that wraps the resolved body in fixed markup."""

    def _transform(match: re.Match[str], engine: RuleEngine) -> str:
        return f"{open_markup}{engine.resolve(match.group('body'))}{close_markup}"

    return _transform


# =============================================================================
# Rule table
# =============================================================================


def build_rule_table() -> tuple[TagRule, ...]:
    """Build the ordered rule table.

    Order only matters for the list rules: the item rule consumes the
    sentinels that the list rules plant in a list body.
    """
    rules = [
        TagRule("spoiler", paired_tag_pattern("spoiler", r"(?:=(?P<title>[^\n]*?))?"), render_spoiler),
        TagRule("img", IMAGE_PATTERN, render_image),
        TagRule("url", paired_tag_pattern("url", r"(?:=(?P<target>[^\n]*?))?"), render_link),
        TagRule("yt", re.compile(r"\[yt\](?P<video_id>[a-zA-Z0-9_-]{11})\[/yt\]", re.IGNORECASE), render_youtube),
        TagRule("list_item", LIST_ITEM_PATTERN, render_list_item),
        TagRule("ulist", paired_tag_pattern("list"), render_unordered_list),
        TagRule("olist", paired_tag_pattern("list", "=1"), render_ordered_list),
        TagRule(
            "quote",
            paired_tag_pattern(
                "quote",
                r"(?:=(?:&quot;(?P<quoted_author>(?:(?!&quot;)[^\n])+)&quot;|(?P<author>[^\s\]]+)))?"
                r"(?:\s+message=(?P<message_id>\d+))?",
            ),
            render_quote,
        ),
        TagRule("table", paired_tag_pattern("table"), wrapper(f'<table class="{TABLE_CLASS}">', "</table>")),
        TagRule("tr", paired_tag_pattern("tr"), wrapper(f'<tr class="{TABLE_ROW_CLASS}">', "</tr>")),
        TagRule("td", paired_tag_pattern("td"), wrapper(f'<td class="{TABLE_CELL_CLASS}">', "</td>")),
    ]

    for tag, (element, css_class) in INLINE_STYLE_TAGS.items():
        rules.append(TagRule(tag, paired_tag_pattern(tag), wrapper(f'<{element} class="{css_class}">', f"</{element}>")))

    rules.extend(
        [
            TagRule("size", paired_tag_pattern("size", r"=(?P<size>\d+)"), render_size),
            TagRule("color", paired_tag_pattern("color", r"=(?P<color>[a-zA-Z0-9#_(),.% -]+)"), render_color),
            TagRule("font", paired_tag_pattern("font", r"=(?P<font>(?:[\w\s,-]|&#039;|&quot;)+)"), render_font),
        ]
    )

    for tag, css_class in ALIGNMENT_CLASSES.items():
        rules.append(TagRule(tag, paired_tag_pattern(tag), wrapper(f'<div class="{css_class}">', "</div>")))

    rules.extend(
        [
            TagRule("sub", paired_tag_pattern("sub"), wrapper("<sub>", "</sub>")),
            TagRule("sup", paired_tag_pattern("sup"), wrapper("<sup>", "</sup>")),
            TagRule("hr", re.compile(r"\[hr\]", re.IGNORECASE), render_horizontal_rule),
        ]
    )

    return tuple(rules)


DEFAULT_RULES = build_rule_table()


def get_rule(name: str) -> TagRule:
    """Look up a rule of the default table by name."""
    for rule in DEFAULT_RULES:
        if rule.name == name:
            return rule
    raise KeyError(name)


__all__ = [
    "DEFAULT_RULES",
    "IMAGE_PATTERN",
    "RuleEngine",
    "TagRule",
    "attribute_value",
    "build_rule_table",
    "clamp_size",
    "clean_parameter",
    "get_rule",
    "paired_tag_pattern",
    "parse_image_attributes",
]
