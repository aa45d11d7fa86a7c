#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbcode2html/constants.py
"""Constants and default values for the bbcode2html rendering pipeline.

This module centralizes the default option values, the fixed markup fragments
emitted for each BBCode construct, and the reserved tokens used internally by
the engine. The CSS class strings reproduce a MyAnimeList-like forum look using
Tailwind utility classes, with ``dark:`` variants for dark mode.
"""

from __future__ import annotations

# =============================================================================
# Renderer defaults
# =============================================================================

DEFAULT_MAX_PASSES = 15
DEFAULT_SIZE_MIN = 50
DEFAULT_SIZE_MAX = 300
DEFAULT_LINK_MENTIONS = True
DEFAULT_CONVERT_NEWLINES = True
DEFAULT_BLOCK_DANGEROUS_URLS = True
DEFAULT_INVALID_IMAGE_PLACEHOLDER = "[Invalid Image]"

# Preview document defaults
DEFAULT_STANDALONE = False
DEFAULT_DOCUMENT_TITLE = "BBCode Preview"
DEFAULT_DOCUMENT_LANGUAGE = "en"
DEFAULT_DARK_MODE = False
DEFAULT_ALLOW_REMOTE_SCRIPTS = True
TAILWIND_CDN_URL = "https://cdn.tailwindcss.com"

# =============================================================================
# Reserved tokens
# =============================================================================

# NUL never survives input normalization, so these cannot collide with user text.
LIST_ITEM_SENTINEL = "\x00LI\x00"
LITERAL_TOKEN_TEMPLATE = "\x00LIT{index}\x00"
LITERAL_TOKEN_PATTERN = r"\x00LIT(\d+)\x00"

# =============================================================================
# Mentions and line breaks
# =============================================================================

MENTION_NAME_PATTERN = r"[a-zA-Z0-9_]{2,30}"
LINE_BREAK = "<br />"

# Elements the post-processor treats as not needing adjacent line breaks.
BLOCK_TAG_NAMES = ("pre", "div", "ul", "ol", "li", "blockquote", "table", "tr", "td", "hr")

# =============================================================================
# URL safety
# =============================================================================

DANGEROUS_SCHEMES = {
    "javascript:",
    "vbscript:",
    "data:text/html",
    "data:text/javascript",
    "data:application/javascript",
    "data:application/x-javascript",
}

DANGEROUS_NULL_LIKE_CHARS = [
    "\x00",  # NULL
    "\ufeff",  # BOM/Zero Width No-Break Space
    "\u200b",  # Zero Width Space
    "\u200c",  # Zero Width Non-Joiner
    "\u200d",  # Zero Width Joiner
    "\u2060",  # Word Joiner
]

DEFAULT_URL_SCHEME = "http://"

# =============================================================================
# Markup classes
# =============================================================================

CODE_BLOCK_CLASS = (
    "bg-gray-200 dark:bg-gray-800 text-gray-800 dark:text-gray-200 p-3 my-2 rounded border "
    "border-gray-300 dark:border-gray-600 whitespace-pre-wrap font-mono text-base overflow-x-auto"
)
PRE_BLOCK_CLASS = (
    "bg-gray-100 dark:bg-gray-700 p-3 my-2 rounded border border-gray-300 dark:border-gray-600 "
    "whitespace-pre-wrap font-mono text-base"
)

SPOILER_CLASS = "spoiler my-2 p-1 bg-gray-200 dark:bg-gray-700 border border-gray-300 dark:border-gray-600 rounded"
SPOILER_BUTTON_CLASS = (
    "button show_button bg-blue-500 hover:bg-blue-600 text-white font-semibold py-1 px-3 rounded "
    "cursor-pointer text-sm my-1 mx-1"
)
SPOILER_CONTENT_CLASS = (
    "spoiler_content block p-2 my-1 mx-1 bg-gray-100 dark:bg-gray-800 border border-gray-300 "
    "dark:border-gray-600 rounded"
)
SPOILER_REVEAL_SCRIPT = "this.nextSibling.style.display='inline-block';this.style.display='none';"
SPOILER_DEFAULT_LABEL = "Show Spoiler"

IMAGE_CLASS = "userimg max-w-full h-auto my-1 border border-gray-300 dark:border-gray-600 shadow-sm"
IMAGE_ALIGN_CLASSES = {
    None: "inline-block",
    "left": "mr-2 mb-1 ",
    "right": "ml-2 mb-1 ",
}

LINK_CLASS = "text-blue-600 dark:text-blue-400 hover:text-blue-700 dark:hover:text-blue-300 hover:underline"
LINK_REL = "nofollow noopener noreferrer"

YOUTUBE_WRAPPER_CLASS = "my-2 aspect-video max-w-xl mx-auto shadow-lg rounded overflow-hidden"
YOUTUBE_EMBED_URL = "https://www.youtube.com/embed/{video_id}"
YOUTUBE_ALLOW = "accelerometer; autoplay; clipboard-write; encrypted-media; gyroscope; picture-in-picture"

LIST_CLASS = "list-inside my-2 p-2 pl-6 bg-gray-50 dark:bg-gray-700 border border-gray-200 dark:border-gray-600 rounded"
UNORDERED_LIST_CLASS = f"list-disc {LIST_CLASS}"
ORDERED_LIST_CLASS = f"list-decimal {LIST_CLASS}"
LIST_ITEM_CLASS = "py-0.5"

QUOTE_CLASS = (
    "border-l-4 border-gray-400 dark:border-gray-500 pl-4 pr-2 py-2 my-2 bg-gray-100 dark:bg-gray-800 "
    "rounded-r shadow-sm"
)
QUOTE_HEADER_CLASS = "font-semibold text-base text-gray-700 dark:text-gray-300 mb-1"
QUOTE_BODY_CLASS = "italic text-gray-800 dark:text-gray-200"

TABLE_CLASS = "border-collapse border border-gray-300 dark:border-gray-600 my-2 w-full bg-white dark:bg-gray-800 shadow text-base"
TABLE_ROW_CLASS = "border-b border-gray-200 dark:border-gray-700 hover:bg-gray-50 dark:hover:bg-gray-700"
TABLE_CELL_CLASS = "border border-gray-200 dark:border-gray-600 p-2"

INLINE_STYLE_TAGS = {
    "b": ("strong", "font-bold"),
    "u": ("span", "underline"),
    "i": ("em", "italic"),
    "s": ("span", "line-through"),
}

ALIGNMENT_CLASSES = {
    "center": "text-center",
    "right": "text-right",
    "justify": "text-justify",
}

HORIZONTAL_RULE = '<hr class="my-4 border-gray-300 dark:border-gray-600">'

MENTION_CLASS = "text-blue-500 dark:text-blue-400 font-semibold hover:underline cursor-pointer"

PREVIEW_CONTAINER_CLASS = (
    "flex-grow p-4 bg-white dark:bg-gray-800 text-gray-900 dark:text-gray-100 border border-gray-300 "
    "dark:border-gray-600 rounded-md shadow-sm overflow-y-auto text-base"
)
