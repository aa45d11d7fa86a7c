#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for the bbcode2html renderer.

Options are frozen dataclasses: build a modified copy with
``create_updated`` or :func:`create_updated_options` rather than mutating an
instance.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from bbcode2html.options.base import BaseRendererOptions, CloneFrozenMixin
from bbcode2html.options.bbcode import BBCodeRendererOptions


def create_updated_options(options: Any, **kwargs: Any) -> Any:
    """Create a new options instance with updated values.

    Parameters
    ----------
    options : Any
        The original options instance (must be a dataclass)
    **kwargs
        Field names and their new values

    Returns
    -------
    Any
        A new options instance of the same type with the updates applied

    """
    return replace(options, **kwargs)


__all__ = [
    "BaseRendererOptions",
    "BBCodeRendererOptions",
    "CloneFrozenMixin",
    "create_updated_options",
]
