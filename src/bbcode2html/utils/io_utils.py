#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/bbcode2html/utils/io_utils.py
"""Reading BBCode input and writing rendered HTML."""

from __future__ import annotations

import io
import sys
from io import BytesIO, StringIO
from pathlib import Path
from typing import IO, Union, cast

TextSource = Union[str, Path, bytes, IO[bytes], IO[str]]
TextDestination = Union[str, Path, IO[bytes], IO[str]]


def _is_binary_stream(stream: object) -> bool:
    if isinstance(stream, BytesIO):
        return True
    if isinstance(stream, StringIO):
        return False
    if isinstance(stream, io.TextIOBase):
        return False
    if isinstance(stream, (io.BufferedIOBase, io.RawIOBase)):
        return True
    mode = getattr(stream, "mode", "")
    return isinstance(mode, str) and "b" in mode


def read_text(source: TextSource) -> str:
    """Read BBCode source text.

    Parameters
    ----------
    source : str, Path, bytes, IO[bytes] or IO[str]
        A file path (``"-"`` reads standard input), raw UTF-8 bytes, or a
        readable stream

    Returns
    -------
    str
        Decoded source text; undecodable bytes are replaced

    Raises
    ------
    OSError
        If a path cannot be read
    TypeError
        If the source type is not supported

    """
    if isinstance(source, bytes):
        return source.decode("utf-8", errors="replace")

    if isinstance(source, (str, Path)):
        if str(source) == "-":
            return sys.stdin.read()
        return Path(source).read_bytes().decode("utf-8", errors="replace")

    if hasattr(source, "read"):
        data = source.read()
        if isinstance(data, bytes):
            return data.decode("utf-8", errors="replace")
        return cast(str, data)

    raise TypeError(f"Unsupported input type: {type(source)}")


def write_text(content: str, output: TextDestination) -> None:
    """Write rendered text to a path or stream.

    Binary streams receive UTF-8 bytes, text streams receive the string.

    Raises
    ------
    OSError
        If a path cannot be written
    TypeError
        If the output type is not supported

    """
    if isinstance(output, (str, Path)):
        Path(output).write_text(content, encoding="utf-8")
        return

    if hasattr(output, "write"):
        if _is_binary_stream(output):
            cast(IO[bytes], output).write(content.encode("utf-8"))
        else:
            cast(IO[str], output).write(content)
        return

    raise TypeError(f"Unsupported output type: {type(output)}")


__all__ = ["TextDestination", "TextSource", "read_text", "write_text"]
