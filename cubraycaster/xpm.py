"""Reading of XPM pixmaps into flat 0xAARRGGBB pixel lists."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, Optional, Union

from .colors import color_by_name

TRANSPARENT = 0xFF000000
"""Pixel value written for the colour ``None``."""

_NAME_LIMIT = 63
_WORD_SEPARATOR = re.compile(r"[ \t]+")
_QUOTED = re.compile(r'"([^"]*)"')
_DECIMAL = re.compile(r"[ \t\n\v\f\r]*([+-]?)([0-9]*)")
_HEXADECIMAL = re.compile(r"[ \t\n\v\f\r]*([+-]?)([0-9a-fA-F]*)")


class XpmError(ValueError):
    """Raised when XPM data cannot be read or is malformed."""


@dataclass(frozen=True)
class XpmImage:
    """A decoded pixmap: pixels are stored row by row, left to right."""

    width: int
    height: int
    pixels: tuple[int, ...]


def split_words(line: str) -> list[str]:
    """Split a line into words separated by spaces or tabs."""
    return [word for word in _WORD_SEPARATOR.split(line) if word]


def _find_unquoted(text: str, token: str) -> int:
    """Index of the first ``token`` outside double quotes, or -1."""
    quoted = False
    for index, char in enumerate(text):
        if char == '"':
            quoted = not quoted
        if not quoted and text.startswith(token, index):
            return index
    return -1


def _blank(text: str, start: int, stop: int) -> str:
    return text[:start] + " " * (stop - start) + text[stop:]


def strip_comments(text: str) -> str:
    """Replace C-style comments outside quotes with spaces.

    The result has the same length as the input.
    """
    while (begin := _find_unquoted(text, "/*")) != -1:
        end = text.find("*/", begin + 2)
        stop = len(text) if end == -1 else end + 2
        text = _blank(text, begin, stop)
    while (begin := _find_unquoted(text, "//")) != -1:
        end = text.find("\n", begin + 2)
        stop = len(text) if end == -1 else end + 1
        text = _blank(text, begin, stop)
    return text


def _leading_int(pattern: re.Pattern[str], text: str, base: int) -> int:
    match = pattern.match(text)
    sign, digits = match.group(1), match.group(2)
    if not digits:
        return 0
    value = int(digits, base)
    return -value if sign == "-" else value


def text_to_rgb(name: str, end: Optional[str]) -> int:
    """Resolve an XPM colour specification to 0xRRGGBB.

    ``#`` introduces a hexadecimal value; otherwise ``name`` (joined with
    ``end`` when given) is looked up among the named colours. Unknown
    names give 0 and ``None`` gives -1.
    """
    if name.startswith("#"):
        return _leading_int(_HEXADECIMAL, name[1:], 16)
    if end is not None:
        name = f"{name} {end}"[:_NAME_LIMIT]
    try:
        return color_by_name(name)
    except KeyError:
        return 0


def _next_line(lines: Iterator[str], what: str) -> str:
    try:
        return next(lines)
    except StopIteration:
        raise XpmError(f"XPM data ends before the {what} line") from None


def _read_header(lines: Iterator[str]) -> tuple[int, int, int, int]:
    words = split_words(_next_line(lines, "header"))
    if len(words) < 4:
        raise XpmError("XPM header needs width, height, colours and chars per pixel")
    values = tuple(_leading_int(_DECIMAL, word, 10) for word in words[:4])
    if any(value <= 0 for value in values):
        raise XpmError(f"invalid XPM header values: {values}")
    width, height, ncolors, cpp = values
    return width, height, ncolors, cpp


def _read_palette(lines: Iterator[str], ncolors: int, cpp: int) -> dict[str, int]:
    # Short keys let a later definition replace an earlier one; long keys
    # keep the first definition.
    later_wins = cpp <= 2
    palette: dict[str, int] = {}
    for _ in range(ncolors):
        line = _next_line(lines, "colour")
        words = split_words(line[cpp:])
        try:
            index = words.index("c")
        except ValueError:
            raise XpmError(f"colour line without a 'c' key: {line!r}") from None
        if index + 1 >= len(words):
            raise XpmError(f"colour line without a colour value: {line!r}")
        end = words[index + 2] if index + 2 < len(words) else None
        rgb = text_to_rgb(words[index + 1], end)
        key = line[:cpp]
        if later_wins:
            palette[key] = rgb
        else:
            palette.setdefault(key, rgb)
    return palette


def parse_xpm_lines(lines: Iterable[str]) -> XpmImage:
    """Decode an XPM image from the contents of its quoted strings."""
    rows = iter(lines)
    width, height, ncolors, cpp = _read_header(rows)
    palette = _read_palette(rows, ncolors, cpp)
    pixels: list[int] = []
    for _ in range(height):
        line = _next_line(rows, "pixel")
        for x in range(width):
            color = palette.get(line[x * cpp:(x + 1) * cpp], 0)
            pixels.append(TRANSPARENT if color == -1 else color & 0xFFFFFFFF)
    return XpmImage(width=width, height=height, pixels=tuple(pixels))


def parse_xpm(text: str) -> XpmImage:
    """Decode an XPM image from the text of an XPM file."""
    return parse_xpm_lines(_QUOTED.findall(strip_comments(text)))


def load_xpm(path: Union[str, os.PathLike[str]]) -> XpmImage:
    """Read and decode an XPM file."""
    try:
        text = Path(path).read_text(encoding="latin-1")
    except OSError as exc:
        raise XpmError(f"cannot read XPM file {os.fspath(path)!r}: {exc}") from exc
    return parse_xpm(text)