"""Reading of XPM texture images."""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from cubraycast.colors import color_by_name
from cubraycast.textutil import atoi

TRANSPARENT = 0xFF000000
"""Pixel value stored for the transparent colour "None"."""

_NAME_LIMIT = 63
_LONG_MAX = 2**63 - 1
_LONG_MIN = -(2**63)
_HEX_NUMBER = re.compile(
    r"[ \t\n\v\f\r]*([+-]?)(?:0[xX](?=[0-9a-fA-F]))?([0-9a-fA-F]*)"
)
_WORD_BREAK = re.compile(r"[ \t]+")


class XpmError(Exception):
    """Raised when an XPM image cannot be read or is malformed."""


@dataclass(frozen=True)
class Texture:
    """A decoded image: rows of 32-bit pixel values."""

    width: int
    height: int
    pixels: tuple[tuple[int, ...], ...]

    def pixel(self, x: int, y: int) -> int:
        """Pixel value at a column and row, or 0 outside the image."""
        if x < 0 or y < 0 or x >= self.width or y >= self.height:
            return 0
        return self.pixels[y][x]


def _int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 2**32 if value >= 2**31 else value


def _find_unquoted(text: str, pattern: str) -> int:
    """Index of the first occurrence of pattern outside double quotes."""
    last = len(text) - len(pattern)
    in_quote = False
    for i, char in enumerate(text):
        if i > last:
            break
        if char == '"':
            in_quote = not in_quote
        if not in_quote and text.startswith(pattern, i):
            return i
    return -1


def _blank(text: str, start: int, count: int) -> str:
    end = min(start + count, len(text))
    return text[:start] + " " * (end - start) + text[end:]


def _relative_find(text: str, pattern: str, start: int) -> int:
    found = text.find(pattern, start)
    return -1 if found == -1 else found - start


def strip_comments(text: str) -> str:
    """Blank out C-style comments that lie outside quoted strings.

    Comments are replaced by spaces, so the text keeps its length.
    A line comment is blanked together with the newline that ends it.
    """
    while (begin := _find_unquoted(text, "/*")) != -1:
        end = _relative_find(text, "*/", begin + 2)
        text = _blank(text, begin, end + 4)
    while (begin := _find_unquoted(text, "//")) != -1:
        end = _relative_find(text, "\n", begin + 2)
        text = _blank(text, begin, end + 3)
    return text


def _hex_value(text: str) -> int:
    match = _HEX_NUMBER.match(text)
    sign, digits = match.group(1), match.group(2)
    value = int(digits, 16) if digits else 0
    if sign == "-":
        value = -value
    value = max(_LONG_MIN, min(_LONG_MAX, value))
    return _int32(value)


def text_to_rgb(name: str, end: str | None = None) -> int:
    """Colour value of an XPM colour specification.

    "#RRGGBB" is read as hexadecimal. Otherwise the name, joined with a
    following word when one is given, is looked up among the named colours;
    unknown names give 0 and "None" gives -1.
    """
    if name.startswith("#"):
        return _hex_value(name[1:])
    if end:
        name = f"{name} {end}"[:_NAME_LIMIT]
    color = color_by_name(name)
    return 0 if color is None else color


def _words(text: str) -> list[str]:
    return [word for word in _WORD_BREAK.split(text) if word]


def _quoted_strings(text: str) -> Iterator[str]:
    pos = 0
    while True:
        start = text.find('"', pos)
        if start == -1:
            return
        stop = text.find('"', start + 1)
        if stop == -1:
            return
        yield text[start + 1:stop]
        pos = stop + 1


def _next_line(lines: Iterator[str]) -> str:
    line = next(lines, None)
    if line is None:
        raise XpmError("XPM data ends too early")
    return line


def _color_definition(spec: str) -> int:
    words = _words(spec)
    try:
        index = words.index("c")
    except ValueError:
        raise XpmError("colour definition has no 'c' entry") from None
    if index + 1 >= len(words):
        raise XpmError("colour definition has no colour")
    end = words[index + 2] if index + 2 < len(words) else None
    return text_to_rgb(words[index + 1], end)


def _resolve(color: int) -> int:
    return TRANSPARENT if color == -1 else color & 0xFFFFFFFF


def parse_xpm(text: str) -> Texture:
    """Decode the text of an XPM file into a Texture."""
    lines = _quoted_strings(strip_comments(text))
    header = _words(_next_line(lines))
    if len(header) < 4:
        raise XpmError("incomplete XPM header")
    width, height, ncolors, cpp = (atoi(word) for word in header[:4])
    if min(width, height, ncolors, cpp) <= 0:
        raise XpmError("invalid XPM header")

    palette: dict[str, int] = {}
    for _ in range(ncolors):
        line = _next_line(lines)
        key = line[:cpp]
        color = _color_definition(line[cpp:])
        if cpp <= 2:
            palette[key] = color
        else:
            palette.setdefault(key, color)

    rows = []
    for _ in range(height):
        line = _next_line(lines)
        rows.append(
            tuple(
                _resolve(palette.get(line[cpp * x:cpp * (x + 1)], 0))
                for x in range(width)
            )
        )
    return Texture(width=width, height=height, pixels=tuple(rows))


def load_xpm(path: str | Path) -> Texture:
    """Read and decode an XPM file."""
    try:
        text = Path(path).read_text(encoding="latin-1")
    except OSError as exc:
        raise XpmError(f"could not read {path}") from exc
    return parse_xpm(text)