"""Small text helpers shared by the scene parser and the command line."""

from __future__ import annotations

import re
from collections.abc import Iterator
from typing import TextIO

_LONG_MAX = 2**63 - 1
_LONG_MIN = -(2**63)
_TERMINATOR = re.compile("[\n\0]")
_CHUNK_SIZE = 4096


def _int32(value: int) -> int:
    """Wrap an integer to the range of a signed 32-bit value."""
    value &= 0xFFFFFFFF
    return value - 2**32 if value >= 2**31 else value


def _is_space(char: str) -> bool:
    return char == " " or "\t" <= char <= "\r"


def _is_digit(char: str) -> bool:
    return "0" <= char <= "9"


def _overflows(num: int, next_char: str) -> bool:
    if num > _LONG_MAX // 10 and _is_digit(next_char):
        return True
    return num == _LONG_MAX // 10 and ord(next_char) - ord("0") > _LONG_MAX % 10


def atoi(text: str) -> int:
    """Parse a leading decimal integer the way the C runtime helper does.

    Leading whitespace and one sign are accepted; parsing stops at the first
    non-digit. A value too large for a 64-bit long saturates, and the result
    is truncated to a signed 32-bit integer.
    """
    i = 0
    length = len(text)
    while i < length and _is_space(text[i]):
        i += 1
    sign = 1
    if i < length and text[i] in "+-":
        if text[i] == "-":
            sign = -1
        i += 1
    num = 0
    while i < length and _is_digit(text[i]):
        num = num * 10 + ord(text[i]) - ord("0")
        i += 1
        next_char = text[i] if i < length else "\0"
        if _overflows(num, next_char):
            return _int32(_LONG_MAX if sign == 1 else _LONG_MIN)
    return _int32(_int32(num) * sign)


def split(text: str, sep: str) -> list[str]:
    """Split on a separator character, dropping empty pieces."""
    return [piece for piece in text.split(sep) if piece]


def is_valid_extension(filename: str, ext: str) -> bool:
    """True when the name ends with the extension and has something before it."""
    if not filename or not ext:
        return False
    return len(filename) > len(ext) and filename.endswith(ext)


def rgb_to_int(r: int, g: int, b: int) -> int:
    """Pack red, green and blue components into a 0xRRGGBB integer."""
    return (r << 16) | (g << 8) | b


def read_lines(stream: TextIO) -> Iterator[str]:
    """Yield lines from a text stream.

    Both newline and NUL end a line. A trailing piece after the last
    terminator is yielded only when it is not empty.
    """
    buffer = ""
    while True:
        chunk = stream.read(_CHUNK_SIZE)
        if not chunk:
            break
        buffer += chunk
        *complete, buffer = _TERMINATOR.split(buffer)
        yield from complete
    if buffer:
        yield buffer