"""Reader for XPM images as used for wall textures."""

from __future__ import annotations

import re
from collections.abc import Iterable
from os import PathLike

from cube3d.colornames import lookup_color
from cube3d.image import Image

_TRANSPARENT = 0xFF000000
_MAX_NAME_LENGTH = 63
_WORD_SEPARATORS = re.compile(r"[ \t]+")
_QUOTED = re.compile(r'"([^"]*)"')
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_LEADING_HEX = re.compile(r"[0-9a-fA-F]*")


class XpmError(ValueError):
    """Raised when XPM data cannot be read or is malformed."""


def split_words(text: str) -> list[str]:
    """Split text into words separated by spaces and tabs."""
    return [word for word in _WORD_SEPARATORS.split(text) if word]


def _find_unquoted(text: str, token: str) -> int:
    quoted = False
    for pos, char in enumerate(text[: len(text) - len(token) + 1]):
        if char == '"':
            quoted = not quoted
        if not quoted and text.startswith(token, pos):
            return pos
    return -1


def _blank(text: str, start: int, stop: int) -> str:
    return text[:start] + " " * (stop - start) + text[stop:]


def strip_comments(text: str) -> str:
    """Replace C-style comments outside quoted strings with spaces.

    The text keeps its length, so positions within it are preserved.
    """
    while (begin := _find_unquoted(text, "/*")) != -1:
        end = text.find("*/", begin + 2)
        text = _blank(text, begin, len(text) if end == -1 else end + 2)
    while (begin := _find_unquoted(text, "//")) != -1:
        end = text.find("\n", begin + 2)
        text = _blank(text, begin, len(text) if end == -1 else end + 1)
    return text


def parse_color_spec(name: str, end: str | None) -> int:
    """Turn an XPM colour value into 0xRRGGBB.

    ``#rrggbb`` is read as hexadecimal; otherwise ``name`` (joined with
    ``end`` when given) is looked up among the named colours. ``none``
    gives -1 and unknown names give 0.
    """
    if name.startswith("#"):
        digits = _LEADING_HEX.match(name, 1).group()
        return int(digits, 16) if digits else 0
    if end is not None:
        name = f"{name} {end}"[:_MAX_NAME_LENGTH]
    color = lookup_color(name)
    return 0 if color is None else color


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def _parse_header(line: str) -> tuple[int, int, int, int]:
    words = split_words(line)
    if len(words) < 4:
        raise XpmError(f"bad XPM header: {line!r}")
    values = tuple(_atoi(word) for word in words[:4])
    if not all(values):
        raise XpmError(f"bad XPM header: {line!r}")
    width, height, ncolors, cpp = values
    return width, height, ncolors, cpp


def _parse_color_line(line: str, cpp: int) -> int:
    words = split_words(line[cpp:])
    try:
        at = words.index("c")
        value = words[at + 1]
    except (ValueError, IndexError):
        raise XpmError(f"XPM colour line without a 'c' value: {line!r}") from None
    end = words[at + 2] if at + 2 < len(words) else None
    return parse_color_spec(value, end)


def parse_xpm(lines: Iterable[str]) -> Image:
    """Build an image from the quoted strings of an XPM file, in order."""
    rows = iter(lines)

    def next_line(what: str) -> str:
        try:
            return next(rows)
        except StopIteration:
            raise XpmError(f"XPM data ends before the {what}") from None

    width, height, ncolors, cpp = _parse_header(next_line("header"))
    # Short keys are stored in a direct table, where a later entry replaces
    # an earlier one; longer keys keep the first definition.
    last_wins = cpp <= 2
    colors: dict[str, int] = {}
    for _ in range(ncolors):
        line = next_line("colour table")
        rgb = _parse_color_line(line, cpp)
        key = line[:cpp]
        if last_wins or key not in colors:
            colors[key] = rgb

    image = Image(width, height)
    for y in range(height):
        line = next_line("pixel rows")
        if len(line) < width * cpp:
            raise XpmError(f"XPM pixel row {y} is too short")
        for x in range(width):
            color = colors.get(line[x * cpp : (x + 1) * cpp], 0)
            image.put_pixel(x, y, _TRANSPARENT if color == -1 else color)
    return image


def parse_xpm_text(text: str) -> Image:
    """Parse the text of an XPM file into an image."""
    return parse_xpm(_QUOTED.findall(strip_comments(text)))


def load_xpm(path: str | PathLike[str]) -> Image:
    """Read and parse an XPM file."""
    try:
        with open(path, encoding="latin-1") as handle:
            text = handle.read()
    except OSError as exc:
        raise XpmError(f"cannot read XPM file {path}: {exc}") from exc
    return parse_xpm_text(text)