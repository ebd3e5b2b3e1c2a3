"""Reading XPM images into :class:`~fdfview.image.Image` buffers."""

from __future__ import annotations

import re

from fdfview.colors import parse_color_spec
from fdfview.image import Image

TRANSPARENT = 0xFF000000

_WORD_SEPARATORS = re.compile(r"[ \t]+")
_LEADING_INT = re.compile(r"[ \t\n\v\f\r]*([+-]?\d+)")
_QUOTED = re.compile(r'"([^"]*)"')


class XpmError(ValueError):
    """Raised when XPM data cannot be parsed."""


def split_words(text):
    """Split ``text`` on runs of spaces and tabs, dropping empty words."""
    return [word for word in _WORD_SEPARATORS.split(text) if word]


def find_outside_quotes(text, pattern):
    """Return the first index of ``pattern`` not inside double quotes, or -1."""
    quoted = False
    for pos in range(len(text) - len(pattern) + 1):
        if text[pos] == '"':
            quoted = not quoted
        if not quoted and text.startswith(pattern, pos):
            return pos
    return -1


def _blank(text, start, count):
    end = min(start + count, len(text))
    return text[:start] + " " * (end - start) + text[end:]


def strip_comments(text):
    """Replace C comments outside quoted strings with spaces.

    The result has the same length as ``text``.
    """
    while (begin := find_outside_quotes(text, "/*")) != -1:
        end = text.find("*/", begin + 2)
        count = end - begin + 2 if end != -1 else 3
        text = _blank(text, begin, count)
    while (begin := find_outside_quotes(text, "//")) != -1:
        end = text.find("\n", begin + 2)
        count = end - begin + 1 if end != -1 else 2
        text = _blank(text, begin, count)
    return text


def xpm_lines_from_text(text):
    """Return the quoted strings of an XPM source file, comments removed."""
    return _QUOTED.findall(strip_comments(text))


def _atoi(text):
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def _color_key(chars):
    key = 0
    for ch in chars:
        key = ((key << 8) + ord(ch)) & 0xFFFFFFFF
    return key


def _next_line(rows, what):
    try:
        return next(rows)
    except StopIteration:
        raise XpmError(f"XPM data ends before the {what} lines") from None


def _parse_header(line):
    words = split_words(line)
    if len(words) < 4:
        raise XpmError(f"bad XPM header: {line!r}")
    values = tuple(_atoi(word) for word in words[:4])
    if min(values) <= 0:
        raise XpmError(f"bad XPM header: {line!r}")
    return values


def _parse_color_line(line, cpp):
    if len(line) < cpp:
        raise XpmError(f"colour line shorter than its key: {line!r}")
    words = split_words(line[cpp:])
    try:
        index = words.index("c")
    except ValueError:
        raise XpmError(f"colour line without a 'c' entry: {line!r}") from None
    if index + 1 >= len(words):
        raise XpmError(f"colour line without a colour: {line!r}")
    suffix = words[index + 2] if index + 2 < len(words) else None
    return _color_key(line[:cpp]), parse_color_spec(words[index + 1], suffix)


def parse_xpm(lines):
    """Build an Image from the strings of an XPM image.

    ``lines`` holds the header, the colour definitions and the pixel rows.
    Transparent pixels take the value 0xFF000000; unknown keys give 0.
    """
    rows = iter(lines)
    width, height, ncolors, cpp = _parse_header(_next_line(rows, "header"))
    keep_last = cpp <= 2
    palette = {}
    for _ in range(ncolors):
        key, value = _parse_color_line(_next_line(rows, "colour"), cpp)
        if keep_last:
            palette[key] = value
        else:
            palette.setdefault(key, value)

    image = Image(width, height)
    for y in range(height):
        line = _next_line(rows, "pixel")
        if len(line) < width * cpp:
            raise XpmError(f"pixel row {y} is too short")
        for x, start in enumerate(range(0, width * cpp, cpp)):
            color = palette.get(_color_key(line[start:start + cpp]), 0)
            if color == -1:
                color = TRANSPARENT
            image.put_pixel(x, y, color)
    return image


def load_xpm(path):
    """Read an XPM file and return its Image."""
    with open(path, encoding="latin-1") as handle:
        text = handle.read()
    return parse_xpm(xpm_lines_from_text(text))