"""Loading height maps from whitespace-separated text files."""

from __future__ import annotations

import re
from dataclasses import dataclass

_LEADING_INT = re.compile(r"[\t\n\v\f\r ]*([+-]?)(\d*)")


class MapError(ValueError):
    """Raised when a map file cannot be turned into a height grid."""


@dataclass(frozen=True)
class HeightMap:
    """A rectangular grid of integer heights, indexed as heights[row][col]."""

    heights: tuple

    @property
    def rows(self):
        return len(self.heights)

    @property
    def cols(self):
        return len(self.heights[0]) if self.heights else 0

    def __getitem__(self, index):
        return self.heights[index]


def parse_int(text):
    """Read a leading decimal integer, skipping leading whitespace.

    An optional sign may precede the digits; reading stops at the first
    non-digit. Text without digits gives 0.
    """
    match = _LEADING_INT.match(text)
    sign, digits = match.group(1), match.group(2)
    if not digits:
        return 0
    value = int(digits)
    return -value if sign == "-" else value


def _to_int32(value):
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def split_fields(line, sep=" "):
    """Split ``line`` on the single character ``sep``, dropping empty fields."""
    return [field for field in line.split(sep) if field]


def parse_map(lines):
    """Build a HeightMap from the lines of a map file.

    Lines keep their line endings as read. The number of columns is taken
    from the first row; longer rows are cut to that width.
    """
    table = []
    for number, line in enumerate(lines, start=1):
        fields = split_fields(line, " ")
        if not fields:
            raise MapError(f"line {number} holds no values")
        table.append(fields)
    if not table:
        raise MapError("Invalid map")
    cols = len(table[0])
    heights = []
    for number, fields in enumerate(table, start=1):
        if len(fields) < cols:
            raise MapError(
                f"line {number} has {len(fields)} values, expected {cols}"
            )
        heights.append(tuple(_to_int32(parse_int(field)) for field in fields[:cols]))
    return HeightMap(tuple(heights))


def _read_lines(handle):
    for raw in handle:
        yield raw.decode("latin-1")


def load_map(path):
    """Read a map file and return its HeightMap.

    OSError from opening the file is left to the caller.
    """
    with open(path, "rb") as handle:
        return parse_map(list(_read_lines(handle)))