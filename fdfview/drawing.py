"""Line rasterisation with height-based colouring."""

from __future__ import annotations

import struct
from dataclasses import dataclass

WIDTH = 1600
HEIGHT = 920


@dataclass
class Line:
    """A segment in screen coordinates with a height at each end."""

    x0: int
    y0: int
    x1: int
    y1: int
    z0: int = 0
    z1: int = 0


def _cdiv(a, b):
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


def _f32(value):
    return struct.unpack("f", struct.pack("f", value))[0]


def _trunc(value):
    return int(value)


def height_color(height, min_h, max_h):
    """Return a 0xRRGGBB colour running from blue through green to red."""
    if max_h != min_h:
        normalized = _cdiv((height - min_h) * 255, max_h - min_h)
    else:
        normalized = 255
    if normalized < 128:
        red = 0
        green = normalized * 2
        blue = 255 - green
    else:
        red = (normalized - 128) * 2
        green = 255 - red
        blue = 0
    return (red << 16) | (green << 8) | blue


def line_in_screen(line, width=WIDTH, height=HEIGHT):
    """Return False when both ends lie beyond the same edge of the screen."""
    if (
        (line.x0 < 0 and line.x1 < 0)
        or (line.x0 > width and line.x1 > width)
        or (line.y0 < 0 and line.y1 < 0)
        or (line.y0 > height and line.y1 > height)
    ):
        return False
    return True


def _sign(value):
    return (value > 0) - (value < 0)


def _height_at(line, step, length):
    if not length:
        return line.z0
    t = _f32(_f32(step) / _f32(length))
    start = _f32(line.z0)
    value = _f32(start - _f32(start * t))
    value = _f32(value + _f32(_f32(line.z1) * t))
    return _trunc(value)


def line_points(line):
    """Yield (x, y, z) for every pixel of ``line``, start point first."""
    dx = _sign(line.x1 - line.x0)
    dy = _sign(line.y1 - line.y0)
    span_x = abs(line.x1 - line.x0)
    span_y = abs(line.y1 - line.y0)
    horizontal = span_x > span_y
    length, minor = (span_x, span_y) if horizontal else (span_y, span_x)
    numerator = length // 2
    x, y = line.x0, line.y0
    for step in range(1, length + 2):
        yield x, y, _height_at(line, step, length)
        numerator += minor
        if horizontal:
            x += dx
        else:
            y += dy
        if numerator >= length:
            numerator -= length
            if horizontal:
                y += dy
            else:
                x += dx


def draw_line(image, line, min_h, max_h):
    """Rasterise ``line`` into ``image``, colouring each pixel by height."""
    for x, y, z in line_points(line):
        image.put_pixel(x, y, height_color(z, min_h, max_h))