"""Rotation, projection and fitting of a height map onto the screen."""

from __future__ import annotations

import enum
import math
import struct

from fdfview.drawing import HEIGHT, WIDTH, Line, draw_line, line_in_screen

UNIT = 200
ROTATION_STEP = 2 * (math.pi / 180)
PAN_STEP_X = WIDTH // 50
PAN_STEP_Y = HEIGHT // 50
SCALE_STEP = 0.0005
ZOOM_IN_FACTOR = 1.1
ZOOM_OUT_FACTOR = 0.9


class Projection(enum.IntEnum):
    """How rotated points are flattened onto the screen."""

    ISOMETRIC = 1
    PARALLEL = 2


_START_ANGLES = {
    Projection.ISOMETRIC: (66, 37, 155),
    Projection.PARALLEL: (180, 0, 90),
}


def _f32(value):
    return struct.unpack("f", struct.pack("f", value))[0]


def _trunc(value):
    return int(value)


def _half(value):
    """Halve an integer, rounding toward zero."""
    quotient = abs(value) // 2
    return quotient if value >= 0 else -quotient


def rotate_point(x, y, z, x_angle, y_angle, z_angle):
    """Rotate an integer point about the x, y and z axes in turn.

    Each intermediate coordinate is truncated toward zero, so the result
    is a tuple of integers.
    """
    cos_a, sin_a = math.cos(x_angle), math.sin(x_angle)
    y, z = _trunc(y * cos_a + z * sin_a), _trunc(-y * sin_a + z * cos_a)
    cos_a, sin_a = math.cos(y_angle), math.sin(y_angle)
    x, z = _trunc(x * cos_a + z * sin_a), _trunc(-x * sin_a + z * cos_a)
    cos_a, sin_a = math.cos(z_angle), math.sin(z_angle)
    x, y = _trunc(x * cos_a - y * sin_a), _trunc(x * sin_a + y * cos_a)
    return x, y, z


def bounds(points):
    """Return ((min_x, max_x), (min_y, max_y)) of (x, y, ...) points."""
    points = list(points)
    if not points:
        raise ValueError("no points to bound")
    xs = [point[0] for point in points]
    ys = [point[1] for point in points]
    return (min(xs), max(xs)), (min(ys), max(ys))


def compute_scale(points, width=WIDTH, height=HEIGHT):
    """Shrink a scale from 1 until every point fits inside the screen borders."""
    scale = 1.0
    border_x = width // 2 - width // 30
    border_y = height // 2 - height // 30
    for point in points:
        x, y = _f32(point[0]), _f32(point[1])
        while abs(_f32(x * scale)) >= border_x:
            scale = _f32(scale - SCALE_STEP)
        while abs(_f32(y * scale)) >= border_y:
            scale = _f32(scale - SCALE_STEP)
    return scale


class View:
    """A height map seen through one projection, with its zoom and offsets.

    ``grid`` holds one (x, y, height) tuple per map cell in unscaled screen
    units. Call :meth:`fit` to size and centre the view before drawing.
    """

    def __init__(self, heightmap, projection=Projection.ISOMETRIC):
        if heightmap.rows == 0 or heightmap.cols == 0:
            raise ValueError("Invalid map")
        self.heightmap = heightmap
        self.projection = Projection(projection)
        x_deg, y_deg, z_deg = _START_ANGLES[self.projection]
        self.x_angle = _f32(x_deg * (math.pi / 180))
        self.y_angle = _f32(y_deg * (math.pi / 180))
        self.z_angle = _f32(z_deg * (math.pi / 180))
        self.scale = 1.0
        self.offset_x = WIDTH // 2
        self.offset_y = HEIGHT // 2
        self.grid = []
        self.apply_rotation()

    @property
    def rows(self):
        return self.heightmap.rows

    @property
    def cols(self):
        return self.heightmap.cols

    def _project(self, row, col, height):
        x, y, z = rotate_point(
            row * UNIT, col * UNIT, height * UNIT,
            self.x_angle, self.y_angle, self.z_angle,
        )
        if self.projection is Projection.ISOMETRIC:
            return x - y, _half(x + y) - z, height
        return x, y, height

    def apply_rotation(self):
        """Recompute every grid point from the map and the current angles."""
        self.grid = [
            [self._project(i, j, height) for j, height in enumerate(row)]
            for i, row in enumerate(self.heightmap.heights)
        ]

    def fit(self):
        """Choose a scale and offsets that place the map on the screen."""
        points = [point for row in self.grid for point in row]
        (min_x, max_x), (min_y, max_y) = bounds(points)
        centre_x = _half(max_x + min_x)
        centre_y = _half(max_y + min_y)
        centred = [(x - centre_x, y - centre_y, z) for x, y, z in points]
        self.scale = compute_scale(centred)
        first_x, first_y = centred[0][0], centred[0][1]
        self.apply_rotation()
        self.offset_x = self._fit_offset(first_x, WIDTH // 2)
        self.offset_y = self._fit_offset(first_y, HEIGHT // 2)

    def _fit_offset(self, coordinate, half_screen):
        scaled = _f32(_f32(coordinate) * self.scale)
        return _trunc(_f32(_f32(scaled + half_screen) - self.scale))

    def zoom_at(self, x, y, zoom_in):
        """Zoom in or out keeping the map point under (x, y) in place."""
        scale_in = self.scale
        grid_x = _trunc(_f32(_f32(x - self.offset_x) / scale_in))
        grid_y = _trunc(_f32(_f32(y - self.offset_y) / scale_in))
        factor = ZOOM_IN_FACTOR if zoom_in else ZOOM_OUT_FACTOR
        self.scale = _f32(self.scale * factor)
        self.offset_x = self._zoom_offset(grid_x, scale_in, self.offset_x)
        self.offset_y = self._zoom_offset(grid_y, scale_in, self.offset_y)
        self.apply_rotation()

    def _zoom_offset(self, coordinate, scale_in, offset):
        before = _f32(_f32(_f32(coordinate) * scale_in) + offset)
        after = _f32(_f32(coordinate) * self.scale)
        return _trunc(_f32(before - after))

    def pan(self, dx, dy):
        """Move the drawing by (dx, dy) screen pixels."""
        self.offset_x += dx
        self.offset_y += dy

    def rotate(self, axis):
        """Turn the map two degrees about the axis named 'x', 'y' or 'z'."""
        key = str(axis).lower()
        if key == "x":
            self.x_angle = _f32(self.x_angle + ROTATION_STEP)
        elif key == "y":
            self.y_angle = _f32(self.y_angle + ROTATION_STEP)
        elif key == "z":
            self.z_angle = _f32(self.z_angle + ROTATION_STEP)
        else:
            raise ValueError(f"unknown rotation axis: {axis!r}")
        self.apply_rotation()

    def _screen(self, value, offset):
        return _trunc(_f32(_f32(_f32(value) * self.scale) + _f32(offset)))

    def _line(self, start, end):
        return Line(
            self._screen(start[0], self.offset_x),
            self._screen(start[1], self.offset_y),
            self._screen(end[0], self.offset_x),
            self._screen(end[1], self.offset_y),
            start[2],
            end[2],
        )

    def lines(self):
        """Yield every grid segment in screen coordinates, in drawing order.

        Each point is joined to its right-hand neighbour, then to the point
        below it.
        """
        for i, row in enumerate(self.grid):
            below = self.grid[i + 1] if i + 1 < len(self.grid) else None
            for j, point in enumerate(row):
                if j + 1 < len(row):
                    yield self._line(point, row[j + 1])
                if below is not None:
                    yield self._line(point, below[j])

    def height_range(self):
        """Return (lowest, highest) height in the grid."""
        heights = [point[2] for row in self.grid for point in row]
        return min(heights), max(heights)

    def render(self, image):
        """Clear ``image`` and draw the visible segments into it."""
        image.clear()
        low, high = self.height_range()
        for line in self.lines():
            if line_in_screen(line, image.width, image.height):
                draw_line(image, line, low, high)