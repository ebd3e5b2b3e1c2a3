import math

import pytest

from fdfview.drawing import HEIGHT, WIDTH, height_color, line_points
from fdfview.image import Image
from fdfview.mapfile import HeightMap
from fdfview.projection import (
    Projection,
    View,
    bounds,
    compute_scale,
    rotate_point,
)


def _map(rows):
    return HeightMap(tuple(tuple(row) for row in rows))


SMALL = _map([(0, 0, 0), (0, 5, 0), (0, 0, 0)])


def test_rotate_point_zero_angles_is_identity():
    assert rotate_point(3, 4, 5, 0.0, 0.0, 0.0) == (3, 4, 5)


def test_rotate_point_keeps_length():
    x, y, z = rotate_point(200, 400, -600, 0.3, 0.7, 1.1)
    before = math.sqrt(200 ** 2 + 400 ** 2 + 600 ** 2)
    after = math.sqrt(x * x + y * y + z * z)
    assert abs(before - after) < 5


def test_bounds_of_points():
    points = [(1, 2, 0), (-3, 5, 0), (4, -1, 0)]
    assert bounds(points) == ((-3, 4), (-1, 5))


def test_bounds_of_nothing_raises():
    with pytest.raises(ValueError):
        bounds([])


def test_compute_scale_keeps_one_when_points_fit():
    assert compute_scale([(10, 10, 0), (-20, 5, 0)]) == 1.0


def test_compute_scale_shrinks_wide_points():
    scale = compute_scale([(1000, 0, 0)])
    border_x = WIDTH // 2 - WIDTH // 30
    assert 0 < scale < 1
    assert abs(1000 * scale) < border_x
    assert abs(1000 * (scale + 0.001)) >= border_x


def test_compute_scale_shrinks_tall_points():
    scale = compute_scale([(0, -1000, 0)])
    border_y = HEIGHT // 2 - HEIGHT // 30
    assert abs(1000 * scale) < border_y
    assert abs(1000 * (scale + 0.001)) >= border_y


def test_view_starts_centred_with_isometric_angles():
    view = View(SMALL)
    assert view.projection is Projection.ISOMETRIC
    assert view.offset_x == WIDTH // 2
    assert view.offset_y == HEIGHT // 2
    assert view.x_angle == pytest.approx(math.radians(66), rel=1e-6)
    assert view.y_angle == pytest.approx(math.radians(37), rel=1e-6)
    assert view.z_angle == pytest.approx(math.radians(155), rel=1e-6)


def test_parallel_grid_matches_rotated_points():
    view = View(SMALL, Projection.PARALLEL)
    assert view.x_angle == pytest.approx(math.pi, rel=1e-6)
    for i, row in enumerate(SMALL.heights):
        for j, height in enumerate(row):
            rx, ry, _ = rotate_point(
                i * 200, j * 200, height * 200,
                view.x_angle, view.y_angle, view.z_angle,
            )
            assert view.grid[i][j] == (rx, ry, height)


def test_grid_keeps_map_shape_and_heights():
    view = View(SMALL)
    assert len(view.grid) == SMALL.rows
    assert all(len(row) == SMALL.cols for row in view.grid)
    assert [[p[2] for p in row] for row in view.grid] == [
        list(row) for row in SMALL.heights
    ]


def test_empty_map_raises():
    with pytest.raises(ValueError):
        View(HeightMap(()))


def test_height_range():
    view = View(_map([(3, -2), (7, 1)]))
    assert view.height_range() == (-2, 7)


def test_fit_gives_usable_scale():
    view = View(_map([[i + j for j in range(12)] for i in range(12)]))
    view.fit()
    assert 0 < view.scale <= 1


def test_pan_moves_offsets():
    view = View(SMALL)
    view.fit()
    x, y = view.offset_x, view.offset_y
    view.pan(-32, 18)
    assert (view.offset_x, view.offset_y) == (x - 32, y + 18)


def test_zoom_in_then_out_changes_scale():
    view = View(SMALL)
    view.fit()
    before = view.scale
    view.zoom_at(WIDTH // 2, HEIGHT // 2, True)
    assert view.scale == pytest.approx(before * 1.1, rel=1e-6)
    zoomed = view.scale
    view.zoom_at(WIDTH // 2, HEIGHT // 2, False)
    assert view.scale == pytest.approx(zoomed * 0.9, rel=1e-6)


def test_zoom_keeps_point_under_cursor():
    view = View(SMALL)
    view.fit()
    cx, cy = 700, 400
    old_scale, old_x, old_y = view.scale, view.offset_x, view.offset_y
    grid_x = int((cx - old_x) / old_scale)
    grid_y = int((cy - old_y) / old_scale)
    view.zoom_at(cx, cy, True)
    assert abs(grid_x * view.scale + view.offset_x - cx) <= 3
    assert abs(grid_y * view.scale + view.offset_y - cy) <= 3


def test_rotate_steps_angle_and_updates_grid():
    view = View(SMALL)
    angle = view.x_angle
    grid = [list(row) for row in view.grid]
    view.rotate("x")
    assert view.x_angle == pytest.approx(angle + math.radians(2), rel=1e-6)
    assert [list(row) for row in view.grid] != grid or view.grid[1][1][2] == 5


def test_rotate_unknown_axis_raises():
    view = View(SMALL)
    with pytest.raises(ValueError):
        view.rotate("w")


def test_lines_count_and_heights():
    heightmap = _map([(1, 2, 3), (4, 5, 6)])
    view = View(heightmap)
    lines = list(view.lines())
    rows, cols = heightmap.rows, heightmap.cols
    assert len(lines) == rows * (cols - 1) + cols * (rows - 1)
    assert (lines[0].z0, lines[0].z1) == (1, 2)
    assert (lines[1].z0, lines[1].z1) == (1, 4)


def test_render_colours_flat_map_uniformly():
    view = View(_map([(5, 5, 5), (5, 5, 5), (5, 5, 5)]))
    view.fit()
    image = Image(WIDTH, HEIGHT)
    view.render(image)
    colour = height_color(5, 5, 5)
    drawn = 0
    for line in view.lines():
        for x, y, _ in line_points(line):
            if 0 <= x < WIDTH and 0 <= y < HEIGHT:
                assert image.get_pixel(x, y) == colour
                drawn += 1
    assert drawn > 0