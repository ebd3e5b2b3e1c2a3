# fdfview

`fdfview` draws a wireframe of a height map in a window. A height map is a
plain-text grid of integers. You can view it in an isometric projection or a
parallel projection, and you can zoom, pan and rotate it. The window is
1600 x 920 pixels and uses pygame.

## Installation

```
pip install .
```

To install the test tools and run the tests:

```
pip install .[test]
pytest
```

## Map files

Each line of a map file is one row of the grid. Single spaces separate the
values on a line. Each value is the height of one point:

```
0 0 0 0
0 5 5 0
0 5 5 0
0 0 0 0
```

The program reads each value as a leading decimal integer with an optional
sign. Any text after the digits is ignored, so `10,0xFF0000` reads as `10`.
A value with no digits reads as `0`.

The first row sets the number of columns. The program cuts longer rows to
that width. A shorter row, a line with no values, or an empty file raises
`fdfview.mapfile.MapError`.

Each line is coloured by height. The lowest point of the map is blue, the
middle heights are green and the highest point is red.

## Usage

```
fdfview path/to/map.fdf
```

The program takes exactly one argument:

- If the argument is missing, it prints `missing input` and exits with status 1.
- If there are too many arguments, it prints `too many inputs` and exits with status 1.
- If the file cannot be opened, it prints the reason and exits with status 2.
- If the map cannot be parsed, it prints the error and exits with status 0.

### Controls

| Input              | Action                                           |
|--------------------|--------------------------------------------------|
| Arrow keys         | Move the drawing                                 |
| `x`, `y`, `z`      | Rotate about that axis by 2 degrees              |
| Mouse wheel        | Zoom in or out around the pointer                |
| `2`                | Switch to the parallel projection                |
| `1`                | Switch back to the isometric projection          |
| `Esc`              | Quit                                             |

Closing the window also quits. Each projection keeps its own zoom, offset and
rotation. The parallel view is created the first time you press `2`.

## Using it as a library

```python
from fdfview.mapfile import load_map
from fdfview.projection import View, Projection
from fdfview.image import Image

heightmap = load_map("map.fdf")
view = View(heightmap, Projection.ISOMETRIC)
view.fit()
image = Image(1600, 920, 32, False)
view.render(image)
print(hex(image.get_pixel(800, 460)))
```

`fdfview.app.Viewer` handles input without opening a window. Its
`handle_key(key)` method takes X keysym codes and `handle_mouse(button, x, y)`
zooms on buttons 4 and 5. `render()` returns the `Image` of the view on
display. `fdfview.app.run(path)` opens the pygame window, and
`fdfview.app.main(argv)` is the command entry point.

The package has these modules:

- `fdfview.mapfile`: `load_map`, `parse_map`, `parse_int`, `split_fields`, `HeightMap` and `MapError`.
- `fdfview.projection`: `View`, `Projection`, `rotate_point`, `bounds` and `compute_scale`.
- `fdfview.drawing`: `Line`, `line_points`, `draw_line`, `line_in_screen` and `height_color`.
- `fdfview.image`: `Image`, a pixel buffer with each row padded to 32 bits, with `put_pixel`, `get_pixel` and `clear`.
- `fdfview.xpm`: `load_xpm` and `parse_xpm` for XPM images, plus their helpers. This module raises `XpmError`.
- `fdfview.colors`: `lookup_color` for X11 colour names and `parse_color_spec` for XPM colour tokens.
- `fdfview.visual`: `channel_shifts` and `to_visual_color`, which pack a 0xRRGGBB colour into the bits of a visual of less than 24 bits.

## What it does not do

The viewer only displays a map. It cannot save the rendered image to a file,
and it cannot edit the map. Heights in the map file set the colours. Any
colour values written in the file are ignored.