"""Interactive wireframe viewer: key and mouse handling and the window loop."""

from __future__ import annotations

import sys

from fdfview.drawing import HEIGHT, WIDTH
from fdfview.image import Image
from fdfview.mapfile import MapError, load_map
from fdfview.projection import PAN_STEP_X, PAN_STEP_Y, Projection, View

ESC = 65307
LEFT = 65361
UP = 65362
RIGHT = 65363
DOWN = 65364
KEY_X = 120
KEY_Y = 121
KEY_Z = 122
KEY_ONE = 49
KEY_TWO = 50
WHEEL_UP = 4
WHEEL_DOWN = 5

_PAN = {
    UP: (0, -PAN_STEP_Y),
    LEFT: (-PAN_STEP_X, 0),
    DOWN: (0, PAN_STEP_Y),
    RIGHT: (PAN_STEP_X, 0),
}
_ROTATE = {KEY_X: "x", KEY_Y: "y", KEY_Z: "z"}


class Viewer:
    """Holds an isometric view and, once asked for, a parallel view of a map.

    Key codes follow X keysyms: arrows pan, x/y/z rotate, '2' shows the
    parallel view, '1' returns to the isometric one and Escape quits.
    """

    def __init__(self, heightmap):
        self.heightmap = heightmap
        self.primary = View(heightmap, Projection.ISOMETRIC)
        self.primary.fit()
        self.second = None
        self.showing_second = False
        self.running = True
        self.image = Image(WIDTH, HEIGHT)

    def current_view(self):
        """Return the view that is on display."""
        if self.showing_second and self.second is not None:
            return self.second
        return self.primary

    def _make_second(self):
        view = View(self.heightmap, Projection.PARALLEL)
        view.fit()
        return view

    def handle_key(self, key):
        """Act on a key press; return True while the viewer keeps running."""
        if key == KEY_TWO and not self.showing_second:
            if self.second is None:
                self.second = self._make_second()
            self.showing_second = True
        if key == ESC:
            self.running = False
            return self.running
        if key == KEY_ONE and self.showing_second:
            self.showing_second = False
        view = self.current_view()
        if key in _PAN:
            view.pan(*_PAN[key])
        elif key in _ROTATE:
            view.rotate(_ROTATE[key])
        return self.running

    def handle_mouse(self, button, x, y):
        """Zoom the displayed view around (x, y) on wheel buttons 4 and 5."""
        if button in (WHEEL_UP, WHEEL_DOWN):
            self.current_view().zoom_at(x, y, button == WHEEL_UP)

    def render(self):
        """Draw the displayed view and return the image."""
        self.current_view().render(self.image)
        return self.image


def _show(pygame, screen, image):
    surface = pygame.image.frombuffer(
        bytes(image.data), (image.width, image.height), "BGRA"
    ).convert()
    screen.blit(surface, (0, 0))
    pygame.display.flip()


def run(path):
    """Open a window on the map in ``path`` and run until it is closed."""
    viewer = Viewer(load_map(path))

    import pygame

    pygame.init()
    try:
        screen = pygame.display.set_mode((WIDTH, HEIGHT))
        pygame.display.set_caption("window")
        keys = {
            pygame.K_ESCAPE: ESC,
            pygame.K_UP: UP,
            pygame.K_DOWN: DOWN,
            pygame.K_LEFT: LEFT,
            pygame.K_RIGHT: RIGHT,
        }
        clock = pygame.time.Clock()
        _show(pygame, screen, viewer.render())
        while viewer.running:
            redraw = False
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    viewer.running = False
                elif event.type == pygame.KEYDOWN:
                    viewer.handle_key(keys.get(event.key, event.key))
                    redraw = True
                elif event.type == pygame.MOUSEBUTTONDOWN:
                    x, y = event.pos
                    viewer.handle_mouse(event.button, x, y)
                    redraw = True
            if redraw and viewer.running:
                _show(pygame, screen, viewer.render())
            clock.tick(60)
    finally:
        pygame.quit()


def main(argv=None):
    """Command entry point; takes exactly one map file argument."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        message = "missing input" if len(args) < 1 else "too many inputs"
        print(message, file=sys.stderr)
        return 1
    path = args[0]
    try:
        with open(path, "rb"):
            pass
    except OSError as error:
        print(f"{path}: {error.strerror}", file=sys.stderr)
        return 2
    try:
        run(path)
    except MapError as error:
        print(error, file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())