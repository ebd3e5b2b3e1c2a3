"""An in-memory pixel buffer laid out like an X ZPixmap image."""

from __future__ import annotations

_SUPPORTED_DEPTHS = (8, 16, 24, 32)


class Image:
    """A width x height pixel buffer with rows padded to 32 bits."""

    def __init__(self, width, height, bits_per_pixel=32, big_endian=False):
        if width <= 0 or height <= 0:
            raise ValueError(f"image size must be positive, got {width}x{height}")
        if bits_per_pixel not in _SUPPORTED_DEPTHS:
            raise ValueError(f"unsupported bits per pixel: {bits_per_pixel}")
        self.width = width
        self.height = height
        self.bits_per_pixel = bits_per_pixel
        self.big_endian = bool(big_endian)
        self.line_length = ((width * bits_per_pixel + 31) // 32) * 4
        self.data = bytearray(self.line_length * height)

    @property
    def bytes_per_pixel(self):
        return self.bits_per_pixel // 8

    @property
    def _byteorder(self):
        return "big" if self.big_endian else "little"

    def _inside(self, x, y):
        return 0 <= x < self.width and 0 <= y < self.height

    def _offset(self, x, y):
        return y * self.line_length + x * self.bytes_per_pixel

    def put_pixel(self, x, y, color):
        """Store ``color`` at (x, y); points outside the image are ignored."""
        if not self._inside(x, y):
            return
        size = self.bytes_per_pixel
        value = color & ((1 << (8 * size)) - 1)
        start = self._offset(x, y)
        self.data[start:start + size] = value.to_bytes(size, self._byteorder)

    def get_pixel(self, x, y):
        """Return the pixel value at (x, y); raise IndexError outside the image."""
        if not self._inside(x, y):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} image")
        start = self._offset(x, y)
        return int.from_bytes(self.data[start:start + self.bytes_per_pixel], self._byteorder)

    def clear(self):
        """Set every pixel to zero."""
        self.data[:] = bytes(len(self.data))