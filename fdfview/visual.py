"""Conversion of 0xRRGGBB colours to the pixel layout of a display visual."""

from __future__ import annotations

_CHANNELS = ("red", "green", "blue")


def _mask_layout(name, mask):
    if mask <= 0:
        raise ValueError(f"{name} mask must be a positive bit mask, got {mask!r}")
    shift = 0
    while not mask & 1:
        mask >>= 1
        shift += 1
    bits = 0
    while mask & 1:
        mask >>= 1
        bits += 1
    return shift, bits


def channel_shifts(red_mask, green_mask, blue_mask):
    """Return (shift, bits) for red, green and blue, flattened into a 6-tuple.

    The shift is the position of the lowest set bit of each mask and bits is
    the length of the run of set bits starting there.
    """
    layout = []
    for name, mask in zip(_CHANNELS, (red_mask, green_mask, blue_mask)):
        layout.extend(_mask_layout(name, mask))
    return tuple(layout)


def to_visual_color(color, depth, shifts):
    """Map a 0xRRGGBB colour to a pixel value for a visual of ``depth`` bits.

    Visuals of 24 bits or more take the colour unchanged. Shallower visuals
    pack each 8-bit channel into the bit positions described by ``shifts``,
    as returned by :func:`channel_shifts`.
    """
    if depth >= 24:
        return color
    red_shift, red_bits, green_shift, green_bits, blue_shift, blue_bits = shifts
    red = (color >> 8) & 0xFF00
    green = color & 0xFF00
    blue = (color << 8) & 0xFF00
    return (
        ((red >> (16 - red_bits)) << red_shift)
        + ((green >> (16 - green_bits)) << green_shift)
        + ((blue >> (16 - blue_bits)) << blue_shift)
    )