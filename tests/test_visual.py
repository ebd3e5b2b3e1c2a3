import pytest

from fdfview.visual import channel_shifts, to_visual_color

RGB888 = (0xFF0000, 0x00FF00, 0x0000FF)
RGB565 = (0xF800, 0x07E0, 0x001F)


def test_channel_shifts_truecolor():
    assert channel_shifts(*RGB888) == (16, 8, 8, 8, 0, 8)


def test_channel_shifts_565():
    assert channel_shifts(*RGB565) == (11, 5, 5, 6, 0, 5)


@pytest.mark.parametrize("masks", [(0, 0xFF00, 0xFF), (0xFF0000, 0, 0xFF), (0xFF0000, 0xFF00, 0)])
def test_channel_shifts_rejects_empty_mask(masks):
    with pytest.raises(ValueError):
        channel_shifts(*masks)


@pytest.mark.parametrize("color", [0x000000, 0x123456, 0xFFFFFF, 0xFF99FF])
def test_deep_visual_keeps_color(color):
    shifts = channel_shifts(*RGB565)
    assert to_visual_color(color, 24, shifts) == color
    assert to_visual_color(color, 32, shifts) == color


@pytest.mark.parametrize("color", [0x000000, 0x123456, 0xABCDEF, 0x00FFFF])
def test_shallow_visual_with_8bit_channels_is_identity(color):
    shifts = channel_shifts(*RGB888)
    assert to_visual_color(color, 16, shifts) == color


def test_565_white():
    assert to_visual_color(0xFFFFFF, 16, channel_shifts(*RGB565)) == 0xFFFF


@pytest.mark.parametrize("color,mask", zip(RGB888, RGB565))
def test_565_pure_channels_fill_their_mask(color, mask):
    assert to_visual_color(color, 16, channel_shifts(*RGB565)) == mask


def test_565_channels_are_additive():
    shifts = channel_shifts(*RGB565)
    total = sum(to_visual_color(c, 16, shifts) for c in RGB888)
    assert to_visual_color(0xFFFFFF, 16, shifts) == total