import pytest

from fdfview.image import Image


def color_map(x, y, w, h, kind):
    if kind == 2:
        return (y * 255) // w + ((((w - x) * 255) // w) << 16) + (((y * 255) // h) << 8)
    return (x * 255) // w + ((((w - x) * 255) // w) << 16) + (((y * 255) // h) << 8)


@pytest.mark.parametrize(
    "size,kind,big_endian",
    [(42, 1, False), (42, 1, True), (242, 1, False), (242, 2, False), (242, 2, True)],
)
def test_fill_and_read_back(size, kind, big_endian):
    img = Image(size, size, 32, big_endian)
    for y in range(size):
        for x in range(size):
            img.put_pixel(x, y, color_map(x, y, size, size, kind))
    for y in range(size):
        for x in range(size):
            assert img.get_pixel(x, y) == color_map(x, y, size, size, kind)


@pytest.mark.parametrize("width", [1, 42, 242])
@pytest.mark.parametrize("bpp", [8, 16, 24, 32])
def test_line_length_padded(width, bpp):
    img = Image(width, 3, bpp)
    assert img.line_length % 4 == 0
    assert width * bpp // 8 <= img.line_length < width * bpp // 8 + 4
    assert len(img.data) == img.line_length * 3


def test_byte_order_in_buffer():
    little = Image(2, 1, 32, False)
    big = Image(2, 1, 32, True)
    little.put_pixel(1, 0, 0x11223344)
    big.put_pixel(1, 0, 0x11223344)
    assert little.data[4:8] == (0x11223344).to_bytes(4, "little")
    assert big.data[4:8] == (0x11223344).to_bytes(4, "big")


def test_value_truncated_to_pixel_size():
    img = Image(1, 1, 16)
    img.put_pixel(0, 0, 0xABCDEF)
    assert img.get_pixel(0, 0) == 0xABCDEF & 0xFFFF


def test_negative_color_wraps():
    img = Image(1, 1)
    img.put_pixel(0, 0, -1)
    assert img.get_pixel(0, 0) == 0xFFFFFFFF


@pytest.mark.parametrize("x,y", [(-1, 0), (0, -1), (4, 0), (0, 3)])
def test_out_of_bounds_put_is_ignored(x, y):
    img = Image(4, 3)
    img.put_pixel(x, y, 0xFFFFFF)
    assert img.data == bytearray(len(img.data))


@pytest.mark.parametrize("x,y", [(-1, 0), (4, 0), (0, 3)])
def test_out_of_bounds_get_raises(x, y):
    with pytest.raises(IndexError):
        Image(4, 3).get_pixel(x, y)


def test_clear():
    img = Image(3, 3)
    img.put_pixel(1, 1, 0x123456)
    img.clear()
    assert img.get_pixel(1, 1) == 0
    assert not any(img.data)


@pytest.mark.parametrize("args", [(0, 5), (5, 0), (-1, 5), (5, 5, 12)])
def test_invalid_construction(args):
    with pytest.raises(ValueError):
        Image(*args)