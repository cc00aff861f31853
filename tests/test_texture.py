import pytest

from cubed.texture import Texture


def _color_map(x, y, w, h, kind):
    # The gradient the library's own demo paints into its images.
    if kind == 2:
        return (y * 255) // w + ((((w - x) * 255) // w) << 16) + (((y * 255) // h) << 8)
    return (x * 255) // w + ((((w - x) * 255) // w) << 16) + (((y * 255) // h) << 8)


def test_new_texture_is_zero_filled():
    tex = Texture(42, 42)
    assert len(tex.pixels) == 42 * 42
    assert all(p == 0 for p in tex.pixels)


@pytest.mark.parametrize("size,kind", [((42, 42), 1), ((242, 242), 1), ((242, 242), 2)])
def test_color_map_round_trip(size, kind):
    w, h = size
    tex = Texture(w, h)
    for y in range(h):
        for x in range(w):
            tex.put_pixel(x, y, _color_map(x, y, w, h, kind))
    for y in (0, h // 2, h - 1):
        for x in (0, w // 3, w - 1):
            assert tex.get_pixel(x, y) == _color_map(x, y, w, h, kind)


def test_put_pixel_negative_is_unsigned():
    tex = Texture(2, 2)
    tex.put_pixel(1, 1, -1)
    assert tex.get_pixel(1, 1) == 0xFFFFFFFF
    assert tex.get_pixel(0, 0) == 0


@pytest.mark.parametrize("x,y", [(-1, 0), (0, -1), (3, 0), (0, 2)])
def test_out_of_range_raises(x, y):
    tex = Texture(3, 2)
    with pytest.raises(IndexError):
        tex.get_pixel(x, y)
    with pytest.raises(IndexError):
        tex.put_pixel(x, y, 1)


def test_fill_background_splits_after_middle():
    tex = Texture(3, 4)
    tex.fill_background(0x112233, 0x445566)
    rows = list(tex.rows())
    assert rows[0] == [0x112233] * 3
    assert rows[2] == [0x112233] * 3
    assert rows[3] == [0x445566] * 3


def test_fill_background_overwrites_existing():
    tex = Texture(2, 2)
    tex.put_pixel(0, 0, 7)
    tex.fill_background(5, 9)
    assert tex.get_pixel(0, 0) == 5
    assert tex.get_pixel(1, 1) == 5


def test_rows_are_copies():
    tex = Texture(2, 3)
    tex.put_pixel(1, 2, 8)
    rows = list(tex.rows())
    assert len(rows) == 3
    assert rows[2] == [0, 8]
    rows[2][0] = 99
    assert tex.get_pixel(0, 2) == 0


def test_pixel_count_mismatch_raises():
    with pytest.raises(ValueError):
        Texture(2, 2, [1, 2, 3])


@pytest.mark.parametrize("w,h", [(0, 4), (4, 0), (-1, 3)])
def test_non_positive_size_raises(w, h):
    with pytest.raises(ValueError):
        Texture(w, h)


def test_given_pixels_are_masked():
    tex = Texture(1, 2, [-1, 5])
    assert tex.get_pixel(0, 0) == 0xFFFFFFFF
    assert tex.get_pixel(0, 1) == 5