import pytest

from cubed.colornames import lookup_color


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("red", 0xFF0000),
        ("white", 0xFFFFFF),
        ("black", 0x0),
        ("navy", 0x80),
        ("lightgoldenrodyellow", 0xFAFAD2),
    ],
)
def test_known_names(name, expected):
    assert lookup_color(name) == expected


def test_none_is_transparent_marker():
    assert lookup_color("none") == -1


@pytest.mark.parametrize("name", ["RED", "Red", "rEd"])
def test_matching_ignores_case(name):
    assert lookup_color(name) == lookup_color("red")


def test_names_with_spaces():
    assert lookup_color("Ghost White") == lookup_color("ghostwhite")


def test_first_duplicate_wins():
    # "dark slate" appears several times; the first entry is used.
    assert lookup_color("dark slate") == 0x2F4F4F
    assert lookup_color("darkslategray") == lookup_color("dark slate")


def test_light_goldenrod_first_entry():
    assert lookup_color("light goldenrod") == lookup_color("lightgoldenrodyellow")
    assert lookup_color("light goldenrod") != lookup_color("lightgoldenrod")


@pytest.mark.parametrize("level", range(101))
def test_gray_and_grey_agree(level):
    assert lookup_color(f"gray{level}") == lookup_color(f"grey{level}")


def test_gray_levels_increase():
    values = [lookup_color(f"gray{level}") for level in range(101)]
    assert values == sorted(values)
    assert values[0] == lookup_color("black")
    assert values[-1] == lookup_color("white")


def test_gray_levels_are_neutral():
    for level in range(101):
        value = lookup_color(f"gray{level}")
        red, green, blue = value >> 16, (value >> 8) & 0xFF, value & 0xFF
        assert red == green == blue


@pytest.mark.parametrize("name", ["red1", "green1", "blue1", "yellow1", "cyan1", "magenta1"])
def test_numbered_variant_one_matches_base(name):
    assert lookup_color(name) == lookup_color(name[:-1])


def test_all_values_fit_in_rgb():
    for base in ["snow", "thistle", "gold", "orchid", "tomato"]:
        for suffix in ["", "1", "2", "3", "4"]:
            value = lookup_color(base + suffix)
            assert 0 <= value <= 0xFFFFFF


@pytest.mark.parametrize("name", ["", "not a colour", "gray101", "#ff0000"])
def test_unknown_name_raises(name):
    with pytest.raises(KeyError):
        lookup_color(name)