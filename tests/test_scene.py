from pathlib import Path

import pytest

from cubed.scene import (
    MapError,
    Scene,
    check_map_bounds,
    check_map_chars,
    check_map_format,
    color_value,
    load_scene,
    parse_map_layout,
    parse_scene,
    parse_scene_infos,
    rgb_to_hex,
)

MAP_ROWS = ("111111", "100001", "10N001", "100001", "111111")

SAMPLE = (
    "NO ./textures/north.xpm\n"
    "SO ./textures/south.xpm\n"
    "WE ./textures/west.xpm\n"
    "EA ./textures/east.xpm\n"
    "\n"
    "F 220,100,0\n"
    "C 225,30,0\n"
    "\n"
    "\n" + "\n".join(MAP_ROWS) + "\n"
)


def _lines(text):
    return text.splitlines(keepends=True)


def test_color_value_first_component():
    assert color_value("F 220,100,0\n", 1) == 220


def test_color_value_middle_component():
    assert color_value("F 220,100,0", 6) == 100


def test_color_value_allows_trailing_space():
    assert color_value("C 7 ,1,1", 1) == 7


@pytest.mark.parametrize(
    "line",
    ["F 256,0,0", "F 1234,0,0", "F ,0,0", "F 12a,0,0", "F -1,0,0", "F "],
)
def test_color_value_rejects(line):
    with pytest.raises(MapError):
        color_value(line, 1)


def test_rgb_to_hex_pins():
    assert rgb_to_hex(255, 0, 0) == 0xFF0000
    assert rgb_to_hex(0, 0, 255) == 0x0000FF


@pytest.mark.parametrize("rgb", [(0, 0, 0), (12, 34, 56), (255, 255, 255)])
def test_rgb_to_hex_components_recoverable(rgb):
    value = rgb_to_hex(*rgb)
    assert ((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF) == rgb


def test_check_map_format_accepts_cub():
    assert check_map_format("maps/level.cub") == "maps/level.cub"
    assert check_map_format(Path("a.cub")) == "a.cub"


@pytest.mark.parametrize("name", ["level.txt", "cub", "level.cu", "levelcub", ""])
def test_check_map_format_rejects(name):
    with pytest.raises(MapError):
        check_map_format(name)


def test_parse_scene_sample():
    scene = parse_scene(SAMPLE)
    assert isinstance(scene, Scene)
    assert scene.textures == (
        "./textures/north.xpm",
        "./textures/south.xpm",
        "./textures/west.xpm",
        "./textures/east.xpm",
    )
    assert scene.floor == rgb_to_hex(220, 100, 0)
    assert scene.ceiling == rgb_to_hex(225, 30, 0)
    assert scene.colors == (scene.ceiling, scene.floor)
    assert scene.grid == MAP_ROWS
    assert scene.height == len(MAP_ROWS)
    assert scene.width == len(MAP_ROWS[0])


def test_parse_scene_without_trailing_newline():
    scene = parse_scene(SAMPLE.rstrip("\n"))
    assert scene.grid == MAP_ROWS


def test_parse_scene_infos_any_order_and_tabs():
    lines = _lines(
        "C 1,2,3\nEA ./e.xpm\nF 4,5,6\nWE ./w.xpm\nSO ./s.xpm\nNO \t ./n.xpm\n"
    )
    textures, ceiling, floor = parse_scene_infos(lines)
    assert textures == ("./n.xpm", "./s.xpm", "./w.xpm", "./e.xpm")
    assert ceiling == rgb_to_hex(1, 2, 3)
    assert floor == rgb_to_hex(4, 5, 6)


def test_parse_scene_infos_duplicate():
    text = SAMPLE.replace("C 225,30,0\n", "C 225,30,0\nF 1,1,1\n")
    with pytest.raises(MapError, match="duplicate"):
        parse_scene_infos(_lines(text))


def test_parse_scene_infos_missing_element():
    text = SAMPLE.replace("WE ./textures/west.xpm\n", "")
    with pytest.raises(MapError, match="WE"):
        parse_scene_infos(_lines(text))


@pytest.mark.parametrize("color", ["F 220,100\n", "F 220;100;0\n", "F 300,0,0\n"])
def test_parse_scene_infos_bad_color(color):
    text = SAMPLE.replace("F 220,100,0\n", color)
    with pytest.raises(MapError):
        parse_scene_infos(_lines(text))


def test_parse_map_layout_skips_leading_blank_lines():
    assert parse_map_layout(_lines(SAMPLE)) == MAP_ROWS


def test_parse_map_layout_keeps_trailing_lines():
    rows = parse_map_layout(_lines(SAMPLE + "\n"))
    assert rows == MAP_ROWS + ("",)


def test_parse_map_layout_missing_map():
    text = SAMPLE.split("\n\n\n")[0] + "\n\n\n"
    with pytest.raises(MapError, match="missing map"):
        parse_map_layout(_lines(text))


@pytest.mark.parametrize(
    "grid",
    [
        ["101", "101", "111"],
        ["111", "101", "101"],
        ["111", "011", "111"],
        ["1111", "1 01", "1111"],
        ["11", "1001", "1111"],
        ["1111", "1001", "1111 "[:3] + "0"],
    ],
)
def test_check_map_bounds_rejects_open_maps(grid):
    with pytest.raises(MapError, match="bounds"):
        check_map_bounds(grid)


def test_check_map_bounds_rejects_empty_grid():
    with pytest.raises(MapError):
        check_map_bounds([])


def test_check_map_chars_invalid_character():
    with pytest.raises(MapError, match="invalid characters"):
        check_map_chars(["111", "1X1", "111"])


def test_check_map_chars_no_spawn():
    with pytest.raises(MapError, match="no player spawn"):
        check_map_chars(["111", "101", "111"])


def test_check_map_chars_spawn_on_edge_not_counted():
    with pytest.raises(MapError, match="no player spawn"):
        check_map_chars(["1N1", "101", "111"])


def test_check_map_chars_too_many_spawns():
    with pytest.raises(MapError, match="too many"):
        check_map_chars(["11111", "1N0S1", "11111"])


def test_parse_scene_rejects_open_map():
    text = SAMPLE.replace("100001\n10N001", "100001\n00N001")
    with pytest.raises(MapError):
        parse_scene(text)


def test_load_scene_round_trip(tmp_path):
    path = tmp_path / "level.cub"
    path.write_text(SAMPLE, encoding="utf-8")
    assert load_scene(path) == parse_scene(SAMPLE)


def test_load_scene_missing_file(tmp_path):
    with pytest.raises(MapError, match="unable to open"):
        load_scene(tmp_path / "absent.cub")