import pytest

from cubed.game import Game, main
from cubed.player import Key
from cubed.scene import MapError
from cubed.xpm import XpmError

XPM = '/* XPM */\nstatic char *img[] = {\n"2 2 1 1",\n"a c #FF0000",\n"aa",\n"aa"};\n'
MAP = "111111\n100001\n10N001\n100001\n111111\n"


def _write_scene(tmp_path, texture_name="wall.xpm"):
    texture = tmp_path / "wall.xpm"
    texture.write_text(XPM)
    target = tmp_path / texture_name
    lines = [f"{key} {target}\n" for key in ("NO", "SO", "WE", "EA")]
    scene = tmp_path / "level.cub"
    scene.write_text("".join(lines) + "F 10,20,30\nC 40,50,60\n\n" + MAP)
    return scene


def test_load_builds_game(tmp_path):
    game = Game.load(_write_scene(tmp_path))
    assert len(game.textures) == 4
    assert all((t.width, t.height) == (2, 2) for t in game.textures)
    assert game.textures[0].get_pixel(0, 0) == 0xFF0000
    assert (game.player.x, game.player.y) == (2.5, 2.5)
    assert game.running is True


def test_load_rejects_wrong_extension(tmp_path):
    with pytest.raises(MapError):
        Game.load(tmp_path / "level.txt")


def test_load_missing_texture(tmp_path):
    with pytest.raises(XpmError):
        Game.load(_write_scene(tmp_path, texture_name="missing.xpm"))


def test_tick_renders_and_moves(tmp_path):
    game = Game.load(_write_scene(tmp_path))
    start_y = game.player.y
    game.player.key_pressed(Key.W)
    frame = game.tick()
    assert frame is game.frame
    assert game.player.y < start_y
    assert frame.get_pixel(0, 0) == game.scene.ceiling
    assert frame.get_pixel(0, frame.height - 1) == game.scene.floor


def test_main_requires_one_argument(capsys):
    assert main([]) == 1
    assert "Usage" in capsys.readouterr().err


def test_main_reports_bad_map(tmp_path, capsys):
    assert main([str(tmp_path / "level.txt")]) == 1
    assert "Error" in capsys.readouterr().err