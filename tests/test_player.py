import math

import pytest

from cubed.player import Camera, Key, Player
from cubed.scene import MapError

ROOM = ("11111", "10001", "10N01", "10001", "11111")


def test_spawn_north():
    player = Player.from_grid(ROOM)
    assert (player.x, player.y) == (2.5, 2.5)
    cam = player.camera
    assert (cam.dir_x, cam.dir_y) == (0.0, -1.0)
    assert (cam.plane_x, cam.plane_y) == (0.66, 0.0)


@pytest.mark.parametrize(
    "letter, direction, plane",
    [
        ("S", (0.0, 1.0), (-0.66, 0.0)),
        ("E", (1.0, 0.0), (0.0, 0.66)),
        ("W", (-1.0, 0.0), (0.0, -0.66)),
    ],
)
def test_spawn_directions(letter, direction, plane):
    grid = ("111", "1" + letter + "1", "111")
    cam = Player.from_grid(grid).camera
    assert (cam.dir_x, cam.dir_y) == direction
    assert (cam.plane_x, cam.plane_y) == plane


def test_no_spawn_raises():
    with pytest.raises(MapError):
        Player.from_grid(("111", "101", "111"))


def test_move_forward_uses_speed():
    player = Player.from_grid(ROOM)
    start_x, start_y = player.x, player.y
    player.move(ROOM, Key.W)
    assert player.y == pytest.approx(start_y - player.camera.speed_m)
    assert player.x == start_x


def test_move_back_and_forth_round_trip():
    player = Player.from_grid(ROOM)
    start = (player.x, player.y)
    player.move(ROOM, Key.D)
    player.move(ROOM, Key.A)
    assert (player.x, player.y) == pytest.approx(start)


def test_wall_blocks_movement():
    grid = ("111", "1N1", "111")
    player = Player.from_grid(grid)
    for _ in range(40):
        player.move(grid, Key.W)
    assert player.y >= 1.0
    assert player.x == 1.5


def test_move_rejects_other_keys():
    player = Player.from_grid(ROOM)
    with pytest.raises(ValueError):
        player.move(ROOM, Key.LEFT)


def test_rotation_round_trip_and_invariants():
    player = Player(1.5, 1.5, Camera(0.0, -1.0, 0.66, 0.0))
    for _ in range(7):
        player.rotate(Key.RIGHT)
    cam = player.camera
    assert math.hypot(cam.dir_x, cam.dir_y) == pytest.approx(1.0)
    assert cam.dir_x * cam.plane_x + cam.dir_y * cam.plane_y == pytest.approx(0.0)
    for _ in range(7):
        player.rotate(Key.LEFT)
    assert (cam.dir_x, cam.dir_y) == pytest.approx((0.0, -1.0))
    assert (cam.plane_x, cam.plane_y) == pytest.approx((0.66, 0.0))


def test_key_priority_and_release():
    player = Player.from_grid(ROOM)
    player.key_pressed(Key.W)
    player.key_pressed(Key.S)
    assert player.moving_x is Key.W
    player.key_pressed(int(Key.LEFT))
    assert player.rotating is Key.LEFT
    player.key_released(Key.S)
    assert player.moving_x is None
    assert player.rotating is Key.LEFT


def test_update_diagonal_speed():
    player = Player.from_grid(ROOM)
    player.key_pressed(Key.W)
    player.key_pressed(Key.D)
    player.update(ROOM)
    assert player.camera.speed_m == 0.025
    player.key_released(Key.D)
    player.update(ROOM)
    assert player.camera.speed_m == 0.05