"""Player position, camera orientation and keyboard-driven movement."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from enum import IntEnum

from cubed.scene import MapError

MOVE_SPEED = 0.05
DIAGONAL_SPEED = 0.025
ROTATION_SPEED = 0.033 * 1.8 / 2.5
PLANE = 0.66


class Key(IntEnum):
    """Key codes the game reacts to (X11 keysyms)."""

    W = 119
    A = 97
    S = 115
    D = 100
    LEFT = 65361
    RIGHT = 65363
    ESCAPE = 65307


_FORWARD = (Key.W, Key.S)
_SIDEWAYS = (Key.A, Key.D)
_TURN = (Key.LEFT, Key.RIGHT)

# direction x, direction y, plane x, plane y for each spawn letter
_SPAWNS = {
    "N": (0.0, -1.0, PLANE, 0.0),
    "S": (0.0, 1.0, -PLANE, 0.0),
    "E": (1.0, 0.0, 0.0, PLANE),
    "W": (-1.0, 0.0, 0.0, -PLANE),
}


def _cell(grid: Sequence[str], x: int, y: int) -> str:
    if 0 <= y < len(grid) and 0 <= x < len(grid[y]):
        return grid[y][x]
    return ""


@dataclass
class Camera:
    """View direction and camera plane, with movement and rotation speeds."""

    dir_x: float
    dir_y: float
    plane_x: float
    plane_y: float
    speed_m: float = MOVE_SPEED
    speed_r: float = ROTATION_SPEED


@dataclass
class Player:
    """The player's position, camera and the keys currently held."""

    x: float
    y: float
    camera: Camera
    moving_x: Key | None = None
    moving_y: Key | None = None
    rotating: Key | None = None

    @classmethod
    def from_grid(cls, grid: Sequence[str]) -> Player:
        """Place the player on the spawn cell of ``grid``; the last spawn found wins."""
        spawn = None
        for y, row in enumerate(grid):
            for x, cell in enumerate(row):
                if cell in _SPAWNS:
                    spawn = (x, y, cell)
        if spawn is None:
            raise MapError("no player spawn in map")
        x, y, cell = spawn
        dir_x, dir_y, plane_x, plane_y = _SPAWNS[cell]
        return cls(x + 0.5, y + 0.5, Camera(dir_x, dir_y, plane_x, plane_y))

    def move(self, grid: Sequence[str], key: int) -> None:
        """Step forward, back or sideways, refusing to enter wall cells per axis."""
        cam = self.camera
        step = cam.speed_m
        if key == Key.W:
            new_x, new_y = self.x + cam.dir_x * step, self.y + cam.dir_y * step
        elif key == Key.S:
            new_x, new_y = self.x - cam.dir_x * step, self.y - cam.dir_y * step
        elif key == Key.A:
            new_x, new_y = self.x + cam.dir_y * step, self.y - cam.dir_x * step
        elif key == Key.D:
            new_x, new_y = self.x - cam.dir_y * step, self.y + cam.dir_x * step
        else:
            raise ValueError(f"not a movement key: {key}")
        if _cell(grid, int(new_x), int(self.y)) != "1":
            self.x = new_x
        if _cell(grid, int(self.x), int(new_y)) != "1":
            self.y = new_y

    def rotate(self, key: int) -> None:
        """Turn the camera right or left by its rotation speed."""
        cam = self.camera
        if key == Key.RIGHT:
            angle = cam.speed_r
        elif key == Key.LEFT:
            angle = -cam.speed_r
        else:
            raise ValueError(f"not a rotation key: {key}")
        cos_a, sin_a = math.cos(angle), math.sin(angle)
        cam.dir_x, cam.dir_y = (
            cam.dir_x * cos_a - cam.dir_y * sin_a,
            cam.dir_x * sin_a + cam.dir_y * cos_a,
        )
        cam.plane_x, cam.plane_y = (
            cam.plane_x * cos_a - cam.plane_y * sin_a,
            cam.plane_x * sin_a + cam.plane_y * cos_a,
        )

    def key_pressed(self, key: int) -> None:
        """Record a held key; the first key held on each axis keeps priority."""
        if key in _FORWARD and self.moving_x is None:
            self.moving_x = Key(key)
        if key in _SIDEWAYS and self.moving_y is None:
            self.moving_y = Key(key)
        if key in _TURN and self.rotating is None:
            self.rotating = Key(key)

    def key_released(self, key: int) -> None:
        """Stop the movement or rotation on the axis of ``key``."""
        if key in _FORWARD:
            self.moving_x = None
        if key in _SIDEWAYS:
            self.moving_y = None
        if key in _TURN:
            self.rotating = None

    def update(self, grid: Sequence[str]) -> None:
        """Apply one frame of the held movement and rotation."""
        both = self.moving_x is not None and self.moving_y is not None
        self.camera.speed_m = DIAGONAL_SPEED if both else MOVE_SPEED
        if self.moving_x is not None:
            self.move(grid, self.moving_x)
        if self.moving_y is not None:
            self.move(grid, self.moving_y)
        if self.rotating is not None:
            self.rotate(self.rotating)