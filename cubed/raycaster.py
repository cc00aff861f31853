"""DDA ray casting of the map grid into a textured frame."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from enum import IntEnum

from cubed.player import Player
from cubed.texture import Texture


class Wall(IntEnum):
    """Wall texture slots, in the order the scene lists them."""

    NORTH = 0
    SOUTH = 1
    WEST = 2
    EAST = 3


@dataclass(frozen=True)
class RayHit:
    """Where a ray met a wall and how far away, perpendicular to the camera."""

    map_x: int
    map_y: int
    side: int
    distance: float
    wall: Wall
    wall_x: float


def wall_for(side: int, ray_dir_x: float, ray_dir_y: float) -> Wall:
    """Pick the wall texture for a hit on ``side`` (0: x side, 1: y side)."""
    if side == 0:
        return Wall.WEST if ray_dir_x >= 0 else Wall.EAST
    return Wall.NORTH if ray_dir_y >= 0 else Wall.SOUTH


def _cell(grid: Sequence[str], x: int, y: int) -> str | None:
    if 0 <= y < len(grid) and 0 <= x < len(grid[y]):
        return grid[y][x]
    return None


def cast_ray(
    grid: Sequence[str], pos_x: float, pos_y: float, ray_dir_x: float, ray_dir_y: float
) -> RayHit:
    """Walk the grid from (pos_x, pos_y) along the ray until a ``1`` cell is hit."""
    map_x, map_y = int(pos_x), int(pos_y)
    delta_x = 1e30 if ray_dir_x == 0 else math.sqrt(1 + ray_dir_y**2 / ray_dir_x**2)
    delta_y = 1e30 if ray_dir_y == 0 else math.sqrt(1 + ray_dir_x**2 / ray_dir_y**2)
    if ray_dir_x < 0:
        step_x, side_x = -1, (pos_x - map_x) * delta_x
    else:
        step_x, side_x = 1, (map_x + 1.0 - pos_x) * delta_x
    if ray_dir_y < 0:
        step_y, side_y = -1, (pos_y - map_y) * delta_y
    else:
        step_y, side_y = 1, (map_y + 1.0 - pos_y) * delta_y

    while True:
        if side_x < side_y:
            side_x += delta_x
            map_x += step_x
            side = 0
        else:
            side_y += delta_y
            map_y += step_y
            side = 1
        cell = _cell(grid, map_x, map_y)
        if cell is None:
            raise ValueError(f"ray left the map at ({map_x}, {map_y})")
        if cell == "1":
            break

    if side == 0:
        distance = (map_x - pos_x + (1 - step_x) // 2) / ray_dir_x
        wall_x = pos_y + distance * ray_dir_y
    else:
        distance = (map_y - pos_y + (1 - step_y) // 2) / ray_dir_y
        wall_x = pos_x + distance * ray_dir_x
    wall_x -= math.floor(wall_x)
    return RayHit(map_x, map_y, side, distance, wall_for(side, ray_dir_x, ray_dir_y), wall_x)


def _draw_column(frame: Texture, tex: Texture, hit: RayHit, ray_dir_x: float,
                 ray_dir_y: float, x: int) -> None:
    height = frame.height
    tex_x = int(hit.wall_x * tex.width)
    if (hit.side == 0 and ray_dir_x > 0) or (hit.side == 1 and ray_dir_y < 0):
        tex_x = tex.width - tex_x - 1
    line_h = height if hit.distance == 0 else int(height / hit.distance)
    if line_h <= 0:
        return
    top = max(height // 2 - line_h // 2, 0)
    bottom = min(height // 2 + line_h // 2, height)
    step = tex.height / line_h
    tex_pos = (top - height // 2 + line_h // 2) * step
    column = tex.width - tex_x - 1
    for y in range(top, bottom):
        tex_y = min(int(tex_pos), tex.height - 1)
        tex_pos += step
        frame.put_pixel(x, y, tex.get_pixel(column, tex_y))


def render_frame(
    frame: Texture,
    textures: Sequence[Texture],
    grid: Sequence[str],
    player: Player,
    colors: tuple[int, int],
) -> Texture:
    """Draw ceiling, floor and textured walls seen by ``player`` into ``frame``.

    ``textures`` is indexed by :class:`Wall`; ``colors`` is (ceiling, floor).
    """
    ceiling, floor = colors
    frame.fill_background(ceiling, floor)
    cam = player.camera
    for x in range(frame.width):
        cam_x = 2.0 * x / frame.width - 1.0
        ray_dir_x = cam.dir_x + cam.plane_x * cam_x
        ray_dir_y = cam.dir_y + cam.plane_y * cam_x
        hit = cast_ray(grid, player.x, player.y, ray_dir_x, ray_dir_y)
        _draw_column(frame, textures[hit.wall], hit, ray_dir_x, ray_dir_y, x)
    return frame