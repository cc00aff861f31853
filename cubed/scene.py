"""Parsing and validation of ``.cub`` scene descriptions.

A scene file lists six elements (the four wall textures ``NO``, ``SO``,
``WE`` and ``EA`` and the floor ``F`` and ceiling ``C`` colours), followed by
the map layout made of ``1`` walls, ``0`` floor, spaces for the void and a
single ``N``/``S``/``E``/``W`` player spawn.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

TEXTURE_KEYS = ("NO ", "SO ", "WE ", "EA ")
COLOR_KEYS = ("F ", "C ")
_ELEMENT_KEYS = COLOR_KEYS + TEXTURE_KEYS
_MAP_CHARS = frozenset("10NSEW ")
_SPAWN_CHARS = frozenset("NSEW")
_DIGITS = frozenset("0123456789")
_LINE = re.compile(r"[^\n]*\n|[^\n]+")


class MapError(ValueError):
    """Raised when a scene file is missing, malformed or describes an open map."""


@dataclass(frozen=True)
class Scene:
    """A validated scene: texture paths, colours and the map grid."""

    textures: tuple[str, str, str, str]
    ceiling: int
    floor: int
    grid: tuple[str, ...]

    @property
    def colors(self) -> tuple[int, int]:
        """Ceiling and floor colours, in that order."""
        return self.ceiling, self.floor

    @property
    def height(self) -> int:
        return len(self.grid)

    @property
    def width(self) -> int:
        return max((len(row) for row in self.grid), default=0)


def _split_lines(text: str) -> Iterator[str]:
    """Yield the lines of ``text``, each keeping its trailing newline."""
    for match in _LINE.finditer(text):
        yield match.group(0)


def _element_key(line: str) -> str | None:
    return next((key for key in _ELEMENT_KEYS if line.startswith(key)), None)


def _at(row: str, x: int) -> str:
    return row[x] if 0 <= x < len(row) else ""


def color_value(line: str, start: int) -> int:
    """Read one colour component (0-255) of ``line`` starting at ``start``.

    Leading spaces are skipped; the number must have one to three digits and
    be followed by the end of the line, a comma, a space or a newline.
    """
    pos = start
    while pos < len(line) and line[pos] == " ":
        pos += 1
    end = pos
    while end < len(line) and line[end] in _DIGITS:
        end += 1
    digits = line[pos:end]
    if not 1 <= len(digits) <= 3:
        raise MapError(f"invalid colour component in {line.rstrip()!r}")
    if end < len(line) and line[end] not in ", \n":
        raise MapError(f"invalid colour component in {line.rstrip()!r}")
    value = int(digits)
    if value > 255:
        raise MapError(f"colour component out of range in {line.rstrip()!r}")
    return value


def rgb_to_hex(red: int, green: int, blue: int) -> int:
    """Pack three 0-255 components into a 0xRRGGBB value."""
    return (red << 16) + (green << 8) + blue


def check_map_format(path: str | Path) -> str:
    """Return ``path`` as a string if it names a ``.cub`` file, else raise."""
    name = str(path)
    if len(name) < 4 or not name.endswith(".cub"):
        raise MapError("map is not a .cub file")
    return name


def _parse_color_line(line: str) -> int:
    red = color_value(line, 1)
    first = line.find(",", 1)
    if first == -1:
        raise MapError(f"colour needs three components: {line.rstrip()!r}")
    green = color_value(line, first + 1)
    second = line.find(",", first + 1)
    if second == -1:
        raise MapError(f"colour needs three components: {line.rstrip()!r}")
    blue = color_value(line, second + 1)
    return rgb_to_hex(red, green, blue)


def _texture_path(line: str) -> str:
    return line[2:].lstrip(" \t").split("\n", 1)[0]


def parse_scene_infos(lines: Iterable[str]) -> tuple[tuple[str, str, str, str], int, int]:
    """Read the six scene elements from ``lines``.

    Returns ``(textures, ceiling, floor)`` where ``textures`` holds the north,
    south, west and east texture paths. Each element must appear exactly once.
    """
    textures = ["", "", "", ""]
    colors: dict[str, int] = {}
    seen: set[str] = set()
    for line in lines:
        key = _element_key(line)
        if key is None:
            continue
        if key in seen:
            raise MapError(f"duplicate element {key.strip()!r}")
        seen.add(key)
        if key in COLOR_KEYS:
            colors[key] = _parse_color_line(line)
        else:
            textures[TEXTURE_KEYS.index(key)] = _texture_path(line)
    missing = [key.strip() for key in _ELEMENT_KEYS if key not in seen]
    if missing:
        raise MapError(f"missing elements: {', '.join(missing)}")
    return (textures[0], textures[1], textures[2], textures[3]), colors["C "], colors["F "]


def parse_map_layout(lines: Iterable[str]) -> tuple[str, ...]:
    """Return the map rows that follow the six elements, without newlines.

    Blank lines directly after the elements are skipped; every line from the
    first map line to the end of the input becomes a row.
    """
    it = iter(lines)
    elements = 0
    line = next(it, None)
    while line is not None and elements != 6:
        if _element_key(line) is not None:
            elements += 1
        line = next(it, None)
    while line is not None and line.startswith("\n"):
        line = next(it, None)
    if line is None:
        raise MapError("missing map in file")
    return tuple(row.split("\n", 1)[0] for row in (line, *it))


def _open_cell(grid: tuple[str, ...] | list[str], walls: set[int], x: int, y: int) -> bool:
    row = grid[y]
    cell = row[x]
    if cell == "0" and x not in walls:
        return True
    if cell == "1":
        walls.add(x)
    if cell == " " and "0" in (
        _at(grid[y + 1], x),
        _at(grid[y - 1], x),
        _at(row, x - 1) if x > 0 else "",
        _at(row, x + 1),
    ):
        return True
    first = len(row) - len(row.lstrip(" "))
    return cell == "0" and (x == first or x == len(row) - 1)


def check_map_bounds(grid: Iterable[str]) -> None:
    """Raise :class:`MapError` unless every floor cell is enclosed by walls."""
    rows = tuple(grid)
    if not rows:
        raise MapError("missing map in file")
    if "0" in rows[0]:
        raise MapError("map bounds must be walls")
    walls = {x for x, cell in enumerate(rows[0]) if cell == "1"}
    for y in range(1, len(rows) - 1):
        for x in range(len(rows[y])):
            if _open_cell(rows, walls, x, y):
                raise MapError("map bounds must be walls")
    if "0" in rows[-1]:
        raise MapError("map bounds must be walls")


def _spawn_inside(rows: tuple[str, ...], x: int, y: int) -> bool:
    if x == 0 or y == 0 or y + 1 >= len(rows):
        return False
    row = rows[y]
    right = _at(row, x + 1)
    if right in ("", "\n"):
        return False
    return " " not in (_at(rows[y + 1], x), _at(rows[y - 1], x), right, _at(row, x - 1))


def check_map_chars(grid: Iterable[str]) -> None:
    """Raise :class:`MapError` on unknown characters or unless exactly one spawn lies inside."""
    rows = tuple(grid)
    count = 0
    for y, row in enumerate(rows):
        for x, cell in enumerate(row):
            if cell not in _MAP_CHARS:
                raise MapError("invalid characters in map")
            if cell in _SPAWN_CHARS and _spawn_inside(rows, x, y):
                count += 1
    if count < 1:
        raise MapError("no player spawn in map")
    if count > 1:
        raise MapError("too many player spawns in map")


def parse_scene(text: str) -> Scene:
    """Parse and validate the full text of a scene file."""
    lines = list(_split_lines(text))
    textures, ceiling, floor = parse_scene_infos(lines)
    grid = parse_map_layout(lines)
    check_map_bounds(grid)
    check_map_chars(grid)
    return Scene(textures=textures, ceiling=ceiling, floor=floor, grid=grid)


def load_scene(path: str | Path) -> Scene:
    """Read and parse a ``.cub`` scene file."""
    try:
        text = Path(path).read_text(encoding="utf-8", errors="surrogateescape")
    except OSError as exc:
        raise MapError(f"unable to open the map: {exc}") from exc
    return parse_scene(text)