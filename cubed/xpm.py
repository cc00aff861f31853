"""Reader for XPM images, producing :class:`~cubed.texture.Texture` objects."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from pathlib import Path

from cubed.colornames import lookup_color
from cubed.texture import Texture

_TRANSPARENT = 0xFF000000
_HEX = re.compile(r"\s*([+-]?)(?:0[xX](?=[0-9a-fA-F]))?([0-9a-fA-F]*)")
_INT = re.compile(r"\s*([+-]?\d+)")
_WORD_SPLIT = re.compile(r"[ \t]+")


class XpmError(ValueError):
    """Raised when XPM data cannot be read or parsed."""


def _words(line: str) -> list[str]:
    return [word for word in _WORD_SPLIT.split(line) if word]


def _atoi(text: str) -> int:
    match = _INT.match(text)
    return int(match.group(1)) if match else 0


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def _find_outside_quotes(text: str, token: str, start: int) -> int:
    in_quote = False
    for pos in range(start, len(text) - len(token) + 1):
        if text[pos] == '"':
            in_quote = not in_quote
        if not in_quote and text.startswith(token, pos):
            return pos
    return -1


def _blank(chars: list[str], start: int, end: int) -> None:
    for pos in range(start, end):
        if chars[pos] != "\n":
            chars[pos] = " "


def strip_comments(text: str) -> str:
    """Replace ``/* */`` and ``//`` comments outside quoted strings with spaces."""
    chars = list(text)
    current = text
    pos = 0
    while (begin := _find_outside_quotes(current, "/*", pos)) != -1:
        close = current.find("*/", begin + 2)
        end = len(current) if close == -1 else close + 2
        _blank(chars, begin, end)
        current = "".join(chars)
        pos = begin
    pos = 0
    while (begin := _find_outside_quotes(current, "//", pos)) != -1:
        newline = current.find("\n", begin + 2)
        end = len(current) if newline == -1 else newline + 1
        _blank(chars, begin, end)
        current = "".join(chars)
        pos = begin
    return current


def quoted_strings(text: str) -> Iterator[str]:
    """Yield the contents of each double-quoted string in ``text``, in order."""
    pos = 0
    while True:
        start = text.find('"', pos)
        if start == -1:
            return
        end = text.find('"', start + 1)
        if end == -1:
            return
        yield text[start + 1:end]
        pos = end + 1


def parse_color(name: str, end: str | None = None) -> int:
    """Resolve an XPM colour value.

    ``#hex`` values are read as hexadecimal. Otherwise ``name`` (joined with
    ``end`` by a space when given) is looked up in the colour-name table;
    ``none`` gives -1 and unknown names give 0.
    """
    if name.startswith("#"):
        match = _HEX.match(name, 1)
        digits = match.group(2) if match else ""
        value = int(digits, 16) if digits else 0
        if match and match.group(1) == "-":
            value = -value
        return _to_int32(value)
    full = f"{name} {end}" if end is not None else name
    try:
        return lookup_color(full)
    except KeyError:
        return 0


def _next_line(lines: Iterator[str], what: str) -> str:
    line = next(lines, None)
    if line is None:
        raise XpmError(f"missing {what}")
    return line


def parse_xpm_lines(lines: Iterable[str]) -> Texture:
    """Build a texture from XPM strings: header, colour table, then pixel rows."""
    it = iter(lines)
    header = _words(_next_line(it, "header line"))
    if len(header) < 4:
        raise XpmError("header needs width, height, colour count and chars per pixel")
    width, height, ncolors, cpp = (_atoi(word) for word in header[:4])
    if width <= 0 or height <= 0 or ncolors <= 0 or cpp <= 0:
        raise XpmError(f"invalid header values: {' '.join(header[:4])}")

    colors: dict[str, int] = {}
    last_wins = cpp <= 2
    for _ in range(ncolors):
        line = _next_line(it, "colour definition")
        key = line[:cpp]
        tokens = _words(line[cpp:])
        try:
            index = tokens.index("c") + 1
        except ValueError:
            raise XpmError(f"colour line without 'c' key: {line!r}") from None
        if index >= len(tokens):
            raise XpmError(f"colour line without value: {line!r}")
        end = tokens[index + 1] if index + 1 < len(tokens) else None
        value = parse_color(tokens[index], end)
        if last_wins or key not in colors:
            colors[key] = value

    pixels: list[int] = []
    for _ in range(height):
        row = _next_line(it, "pixel row")
        if len(row) < width * cpp:
            raise XpmError(f"pixel row too short: {row!r}")
        for x in range(width):
            color = colors.get(row[x * cpp:(x + 1) * cpp], 0)
            pixels.append(_TRANSPARENT if color == -1 else color)
    return Texture(width, height, pixels)


def parse_xpm(text: str) -> Texture:
    """Parse the text of an XPM file."""
    return parse_xpm_lines(quoted_strings(strip_comments(text)))


def load_xpm(path: str | Path) -> Texture:
    """Read and parse an XPM file, raising :class:`XpmError` on any failure."""
    try:
        text = Path(path).read_text(encoding="latin-1")
    except OSError as exc:
        raise XpmError(f"cannot read {path}: {exc}") from exc
    return parse_xpm(text)