"""Parsing and validation of .cub scene descriptions."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path

from cubraycast.textutil import atoi, read_lines, rgb_to_int, split

ERR_FILE = "Could not open file."
ERR_MAP = "Invalid map."
ERR_CONFIG = "Invalid configuration."

CONFIG_ENTRIES = 6
PLAYER_CHARS = frozenset("NSEW")
MAP_CHARS = frozenset("01 ") | PLAYER_CHARS


class SceneError(Exception):
    """Raised when a scene file cannot be read or is invalid."""


class Direction(IntEnum):
    """Wall faces, numbered as texture slots."""

    NORTH = 0
    SOUTH = 1
    EAST = 2
    WEST = 3


_TEXTURE_KEYS = {
    "NO ": Direction.NORTH,
    "SO ": Direction.SOUTH,
    "WE ": Direction.WEST,
    "EA ": Direction.EAST,
}


def _empty_textures() -> dict[Direction, str | None]:
    return {direction: None for direction in Direction}


@dataclass
class Scene:
    """A parsed scene: wall textures, colours and the map grid."""

    grid: list[str]
    player_x: int
    player_y: int
    player_dir: str
    textures: dict[Direction, str | None] = field(default_factory=_empty_textures)
    floor_color: int = -1
    ceiling_color: int = -1

    @property
    def width(self) -> int:
        return len(self.grid[0]) if self.grid else 0

    @property
    def height(self) -> int:
        return len(self.grid)


@dataclass
class _Config:
    textures: dict[Direction, str | None] = field(default_factory=_empty_textures)
    floor_color: int = -1
    ceiling_color: int = -1


def is_player(char: str) -> bool:
    """True for a player start marker."""
    return char in PLAYER_CHARS


def _parse_color(text: str) -> int:
    parts = split(text.lstrip(" "), ",")
    if len(parts) != 3:
        raise SceneError(ERR_CONFIG)
    values = [atoi(part) for part in parts]
    if any(not 0 <= value <= 255 for value in values):
        raise SceneError(ERR_CONFIG)
    return rgb_to_int(*values)


def _apply_config_line(config: _Config, line: str) -> None:
    for prefix, direction in _TEXTURE_KEYS.items():
        if line.startswith(prefix):
            config.textures[direction] = line[len(prefix):].lstrip(" ")
            return
    if line.startswith("F "):
        config.floor_color = _parse_color(line[2:])
    elif line.startswith("C "):
        config.ceiling_color = _parse_color(line[2:])
    else:
        raise SceneError(ERR_CONFIG)


def _parse_config(lines: Iterator[str]) -> _Config:
    config = _Config()
    count = 0
    while count < CONFIG_ENTRIES:
        line = next(lines, None)
        if line is None:
            raise SceneError(ERR_CONFIG)
        if not line:
            continue
        _apply_config_line(config, line)
        count += 1
    return config


def pad_grid(lines: Sequence[str]) -> list[str]:
    """Pad every map line with spaces to the width of the longest one."""
    width = max((len(line) for line in lines), default=0)
    return [line.ljust(width) for line in lines]


def check_map(grid: Sequence[str]) -> None:
    """Raise SceneError unless the padded grid is a closed, valid map."""
    height = len(grid)
    for y, row in enumerate(grid):
        width = len(row)
        for x, char in enumerate(row):
            if char not in MAP_CHARS:
                raise SceneError(ERR_MAP)
            if char != "0" and not is_player(char):
                continue
            if x == 0 or y == 0 or x == width - 1 or y == height - 1:
                raise SceneError(ERR_MAP)
            neighbours = (grid[y - 1][x], grid[y + 1][x], row[x - 1], row[x + 1])
            if " " in neighbours:
                raise SceneError(ERR_MAP)


def find_player(grid: Sequence[str]) -> tuple[int, int, str, list[str]]:
    """Locate the single player marker.

    Returns its column, row and direction letter, and a copy of the grid
    with the marker replaced by floor.
    """
    found: tuple[int, int, str] | None = None
    for y, row in enumerate(grid):
        for x, char in enumerate(row):
            if is_player(char):
                if found is not None:
                    raise SceneError(ERR_MAP)
                found = (x, y, char)
    if found is None:
        raise SceneError(ERR_MAP)
    x, y, char = found
    rows = list(grid)
    rows[y] = rows[y][:x] + "0" + rows[y][x + 1:]
    return x, y, char, rows


def parse_scene(lines: Iterable[str]) -> Scene:
    """Build a Scene from the lines of a .cub description."""
    remaining = iter(lines)
    config = _parse_config(remaining)
    map_lines = [line for line in remaining if line]
    if not map_lines:
        raise SceneError(ERR_MAP)
    grid = pad_grid(map_lines)
    check_map(grid)
    x, y, direction, grid = find_player(grid)
    return Scene(
        grid=grid,
        player_x=x,
        player_y=y,
        player_dir=direction,
        textures=config.textures,
        floor_color=config.floor_color,
        ceiling_color=config.ceiling_color,
    )


def load_scene(path: str | Path) -> Scene:
    """Read and parse a scene file."""
    try:
        stream = open(path, encoding="latin-1", newline="")
    except OSError as exc:
        raise SceneError(ERR_FILE) from exc
    with stream:
        return parse_scene(read_lines(stream))