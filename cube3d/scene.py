"""Reading and validating .cub scene descriptions."""

from __future__ import annotations

import os
import re
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

from cube3d.image import get_color
from cube3d.player import Direction, Player, spawn_player
from cube3d.xpm import load_xpm

MAX_MAP_WIDTH = 40
MAX_MAP_HEIGHT = 40
DEFAULT_SKY_COLOR = 255
DEFAULT_FLOOR_COLOR = 16711680

_WHITESPACE = " \t\n\v\f\r"
_MAP_CHARS = frozenset("01NSEW ")
_SPAWN_CHARS = frozenset("NSEW")
_TEXTURE_KEYS = {
    "NO": Direction.NORTH,
    "SO": Direction.SOUTH,
    "EA": Direction.EAST,
    "WE": Direction.WEST,
}
_COLOR_PATTERN = re.compile(r"([0-9]+),([0-9]+),([0-9]+)\n?")

TextureLoader = Callable[[str], Any]


class ErrorKind(IntEnum):
    """Failure categories; the value is the error code reported to users."""

    INITIALIZATION_ERROR = 1
    WRONG_ARG_NUMBER = 2
    WRONG_MAP_NAME = 3
    OPEN_ERROR = 4
    MAP_ERROR = 5


class SceneError(Exception):
    """A scene could not be loaded; ``kind`` tells why."""

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind


def _map_error(message: str) -> SceneError:
    return SceneError(ErrorKind.MAP_ERROR, message)


@dataclass
class Scene:
    """A parsed scene: wall textures, colours, map grid and spawn point.

    ``player`` is None when the map has no spawn point.
    """

    textures: dict[Direction, Any] = field(default_factory=dict)
    floor_color: int = DEFAULT_FLOOR_COLOR
    sky_color: int = DEFAULT_SKY_COLOR
    grid: list[list[str]] = field(default_factory=list)
    player: Player | None = None


def is_map_name_valid(name: str) -> bool:
    """Tell whether a path names a .cub file with a non-trivial base name."""
    basename = name.rsplit("/", 1)[-1]
    # Only the last three characters are compared; the dot is not required.
    return len(basename) > 4 and name.endswith("cub")


def parse_color(text: str) -> int:
    """Parse ``R,G,B`` (each 0-255, optional leading whitespace) to 0xRRGGBB."""
    match = _COLOR_PATTERN.fullmatch(text.lstrip(_WHITESPACE))
    if match is None:
        raise _map_error(f"bad colour: {text!r}")
    red, green, blue = (int(part) for part in match.groups())
    if max(red, green, blue) > 255:
        raise _map_error(f"colour component above 255: {text!r}")
    return get_color(red, green, blue)


def _cell(grid: Sequence[Sequence[str]], x: int, y: int) -> str | None:
    if 0 <= y < len(grid) and 0 <= x < len(grid[y]):
        return grid[y][x]
    return None


def is_valid_map(grid: Sequence[Sequence[str]]) -> bool:
    """Tell whether every floor cell is enclosed and there is at least one."""
    floors = 0
    for y, row in enumerate(grid):
        for x, char in enumerate(row):
            if char != "0":
                continue
            floors += 1
            for nx, ny in ((x - 1, y), (x + 1, y), (x, y - 1), (x, y + 1)):
                neighbour = _cell(grid, nx, ny)
                if neighbour is None or neighbour == " ":
                    return False
    return floors >= 1


class SceneParser:
    """Reads the lines of a scene description into a :class:`Scene`."""

    def __init__(self, texture_loader: TextureLoader = load_xpm) -> None:
        self._load_texture = texture_loader
        self._reset()

    def _reset(self) -> None:
        self._textures: dict[Direction, Any] = {}
        self._floor: int | None = None
        self._sky: int | None = None
        self._grid = [[" "] * MAX_MAP_WIDTH for _ in range(MAX_MAP_HEIGHT)]
        self._player: Player | None = None
        self._row = 0
        self._map_started = False

    def parse(self, lines: Iterable[str]) -> Scene:
        """Parse lines (newlines kept) and return the validated scene."""
        self._reset()
        lines = list(lines)
        for number, line in enumerate(lines, 1):
            self._feed(line, more_follow=number < len(lines))
        if not is_valid_map(self._grid):
            raise _map_error("map is not closed or has no floor")
        missing = [d.name for d in _TEXTURE_KEYS.values() if d not in self._textures]
        if missing:
            raise _map_error(f"missing textures: {', '.join(missing)}")
        if self._floor is None or self._sky is None:
            raise _map_error("floor and ceiling colours are both required")
        return Scene(
            textures=dict(self._textures),
            floor_color=self._floor,
            sky_color=self._sky,
            grid=self._grid,
            player=self._player,
        )

    def _feed(self, line: str, more_follow: bool) -> None:
        if not self._map_started:
            if line.startswith("\n"):
                return
            if self._parse_texture(line) or self._parse_color(line):
                return
            self._map_started = True
        self._parse_map_row(line, more_follow)

    def _parse_texture(self, line: str) -> bool:
        direction = _TEXTURE_KEYS.get(line[:2])
        if direction is None:
            return False
        if direction in self._textures:
            raise _map_error(f"texture {direction.name} already set")
        path = line[2:].lstrip(_WHITESPACE).rstrip(" \n")
        try:
            self._textures[direction] = self._load_texture(path)
        except (OSError, ValueError) as exc:
            raise _map_error(f"cannot load texture {path!r}: {exc}") from exc
        return True

    def _parse_color(self, line: str) -> bool:
        if line.startswith("F"):
            if self._floor is not None:
                raise _map_error("floor colour set twice")
            self._floor = parse_color(line[1:])
            return True
        if line.startswith("C"):
            if self._sky is not None:
                raise _map_error("ceiling colour set twice")
            self._sky = parse_color(line[1:])
            return True
        return False

    def _parse_map_row(self, line: str, more_follow: bool) -> None:
        if len(line) >= MAX_MAP_WIDTH:
            raise _map_error(f"map row longer than {MAX_MAP_WIDTH - 2} cells")
        if self._row >= MAX_MAP_HEIGHT:
            raise _map_error(f"map taller than {MAX_MAP_HEIGHT} rows")
        nonempty = 0
        for col, char in enumerate(line):
            if char == "\n":
                if not nonempty and more_follow:
                    raise _map_error("empty line inside the map")
                break
            if char not in _MAP_CHARS:
                raise _map_error(f"invalid map character {char!r}")
            if char != " ":
                nonempty += 1
            self._grid[self._row][col] = char
            if char in _SPAWN_CHARS:
                if self._player is not None:
                    raise _map_error("more than one spawn point")
                self._player = spawn_player(char, col, self._row)
        if nonempty:
            self._row += 1


def parse_scene(lines: Iterable[str], texture_loader: TextureLoader = load_xpm) -> Scene:
    """Parse the lines of a scene description."""
    return SceneParser(texture_loader).parse(lines)


def load_scene(
    path: str | os.PathLike[str], texture_loader: TextureLoader = load_xpm
) -> Scene:
    """Check the file name, then read and parse a .cub scene file."""
    name = os.fspath(path)
    if not is_map_name_valid(name):
        raise SceneError(ErrorKind.WRONG_MAP_NAME, f"not a .cub file: {name}")
    try:
        handle = open(name, encoding="utf-8", errors="surrogateescape", newline="")
    except OSError as exc:
        raise SceneError(ErrorKind.OPEN_ERROR, f"cannot open {name}: {exc}") from exc
    with handle:
        return parse_scene(handle, texture_loader)