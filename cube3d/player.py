"""Player position, facing and movement on the map grid."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from enum import IntEnum

MOVE_SPEED = 0.10
ROT_SPEED = 0.10

WALL = "1"


class Direction(IntEnum):
    """Compass directions; also selects the wall texture."""

    NONE = 0
    NORTH = 1
    SOUTH = 2
    EAST = 3
    WEST = 4


# (dir_x, dir_y, plane_x, plane_y) for each spawn character.
_NORTH_FACING = (1.0, 0.0, 0.0, 0.66)
_EAST_FACING = (0.0, 1.0, -0.66, 0.0)
_WEST_FACING = (0.0, -1.0, 0.66, 0.0)


@dataclass
class Player:
    """Position, view direction and camera plane of the player."""

    x: float = 0.0
    y: float = 0.0
    dir_x: float = 0.0
    dir_y: float = 0.0
    plane_x: float = 0.0
    plane_y: float = 0.0

    def _move(self, grid: Sequence[Sequence[str]], step: float) -> None:
        new_x = self.x + self.dir_x * step
        new_y = self.y + self.dir_y * step
        if grid[int(new_y)][int(self.x)] != WALL:
            self.y = new_y
        if grid[int(self.y)][int(new_x)] != WALL:
            self.x = new_x

    def _rotate(self, angle: float) -> None:
        cos_a = math.cos(angle)
        sin_a = math.sin(angle)
        self.dir_x, self.dir_y = (
            self.dir_x * cos_a - self.dir_y * sin_a,
            self.dir_x * sin_a + self.dir_y * cos_a,
        )
        self.plane_x, self.plane_y = (
            self.plane_x * cos_a - self.plane_y * sin_a,
            self.plane_x * sin_a + self.plane_y * cos_a,
        )

    def move_forward(self, grid: Sequence[Sequence[str]]) -> None:
        """Step along the view direction, sliding along walls."""
        self._move(grid, MOVE_SPEED)

    def move_backward(self, grid: Sequence[Sequence[str]]) -> None:
        """Step against the view direction, sliding along walls."""
        self._move(grid, -MOVE_SPEED)

    def rotate_left(self) -> None:
        """Turn the view by one rotation step counter-clockwise."""
        self._rotate(-ROT_SPEED)

    def rotate_right(self) -> None:
        """Turn the view by one rotation step clockwise."""
        self._rotate(ROT_SPEED)


def spawn_player(char: str, col: int, row: int) -> Player:
    """Place a player in the middle of map cell (col, row).

    'N' and 'E' face their own way; any other character, 'S' included,
    takes the west-facing orientation.
    """
    if char == "N":
        facing = _NORTH_FACING
    elif char == "E":
        facing = _EAST_FACING
    else:
        facing = _WEST_FACING
    dir_x, dir_y, plane_x, plane_y = facing
    return Player(col + 0.5, row + 0.5, dir_x, dir_y, plane_x, plane_y)