"""Grid ray casting and column drawing for the first-person view."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from cube3d.image import Image
from cube3d.player import WALL, Direction, Player

WIDTH = 800
HEIGHT = 600
FOV_ANGLE = 1.0471975511965979

# Walls seen from (almost) zero distance are drawn with this height instead.
_MAX_WALL_HEIGHT = 1e9


@dataclass(frozen=True)
class RayHit:
    """Where a ray met a wall.

    ``side`` is 0 when a vertical grid line was crossed and 1 for a
    horizontal one; ``distance`` is measured perpendicular to the camera
    plane; ``wall_x`` is the world coordinate along the wall face.
    """

    map_x: int
    map_y: int
    side: int
    distance: float
    wall_x: float
    direction: Direction

    @property
    def wall_height(self) -> float:
        """On-screen height of the wall slice, in pixels."""
        if self.distance == 0:
            return math.inf
        return HEIGHT / (self.distance * math.cos(FOV_ANGLE / 2)) * 0.5


def _delta(component: float) -> float:
    return abs(1 / component) if component else math.inf


def _cell(grid: Sequence[Sequence[str]], x: int, y: int) -> str:
    if 0 <= y < len(grid) and 0 <= x < len(grid[y]):
        return grid[y][x]
    raise ValueError(f"ray left the map at cell ({x}, {y})")


def cast_ray(player: Player, grid: Sequence[Sequence[str]], column: int) -> RayHit:
    """Follow the ray of one screen column through the grid to a wall."""
    camera_x = 2 * column / WIDTH - 1
    dir_x = player.dir_x + player.plane_x * camera_x
    dir_y = player.dir_y + player.plane_y * camera_x
    map_x = int(player.x)
    map_y = int(player.y)
    delta_x = _delta(dir_x)
    delta_y = _delta(dir_y)

    if dir_x < 0:
        step_x = -1
        side_x = (player.x - map_x) * delta_x
    else:
        step_x = 1
        side_x = (map_x + 1.0 - player.x) * delta_x
    if dir_y < 0:
        step_y = -1
        side_y = (player.y - map_y) * delta_y
    else:
        step_y = 1
        side_y = (map_y + 1.0 - player.y) * delta_y

    while True:
        if side_x < side_y:
            side_x += delta_x
            map_x += step_x
            side = 0
        else:
            side_y += delta_y
            map_y += step_y
            side = 1
        if _cell(grid, map_x, map_y) == WALL:
            break

    if side == 0:
        distance = (map_x - player.x + (1 - step_x) / 2) / dir_x
        wall_x = player.y + distance * dir_y
    else:
        distance = (map_y - player.y + (1 - step_y) / 2) / dir_y
        wall_x = player.x + distance * dir_x

    if side == 0 and dir_x > 0:
        direction = Direction.NORTH
    elif side == 0 and dir_x < 0:
        direction = Direction.SOUTH
    elif side == 1 and dir_y > 0:
        direction = Direction.EAST
    else:
        direction = Direction.WEST
    return RayHit(map_x, map_y, side, distance, wall_x, direction)


def draw_column(frame: Image, column: int, hit: RayHit, scene) -> None:
    """Paint one screen column: ceiling, textured wall slice, then floor."""
    height = min(hit.wall_height, _MAX_WALL_HEIGHT)
    start = int((HEIGHT - height) / 2)
    end = int(start + height)
    texture = scene.textures[hit.direction]
    for y in range(HEIGHT):
        if y < start:
            color = scene.sky_color
        elif y < end:
            color = texture.sample(hit.wall_x, (y - start) / height)
        else:
            color = scene.floor_color
        frame.put_pixel(column, y, color)


def render(scene, frame: Image) -> Image:
    """Draw the whole view of the scene's player into frame and return it."""
    if scene.player is None:
        raise ValueError("scene has no player to render from")
    for column in range(WIDTH):
        hit = cast_ray(scene.player, scene.grid, column)
        draw_column(frame, column, hit, scene)
    return frame