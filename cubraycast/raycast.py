"""Ray casting of the map into a frame of 32-bit pixels."""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import ClassVar

from cubraycast.player import Player
from cubraycast.scene import Direction
from cubraycast.xpm import Texture

WINDOW_WIDTH = 1280
WINDOW_HEIGHT = 720
INFINITY_DIST = 1e30
SHADE_MASK = 8355711

_MAX_LINE_HEIGHT = 2**31 - 1


@dataclass(frozen=True)
class Ray:
    """One screen column's ray and the wall slice it hit."""

    camera_x: float
    ray_dir_x: float
    ray_dir_y: float
    map_x: int
    map_y: int
    step_x: int
    step_y: int
    side_dist_x: float
    side_dist_y: float
    delta_dist_x: float
    delta_dist_y: float
    side: int
    perp_wall_dist: float
    line_height: int
    draw_start: int
    draw_end: int
    tex_num: Direction
    wall_x: float


def _blank_pixels() -> list[int]:
    return [0] * (WINDOW_WIDTH * WINDOW_HEIGHT)


@dataclass
class Frame:
    """A window-sized image of 32-bit pixel values, row by row."""

    width: ClassVar[int] = WINDOW_WIDTH
    height: ClassVar[int] = WINDOW_HEIGHT
    pixels: list[int] = field(default_factory=_blank_pixels)

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Store a colour; points outside the frame are ignored."""
        if x < 0 or y < 0 or x >= self.width or y >= self.height:
            return
        self.pixels[y * self.width + x] = color & 0xFFFFFFFF

    def get_pixel(self, x: int, y: int) -> int:
        """Pixel value at a point; raises IndexError outside the frame."""
        if x < 0 or y < 0 or x >= self.width or y >= self.height:
            raise IndexError(f"pixel ({x}, {y}) is outside the frame")
        return self.pixels[y * self.width + x]

    def _fill_rows(self, first: int, last: int, color: int) -> None:
        start, stop = first * self.width, last * self.width
        self.pixels[start:stop] = [color & 0xFFFFFFFF] * (stop - start)


def _is_wall(grid: Sequence[str], x: int, y: int) -> bool:
    return grid[y][x] == "1"


def _inside(grid: Sequence[str], x: int, y: int) -> bool:
    return 0 <= y < len(grid) and 0 <= x < len(grid[y])


def cast_ray(player: Player, grid: Sequence[str], x: int) -> Ray:
    """Cast the ray for screen column x and measure the wall it meets.

    Raises ValueError when the ray leaves the map without hitting a wall.
    """
    camera_x = 2.0 * x / WINDOW_WIDTH - 1.0
    ray_dir_x = player.dir_x + player.plane_x * camera_x
    ray_dir_y = player.dir_y + player.plane_y * camera_x
    map_x, map_y = int(player.pos_x), int(player.pos_y)
    delta_x = INFINITY_DIST if ray_dir_x == 0 else abs(1.0 / ray_dir_x)
    delta_y = INFINITY_DIST if ray_dir_y == 0 else abs(1.0 / ray_dir_y)

    if ray_dir_x < 0:
        step_x, side_x = -1, (player.pos_x - map_x) * delta_x
    else:
        step_x, side_x = 1, (map_x + 1.0 - player.pos_x) * delta_x
    if ray_dir_y < 0:
        step_y, side_y = -1, (player.pos_y - map_y) * delta_y
    else:
        step_y, side_y = 1, (map_y + 1.0 - player.pos_y) * delta_y

    while True:
        if side_x < side_y:
            side_x += delta_x
            map_x += step_x
            side = 0
        else:
            side_y += delta_y
            map_y += step_y
            side = 1
        if not _inside(grid, map_x, map_y):
            raise ValueError("ray left the map without hitting a wall")
        if _is_wall(grid, map_x, map_y):
            break

    if side == 0:
        perp = (map_x - player.pos_x + (1 - step_x) // 2) / ray_dir_x
    else:
        perp = (map_y - player.pos_y + (1 - step_y) // 2) / ray_dir_y

    quotient = WINDOW_HEIGHT / perp if perp > 0 else math.inf
    line_height = int(quotient) if quotient < _MAX_LINE_HEIGHT else _MAX_LINE_HEIGHT
    draw_start = max(0, -(line_height // 2) + WINDOW_HEIGHT // 2)
    draw_end = min(WINDOW_HEIGHT - 1, line_height // 2 + WINDOW_HEIGHT // 2)

    if side == 0:
        tex_num = Direction.EAST if ray_dir_x > 0 else Direction.WEST
        wall_x = player.pos_y + perp * ray_dir_y
    else:
        tex_num = Direction.SOUTH if ray_dir_y > 0 else Direction.NORTH
        wall_x = player.pos_x + perp * ray_dir_x
    wall_x -= math.floor(wall_x)

    return Ray(
        camera_x=camera_x,
        ray_dir_x=ray_dir_x,
        ray_dir_y=ray_dir_y,
        map_x=map_x,
        map_y=map_y,
        step_x=step_x,
        step_y=step_y,
        side_dist_x=side_x,
        side_dist_y=side_y,
        delta_dist_x=delta_x,
        delta_dist_y=delta_y,
        side=side,
        perp_wall_dist=perp,
        line_height=line_height,
        draw_start=draw_start,
        draw_end=draw_end,
        tex_num=tex_num,
        wall_x=wall_x,
    )


def _texture_column(ray: Ray, texture: Texture) -> tuple[int, float, float]:
    tex_x = int(ray.wall_x * texture.width)
    if (ray.side == 0 and ray.ray_dir_x > 0) or (ray.side == 1 and ray.ray_dir_y < 0):
        tex_x = texture.width - tex_x - 1
    tex_step = texture.height / ray.line_height
    tex_pos = (ray.draw_start - WINDOW_HEIGHT // 2 + ray.line_height // 2) * tex_step
    return tex_x, tex_step, tex_pos


def _draw_wall(frame: Frame, x: int, ray: Ray, texture: Texture) -> None:
    tex_x, tex_step, tex_pos = _texture_column(ray, texture)
    mask = texture.height - 1
    for y in range(ray.draw_start, ray.draw_end):
        tex_y = int(tex_pos) & mask
        tex_pos += tex_step
        color = texture.pixel(tex_x, tex_y)
        if ray.side == 1:
            color = (color >> 1) & SHADE_MASK
        frame.put_pixel(x, y, color)


def render_frame(
    frame: Frame,
    player: Player,
    grid: Sequence[str],
    textures: Mapping[int, Texture],
    floor_color: int,
    ceiling_color: int,
) -> Frame:
    """Draw ceiling, floor and textured walls into the frame and return it."""
    half = WINDOW_HEIGHT // 2
    frame._fill_rows(0, half, ceiling_color)
    frame._fill_rows(half, WINDOW_HEIGHT, floor_color)
    for x in range(WINDOW_WIDTH):
        ray = cast_ray(player, grid, x)
        _draw_wall(frame, x, ray, textures[ray.tex_num])
    return frame