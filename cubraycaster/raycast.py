"""Ray casting of the textured walls, floor and ceiling into a frame."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import MutableSequence

from .state import TEX_HEIGHT, TEX_WIDTH, Game

_DIM_MASK = 8355711


@dataclass
class Ray:
    """One screen column's ray and the wall slice it produces."""

    camera_x: float = 0.0
    ray_dir_x: float = 0.0
    ray_dir_y: float = 0.0
    map_x: int = 0
    map_y: int = 0
    side_dist_x: float = 0.0
    side_dist_y: float = 0.0
    delta_dist_x: float = 0.0
    delta_dist_y: float = 0.0
    perp_wall_dist: float = 0.0
    step_x: int = 0
    step_y: int = 0
    hit: bool = False
    side: int = 0
    line_height: int = 0
    draw_start: int = 0
    draw_end: int = 0


def _half(value: int) -> int:
    """Halve an integer, truncating toward zero."""
    return int(value / 2)


def _inverse_abs(value: float) -> float:
    return math.inf if value == 0 else abs(1 / value)


def _divide(numerator: float, denominator: float) -> float:
    if denominator == 0:
        return math.nan if numerator == 0 else math.copysign(math.inf, numerator)
    return numerator / denominator


def init_ray(game: Game, x: int) -> Ray:
    """Set up the ray for screen column ``x``."""
    player = game.player
    camera_x = 2 * x / game.win_width - 1
    ray = Ray(
        camera_x=camera_x,
        ray_dir_x=player.dir_x + player.plane_x * camera_x,
        ray_dir_y=player.dir_y + player.plane_y * camera_x,
        map_x=int(player.pos_x),
        map_y=int(player.pos_y),
    )
    ray.delta_dist_x = _inverse_abs(ray.ray_dir_x)
    ray.delta_dist_y = _inverse_abs(ray.ray_dir_y)
    if ray.ray_dir_x < 0:
        ray.step_x = -1
        ray.side_dist_x = (player.pos_x - ray.map_x) * ray.delta_dist_x
    else:
        ray.step_x = 1
        ray.side_dist_x = (ray.map_x + 1.0 - player.pos_x) * ray.delta_dist_x
    if ray.ray_dir_y < 0:
        ray.step_y = -1
        ray.side_dist_y = (player.pos_y - ray.map_y) * ray.delta_dist_y
    else:
        ray.step_y = 1
        ray.side_dist_y = (ray.map_y + 1.0 - player.pos_y) * ray.delta_dist_y
    return ray


def perform_dda(game: Game, ray: Ray) -> None:
    """Walk the grid until a wall is hit or the ray leaves the map."""
    while not ray.hit:
        if ray.side_dist_x < ray.side_dist_y:
            ray.side_dist_x += ray.delta_dist_x
            ray.map_x += ray.step_x
            ray.side = 0
        else:
            ray.side_dist_y += ray.delta_dist_y
            ray.map_y += ray.step_y
            ray.side = 1
        if (
            ray.map_x < 0
            or ray.map_y < 0
            or ray.map_y >= game.map_height
            or ray.map_x >= len(game.map[ray.map_y])
        ):
            break
        if game.map[ray.map_y][ray.map_x] == "1":
            ray.hit = True


def calc_perp_wall_dist(game: Game, ray: Ray) -> None:
    """Distance to the wall measured perpendicular to the camera plane."""
    player = game.player
    if ray.side == 0:
        offset = ray.map_x - player.pos_x + (1 - ray.step_x) // 2
        ray.perp_wall_dist = _divide(offset, ray.ray_dir_x)
    else:
        offset = ray.map_y - player.pos_y + (1 - ray.step_y) // 2
        ray.perp_wall_dist = _divide(offset, ray.ray_dir_y)


def calc_line_height(game: Game, ray: Ray) -> None:
    """Height of the wall slice and its clamped vertical extent."""
    height = game.win_height
    quotient = _divide(height, ray.perp_wall_dist)
    ray.line_height = int(quotient) if math.isfinite(quotient) else 0
    centre = height // 2
    ray.draw_start = max(_half(-ray.line_height) + centre, 0)
    ray.draw_end = _half(ray.line_height) + centre
    if ray.draw_end >= height:
        ray.draw_end = height - 1


def calculate_wall_x(game: Game, ray: Ray) -> float:
    """Fractional position along the wall where the ray hit it."""
    player = game.player
    if ray.side == 0:
        hit = player.pos_y + ray.perp_wall_dist * ray.ray_dir_y
    else:
        hit = player.pos_x + ray.perp_wall_dist * ray.ray_dir_x
    return hit - math.floor(hit)


def calculate_texture_x(wall_x: float, ray: Ray) -> int:
    """Texture column for a wall hit, mirrored on east and north faces."""
    texture_x = int(wall_x * TEX_WIDTH)
    if (ray.side == 0 and ray.ray_dir_x > 0) or (ray.side == 1 and ray.ray_dir_y < 0):
        texture_x = TEX_WIDTH - texture_x - 1
    return texture_x


def texture_index(ray: Ray) -> int:
    """Index of the wall texture hit: 0 NO, 1 SO, 2 WE, 3 EA."""
    if ray.side == 0:
        return 3 if ray.ray_dir_x > 0 else 2
    return 1 if ray.ray_dir_y > 0 else 0


def draw_line(game: Game, frame: MutableSequence[int], x: int, ray: Ray) -> None:
    """Draw the textured wall slice of column ``x`` into the frame."""
    if ray.draw_start >= ray.draw_end:
        return
    texture = game.textures[texture_index(ray)]
    texture_x = calculate_texture_x(calculate_wall_x(game, ray), ray)
    step = TEX_HEIGHT / ray.line_height
    texture_pos = (
        ray.draw_start - game.win_height // 2 + _half(ray.line_height)
    ) * step
    width = game.win_width
    for y in range(ray.draw_start, ray.draw_end):
        texture_y = int(texture_pos) & (TEX_HEIGHT - 1)
        texture_pos += step
        color = texture.data[TEX_HEIGHT * texture_y + texture_x]
        if ray.side == 1:
            color = (color >> 1) & _DIM_MASK
        frame[y * width + x] = color


def draw_floor_and_ceiling(game: Game, frame: MutableSequence[int]) -> None:
    """Fill the top half with the ceiling colour and the rest with the floor."""
    width = game.win_width
    split = (game.win_height // 2) * width
    total = game.win_height * width
    frame[:split] = [game.ceiling_color.to_int()] * split
    frame[split:total] = [game.floor_color.to_int()] * (total - split)


def render_frame(game: Game, frame: MutableSequence[int]) -> None:
    """Draw a whole frame: floor, ceiling, then one wall slice per column."""
    draw_floor_and_ceiling(game, frame)
    for x in range(game.win_width):
        ray = init_ray(game, x)
        perform_dda(game, ray)
        calc_perp_wall_dist(game, ray)
        calc_line_height(game, ray)
        draw_line(game, frame, x, ray)