import math

import pytest

from cubraycaster.player import set_player_direction
from cubraycaster.raycast import (
    Ray,
    calc_line_height,
    calc_perp_wall_dist,
    calculate_texture_x,
    calculate_wall_x,
    draw_floor_and_ceiling,
    draw_line,
    init_ray,
    perform_dda,
    render_frame,
    texture_index,
)
from cubraycaster.state import TEX_WIDTH, TEXTURE_IDS, Color, Game, Texture

ROOM = ["11111", "10001", "10001", "10001", "11111"]
TEXTURE_COLORS = (0xFFFFFF, 0x00FF00, 0x0000FF, 0xFF0000)
UNSET = -1


def make_game(rows=ROOM, pos=(2.5, 2.5), direction="E", width=8, height=6):
    game = Game(
        win_width=width,
        win_height=height,
        map=list(rows),
        map_width=max(len(row) for row in rows),
        map_height=len(rows),
        floor_color=Color(10, 20, 30),
        ceiling_color=Color(200, 100, 50),
    )
    game.player.pos_x, game.player.pos_y = pos
    set_player_direction(game.player, direction)
    game.textures = [
        Texture(width=64, height=64, data=[value] * (64 * 64))
        for value in TEXTURE_COLORS
    ]
    return game


def cast(game, x):
    ray = init_ray(game, x)
    perform_dda(game, ray)
    calc_perp_wall_dist(game, ray)
    calc_line_height(game, ray)
    return ray


def test_centre_ray_hits_east_wall():
    game = make_game()
    ray = init_ray(game, game.win_width // 2)
    assert ray.camera_x == 0
    assert (ray.ray_dir_x, ray.ray_dir_y) == (1.0, 0.0)
    perform_dda(game, ray)
    assert ray.hit is True
    assert ray.side == 0
    assert game.map[ray.map_y][ray.map_x] == "1"
    assert ray.map_y == 2
    calc_perp_wall_dist(game, ray)
    assert ray.perp_wall_dist == pytest.approx(1.5)
    assert TEXTURE_IDS[texture_index(ray)] == "EA"


def test_zero_direction_component_gives_infinite_delta():
    game = make_game()
    ray = init_ray(game, game.win_width // 2)
    assert math.isinf(ray.delta_dist_y)
    assert ray.step_y == 1


def test_ray_leaving_map_stops_without_hit():
    game = make_game(rows=["000"], pos=(1.5, 0.5))
    ray = init_ray(game, game.win_width // 2)
    perform_dda(game, ray)
    assert ray.hit is False
    assert ray.map_x == len(game.map[0])


def test_line_height_is_clamped_to_window():
    game = make_game()
    ray = Ray(perp_wall_dist=1.0)
    calc_line_height(game, ray)
    assert ray.line_height == game.win_height
    assert ray.draw_start == 0
    assert ray.draw_end == game.win_height - 1


@pytest.mark.parametrize("x", range(8))
def test_line_extent_stays_on_screen(x):
    game = make_game()
    ray = cast(game, x)
    assert 0 <= ray.draw_start <= ray.draw_end < game.win_height


def test_infinite_distance_draws_nothing():
    game = make_game()
    ray = Ray(perp_wall_dist=math.inf, side=0, ray_dir_x=1.0)
    calc_line_height(game, ray)
    assert ray.line_height == 0
    assert ray.draw_start == ray.draw_end == game.win_height // 2
    frame = [UNSET] * (game.win_width * game.win_height)
    draw_line(game, frame, 0, ray)
    assert frame == [UNSET] * (game.win_width * game.win_height)


def test_calculate_wall_x_uses_other_axis():
    game = make_game()
    ray = Ray(side=0, perp_wall_dist=1.5, ray_dir_y=0.5)
    assert calculate_wall_x(game, ray) == pytest.approx(0.25)
    ray = Ray(side=1, perp_wall_dist=2.0, ray_dir_x=0.0)
    assert calculate_wall_x(game, ray) == pytest.approx(0.5)


def test_texture_x_mirrors_on_east_faces():
    plain = calculate_texture_x(0.3, Ray(side=0, ray_dir_x=-1.0))
    mirrored = calculate_texture_x(0.3, Ray(side=0, ray_dir_x=1.0))
    assert plain + mirrored == TEX_WIDTH - 1
    assert calculate_texture_x(0.5, Ray(side=0, ray_dir_x=-1.0)) == TEX_WIDTH // 2


@pytest.mark.parametrize(
    "ray, name",
    [
        (Ray(side=1, ray_dir_y=-1.0), "NO"),
        (Ray(side=1, ray_dir_y=1.0), "SO"),
        (Ray(side=0, ray_dir_x=-1.0), "WE"),
        (Ray(side=0, ray_dir_x=1.0), "EA"),
    ],
)
def test_texture_index(ray, name):
    assert TEXTURE_IDS[texture_index(ray)] == name


def test_draw_line_fills_only_its_column():
    game = make_game()
    x = game.win_width // 2
    ray = cast(game, x)
    frame = [UNSET] * (game.win_width * game.win_height)
    draw_line(game, frame, x, ray)
    width = game.win_width
    for y in range(game.win_height):
        expected = TEXTURE_COLORS[3] if ray.draw_start <= y < ray.draw_end else UNSET
        assert frame[y * width + x] == expected
    others = [frame[y * width + c] for y in range(game.win_height) for c in range(width) if c != x]
    assert set(others) == {UNSET}


def test_horizontal_faces_are_dimmed():
    game = make_game(direction="N")
    x = game.win_width // 2
    ray = cast(game, x)
    assert ray.side == 1
    frame = [UNSET] * (game.win_width * game.win_height)
    draw_line(game, frame, x, ray)
    column = [frame[y * game.win_width + x] for y in range(ray.draw_start, ray.draw_end)]
    assert column
    assert set(column) == {8355711}


def test_floor_and_ceiling_split_the_frame():
    game = make_game()
    frame = [UNSET] * (game.win_width * game.win_height)
    draw_floor_and_ceiling(game, frame)
    half = (game.win_height // 2) * game.win_width
    assert frame[:half] == [game.ceiling_color.to_int()] * half
    assert frame[half:] == [game.floor_color.to_int()] * (len(frame) - half)


def test_render_frame_covers_every_pixel():
    game = make_game()
    size = game.win_width * game.win_height
    frame = [UNSET] * size
    render_frame(game, frame)
    assert len(frame) == size
    assert UNSET not in frame
    allowed = {
        game.ceiling_color.to_int(),
        game.floor_color.to_int(),
        *TEXTURE_COLORS,
        *((value >> 1) & 8355711 for value in TEXTURE_COLORS),
    }
    assert set(frame) <= allowed