"""Player orientation, movement, rotation and keyboard state."""

from __future__ import annotations

import math

from .state import (
    KEY_A,
    KEY_D,
    KEY_ESC,
    KEY_LEFT,
    KEY_RIGHT,
    KEY_S,
    KEY_W,
    Game,
    Player,
)

MOVE_SPEED = 0.05
ROT_SPEED = 0.03

# direction letter -> (dir_x, dir_y, plane_x, plane_y)
_DIRECTIONS: dict[str, tuple[float, float, float, float]] = {
    "N": (0.0, -1.0, 0.66, 0.0),
    "S": (0.0, 1.0, -0.66, 0.0),
    "W": (-1.0, 0.0, 0.0, -0.66),
    "E": (1.0, 0.0, 0.0, 0.66),
}

_KEY_FLAGS: dict[int, str] = {
    KEY_W: "w",
    KEY_A: "a",
    KEY_S: "s",
    KEY_D: "d",
    KEY_LEFT: "left",
    KEY_RIGHT: "right",
}


def set_player_direction(player: Player, direction: str) -> None:
    """Face the player N, S, W or E; any other letter changes nothing."""
    values = _DIRECTIONS.get(direction)
    if values is None:
        return
    player.dir_x, player.dir_y, player.plane_x, player.plane_y = values


def _is_floor(game: Game, x: float, y: float) -> bool:
    if not game.is_within_bounds(x, y):
        return False
    row = game.map[int(y)]
    column = int(x)
    return column < len(row) and row[column] == "0"


def _step(game: Game, dx: float, dy: float) -> None:
    """Move along each axis separately, only onto floor cells."""
    player = game.player
    if _is_floor(game, player.pos_x + dx, player.pos_y):
        player.pos_x += dx
    if _is_floor(game, player.pos_x, player.pos_y + dy):
        player.pos_y += dy


def move_forward(game: Game, move_speed: float) -> None:
    """Step along the facing direction."""
    player = game.player
    _step(game, player.dir_x * move_speed, player.dir_y * move_speed)


def move_backward(game: Game, move_speed: float) -> None:
    """Step against the facing direction."""
    player = game.player
    _step(game, -player.dir_x * move_speed, -player.dir_y * move_speed)


def move_left(game: Game, move_speed: float) -> None:
    """Strafe against the camera plane."""
    player = game.player
    _step(game, -player.plane_x * move_speed, -player.plane_y * move_speed)


def move_right(game: Game, move_speed: float) -> None:
    """Strafe along the camera plane."""
    player = game.player
    _step(game, player.plane_x * move_speed, player.plane_y * move_speed)


def _rotate(player: Player, angle: float) -> None:
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)
    dir_x, dir_y = player.dir_x, player.dir_y
    player.dir_x = dir_x * cos_a - dir_y * sin_a
    player.dir_y = dir_x * sin_a + dir_y * cos_a
    plane_x, plane_y = player.plane_x, player.plane_y
    player.plane_x = plane_x * cos_a - plane_y * sin_a
    player.plane_y = plane_x * sin_a + plane_y * cos_a


def rotate_left(game: Game, rot_speed: float) -> None:
    """Turn the view and camera plane counter-clockwise on screen."""
    _rotate(game.player, -rot_speed)


def rotate_right(game: Game, rot_speed: float) -> None:
    """Turn the view and camera plane clockwise on screen."""
    _rotate(game.player, rot_speed)


def update_player(game: Game) -> None:
    """Apply one frame of movement for every key held down."""
    keys = game.keys
    if keys.w:
        move_forward(game, MOVE_SPEED)
    if keys.s:
        move_backward(game, MOVE_SPEED)
    if keys.a:
        move_left(game, MOVE_SPEED)
    if keys.d:
        move_right(game, MOVE_SPEED)
    if keys.left:
        rotate_left(game, ROT_SPEED)
    if keys.right:
        rotate_right(game, ROT_SPEED)


def handle_keypress(game: Game, keycode: int) -> bool:
    """Record a pressed key; return False when the key asks to quit."""
    flag = _KEY_FLAGS.get(keycode)
    if flag is not None:
        setattr(game.keys, flag, True)
    return keycode != KEY_ESC


def handle_keyrelease(game: Game, keycode: int) -> None:
    """Record a released key."""
    flag = _KEY_FLAGS.get(keycode)
    if flag is not None:
        setattr(game.keys, flag, False)