import copy
import math

import pytest

from cubraycaster.player import (
    handle_keypress,
    handle_keyrelease,
    move_backward,
    move_forward,
    move_left,
    move_right,
    rotate_left,
    rotate_right,
    set_player_direction,
    update_player,
)
from cubraycaster.state import (
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

ROOM = ["111111", "100001", "100001", "100001", "111111"]


def make_game(rows=ROOM, pos=(2.5, 2.5), direction="E"):
    game = Game(
        map=list(rows),
        map_width=max(len(row) for row in rows),
        map_height=len(rows),
    )
    game.player.pos_x, game.player.pos_y = pos
    set_player_direction(game.player, direction)
    return game


@pytest.mark.parametrize(
    "direction, expected",
    [
        ("N", (0.0, -1.0, 0.66, 0.0)),
        ("S", (0.0, 1.0, -0.66, 0.0)),
        ("W", (-1.0, 0.0, 0.0, -0.66)),
        ("E", (1.0, 0.0, 0.0, 0.66)),
    ],
)
def test_set_player_direction(direction, expected):
    player = Player()
    set_player_direction(player, direction)
    assert (player.dir_x, player.dir_y, player.plane_x, player.plane_y) == expected


def test_unknown_direction_changes_nothing():
    player = Player(dir_x=0.5, dir_y=0.25, plane_x=0.1, plane_y=0.2)
    set_player_direction(player, "X")
    assert player == Player(dir_x=0.5, dir_y=0.25, plane_x=0.1, plane_y=0.2)


def test_move_forward_onto_floor():
    game = make_game()
    move_forward(game, 0.5)
    assert game.player.pos_x == pytest.approx(3.0)
    assert game.player.pos_y == 2.5


def test_move_forward_blocked_by_wall():
    game = make_game(pos=(4.5, 2.5))
    move_forward(game, 1.0)
    assert (game.player.pos_x, game.player.pos_y) == (4.5, 2.5)


def test_move_backward_goes_the_other_way():
    game = make_game(pos=(3.5, 2.5))
    move_backward(game, 0.5)
    assert game.player.pos_x < 3.5
    assert game.player.pos_y == 2.5


def test_forward_then_backward_round_trip():
    game = make_game()
    move_forward(game, 0.3)
    move_backward(game, 0.3)
    assert game.player.pos_x == pytest.approx(2.5)
    assert game.player.pos_y == pytest.approx(2.5)


def test_strafe_round_trip():
    game = make_game(direction="N")
    move_right(game, 0.5)
    assert game.player.pos_x > 2.5
    move_left(game, 0.5)
    assert game.player.pos_x == pytest.approx(2.5)
    assert game.player.pos_y == pytest.approx(2.5)


def test_short_row_blocks_without_error():
    game = make_game(rows=["1111", "10", "1111"], pos=(1.5, 1.5))
    move_forward(game, 1.0)
    assert game.player.pos_x == 1.5


def test_rotate_right_quarter_turn_from_north_faces_east():
    game = make_game(direction="N")
    rotate_right(game, math.pi / 2)
    east = Player()
    set_player_direction(east, "E")
    p = game.player
    assert p.dir_x == pytest.approx(east.dir_x)
    assert p.dir_y == pytest.approx(east.dir_y, abs=1e-12)
    assert p.plane_x == pytest.approx(east.plane_x, abs=1e-12)
    assert p.plane_y == pytest.approx(east.plane_y)


def test_rotation_round_trip_and_length():
    game = make_game(direction="S")
    rotate_left(game, 0.7)
    assert math.hypot(game.player.dir_x, game.player.dir_y) == pytest.approx(1.0)
    rotate_right(game, 0.7)
    assert game.player.dir_x == pytest.approx(0.0, abs=1e-12)
    assert game.player.dir_y == pytest.approx(1.0)
    assert game.player.plane_x == pytest.approx(-0.66)


@pytest.mark.parametrize(
    "flag, action",
    [
        ("w", lambda g: move_forward(g, 0.05)),
        ("s", lambda g: move_backward(g, 0.05)),
        ("a", lambda g: move_left(g, 0.05)),
        ("d", lambda g: move_right(g, 0.05)),
        ("left", lambda g: rotate_left(g, 0.03)),
        ("right", lambda g: rotate_right(g, 0.03)),
    ],
)
def test_update_player_applies_held_key(flag, action):
    game = make_game(direction="N")
    expected = copy.deepcopy(game)
    setattr(game.keys, flag, True)
    update_player(game)
    action(expected)
    assert game.player == expected.player


def test_update_player_without_keys_does_nothing():
    game = make_game()
    before = copy.deepcopy(game.player)
    update_player(game)
    assert game.player == before


def test_keypress_and_release_toggle_flags():
    game = make_game()
    for key in (KEY_W, KEY_A, KEY_S, KEY_D, KEY_LEFT, KEY_RIGHT):
        assert handle_keypress(game, key) is True
    keys = game.keys
    assert (keys.w, keys.a, keys.s, keys.d, keys.left, keys.right) == (True,) * 6
    handle_keyrelease(game, KEY_A)
    handle_keyrelease(game, KEY_RIGHT)
    assert (keys.w, keys.a, keys.s, keys.d, keys.left, keys.right) == (
        True, False, True, True, True, False,
    )


def test_escape_asks_to_quit():
    game = make_game()
    assert handle_keypress(game, KEY_ESC) is False
    assert game.keys.w is False