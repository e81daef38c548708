import math

import pytest

from cubraycast.player import (
    KEY_A,
    KEY_ESC,
    KEY_LEFT,
    KEY_W,
    MOVE_SPEED,
    KeyState,
    Player,
    spawn_player,
)
from cubraycast.scene import Scene

GRID = [
    "11111",
    "10001",
    "10001",
    "10001",
    "11111",
]


def make_scene(direction):
    return Scene(grid=GRID, player_x=2, player_y=2, player_dir=direction)


def test_spawn_north():
    player = spawn_player(make_scene("N"))
    assert (player.pos_x, player.pos_y) == (2.5, 2.5)
    assert (player.dir_x, player.dir_y) == (0, -1)
    assert (player.plane_x, player.plane_y) == (0.66, 0)


def test_spawn_west():
    player = spawn_player(make_scene("W"))
    assert (player.dir_x, player.dir_y) == (-1, 0)
    assert (player.plane_x, player.plane_y) == (0, -0.66)


@pytest.mark.parametrize("direction", "NSEW")
def test_spawn_plane_is_perpendicular(direction):
    player = spawn_player(make_scene(direction))
    assert player.dir_x * player.plane_x + player.dir_y * player.plane_y == 0


def test_move_forward_in_open_space():
    player = spawn_player(make_scene("E"))
    player.move_forward(GRID)
    assert player.pos_x == pytest.approx(2.5 + MOVE_SPEED)
    assert player.pos_y == 2.5


def test_forward_then_backward_returns():
    player = spawn_player(make_scene("N"))
    player.move_forward(GRID)
    player.move_backward(GRID)
    assert player.pos_x == pytest.approx(2.5)
    assert player.pos_y == pytest.approx(2.5)


def test_strafe_left_then_right_returns():
    player = spawn_player(make_scene("S"))
    player.strafe_left(GRID)
    moved = player.pos_x
    player.strafe_right(GRID)
    assert moved != pytest.approx(2.5)
    assert player.pos_x == pytest.approx(2.5)


def test_wall_blocks_movement():
    player = Player(pos_x=3.85, pos_y=2.5, dir_x=1.0, dir_y=0.0, plane_y=0.66)
    player.move_forward(GRID)
    assert player.pos_x == 3.85


def test_rotation_round_trip():
    player = spawn_player(make_scene("N"))
    player.rotate_left()
    player.rotate_right()
    assert player.dir_x == pytest.approx(0.0, abs=1e-12)
    assert player.dir_y == pytest.approx(-1.0)
    assert player.plane_x == pytest.approx(0.66)


def test_rotation_keeps_lengths():
    player = spawn_player(make_scene("E"))
    for _ in range(50):
        player.rotate_right()
    assert math.hypot(player.dir_x, player.dir_y) == pytest.approx(1.0)
    assert math.hypot(player.plane_x, player.plane_y) == pytest.approx(0.66)


def test_keys_apply_movement():
    keys = KeyState()
    keys.press(KEY_W)
    player = spawn_player(make_scene("E"))
    keys.apply(player, GRID)
    assert player.pos_x == pytest.approx(2.5 + MOVE_SPEED)


def test_release_stops_movement():
    keys = KeyState()
    keys.press(KEY_A)
    keys.release(KEY_A)
    player = spawn_player(make_scene("E"))
    keys.apply(player, GRID)
    assert (player.pos_x, player.pos_y) == (2.5, 2.5)


def test_arrow_key_turns():
    keys = KeyState()
    keys.press(KEY_LEFT)
    player = spawn_player(make_scene("N"))
    keys.apply(player, GRID)
    assert player.dir_x < 0
    assert KEY_LEFT in keys.pressed


def test_untracked_key_ignored():
    keys = KeyState()
    keys.press(70000)
    assert keys.pressed == set()


def test_escape_requests_quit():
    keys = KeyState()
    keys.press(KEY_ESC)
    assert keys.quit_requested is True
    assert KEY_ESC not in keys.pressed