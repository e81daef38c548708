"""Player position, movement and keyboard state."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field

from cubraycast.scene import Scene

MOVE_SPEED = 0.05
ROT_SPEED = 0.03
COLLISION_BUFFER = 0.1
PLANE_LENGTH = 0.66

KEY_ESC = 65307
KEY_W = 119
KEY_A = 97
KEY_S = 115
KEY_D = 100
KEY_LEFT = 65361
KEY_RIGHT = 65363

_START_VECTORS = {
    "N": ((0.0, -1.0), (PLANE_LENGTH, 0.0)),
    "S": ((0.0, 1.0), (-PLANE_LENGTH, 0.0)),
    "E": ((1.0, 0.0), (0.0, PLANE_LENGTH)),
    "W": ((-1.0, 0.0), (0.0, -PLANE_LENGTH)),
}


@dataclass
class Player:
    """Position, facing direction and camera plane of the viewer."""

    pos_x: float = 0.0
    pos_y: float = 0.0
    dir_x: float = 0.0
    dir_y: float = 0.0
    plane_x: float = 0.0
    plane_y: float = 0.0

    def _move(self, grid: Sequence[str], dx: float, dy: float) -> None:
        new_x = self.pos_x + dx
        probe_x = new_x + (COLLISION_BUFFER if new_x > self.pos_x else -COLLISION_BUFFER)
        if grid[int(self.pos_y)][int(probe_x)] != "1":
            self.pos_x = new_x
        new_y = self.pos_y + dy
        probe_y = new_y + (COLLISION_BUFFER if new_y > self.pos_y else -COLLISION_BUFFER)
        if grid[int(probe_y)][int(self.pos_x)] != "1":
            self.pos_y = new_y

    def move_forward(self, grid: Sequence[str]) -> None:
        self._move(grid, self.dir_x * MOVE_SPEED, self.dir_y * MOVE_SPEED)

    def move_backward(self, grid: Sequence[str]) -> None:
        self._move(grid, -self.dir_x * MOVE_SPEED, -self.dir_y * MOVE_SPEED)

    def strafe_left(self, grid: Sequence[str]) -> None:
        self._move(grid, self.dir_y * MOVE_SPEED, -self.dir_x * MOVE_SPEED)

    def strafe_right(self, grid: Sequence[str]) -> None:
        self._move(grid, -self.dir_y * MOVE_SPEED, self.dir_x * MOVE_SPEED)

    def _rotate(self, angle: float) -> None:
        cos_a, sin_a = math.cos(angle), math.sin(angle)
        self.dir_x, self.dir_y = (
            self.dir_x * cos_a - self.dir_y * sin_a,
            self.dir_x * sin_a + self.dir_y * cos_a,
        )
        self.plane_x, self.plane_y = (
            self.plane_x * cos_a - self.plane_y * sin_a,
            self.plane_x * sin_a + self.plane_y * cos_a,
        )

    def rotate_left(self) -> None:
        self._rotate(-ROT_SPEED)

    def rotate_right(self) -> None:
        self._rotate(ROT_SPEED)


def spawn_player(scene: Scene) -> Player:
    """Place a player at the centre of the scene's start cell, facing its way."""
    player = Player(pos_x=scene.player_x + 0.5, pos_y=scene.player_y + 0.5)
    vectors = _START_VECTORS.get(scene.player_dir)
    if vectors is not None:
        (player.dir_x, player.dir_y), (player.plane_x, player.plane_y) = vectors
    return player


def _tracked(key: int) -> bool:
    return 0 <= key < 256 or key in (KEY_LEFT, KEY_RIGHT)


@dataclass
class KeyState:
    """Which keys are held down, and whether quitting was asked for."""

    pressed: set[int] = field(default_factory=set)
    quit_requested: bool = False

    def press(self, key: int) -> None:
        if key == KEY_ESC:
            self.quit_requested = True
        elif _tracked(key):
            self.pressed.add(key)

    def release(self, key: int) -> None:
        if _tracked(key):
            self.pressed.discard(key)

    def apply(self, player: Player, grid: Sequence[str]) -> None:
        """Move and turn the player for every held control key."""
        if KEY_W in self.pressed:
            player.move_forward(grid)
        if KEY_S in self.pressed:
            player.move_backward(grid)
        if KEY_A in self.pressed:
            player.strafe_left(grid)
        if KEY_D in self.pressed:
            player.strafe_right(grid)
        if KEY_LEFT in self.pressed:
            player.rotate_left()
        if KEY_RIGHT in self.pressed:
            player.rotate_right()