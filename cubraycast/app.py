"""Command line entry point: load a scene and run the viewer window."""

from __future__ import annotations

import sys
from array import array
from collections.abc import Sequence

from cubraycast.player import KEY_ESC, KEY_LEFT, KEY_RIGHT, KeyState, Player, spawn_player
from cubraycast.raycast import WINDOW_HEIGHT, WINDOW_WIDTH, Frame, render_frame
from cubraycast.scene import ERR_FILE, Direction, Scene, SceneError, load_scene
from cubraycast.textutil import is_valid_extension
from cubraycast.xpm import Texture, XpmError, load_xpm

TITLE = "cub3D"
SCENE_EXTENSION = ".cub"
ERR_ARGS = "Invalid arguments. Usage: cubraycast [map.cub]"
ERR_TEXTURE = "Could not load texture."
ERR_MEMORY = "Memory allocation failed."

_PIXEL_TYPE = "I" if array("I").itemsize == 4 else "L"


def _error(message: str) -> None:
    print(f"Error\n{message}", file=sys.stderr)


def load_textures(scene: Scene) -> dict[Direction, Texture]:
    """Load the four wall textures named by the scene.

    Raises XpmError when any of them cannot be loaded.
    """
    textures: dict[Direction, Texture] = {}
    for direction in Direction:
        path = scene.textures.get(direction)
        if path is None:
            raise XpmError(ERR_TEXTURE)
        try:
            textures[direction] = load_xpm(path)
        except XpmError as exc:
            raise XpmError(ERR_TEXTURE) from exc
    return textures


def _frame_bytes(frame: Frame) -> bytes:
    """Frame pixels as RGBX bytes."""
    data = array(_PIXEL_TYPE, frame.pixels)
    if sys.byteorder == "little":
        data.byteswap()
    raw = data.tobytes()
    # Big-endian 0x00RRGGBB shifted by one byte reads as R, G, B, padding.
    return raw[1:] + b"\0"


def _run_window(scene: Scene, player: Player, textures: dict[Direction, Texture]) -> int:
    import pygame

    pygame.init()
    try:
        try:
            screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
        except pygame.error:
            _error(ERR_MEMORY)
            return 1
        pygame.display.set_caption(TITLE)
        special = {
            pygame.K_ESCAPE: KEY_ESC,
            pygame.K_LEFT: KEY_LEFT,
            pygame.K_RIGHT: KEY_RIGHT,
        }
        keys = KeyState()
        frame = Frame()
        while True:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    return 0
                if event.type == pygame.KEYDOWN:
                    keys.press(special.get(event.key, event.key))
                    if keys.quit_requested:
                        return 0
                elif event.type == pygame.KEYUP:
                    keys.release(special.get(event.key, event.key))
            keys.apply(player, scene.grid)
            render_frame(
                frame, player, scene.grid, textures,
                scene.floor_color, scene.ceiling_color,
            )
            image = pygame.image.frombuffer(
                _frame_bytes(frame), (WINDOW_WIDTH, WINDOW_HEIGHT), "RGBX"
            )
            screen.blit(image, (0, 0))
            pygame.display.flip()
    finally:
        pygame.quit()


def main(argv: Sequence[str] | None = None) -> int:
    """Run the viewer on the scene file given on the command line."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 1:
        _error(ERR_ARGS)
        return 0
    if not is_valid_extension(args[0], SCENE_EXTENSION):
        _error(ERR_FILE)
        return 0
    try:
        scene = load_scene(args[0])
    except SceneError as exc:
        _error(str(exc))
        return 1
    player = spawn_player(scene)
    try:
        textures = load_textures(scene)
    except XpmError as exc:
        _error(str(exc))
        return 1
    return _run_window(scene, player, textures)


if __name__ == "__main__":
    sys.exit(main())