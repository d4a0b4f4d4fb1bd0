"""The game window, its event loop and the command-line entry point."""

from __future__ import annotations

import sys
from array import array
from typing import Optional, Sequence

import pygame

from .parser import parse_args, parse_file
from .player import handle_keypress, handle_keyrelease, update_player
from .raycast import render_frame
from .state import KEY_ESC, KEY_LEFT, KEY_RIGHT, CubError, Game

WINDOW_TITLE = "Cub3D"
EXIT_MESSAGE = "cub3d: successfully exited."

_SPECIAL_KEYS = {
    pygame.K_ESCAPE: KEY_ESC,
    pygame.K_LEFT: KEY_LEFT,
    pygame.K_RIGHT: KEY_RIGHT,
}
_OPAQUE = 0xFF000000


def _keycode(key: int) -> int:
    """Translate a pygame key into the game's key code."""
    return _SPECIAL_KEYS.get(key, key)


def _frame_to_surface(frame: Sequence[int], width: int, height: int) -> pygame.Surface:
    pixels = array("I", ((color & 0xFFFFFF) | _OPAQUE for color in frame))
    if sys.byteorder == "little":
        pixels.byteswap()
    return pygame.image.frombuffer(pixels.tobytes(), (width, height), "ARGB")


def _handle_events(game: Game) -> bool:
    """Process pending events; return False when the game should stop."""
    for event in pygame.event.get():
        if event.type == pygame.QUIT:
            return False
        if event.type == pygame.KEYDOWN:
            if not handle_keypress(game, _keycode(event.key)):
                return False
        elif event.type == pygame.KEYUP:
            handle_keyrelease(game, _keycode(event.key))
    return True


def run(game: Game) -> None:
    """Open the window and run the game until it is closed or Esc is pressed."""
    width, height = game.win_width, game.win_height
    pygame.init()
    try:
        try:
            screen = pygame.display.set_mode((width, height))
        except pygame.error as exc:
            raise CubError("Error: Error creating window") from exc
        pygame.display.set_caption(WINDOW_TITLE)
        frame = [0] * (width * height)
        while _handle_events(game):
            update_player(game)
            render_frame(game, frame)
            screen.blit(_frame_to_surface(frame, width, height), (0, 0))
            pygame.display.flip()
    finally:
        pygame.quit()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Load the scene named on the command line and play it."""
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        filename = parse_args(args)
        game = Game()
        parse_file(game, filename)
        run(game)
    except CubError as exc:
        print(exc, file=sys.stderr)
        return 1
    print(EXIT_MESSAGE)
    return 0


if __name__ == "__main__":
    sys.exit(main())