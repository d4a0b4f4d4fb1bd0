"""Game state: window, player, textures, colours, map and pressed keys."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

WIN_WIDTH = 1600
WIN_HEIGHT = 900
TEX_WIDTH = 64
TEX_HEIGHT = 64
NUM_TEXTURES = 4
TEXTURE_IDS = ("NO", "SO", "WE", "EA")

KEY_ESC = 65307
KEY_W = ord("w")
KEY_A = ord("a")
KEY_S = ord("s")
KEY_D = ord("d")
KEY_LEFT = 65361
KEY_RIGHT = 65363


class CubError(Exception):
    """Raised for any error that ends the game with a message."""


@dataclass
class Color:
    """An RGB colour with 0-255 components."""

    r: int
    g: int
    b: int

    def to_int(self) -> int:
        """Pack the colour as 0xRRGGBB."""
        return (self.r << 16) | (self.g << 8) | self.b


@dataclass
class Player:
    """Position, facing direction and camera plane of the player."""

    pos_x: float = 0.0
    pos_y: float = 0.0
    dir_x: float = 0.0
    dir_y: float = 0.0
    plane_x: float = 0.0
    plane_y: float = 0.0


@dataclass
class Keys:
    """Which movement keys are currently held down."""

    w: bool = False
    a: bool = False
    s: bool = False
    d: bool = False
    left: bool = False
    right: bool = False


@dataclass
class Texture:
    """A wall texture: its file path and its pixels row by row."""

    path: Optional[str] = None
    width: int = 0
    height: int = 0
    data: Sequence[int] = ()


def _default_textures() -> list[Texture]:
    return [Texture() for _ in range(NUM_TEXTURES)]


@dataclass
class Game:
    """Everything the game loop reads and updates."""

    win_width: int = WIN_WIDTH
    win_height: int = WIN_HEIGHT
    player: Player = field(default_factory=Player)
    textures: list[Texture] = field(default_factory=_default_textures)
    floor_color: Color = field(default_factory=lambda: Color(0, 0, 0))
    ceiling_color: Color = field(default_factory=lambda: Color(255, 255, 255))
    map: list[str] = field(default_factory=list)
    map_width: int = 0
    map_height: int = 0
    keys: Keys = field(default_factory=Keys)

    def is_within_bounds(self, x: float, y: float) -> bool:
        """Whether the point lies inside the map's bounding rectangle."""
        return 0 <= x < self.map_width and 0 <= y < self.map_height


def is_enclosed(c: str) -> bool:
    """Whether a map cell counts as closed off: a wall or a blank."""
    return c in ("1", " ")


def is_valid_surrounding(c: str) -> bool:
    """Whether a map cell is floor or wall."""
    return c in ("0", "1")


def is_space(c: str) -> bool:
    """Whether a character is a space or one of tab, LF, VT, FF, CR."""
    return c == " " or "\t" <= c <= "\r"