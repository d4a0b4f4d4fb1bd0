"""Collecting map rows from a file and placing the player."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

from .mapcheck import MapError
from .player import set_player_direction
from .state import Game

_MAP_CHARS = frozenset("01NSEW ")
_PLAYER_CHARS = frozenset("NSEW")


def _count_players(line: str) -> int:
    return sum(1 for c in line if c in _PLAYER_CHARS)


def is_valid_map_line(line: str) -> bool:
    """Whether a line holds only map characters and at most one player."""
    return all(c in _MAP_CHARS for c in line) and _count_players(line) <= 1


@dataclass
class MapBuilder:
    """Accumulates the map rows of a scene file, one line at a time."""

    rows: list[str] = field(default_factory=list)
    player_count: int = 0
    ended: bool = False

    @property
    def height(self) -> int:
        """Number of rows collected."""
        return len(self.rows)

    @property
    def width(self) -> int:
        """Length of the longest row collected."""
        return max((len(row) for row in self.rows), default=0)

    def add_line(self, line: str) -> None:
        """Add one line; an empty line after rows marks the map's end."""
        if line == "":
            if self.rows:
                self.ended = True
            return
        if self.ended:
            raise MapError("Error: Discontinuous map/Wrong config")
        if not all(c in _MAP_CHARS for c in line):
            raise MapError("Error: Invalid map/config")
        players = self.player_count + _count_players(line)
        if players > 1:
            raise MapError("Error: Invalid map/config")
        self.player_count = players
        self.rows.append(line)


def find_initial_position(rows: Sequence[str]) -> Optional[tuple[int, int]]:
    """The (x, y) of the first player start in row order, or None."""
    for y, row in enumerate(rows):
        for x, c in enumerate(row):
            if c in _PLAYER_CHARS:
                return x, y
    return None


def init_player_position(game: Game) -> None:
    """Place and orient the player at its start and turn that cell to floor."""
    position = find_initial_position(game.map)
    if position is None:
        raise MapError("Error: No initial player position set in the map")
    x, y = position
    row = game.map[y]
    game.player.pos_x = x + 0.5
    game.player.pos_y = y + 0.5
    set_player_direction(game.player, row[x])
    game.map[y] = row[:x] + "0" + row[x + 1:]