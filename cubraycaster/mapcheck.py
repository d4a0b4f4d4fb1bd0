"""Checks that a map's floor is fully enclosed by walls."""

from __future__ import annotations

from typing import Sequence

from .state import CubError, is_enclosed, is_space, is_valid_surrounding

_PLAYER_CHARS = "NSEW"


class MapError(CubError):
    """Raised when a map is malformed or not enclosed."""


def _cell(rows: Sequence[str], y: int, x: int) -> str:
    """The character at (x, y), or an empty string outside the map."""
    if 0 <= y < len(rows) and 0 <= x < len(rows[y]):
        return rows[y][x]
    return ""


def is_row_completely_empty(row: str) -> bool:
    """Whether a row holds only whitespace (or nothing)."""
    return all(is_space(c) for c in row)


def check_horizontal_boundaries(rows: Sequence[str]) -> None:
    """The top and bottom rows may hold only walls and blanks."""
    if any(c not in "1 " for c in rows[0]):
        raise MapError("Error: Map is not enclosed (top row)")
    if any(c not in "1 " for c in rows[-1]):
        raise MapError("Error: Map is not enclosed (bottom row)")


def _check_left_boundary(row: str) -> None:
    stripped = row.lstrip(" ")
    if stripped.startswith("0"):
        raise MapError("Error: Map not enclosed at the start.")


def _check_right_boundary(row: str) -> None:
    stripped = row.rstrip(" ")
    if stripped.endswith("0"):
        raise MapError("Error: Map not enclosed in the end.")
    if row and row[-1] not in "1 ":
        raise MapError("Error: Map not enclosed (right boundary)")


def check_vertical_boundaries(rows: Sequence[str]) -> None:
    """Every row must start and end on a wall, past any blanks."""
    for row in rows:
        _check_left_boundary(row)
        _check_right_boundary(row)


def _check_surrounding_positions(rows: Sequence[str], y: int, x: int) -> None:
    length = len(rows[y])
    if y == 0 or y == len(rows) - 1 or x == 0 or x == length - 1:
        raise MapError("Error: Player position on map boundary.")
    neighbours = (
        ("above", _cell(rows, y - 1, x)),
        ("below", _cell(rows, y + 1, x)),
        ("left", _cell(rows, y, x - 1)),
        ("right", _cell(rows, y, x + 1)),
    )
    for where, c in neighbours:
        if not is_valid_surrounding(c):
            raise MapError(f"Error: Invalid player starting position ({where}).")


def check_player_position_surroundings(rows: Sequence[str]) -> None:
    """A player start must be inside the map and touch only floor or walls."""
    for y, row in enumerate(rows):
        for x, c in enumerate(row):
            if c in _PLAYER_CHARS:
                _check_surrounding_positions(rows, y, x)


def check_zeroes_below_in_second_to_last_row(rows: Sequence[str]) -> None:
    """Every floor cell of the second-to-last row needs a wall below it."""
    second_to_last = rows[-2]
    last = rows[-1]
    for x, c in enumerate(second_to_last):
        if c == "0" and (x >= len(last) or last[x] != "1"):
            raise MapError("Error: Map not enclosed (in 2nd to last row)")


def check_extended_row_enclosures(rows: Sequence[str]) -> None:
    """Floor cells in the part of a row longer than a neighbour must be closed."""
    height = len(rows)
    for y in range(1, height):
        for x in range(len(rows[y - 1]), len(rows[y])):
            if rows[y][x] == "0" and (
                not is_enclosed(_cell(rows, y - 1, x))
                or (y + 1 < height and not is_enclosed(_cell(rows, y + 1, x)))
            ):
                raise MapError("Error: Map not enclosed (extended row)")
    for y in range(height - 1):
        for x in range(len(rows[y + 1]), len(rows[y])):
            if rows[y][x] == "0" and (
                not is_enclosed(_cell(rows, y - 1, x))
                or not is_enclosed(_cell(rows, y + 1, x))
            ):
                raise MapError("Error: Map not enclosed (extended row)")


def validate_section(rows: Sequence[str], start: int, end: int) -> None:
    """Check that rows ``start`` to ``end`` inclusive form a closed block."""
    for y in range(start, end + 1):
        row = rows[y]
        if y in (start, end) and any(c not in "1 " for c in row):
            raise MapError("Error: Section of the map is not properly enclosed.")
        if row and row[0] not in "1 ":
            raise MapError("Error: Section left boundary not enclosed.")
        if row and row[-1] not in "1 ":
            raise MapError("Error: Section right boundary not enclosed.")


def check_for_multiple_sections(rows: Sequence[str]) -> None:
    """Validate every block of rows separated by blank rows."""
    section_start = None
    for y in range(len(rows) + 1):
        if y == len(rows) or is_row_completely_empty(rows[y]):
            if section_start is not None:
                validate_section(rows, section_start, y - 1)
                section_start = None
        elif section_start is None:
            section_start = y


def _check_left_space(rows: Sequence[str], y: int, x: int) -> None:
    row = rows[y]
    if x > 0 and is_space(row[x - 1]):
        if x == 1 or not is_valid_surrounding(row[x - 2]):
            raise MapError("Error: Unprotected space to the left of '0'.")


def _check_right_space(rows: Sequence[str], y: int, x: int) -> None:
    row = rows[y]
    length = len(row)
    if x < length - 1 and is_space(row[x + 1]):
        if x == length - 2 or not is_valid_surrounding(row[x + 2]):
            raise MapError("Error: Unprotected space to the right of '0'.")


def _check_vertical_spaces(rows: Sequence[str], y: int, x: int) -> None:
    height = len(rows)
    if y > 0 and x < len(rows[y - 1]) and is_space(rows[y - 1][x]):
        if y == 1 or not is_valid_surrounding(_cell(rows, y - 2, x)):
            raise MapError("Error: Unprotected space above '0'.")
    if y < height - 1 and x < len(rows[y + 1]) and is_space(rows[y + 1][x]):
        if y == height - 2 or not is_valid_surrounding(_cell(rows, y + 2, x)):
            raise MapError("Error: Unprotected space below '0'.")


def check_unprotected_spaces(rows: Sequence[str]) -> None:
    """A blank next to a floor cell must be backed by floor or wall beyond it."""
    for y, row in enumerate(rows):
        for x, c in enumerate(row):
            if c == "0":
                _check_left_space(rows, y, x)
                _check_right_space(rows, y, x)
                _check_vertical_spaces(rows, y, x)


def validate_map(rows: Sequence[str]) -> None:
    """Run every enclosure check; raise MapError on the first failure."""
    if len(rows) < 2:
        raise MapError("Error: Map must have at least two rows")
    check_horizontal_boundaries(rows)
    check_vertical_boundaries(rows)
    check_zeroes_below_in_second_to_last_row(rows)
    check_extended_row_enclosures(rows)
    check_for_multiple_sections(rows)
    check_unprotected_spaces(rows)