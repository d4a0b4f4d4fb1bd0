"""Reading a .cub scene file into a Game: textures, colours and map."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Callable, Iterable, Iterator, Optional, Sequence, TextIO, Union

from .mapbuild import MapBuilder, init_player_position
from .mapcheck import validate_map
from .state import NUM_TEXTURES, Color, CubError, Game, Texture, is_space
from .xpm import XpmError, XpmImage, load_xpm

LONG_MAX = 2**63 - 1
LONG_MIN = -(2**63)

MAX_LINE_LENGTH = 1024
"""Lines of this many characters or more end the reading of a file."""

_TEXTURE_PREFIXES = ("NO", "SO", "WE", "EA")
_COLOR_PREFIXES = ("F", "C")

Loader = Callable[[str], XpmImage]


@dataclass
class ParseState:
    """What has been seen so far while reading a scene file."""

    textures_parsed: list[bool] = field(
        default_factory=lambda: [False] * NUM_TEXTURES
    )
    colors_parsed: list[bool] = field(default_factory=lambda: [False, False])
    parsing_map: bool = False
    map_builder: MapBuilder = field(default_factory=MapBuilder)


def parse_args(argv: Sequence[str]) -> str:
    """Check the command-line arguments and return the scene file name."""
    if len(argv) != 1:
        raise CubError("Error: Wrong arguments")
    filename = argv[0]
    if len(filename) < 4 or not filename.endswith(".cub"):
        raise CubError("Error: Map must have a .cub extension")
    return filename


def _digit_value(c: str, base: int) -> Optional[int]:
    if "0" <= c <= "9":
        value = ord(c) - ord("0")
    elif "a" <= c <= "z":
        value = ord(c) - ord("a") + 10
    elif "A" <= c <= "Z":
        value = ord(c) - ord("A") + 10
    else:
        return None
    return value if value < base else None


def strtol(text: str, base: int) -> tuple[int, str]:
    """Read a leading integer; return it and the text left unread.

    Leading whitespace and one sign are skipped. On overflow the value
    saturates to the signed 64-bit limit for the sign.
    """
    index = 0
    while index < len(text) and is_space(text[index]):
        index += 1
    sign = 1
    if index < len(text) and text[index] in "+-":
        if text[index] == "-":
            sign = -1
        index += 1
    result = 0
    while index < len(text):
        digit = _digit_value(text[index], base)
        if digit is None:
            break
        if result > (LONG_MAX - digit) // base:
            return (LONG_MAX if sign == 1 else LONG_MIN), text[index:]
        result = result * base + digit
        index += 1
    return sign * result, text[index:]


def _rgb_component(component: str) -> Optional[int]:
    if component == "":
        return None
    value, rest = strtol(component, 10)
    if rest != "" or not 0 <= value <= 255:
        return None
    return value


def parse_color(line: str) -> tuple[str, Color]:
    """Parse an ``F r,g,b`` or ``C r,g,b`` line into its letter and colour."""
    if not line or line[0] not in _COLOR_PREFIXES:
        raise CubError("Error: Invalid color line format")
    parts = [part for part in line[1:].split(",") if part]
    if len(parts) < 3:
        raise CubError("Error: Incorrect number of RGB components")
    values = [_rgb_component(part) for part in parts[:3]]
    if any(value is None for value in values):
        raise CubError("Error: Invalid RGB values")
    r, g, b = values
    return line[0], Color(r, g, b)


def parse_texture_line(line: str) -> tuple[int, str]:
    """Parse a texture line into a texture index (0 NO .. 3 EA) and path."""
    tokens = [token for token in line.split(" ") if token]
    if not tokens:
        raise CubError("Error: Invalid texture path")
    identifier = tokens[0]
    index = next(
        (i for i, prefix in enumerate(_TEXTURE_PREFIXES) if identifier.startswith(prefix)),
        None,
    )
    if index is None:
        raise CubError("Error: Unknown texture identifier")
    if len(tokens) < 2:
        raise CubError("Error: Invalid texture path")
    return index, tokens[1]


def trim_leading_whitespace(line: str) -> str:
    """Drop leading spaces and tabs."""
    return line.lstrip(" \t")


def read_lines(stream: TextIO) -> Iterator[str]:
    """Yield the lines of a stream without their newlines.

    Reading stops silently at the first line of MAX_LINE_LENGTH
    characters or more.
    """
    parts = stream.read().split("\n")
    if parts[-1] == "":
        parts.pop()
    for part in parts:
        if len(part) >= MAX_LINE_LENGTH:
            return
        yield part


def _load_texture(game: Game, index: int, path: str, loader: Loader) -> None:
    try:
        image = loader(path)
    except (XpmError, OSError) as exc:
        raise CubError(f"Error: Texture not loaded ({path})") from exc
    game.textures[index] = Texture(
        path=path, width=image.width, height=image.height, data=image.pixels
    )


def _handle_texture(
    game: Game, line: str, state: ParseState, index: int, loader: Loader
) -> None:
    if state.textures_parsed[index]:
        raise CubError("Error: Duplicate texture definition")
    texture_index, path = parse_texture_line(line)
    _load_texture(game, texture_index, path, loader)
    state.textures_parsed[index] = True


def _handle_color(game: Game, line: str, state: ParseState, index: int) -> None:
    if state.colors_parsed[index]:
        raise CubError("Error: Duplicate color definition")
    letter, color = parse_color(line)
    if letter == "F":
        game.floor_color = color
    else:
        game.ceiling_color = color
    state.colors_parsed[index] = True


def _parse_config_line(
    game: Game, line: str, state: ParseState, loader: Loader
) -> None:
    line = trim_leading_whitespace(line)
    if line == "":
        return
    for index, prefix in enumerate(_TEXTURE_PREFIXES):
        if line.startswith(prefix):
            _handle_texture(game, line, state, index, loader)
            return
    for index, prefix in enumerate(_COLOR_PREFIXES):
        if line.startswith(prefix):
            _handle_color(game, line, state, index)
            return
    raise CubError("Error: Invalid map configuration")


def _parse_map_line(game: Game, line: str, state: ParseState) -> None:
    builder = state.map_builder
    builder.add_line(line)
    game.map = builder.rows
    game.map_height = builder.height
    game.map_width = max(game.map_width, builder.width)


def _process_line(game: Game, line: str, state: ParseState, loader: Loader) -> None:
    if not state.parsing_map and line[:1] in ("1", " "):
        state.parsing_map = True
    if state.parsing_map:
        _parse_map_line(game, line, state)
    else:
        _parse_config_line(game, line, state, loader)


def _check_missing_definitions(state: ParseState) -> None:
    if not all(state.textures_parsed):
        raise CubError("Error: Missing one or more texture definitions")
    if not all(state.colors_parsed):
        raise CubError("Error: Missing floor or ceiling color definition")
    if not state.parsing_map:
        raise CubError("Error: No map data found")


def parse_lines(
    game: Game, lines: Iterable[str], loader: Loader = load_xpm
) -> ParseState:
    """Fill the game from the lines of a scene, validate the map, place the player."""
    state = ParseState()
    for line in lines:
        _process_line(game, line, state, loader)
    _check_missing_definitions(state)
    validate_map(game.map)
    init_player_position(game)
    return state


def parse_file(
    game: Game,
    filename: Union[str, os.PathLike[str]],
    loader: Loader = load_xpm,
) -> ParseState:
    """Read a scene file into the game."""
    try:
        stream = open(filename, encoding="latin-1", newline="")
    except OSError as exc:
        raise CubError("Error: Error opening file") from exc
    with stream:
        lines = list(read_lines(stream))
    return parse_lines(game, lines, loader)