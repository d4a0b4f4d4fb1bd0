# cubraycaster

A small first-person raycaster. It reads a `.cub` scene file that names four
wall textures (XPM images), the floor and ceiling colours and a grid map,
checks that the map is closed by walls, and opens a 1600×900 window (using
pygame) that you can walk through.

## Installing

```
pip install .
```

## Running

```
cubraycaster path/to/scene.cub
```

The command takes exactly one argument, and its name must end in `.cub`. If
the arguments, the file, a texture or the map is invalid, it prints a message
starting with `Error:` to standard error and exits with status 1. On a normal
exit it prints `cub3d: successfully exited.`.

### Controls

| Key            | Action                  |
|----------------|-------------------------|
| `W` / `S`      | move forward / backward |
| `A` / `D`      | strafe left / right     |
| `←` / `→`      | turn left / right       |
| `Esc`          | quit                    |

Closing the window quits as well. The player only moves onto floor (`0`)
cells; walls stop movement along each axis separately.

## The `.cub` format

```
NO ./textures/north.xpm
SO ./textures/south.xpm
WE ./textures/west.xpm
EA ./textures/east.xpm

F 220,100,0
C 225,30,0

111111
100001
10N001
111111
```

* `NO`, `SO`, `WE`, `EA` give the XPM texture for each wall direction. Each
  must appear exactly once. Textures are sampled as 64×64 images.
* `F` and `C` give the floor and ceiling colours as `R,G,B`, each from 0 to
  255. Each must appear exactly once.
* Leading spaces and tabs on these lines are ignored, and blank lines between
  them are skipped.
* The map starts at the first line beginning with `1` or a space and must come
  last. It uses `1` for walls, `0` for floor, spaces for empty cells, and
  exactly one of `N`, `S`, `E`, `W` for the starting position and the
  direction the player faces. It needs at least two rows, must be closed by
  walls, and may not be interrupted by a blank line.
* Reading stops at the first line of 1024 characters or more.

XPM textures may give colours as `#RRGGBB` or by X11 colour name; `None` is
read as transparent.

## Using it as a library

* `cubraycaster.state` holds `Game`, `Player`, `Keys`, `Texture`, `Color` and
  the base error `CubError`.
* `cubraycaster.parser` has `parse_file(game, filename)`,
  `parse_lines(game, lines)`, `parse_color`, `parse_texture_line`,
  `parse_args`, `read_lines`, `strtol` and `ParseState`. Both `parse_file` and
  `parse_lines` take an optional `loader` that turns a texture path into an
  `XpmImage` (by default `load_xpm`).
* `cubraycaster.mapcheck.validate_map(rows)` runs every enclosure check and
  raises `MapError` on the first failure; the single checks are available too.
* `cubraycaster.mapbuild` provides `MapBuilder`, `is_valid_map_line`,
  `find_initial_position` and `init_player_position`.
* `cubraycaster.xpm` reads XPM images with `load_xpm`, `parse_xpm` and
  `parse_xpm_lines`, returning an `XpmImage` (width, height and a flat tuple of
  pixels); malformed data raises `XpmError`.
* `cubraycaster.colors.color_by_name(name)` looks up an X11 colour name,
  ignoring case, and raises `KeyError` for an unknown one.
* `cubraycaster.raycast.render_frame(game, frame)` draws one frame into a flat
  mutable sequence of `win_width * win_height` pixels in `0xRRGGBB` form.
* `cubraycaster.player` moves and turns the player (`move_forward`,
  `rotate_left`, `update_player`, ...) and records key presses with
  `handle_keypress` and `handle_keyrelease`.
* `cubraycaster.app.run(game)` opens the window and runs the game loop;
  `cubraycaster.app.main(argv)` is the command above.

Errors from parsing and validation are raised as `CubError` or one of its
subclasses.

## Tests

```
pip install .[test]
pytest
```