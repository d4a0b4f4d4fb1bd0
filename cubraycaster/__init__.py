"""Textured grid raycaster driven by .cub scene files, with XPM textures."""

__version__ = "0.1.0"

__all__ = [
    "app",
    "colors",
    "mapbuild",
    "mapcheck",
    "parser",
    "player",
    "raycast",
    "state",
    "xpm",
]