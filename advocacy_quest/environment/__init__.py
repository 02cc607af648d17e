"""Grid environment for Self-Advocacy Quest."""

from .grid import (
    BASE_MAP,
    MAP_HEIGHT,
    MAP_WIDTH,
    GridCell,
    TileGrid,
    default_grid,
)
from .helpers import (
    is_adjacent,
    manhattan_distance,
    render_ascii_map,
)

__all__ = [
    "BASE_MAP",
    "MAP_HEIGHT",
    "MAP_WIDTH",
    "GridCell",
    "TileGrid",
    "default_grid",
    "is_adjacent",
    "manhattan_distance",
    "render_ascii_map",
]
