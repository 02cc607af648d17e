"""
Keyboard-to-movement mapping and grid-validated steps.

Movement is one tile per key press along a single axis. A step that would
leave the map or enter a wall is rejected silently: the player simply stays
where they are. Blocked movement is an expected boundary, not an error.

Usage:
    direction = direction_for_key("ArrowRight")
    player.position = move_player(grid, player.position, direction)
"""

from typing import Dict, FrozenSet, Tuple

from .environment import TileGrid
from .schemas import Position

Direction = Tuple[int, int]

STAY: Direction = (0, 0)
LEFT: Direction = (-1, 0)
RIGHT: Direction = (1, 0)
UP: Direction = (0, -1)
DOWN: Direction = (0, 1)

# Arrow keys and WASD in either case.
KEY_DIRECTIONS: Dict[str, Direction] = {
    "ArrowLeft": LEFT,
    "a": LEFT,
    "A": LEFT,
    "ArrowRight": RIGHT,
    "d": RIGHT,
    "D": RIGHT,
    "ArrowUp": UP,
    "w": UP,
    "W": UP,
    "ArrowDown": DOWN,
    "s": DOWN,
    "S": DOWN,
}

INTERACT_KEYS: FrozenSet[str] = frozenset({" ", "Enter"})
CANCEL_KEY = "Escape"


def direction_for_key(key: str) -> Direction:
    """Return the step vector for ``key``; unrecognised keys map to ``STAY``."""
    return KEY_DIRECTIONS.get(key, STAY)


def is_direction_key(key: str) -> bool:
    return key in KEY_DIRECTIONS


def candidate_position(grid: TileGrid, current: Position, direction: Direction) -> Position:
    """Apply ``direction`` to ``current`` and clamp the result into the grid."""
    stepped = current.offset(*direction)
    x, y = grid.clamp(stepped.x, stepped.y)
    return Position(x=x, y=y)


def move_player(grid: TileGrid, current: Position, direction: Direction) -> Position:
    """Return the player's position after one step.

    The candidate is accepted only when it is walkable; otherwise ``current``
    is returned unchanged.
    """
    candidate = candidate_position(grid, current, direction)
    if grid.is_walkable(candidate.x, candidate.y):
        return candidate
    return current
