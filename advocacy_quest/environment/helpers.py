"""Utilities for proximity checks and text rendering of the grid."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Tuple

from ..schemas import NPC
from .grid import GridCell, TileGrid


def manhattan_distance(a: Tuple[int, int], b: Tuple[int, int]) -> int:
    """Return |dx| + |dy| between two tile coordinates."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def is_adjacent(a: Tuple[int, int], b: Tuple[int, int], *, reach: int = 1) -> bool:
    """True when ``b`` is within ``reach`` steps of ``a`` (sharing a tile counts)."""
    return manhattan_distance(a, b) <= reach


_DEFAULT_TILE_SYMBOLS: Dict[str, str] = {
    "wall": "██",
    "floor": "· ",
    "player": "@ ",
    "npc": "N ",
}


def render_ascii_map(
    grid: TileGrid,
    player: Tuple[int, int],
    npcs: Iterable[NPC] = (),
    *,
    symbols: Optional[Dict[str, str]] = None,
) -> str:
    """Render the whole grid as text, top row first.

    NPCs are drawn with the first letter of their name so the map stays
    two-columns-per-tile wide regardless of sprite glyph width. The player is
    drawn last and hides an NPC standing on the same tile.
    """

    mapping = {**_DEFAULT_TILE_SYMBOLS}
    if symbols:
        mapping.update(symbols)

    npc_marks: Dict[Tuple[int, int], str] = {}
    for npc in npcs:
        # First NPC in list order owns the tile, matching interaction tie-breaks.
        coord = (npc.x, npc.y)
        if coord not in npc_marks:
            initial = npc.name[:1].upper() if npc.name else ""
            npc_marks[coord] = f"{initial} " if initial else mapping["npc"]

    rows: List[List[str]] = [[] for _ in range(grid.height)]
    for x, y, cell in grid.iter_cells():
        if (x, y) == tuple(player):
            rows[y].append(mapping["player"])
        elif (x, y) in npc_marks:
            rows[y].append(npc_marks[(x, y)])
        elif cell is GridCell.WALL:
            rows[y].append(mapping["wall"])
        else:
            rows[y].append(mapping["floor"])

    return "\n".join("".join(chars).rstrip() for chars in rows)
