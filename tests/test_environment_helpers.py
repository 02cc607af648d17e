"""Tests for the tile grid and environment helper utilities."""

import pytest

from advocacy_quest.environment import (
    BASE_MAP,
    MAP_HEIGHT,
    MAP_WIDTH,
    GridCell,
    TileGrid,
    default_grid,
    is_adjacent,
    manhattan_distance,
    render_ascii_map,
)
from advocacy_quest.schemas import NPC


def test_default_grid_matches_base_map():
    grid = default_grid()

    assert grid.width == MAP_WIDTH == 18
    assert grid.height == MAP_HEIGHT == 12
    for x, y, cell in grid.iter_cells():
        assert cell == GridCell(BASE_MAP[y][x])


def test_is_walkable_floor_wall_and_out_of_range():
    grid = default_grid()

    assert grid.is_walkable(1, 1) is True
    assert grid.is_walkable(0, 0) is False  # border wall
    assert grid.is_walkable(2, 2) is False  # interior wall
    # Out-of-range never raises
    assert grid.is_walkable(-1, 1) is False
    assert grid.is_walkable(1, -1) is False
    assert grid.is_walkable(18, 1) is False
    assert grid.is_walkable(1, 12) is False


def test_clamp_keeps_coordinates_in_bounds():
    grid = default_grid()

    assert grid.clamp(-3, 5) == (0, 5)
    assert grid.clamp(40, 40) == (17, 11)
    assert grid.clamp(4, 4) == (4, 4)


def test_from_rows_rejects_ragged_and_unknown_cells():
    with pytest.raises(ValueError):
        TileGrid.from_rows([])
    with pytest.raises(ValueError):
        TileGrid.from_rows([[0, 0], [0]])
    with pytest.raises(ValueError):
        TileGrid.from_rows([[0, 2]])


def test_manhattan_distance_and_adjacency():
    assert manhattan_distance((1, 1), (2, 2)) == 2
    assert manhattan_distance((4, 7), (4, 7)) == 0
    assert is_adjacent((1, 2), (2, 2)) is True
    assert is_adjacent((2, 2), (2, 2)) is True
    assert is_adjacent((1, 1), (2, 2)) is False
    assert is_adjacent((1, 1), (2, 2), reach=2) is True


def test_render_ascii_map_marks_player_and_npcs():
    grid = default_grid()
    npcs = [NPC(id="guide", name="Guide", x=2, y=2, scenario_id="unclear-instruction")]

    ascii_map = render_ascii_map(grid, (1, 1), npcs)
    lines = ascii_map.splitlines()

    assert len(lines) == 12
    assert lines[0] == "██" * 18
    assert lines[1].startswith("██@ ")
    assert lines[2].startswith("██· G ")


def test_render_ascii_map_player_hides_npc_on_same_tile():
    grid = TileGrid.from_rows([[0, 0]])
    npcs = [NPC(id="a", name="Ally", x=0, y=0, scenario_id="s")]

    ascii_map = render_ascii_map(grid, (0, 0), npcs, symbols={"floor": ". "})

    assert ascii_map == "@ ."
