"""
Self-Advocacy Quest - a small tile-grid game for practising self-advocacy.

Walk the school map, talk to the people you meet, and pick how to respond to
everyday situations. Good choices raise comfort and score.

The game logic is plain state transitions with no I/O; front-ends drive a
GameController and render its state.
"""

__version__ = "0.1.0"

# Core schemas
from .schemas import (
    ActiveInteraction,
    Choice,
    ChoiceFeedback,
    ChoiceOutcome,
    GameContent,
    NPC,
    PlayerState,
    Position,
    ProgressSnapshot,
    Scenario,
)

# Grid environment
from .environment import GridCell, TileGrid, default_grid, render_ascii_map

# State transitions
from .movement import direction_for_key, move_player
from .interaction import InteractionResult, find_adjacent_npc, resolve_interaction
from .scenario import (
    ContentLoader,
    ContentValidationError,
    ScenarioEngine,
    default_content,
    load_content,
    resolve_choice,
)

# Progress snapshots
from .persistence import (
    InMemorySnapshotStore,
    JsonSnapshotStore,
    SnapshotError,
    SnapshotStore,
    export_snapshot,
    parse_snapshot,
)

# Session controller
from .game import GameController, GameState

__all__ = [
    # Schemas
    "ActiveInteraction",
    "Choice",
    "ChoiceFeedback",
    "ChoiceOutcome",
    "GameContent",
    "NPC",
    "PlayerState",
    "Position",
    "ProgressSnapshot",
    "Scenario",
    # Environment
    "GridCell",
    "TileGrid",
    "default_grid",
    "render_ascii_map",
    # Transitions
    "direction_for_key",
    "move_player",
    "InteractionResult",
    "find_adjacent_npc",
    "resolve_interaction",
    "ContentLoader",
    "ContentValidationError",
    "ScenarioEngine",
    "default_content",
    "load_content",
    "resolve_choice",
    # Persistence
    "InMemorySnapshotStore",
    "JsonSnapshotStore",
    "SnapshotError",
    "SnapshotStore",
    "export_snapshot",
    "parse_snapshot",
    # Controller
    "GameController",
    "GameState",
]
