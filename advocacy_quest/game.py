"""
Game controller: the single owner of a session's state.

The controller turns key presses and menu actions into calls on the pure
movement, interaction, and scenario functions and writes the results back into
one GameState. Front-ends hold a controller and render ``controller.state``;
nothing lives in module globals.

Key handling per event:
- While a scenario dialog is open, only the cancel key does anything (it
  closes the dialog). Directional and interact keys are ignored.
- Otherwise a directional key moves the player one tile if the target is
  walkable; an interact key talks to the first NPC within one step.

Every public operation returns the user-visible status message after it ran.

Usage:
    controller = GameController()
    controller.handle_key("ArrowDown")
    controller.handle_key("Enter")
    controller.choose("ask-clarify")
"""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional

from .defaults import START_COMFORT, START_X, START_Y, WELCOME_MESSAGE
from .environment import TileGrid, default_grid
from .interaction import resolve_interaction
from .logging_utils import log_deterministic, log_error, log_info, log_success
from .movement import (
    CANCEL_KEY,
    INTERACT_KEYS,
    Direction,
    direction_for_key,
    is_direction_key,
    move_player,
)
from .persistence import (
    SnapshotError,
    SnapshotStore,
    apply_snapshot,
    export_snapshot,
    parse_snapshot,
)
from .scenario import ContentLoader, ContentValidationError, ScenarioEngine, default_content
from .schemas import (
    ActiveInteraction,
    GameContent,
    NPC,
    PlayerState,
    Position,
    Scenario,
)

CORRECT_MESSAGE = "Great advocacy! Keep going."
INCORRECT_MESSAGE = "Nice try, read the feedback and try another option."
NO_DIALOG_MESSAGE = "Walk up to someone and press Space/Enter to start a conversation."
CONTENT_APPLIED_MESSAGE = "Scenarios applied."
CONTENT_REJECTED_MESSAGE = "Invalid content. No changes made."
PROGRESS_LOADED_MESSAGE = "Progress loaded."
PROGRESS_REJECTED_MESSAGE = "Couldn't read file."
PROGRESS_EXPORTED_MESSAGE = "Progress exported."
PROGRESS_NOT_SAVED_MESSAGE = "Couldn't write file."
NO_SAVED_PROGRESS_MESSAGE = "No saved progress found."


@dataclass
class GameState:
    """Everything a session needs: map, player, content, open dialog, status line."""

    grid: TileGrid
    player: PlayerState
    engine: ScenarioEngine
    npcs: List[NPC]
    active: Optional[ActiveInteraction] = None
    message: str = WELCOME_MESSAGE

    @classmethod
    def new(
        cls,
        *,
        content: Optional[GameContent] = None,
        grid: Optional[TileGrid] = None,
        start: Optional[Position] = None,
        comfort: int = START_COMFORT,
    ) -> "GameState":
        """Create a fresh session.

        Raises:
            ValueError: If ``start`` is not a walkable tile or ``comfort`` is
                outside [0, 10].
        """
        grid = grid or default_grid()
        content = content or default_content()
        start = start or Position(x=START_X, y=START_Y)
        if not grid.is_walkable(start.x, start.y):
            raise ValueError(f"Start position ({start.x}, {start.y}) is not walkable")
        return cls(
            grid=grid,
            player=PlayerState(position=start, comfort=comfort, score=0),
            engine=ScenarioEngine(content.scenarios),
            npcs=list(content.npcs),
        )

    @property
    def scenarios(self) -> List[Scenario]:
        return self.engine.scenarios

    @property
    def content(self) -> GameContent:
        return GameContent(scenarios=self.engine.scenarios, npcs=list(self.npcs))

    @property
    def dialog_open(self) -> bool:
        return self.active is not None


class GameController:
    """Dispatches input to the state-transition functions for one session."""

    def __init__(
        self,
        state: Optional[GameState] = None,
        *,
        loader: Optional[ContentLoader] = None,
        store: Optional[SnapshotStore] = None,
        verbose: bool = False,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.state = state or GameState.new()
        self.loader = loader or ContentLoader(self.state.grid)
        self.store = store
        self.verbose = verbose
        self._clock = clock

    # ------------------------------------------------------------------
    # Keyboard
    # ------------------------------------------------------------------

    def handle_key(self, key: str) -> str:
        """Process one key press and return the status message."""
        if self.state.dialog_open:
            if key == CANCEL_KEY:
                return self.close()
            return self.state.message

        if is_direction_key(key):
            return self.move(direction_for_key(key))
        if key in INTERACT_KEYS:
            return self.interact()
        return self.state.message

    def move(self, direction: Direction) -> str:
        if self.state.dialog_open:
            return self.state.message

        player = self.state.player
        before = player.position
        after = move_player(self.state.grid, before, direction)
        if after != before:
            player.position = after
            self._log(log_deterministic, f"[Move] ({before.x}, {before.y}) -> ({after.x}, {after.y})")
        return self.state.message

    def interact(self) -> str:
        if self.state.dialog_open:
            return self.state.message

        result = resolve_interaction(self.state.npcs, self.state.scenarios, self.state.player.position)
        if result.opened:
            self.state.active = ActiveInteraction(scenario=result.scenario, npc_id=result.npc.id)
            self._log(log_deterministic, f"[Interact] {result.npc.id} opened '{result.scenario.id}'")
        elif result.npc is not None:
            self._log(log_info, f"[Interact] {result.npc.id} references missing scenario '{result.npc.scenario_id}'")
        self.state.message = result.message
        return self.state.message

    # ------------------------------------------------------------------
    # Scenario dialog
    # ------------------------------------------------------------------

    def choose(self, choice_id: str) -> str:
        """Resolve a choice in the open dialog; every pick applies its deltas."""
        active = self.state.active
        if active is None:
            self.state.message = NO_DIALOG_MESSAGE
            return self.state.message

        choice = active.scenario.get_choice(choice_id)
        if choice is None:
            self.state.message = f"Unknown choice '{choice_id}'."
            return self.state.message

        outcome = self.state.engine.resolve_choice(choice)
        self.state.engine.apply(self.state.player, outcome)
        active.feedback = outcome.feedback
        self.state.message = CORRECT_MESSAGE if outcome.feedback.correct else INCORRECT_MESSAGE
        self._log(
            log_deterministic,
            f"[Choice] {active.scenario_id}/{choice.id} comfort {outcome.comfort_delta:+d} "
            f"score {outcome.score_delta:+d} -> comfort={self.state.player.comfort} "
            f"score={self.state.player.score}",
        )
        return self.state.message

    def choose_index(self, number: int) -> str:
        """Resolve the ``number``-th choice (1-based, as numbered on screen)."""
        active = self.state.active
        if active is None:
            self.state.message = NO_DIALOG_MESSAGE
            return self.state.message
        if not 1 <= number <= len(active.scenario.choices):
            self.state.message = f"Pick a choice between 1 and {len(active.scenario.choices)}."
            return self.state.message
        return self.choose(active.scenario.choices[number - 1].id)

    def close(self) -> str:
        if self.state.active is not None:
            self._log(log_deterministic, f"[Dialog] closed '{self.state.active.scenario_id}'")
        self.state.active = None
        return self.state.message

    # ------------------------------------------------------------------
    # Content
    # ------------------------------------------------------------------

    def apply_content(self, text: str) -> str:
        """Replace scenarios and/or NPCs from a content document, atomically."""
        try:
            content = self.loader.parse(text, current=self.state.content)
        except ContentValidationError as exc:
            self._log(log_error, f"[Content] {exc}")
            self.state.message = CONTENT_REJECTED_MESSAGE
            return self.state.message
        return self._install_content(content)

    def load_content_file(self, path: Path | str) -> str:
        try:
            content = self.loader.load(path, current=self.state.content)
        except (OSError, ContentValidationError) as exc:
            self._log(log_error, f"[Content] {exc}")
            self.state.message = CONTENT_REJECTED_MESSAGE
            return self.state.message
        return self._install_content(content)

    def reset_content(self) -> str:
        """Reinstall the built-in scenarios and NPCs."""
        return self._install_content(default_content())

    def content_text(self) -> str:
        """Current content as an editable document."""
        return self.loader.dump(self.state.content)

    def _install_content(self, content: GameContent) -> str:
        self.state.engine.replace(content.scenarios)
        self.state.npcs = list(content.npcs)
        self.state.active = None
        self.state.message = CONTENT_APPLIED_MESSAGE
        self._log(
            log_success,
            f"[Content] {len(content.scenarios)} scenarios, {len(content.npcs)} npcs",
        )
        return self.state.message

    # ------------------------------------------------------------------
    # Progress snapshots
    # ------------------------------------------------------------------

    def export_progress(self) -> str:
        """Return the snapshot JSON for the current player."""
        now = self._clock() if self._clock else None
        return export_snapshot(self.state.player, now=now)

    def save_progress(self) -> str:
        """Export to the configured store."""
        if self.store is None:
            raise RuntimeError("No snapshot store configured")
        try:
            self.store.save(self.export_progress())
        except OSError as exc:
            self._log(log_error, f"[Progress] {exc}")
            self.state.message = PROGRESS_NOT_SAVED_MESSAGE
            return self.state.message
        self.state.message = PROGRESS_EXPORTED_MESSAGE
        self._log(log_success, "[Progress] exported")
        return self.state.message

    def import_progress(self, text: str) -> str:
        """Overwrite position/comfort/score from snapshot text, all or nothing."""
        try:
            update = parse_snapshot(text, self.state.grid)
        except SnapshotError as exc:
            self._log(log_error, f"[Progress] {exc}")
            self.state.message = PROGRESS_REJECTED_MESSAGE
            return self.state.message

        if update.is_empty:
            self._log(log_info, "[Progress] snapshot had nothing to apply")
        apply_snapshot(self.state.player, update)
        if update.position is not None:
            # Teleporting away ends the conversation.
            self.state.active = None
        self.state.message = PROGRESS_LOADED_MESSAGE
        self._log(log_success, "[Progress] loaded")
        return self.state.message

    def load_progress(self) -> str:
        """Import from the configured store."""
        if self.store is None:
            raise RuntimeError("No snapshot store configured")
        try:
            text = self.store.load()
        except (OSError, SnapshotError) as exc:
            self._log(log_error, f"[Progress] {exc}")
            self.state.message = PROGRESS_REJECTED_MESSAGE
            return self.state.message
        if text is None:
            self.state.message = NO_SAVED_PROGRESS_MESSAGE
            return self.state.message
        return self.import_progress(text)

    def _log(self, sink: Callable[[str], None], message: str) -> None:
        if self.verbose:
            sink(message)
