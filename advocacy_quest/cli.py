"""Terminal front-end for Self-Advocacy Quest.

Reads one command per line and redraws the map, HUD, and any open dialog
after each one:

    advocacy-quest
    advocacy-quest --content my_scenarios.json --snapshot saves/progress.json

Commands:
- ``w a s d`` / ``up down left right``: move one tile
- ``e`` / ``space`` / ``enter``: talk to an adjacent NPC
- ``1``..``n``: pick a choice while a dialog is open
- ``esc``: close the dialog
- ``export [PATH]`` / ``import [PATH]``: save or load progress
- ``load PATH``: apply a content file; ``content`` prints the current one;
  ``reset`` restores the built-in content
- ``help``, ``quit``
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from .config import Config
from .environment import render_ascii_map
from .game import GameController, GameState
from .logging_utils import Color, colored
from .movement import CANCEL_KEY, INTERACT_KEYS, KEY_DIRECTIONS
from .persistence import JsonSnapshotStore
from .scenario import ContentLoader, ContentValidationError, default_content
from .schemas import Position

KEY_ALIASES = {
    "up": "ArrowUp",
    "down": "ArrowDown",
    "left": "ArrowLeft",
    "right": "ArrowRight",
    "e": " ",
    "space": " ",
    "enter": "Enter",
    "esc": "Escape",
    "escape": "Escape",
}

HELP_TEXT = """Controls:
  w a s d / up down left right   move
  e / space / enter              talk to someone next to you
  1..n                           pick a choice in a dialog
  esc                            close the dialog
  export [PATH] / import [PATH]  save or load progress
  load PATH / content / reset    apply, show, or reset scenario content
  help / quit"""


def format_hud(state: GameState) -> str:
    player = state.player
    pills = f"Comfort: {player.comfort}/10  Score: {player.score}"
    return "\n".join([colored(pills, Color.CYAN, bold=True), state.message])


def format_dialog(state: GameState) -> str:
    active = state.active
    if active is None:
        return ""
    scenario = active.scenario
    lines = [
        colored("What do you notice?", Color.BLUE, bold=True),
        f"Cue: {scenario.cue}",
        f"Context: {scenario.context}",
        "",
        scenario.prompt,
        "",
    ]
    lines.extend(f"  {number}. {choice.label}" for number, choice in enumerate(scenario.choices, 1))
    if active.feedback is not None:
        if active.feedback.correct:
            lines.append(colored(f"Nice! {active.feedback.why}", Color.GREEN))
        else:
            lines.append(colored(f"Think again: {active.feedback.why}", Color.RED))
    lines.append("(esc to close)")
    return "\n".join(lines)


def render(state: GameState) -> str:
    parts = [
        render_ascii_map(state.grid, state.player.position.as_tuple(), state.npcs),
        format_hud(state),
    ]
    dialog = format_dialog(state)
    if dialog:
        parts.append(dialog)
    return "\n\n".join(parts)


class CommandRunner:
    """Maps typed commands onto controller operations."""

    def __init__(
        self,
        controller: GameController,
        *,
        snapshot_path: Path,
        write: Callable[[str], None] = print,
    ):
        self.controller = controller
        self.snapshot_path = snapshot_path
        self.write = write

    def execute(self, line: str) -> bool:
        """Run one command line. Returns False when the session should end."""
        parts = line.strip().split(maxsplit=1)
        if not parts:
            return True
        command, argument = parts[0], (parts[1] if len(parts) > 1 else None)
        lowered = command.lower()

        if lowered in {"quit", "exit"}:
            return False
        if lowered == "help":
            self.write(HELP_TEXT)
            return True
        if lowered == "content":
            self.write(self.controller.content_text())
            return True

        controller = self.controller
        if lowered == "export":
            controller.store = JsonSnapshotStore(Path(argument) if argument else self.snapshot_path)
            controller.save_progress()
        elif lowered == "import":
            controller.store = JsonSnapshotStore(Path(argument) if argument else self.snapshot_path)
            controller.load_progress()
        elif lowered == "load":
            if argument is None:
                self.write("Usage: load PATH")
                return True
            controller.load_content_file(argument)
        elif lowered == "reset":
            controller.reset_content()
        elif command.isdigit():
            controller.choose_index(int(command))
        elif lowered in KEY_ALIASES:
            controller.handle_key(KEY_ALIASES[lowered])
        elif command in KEY_DIRECTIONS or command in INTERACT_KEYS or command == CANCEL_KEY:
            controller.handle_key(command)
        else:
            self.write(f"Unknown command '{command}'. Type 'help' for controls.")
            return True

        self.write(render(controller.state))
        return True

    def run(self, lines: Iterable[str]) -> None:
        self.write(render(self.controller.state))
        for line in lines:
            if not self.execute(line):
                break


def build_controller(
    content_path: Optional[Path] = None,
    *,
    verbose: bool = False,
) -> GameController:
    """Create a controller from Config, optionally loading a content file.

    Raises:
        FileNotFoundError: If ``content_path`` doesn't exist
        ContentValidationError: If the content file is invalid
    """
    content = default_content()
    if content_path is not None:
        content = ContentLoader().load(content_path, current=content)
    state = GameState.new(
        content=content,
        start=Position(x=Config.START_X, y=Config.START_Y),
        comfort=Config.START_COMFORT,
    )
    return GameController(state, verbose=verbose)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Self-Advocacy Quest (terminal edition)")
    parser.add_argument(
        "--content",
        type=Path,
        default=Config.CONTENT_PATH,
        help="Scenario/NPC JSON file to play with instead of the built-in content",
    )
    parser.add_argument(
        "--snapshot",
        type=Path,
        default=Config.SNAPSHOT_PATH,
        help="Default file for export/import of progress",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        default=Config.NO_COLOR,
        help="Disable ANSI colors",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        default=Config.VERBOSE,
        help="Echo state transitions as they happen",
    )
    return parser.parse_args(argv)


def _stdin_lines() -> Iterable[str]:
    while True:
        try:
            yield input("> ")
        except EOFError:
            return


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    if args.no_color:
        os.environ["ADVOCACY_QUEST_NO_COLOR"] = "1"

    try:
        Config.validate()
        controller = build_controller(args.content, verbose=args.verbose)
    except (ValueError, FileNotFoundError) as exc:
        # ContentValidationError is a ValueError subclass.
        label = "Invalid content" if isinstance(exc, ContentValidationError) else "Configuration error"
        print(colored(f"{label}: {exc}", Color.RED), file=sys.stderr)
        return 1

    CommandRunner(controller, snapshot_path=args.snapshot).run(_stdin_lines())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
