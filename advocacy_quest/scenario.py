"""
Scenario resolution and content loading.

This module holds two pieces:

- ScenarioEngine: keeps the ordered scenario set and turns a picked choice into
  comfort/score deltas plus feedback.
- ContentLoader: parses and validates a content document (scenarios + NPCs)
  before the game accepts it.

Scoring policy (per pick, no "already answered" tracking):
- correct choice   → comfort +2, score +100
- incorrect choice → comfort -1, score +0
Comfort is clamped into [0, 10] when the outcome is applied, so the deltas
reported in a ChoiceOutcome are pre-clamp values.

Content file structure:
```json
{
  "scenarios": [
    {"id": "...", "cue": "...", "context": "...", "prompt": "...",
     "choices": [{"id": "...", "label": "...", "isCorrect": true, "why": "..."}]}
  ],
  "npcs": [
    {"id": "guide", "name": "Guide", "x": 2, "y": 2, "sprite": "🤝", "scenarioId": "..."}
  ]
}
```
Either key may be omitted; the omitted set is kept from the current content.
A document is accepted whole or not at all.

Usage:
    loader = ContentLoader(grid)
    content = loader.parse(text, current=state.content)
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Type

from pydantic import BaseModel, ValidationError

from .defaults import DEFAULT_NPCS, DEFAULT_SCENARIOS
from .environment import TileGrid, default_grid
from .schemas import (
    Choice,
    ChoiceFeedback,
    ChoiceOutcome,
    GameContent,
    NPC,
    PlayerState,
    Scenario,
)

CORRECT_COMFORT_DELTA = 2
CORRECT_SCORE_DELTA = 100
INCORRECT_COMFORT_DELTA = -1
INCORRECT_SCORE_DELTA = 0


class ContentValidationError(ValueError):
    """Raised when a content document is malformed or inconsistent.

    ``problems`` lists each individual issue found so the caller can show
    them all at once instead of one per attempt.
    """

    def __init__(self, reason: str, *, problems: Optional[List[str]] = None) -> None:
        self.reason = reason
        self.problems = list(problems or [])
        lines = [reason]
        lines.extend(f"  - {problem}" for problem in self.problems)
        super().__init__("\n".join(lines))


class ScenarioEngine:
    """Ordered scenario set plus the choice scoring policy."""

    def __init__(
        self,
        scenarios: Optional[Iterable[Scenario]] = None,
        *,
        correct_comfort: int = CORRECT_COMFORT_DELTA,
        correct_score: int = CORRECT_SCORE_DELTA,
        incorrect_comfort: int = INCORRECT_COMFORT_DELTA,
        incorrect_score: int = INCORRECT_SCORE_DELTA,
    ):
        if correct_score < 0 or incorrect_score < 0:
            raise ValueError("Score deltas must be non-negative")
        self._scenarios: List[Scenario] = list(scenarios or [])
        self.correct_comfort = correct_comfort
        self.correct_score = correct_score
        self.incorrect_comfort = incorrect_comfort
        self.incorrect_score = incorrect_score

    @property
    def scenarios(self) -> List[Scenario]:
        return list(self._scenarios)

    def replace(self, scenarios: Iterable[Scenario]) -> None:
        self._scenarios = list(scenarios)

    def get(self, scenario_id: str) -> Optional[Scenario]:
        return next((s for s in self._scenarios if s.id == scenario_id), None)

    def resolve_choice(self, choice: Choice) -> ChoiceOutcome:
        """Score a picked choice. Pure: nothing is mutated."""
        if choice.is_correct:
            comfort_delta, score_delta = self.correct_comfort, self.correct_score
        else:
            comfort_delta, score_delta = self.incorrect_comfort, self.incorrect_score
        return ChoiceOutcome(
            comfort_delta=comfort_delta,
            score_delta=score_delta,
            feedback=ChoiceFeedback(correct=choice.is_correct, why=choice.why),
        )

    @staticmethod
    def apply(player: PlayerState, outcome: ChoiceOutcome) -> PlayerState:
        """Apply an outcome to ``player`` in place (comfort clamped, score accumulated)."""
        player.adjust_comfort(outcome.comfort_delta)
        player.add_score(outcome.score_delta)
        return player


def resolve_choice(choice: Choice) -> ChoiceOutcome:
    """Score ``choice`` with the default policy."""
    return ScenarioEngine().resolve_choice(choice)


class ContentLoader:
    """Load and validate scenario/NPC content documents.

    Validation (all problems are collected before raising):
    - Document must be a JSON object holding ``scenarios`` and/or ``npcs`` lists
    - Every entry must match the Scenario / NPC schemas (required fields, types,
      at least one choice, unique choice ids within a scenario)
    - Scenario ids and NPC ids must be unique
    - NPCs must stand inside the grid
    - Every NPC ``scenarioId`` must name a scenario in the resulting set

    NPCs may stand on wall tiles (a counter or desk); only bounds are checked.
    """

    def __init__(self, grid: Optional[TileGrid] = None):
        self.grid = grid or default_grid()

    def load(self, path: Path | str, *, current: Optional[GameContent] = None) -> GameContent:
        """Load a content document from ``path``.

        Raises:
            FileNotFoundError: If the file doesn't exist
            ContentValidationError: If the document is malformed or inconsistent
        """
        content_path = Path(path)
        if not content_path.exists():
            raise FileNotFoundError(f"Content file not found at {content_path}")
        try:
            text = content_path.read_text("utf-8")
        except UnicodeDecodeError as exc:
            raise ContentValidationError("Content file is not UTF-8 text", problems=[str(exc)]) from exc
        return self.parse(text, current=current)

    def parse(self, text: str, *, current: Optional[GameContent] = None) -> GameContent:
        """Parse ``text`` into GameContent, filling omitted sets from ``current``."""
        try:
            data = json.loads(text)
        except (ValueError, RecursionError) as exc:
            # json also raises these for over-long integers and deep nesting
            raise ContentValidationError("Content is not valid JSON", problems=[str(exc)]) from exc
        return self.from_dict(data, current=current)

    def from_dict(self, data: Any, *, current: Optional[GameContent] = None) -> GameContent:
        self._validate_document(data)
        base = current or GameContent()

        problems: List[str] = []
        scenarios = self._parse_entries(data, "scenarios", Scenario, problems)
        npcs = self._parse_entries(data, "npcs", NPC, problems)
        if problems:
            raise ContentValidationError("Content entries failed validation", problems=problems)

        content = GameContent(
            scenarios=scenarios if scenarios is not None else list(base.scenarios),
            npcs=npcs if npcs is not None else list(base.npcs),
        )
        self._check_consistency(content)
        return content

    def dump(self, content: GameContent) -> str:
        """Serialize ``content`` back into the document shape ``parse`` accepts."""
        payload = content.model_dump(mode="json", by_alias=True)
        return json.dumps(payload, indent=2, ensure_ascii=False)

    def _validate_document(self, data: Any) -> None:
        if not isinstance(data, dict):
            raise ContentValidationError("Content must be a JSON object")

        present = [key for key in ("scenarios", "npcs") if key in data]
        if not present:
            raise ContentValidationError("Content must include 'scenarios' and/or 'npcs'")

        wrong = [key for key in present if not isinstance(data[key], list)]
        if wrong:
            raise ContentValidationError(
                "Content sections must be lists",
                problems=[f"'{key}' is {type(data[key]).__name__}" for key in wrong],
            )

    def _parse_entries(
        self,
        data: Dict[str, Any],
        key: str,
        model: Type[BaseModel],
        problems: List[str],
    ) -> Optional[List[BaseModel]]:
        if key not in data:
            return None
        parsed: List[BaseModel] = []
        for index, raw in enumerate(data[key]):
            try:
                parsed.append(model.model_validate(raw))
            except ValidationError as exc:
                for error in exc.errors():
                    location = ".".join(str(part) for part in error["loc"])
                    where = f"{key}[{index}]" + (f".{location}" if location else "")
                    problems.append(f"{where}: {error['msg']}")
        return parsed

    def _check_consistency(self, content: GameContent) -> None:
        problems: List[str] = []

        scenario_ids = [s.id for s in content.scenarios]
        for dup in sorted({sid for sid in scenario_ids if scenario_ids.count(sid) > 1}):
            problems.append(f"duplicate scenario id '{dup}'")

        npc_ids = [n.id for n in content.npcs]
        for dup in sorted({nid for nid in npc_ids if npc_ids.count(nid) > 1}):
            problems.append(f"duplicate npc id '{dup}'")

        known = set(scenario_ids)
        for npc in content.npcs:
            if not self.grid.in_bounds(npc.x, npc.y):
                problems.append(
                    f"npc '{npc.id}' at ({npc.x}, {npc.y}) is outside the "
                    f"{self.grid.width}x{self.grid.height} grid"
                )
            if npc.scenario_id not in known:
                problems.append(f"npc '{npc.id}' references unknown scenario '{npc.scenario_id}'")

        if problems:
            raise ContentValidationError("Content is inconsistent", problems=problems)


def default_content() -> GameContent:
    """Return a fresh copy of the built-in scenarios and NPCs."""
    return ContentLoader().from_dict({"scenarios": DEFAULT_SCENARIOS, "npcs": DEFAULT_NPCS})


def load_content(path: Path | str) -> GameContent:
    """Convenience function to load a content file against the default grid."""
    return ContentLoader().load(path, current=default_content())
