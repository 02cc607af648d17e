"""
Progress snapshot export/import and pluggable snapshot storage.

A snapshot captures the player's position and counters:

```json
{"player": {"x": 1, "y": 1}, "comfort": 7, "score": 0, "timestamp": 1760000000000}
```

``timestamp`` is milliseconds since the Unix epoch. On import every field is
optional and validated before anything is assigned, so an import either
applies completely or leaves the player untouched:

- ``player`` must be ``{"x": int, "y": int}`` on a walkable tile
- ``comfort`` is applied when numeric, truncated to an int and clamped to [0, 10]
- ``score`` is applied when numeric, truncated to an int and floored at 0
- non-numeric ``comfort``/``score`` values are ignored

Two storage strategies are included:
1. InMemorySnapshotStore - keeps the last export in memory (tests, embedding)
2. JsonSnapshotStore - reads/writes a JSON file on disk
"""

import json
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, List, Optional

from .environment import TileGrid
from .schemas import COMFORT_MAX, COMFORT_MIN, PlayerState, Position, ProgressSnapshot

SNAPSHOT_FILENAME = "self-advocacy-quest-progress.json"


class SnapshotError(ValueError):
    """Raised when a snapshot cannot be read or would place the player illegally."""

    def __init__(self, reason: str, *, problems: Optional[List[str]] = None) -> None:
        self.reason = reason
        self.problems = list(problems or [])
        lines = [reason]
        lines.extend(f"  - {problem}" for problem in self.problems)
        super().__init__("\n".join(lines))


@dataclass(frozen=True)
class SnapshotUpdate:
    """Validated fields from an imported snapshot; None means "leave as is"."""

    position: Optional[Position] = None
    comfort: Optional[int] = None
    score: Optional[int] = None

    @property
    def is_empty(self) -> bool:
        return self.position is None and self.comfort is None and self.score is None


def build_snapshot(player: PlayerState, *, now: Optional[datetime] = None) -> ProgressSnapshot:
    moment = now or datetime.now(timezone.utc)
    return ProgressSnapshot(
        player=player.position,
        comfort=player.comfort,
        score=player.score,
        timestamp=int(moment.timestamp() * 1000),
    )


def export_snapshot(player: PlayerState, *, now: Optional[datetime] = None) -> str:
    """Serialize the player's progress as pretty-printed JSON."""
    payload = build_snapshot(player, now=now).model_dump(mode="json")
    return json.dumps(payload, indent=2)


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a meaningful counter value.
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def parse_snapshot(text: str, grid: TileGrid) -> SnapshotUpdate:
    """Validate snapshot ``text`` against ``grid`` without touching any state.

    Raises:
        SnapshotError: If the text is not JSON, not an object, or any present
            field is unusable.
    """
    try:
        data = json.loads(text or "{}")
    except (ValueError, RecursionError) as exc:
        # json also raises these for over-long integers and deep nesting
        raise SnapshotError("Snapshot is not valid JSON", problems=[str(exc)]) from exc

    if not isinstance(data, dict):
        raise SnapshotError("Snapshot must be a JSON object")

    problems: List[str] = []
    position: Optional[Position] = None
    comfort: Optional[int] = None
    score: Optional[int] = None

    raw_player = data.get("player")
    if raw_player is not None:
        if (
            isinstance(raw_player, dict)
            and _is_integer(raw_player.get("x"))
            and _is_integer(raw_player.get("y"))
        ):
            x, y = raw_player["x"], raw_player["y"]
            if grid.is_walkable(x, y):
                position = Position(x=x, y=y)
            else:
                problems.append(f"player position ({x}, {y}) is not a walkable tile")
        else:
            problems.append("player must be an object with integer 'x' and 'y'")

    for key in ("comfort", "score"):
        value = data.get(key)
        if not _is_number(value):
            continue
        if not math.isfinite(value):
            problems.append(f"{key} must be a finite number")
            continue
        if key == "comfort":
            comfort = max(COMFORT_MIN, min(COMFORT_MAX, int(value)))
        else:
            score = max(0, int(value))

    if problems:
        raise SnapshotError("Snapshot failed validation", problems=problems)

    return SnapshotUpdate(position=position, comfort=comfort, score=score)


def apply_snapshot(player: PlayerState, update: SnapshotUpdate) -> PlayerState:
    """Overwrite the fields present in ``update`` on ``player`` in place."""
    if update.position is not None:
        player.position = update.position
    if update.comfort is not None:
        player.comfort = update.comfort
    if update.score is not None:
        player.score = update.score
    return player


class SnapshotStore(ABC):
    """Where exported snapshot text goes and where imports come from."""

    @abstractmethod
    def save(self, text: str) -> None:
        pass

    @abstractmethod
    def load(self) -> Optional[str]:
        """Return the stored snapshot text, or None if nothing was saved."""
        pass


class InMemorySnapshotStore(SnapshotStore):
    """Keeps the most recent snapshot in memory; lost on exit."""

    def __init__(self, text: Optional[str] = None):
        self.text = text

    def save(self, text: str) -> None:
        self.text = text

    def load(self) -> Optional[str]:
        return self.text


class JsonSnapshotStore(SnapshotStore):
    """Reads and writes the snapshot as a UTF-8 JSON file."""

    def __init__(self, path: Path | str = SNAPSHOT_FILENAME):
        self.path = Path(path)

    def save(self, text: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(text, "utf-8")

    def load(self) -> Optional[str]:
        if not self.path.exists():
            return None
        try:
            return self.path.read_text("utf-8")
        except UnicodeDecodeError as exc:
            raise SnapshotError("Snapshot file is not UTF-8 text", problems=[str(exc)]) from exc
