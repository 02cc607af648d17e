"""
Self-Advocacy Quest Configuration

Loads configuration from environment variables with sensible defaults.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

from .defaults import START_COMFORT, START_X, START_Y
from .environment import default_grid
from .persistence import SNAPSHOT_FILENAME
from .schemas import COMFORT_MAX, COMFORT_MIN

# Load .env file if it exists
load_dotenv()


def _flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in {"1", "true", "yes", "on"}


class Config:
    """Application configuration loaded from environment variables."""

    # Content
    # Optional scenario/NPC document loaded at start-up instead of the defaults
    CONTENT_PATH: Path | None = (
        Path(os.environ["ADVOCACY_QUEST_CONTENT"]) if os.getenv("ADVOCACY_QUEST_CONTENT") else None
    )

    # Progress snapshots
    SNAPSHOT_PATH: Path = Path(os.getenv("ADVOCACY_QUEST_SNAPSHOT", SNAPSHOT_FILENAME))

    # Starting player state
    START_X: int = int(os.getenv("ADVOCACY_QUEST_START_X", str(START_X)))
    START_Y: int = int(os.getenv("ADVOCACY_QUEST_START_Y", str(START_Y)))
    START_COMFORT: int = int(os.getenv("ADVOCACY_QUEST_START_COMFORT", str(START_COMFORT)))

    # Logging
    VERBOSE: bool = _flag("ADVOCACY_QUEST_VERBOSE")
    NO_COLOR: bool = _flag("ADVOCACY_QUEST_NO_COLOR")

    @classmethod
    def validate(cls) -> None:
        """Validate configuration and raise errors if values are unusable."""
        if not COMFORT_MIN <= cls.START_COMFORT <= COMFORT_MAX:
            raise ValueError(
                f"ADVOCACY_QUEST_START_COMFORT must be between {COMFORT_MIN} and "
                f"{COMFORT_MAX}, got {cls.START_COMFORT}"
            )

        if not default_grid().is_walkable(cls.START_X, cls.START_Y):
            raise ValueError(
                f"Start position ({cls.START_X}, {cls.START_Y}) is not a walkable tile. "
                "Set ADVOCACY_QUEST_START_X / ADVOCACY_QUEST_START_Y to a floor cell."
            )

        if cls.CONTENT_PATH is not None and not cls.CONTENT_PATH.exists():
            raise ValueError(f"ADVOCACY_QUEST_CONTENT points to a missing file: {cls.CONTENT_PATH}")

    @classmethod
    def display(cls) -> str:
        """Return a formatted string showing current configuration."""
        lines = [
            "Self-Advocacy Quest Configuration:",
            f"  Content: {cls.CONTENT_PATH or 'built-in defaults'}",
            f"  Snapshot: {cls.SNAPSHOT_PATH}",
            f"  Start: ({cls.START_X}, {cls.START_Y}) comfort {cls.START_COMFORT}",
            f"  Verbose: {cls.VERBOSE}",
            f"  Color: {'off' if cls.NO_COLOR else 'on'}",
        ]
        return "\n".join(lines)
