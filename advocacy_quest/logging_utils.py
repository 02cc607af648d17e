"""Logging utilities for Self-Advocacy Quest.

Provides color-coded output to distinguish state transitions, notices,
successes, and rejected input.
"""

import os
from enum import Enum


class Color(Enum):
    """ANSI color codes for terminal output."""

    # Colors for operation types
    BLUE = "\033[94m"      # Deterministic state transitions (movement, choices)
    RED = "\033[91m"       # Rejected content/snapshots
    GREEN = "\033[92m"     # Success/completion
    CYAN = "\033[96m"      # Info/metadata

    # Formatting
    BOLD = "\033[1m"
    RESET = "\033[0m"


def colored(text: str, color: Color, bold: bool = False) -> str:
    """Wrap text in ANSI color codes if colors are enabled.

    Args:
        text: Text to colorize
        color: Color to apply
        bold: Whether to make text bold

    Returns:
        Colorized text if ADVOCACY_QUEST_NO_COLOR is not set, otherwise plain text
    """
    if os.getenv("ADVOCACY_QUEST_NO_COLOR"):
        return text

    prefix = color.value
    if bold:
        prefix = Color.BOLD.value + prefix

    return f"{prefix}{text}{Color.RESET.value}"


def log_deterministic(message: str) -> None:
    """Log a state transition (blue)."""
    print(colored(f"{TAG_DETERMINISTIC} {message}", Color.BLUE))


def log_error(message: str) -> None:
    """Log a rejected operation (red)."""
    print(colored(f"{TAG_ERROR} {message}", Color.RED))


def log_success(message: str) -> None:
    """Log a success (green)."""
    print(colored(f"{TAG_SUCCESS} {message}", Color.GREEN))


def log_info(message: str) -> None:
    """Log metadata/info (cyan)."""
    print(colored(f"{TAG_INFO} {message}", Color.CYAN))


# Markers for operation types (color-blind accessible)
TAG_DETERMINISTIC = "[•]"  # State transition
TAG_ERROR = "[!]"          # Rejected input
TAG_SUCCESS = "[✓]"        # Success
TAG_INFO = "[i]"           # Information
