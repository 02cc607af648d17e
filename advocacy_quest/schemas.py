"""
Pydantic schemas for Self-Advocacy Quest.

All data structures shared by the movement, interaction, and scenario layers
are defined here.

Design Philosophy:
- Content (scenarios, choices, NPCs) is data, validated before the game accepts it
- Wire names follow the content JSON (``isCorrect``, ``scenarioId``) through aliases,
  Python attributes stay snake_case
- Player counters carry their bounds on the model so a bad assignment fails loudly
"""

from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr, field_validator


COMFORT_MIN = 0
COMFORT_MAX = 10


# ============================================================================
# Spatial Schemas
# ============================================================================


class Position(BaseModel):
    """Integer tile coordinate; x grows rightward, y grows downward."""

    model_config = ConfigDict(frozen=True)

    x: int
    y: int

    def as_tuple(self) -> Tuple[int, int]:
        return (self.x, self.y)

    def offset(self, dx: int, dy: int) -> "Position":
        return Position(x=self.x + dx, y=self.y + dy)


# ============================================================================
# Content Schemas
# ============================================================================


class Choice(BaseModel):
    """One selectable response to a scenario."""

    model_config = ConfigDict(populate_by_name=True)

    id: StrictStr = Field(..., description="Unique within the owning scenario")
    label: StrictStr = Field(..., description="Text shown on the choice button")
    is_correct: StrictBool = Field(..., alias="isCorrect")
    why: StrictStr = Field(..., description="Feedback explaining the outcome")


class Scenario(BaseModel):
    """A social situation presented when the player talks to an NPC.

    ``cue`` is what the player notices in their body, ``context`` where they
    are, and ``prompt`` what is happening. Choices keep their authored order,
    which is the order they are numbered in the dialog.
    """

    id: StrictStr
    cue: StrictStr
    context: StrictStr
    prompt: StrictStr
    choices: List[Choice] = Field(..., min_length=1)

    @field_validator("choices")
    @classmethod
    def _choice_ids_unique(cls, choices: List[Choice]) -> List[Choice]:
        seen: set[str] = set()
        for choice in choices:
            if choice.id in seen:
                raise ValueError(f"duplicate choice id '{choice.id}'")
            seen.add(choice.id)
        return choices

    def get_choice(self, choice_id: str) -> Optional[Choice]:
        return next((c for c in self.choices if c.id == choice_id), None)


class NPC(BaseModel):
    """A fixed-position character linked to one scenario."""

    model_config = ConfigDict(populate_by_name=True)

    id: StrictStr
    name: StrictStr
    x: StrictInt
    y: StrictInt
    sprite: Optional[StrictStr] = Field(None, description="Single glyph shown on the map")
    scenario_id: StrictStr = Field(..., alias="scenarioId")

    @property
    def position(self) -> Position:
        return Position(x=self.x, y=self.y)


class GameContent(BaseModel):
    """The scenario and NPC sets a session plays with."""

    scenarios: List[Scenario] = Field(default_factory=list)
    npcs: List[NPC] = Field(default_factory=list)

    def get_scenario(self, scenario_id: str) -> Optional[Scenario]:
        return next((s for s in self.scenarios if s.id == scenario_id), None)


# ============================================================================
# Player & Interaction Schemas
# ============================================================================


class PlayerState(BaseModel):
    """Mutable player counters for one session.

    Assignment is validated, so writing a comfort outside [0, 10] or a
    negative score raises instead of corrupting the session. Use
    ``adjust_comfort`` and ``add_score`` for gameplay changes; they clamp and
    accumulate respectively.
    """

    model_config = ConfigDict(validate_assignment=True)

    position: Position
    comfort: int = Field(7, ge=COMFORT_MIN, le=COMFORT_MAX)
    score: int = Field(0, ge=0)

    def adjust_comfort(self, delta: int) -> int:
        self.comfort = max(COMFORT_MIN, min(COMFORT_MAX, self.comfort + delta))
        return self.comfort

    def add_score(self, delta: int) -> int:
        if delta < 0:
            raise ValueError("score only accumulates; negative deltas are not allowed")
        self.score += delta
        return self.score


class ChoiceFeedback(BaseModel):
    """Feedback shown in the dialog after a choice is picked."""

    correct: bool
    why: str


class ChoiceOutcome(BaseModel):
    """Deltas and feedback produced by resolving a choice (deltas are pre-clamp)."""

    comfort_delta: int
    score_delta: int
    feedback: ChoiceFeedback


class ActiveInteraction(BaseModel):
    """The scenario dialog currently open, if any."""

    scenario: Scenario
    npc_id: str
    feedback: Optional[ChoiceFeedback] = None

    @property
    def scenario_id(self) -> str:
        return self.scenario.id


class ProgressSnapshot(BaseModel):
    """Exported progress: position, counters, and a millisecond timestamp."""

    player: Position
    comfort: int
    score: int
    timestamp: int
