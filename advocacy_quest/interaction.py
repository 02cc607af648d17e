"""
Interaction resolution: who is the player talking to, and about what?

On an interact key press the NPC list is scanned in authored order and the
first NPC within one step (Manhattan distance) wins. List order is the
tie-break when several NPCs are in reach; it is neither alphabetical nor
nearest-first.

The resolver is pure. It reports what should happen through an
``InteractionResult`` and leaves state changes to the game controller.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from .environment import is_adjacent
from .schemas import NPC, Position, Scenario

INTERACTION_REACH = 1

NO_ONE_NEARBY = "There's no one nearby to interact with."


@dataclass(frozen=True)
class InteractionResult:
    """Outcome of an interact attempt.

    - ``npc`` is None when nobody is in reach.
    - ``scenario`` is None when nobody is in reach or the NPC's scenario id
      does not resolve; in both cases no dialog opens.
    """

    npc: Optional[NPC]
    scenario: Optional[Scenario]
    message: str

    @property
    def opened(self) -> bool:
        return self.scenario is not None


def find_adjacent_npc(
    npcs: Iterable[NPC], position: Position, *, reach: int = INTERACTION_REACH
) -> Optional[NPC]:
    """Return the first NPC (list order) within ``reach`` of ``position``."""
    origin = position.as_tuple()
    for npc in npcs:
        if is_adjacent(origin, (npc.x, npc.y), reach=reach):
            return npc
    return None


def find_scenario(scenarios: Iterable[Scenario], scenario_id: str) -> Optional[Scenario]:
    return next((s for s in scenarios if s.id == scenario_id), None)


def resolve_interaction(
    npcs: Iterable[NPC], scenarios: Iterable[Scenario], position: Position
) -> InteractionResult:
    """Decide what an interact key press at ``position`` does."""
    npc = find_adjacent_npc(npcs, position)
    if npc is None:
        return InteractionResult(npc=None, scenario=None, message=NO_ONE_NEARBY)

    scenario = find_scenario(scenarios, npc.scenario_id)
    if scenario is None:
        # Dangling reference: treat the NPC as having nothing to say.
        return InteractionResult(
            npc=npc,
            scenario=None,
            message=f"{npc.name} has no scenario to share right now.",
        )

    return InteractionResult(npc=npc, scenario=scenario, message=f"Talking with {npc.name}…")
