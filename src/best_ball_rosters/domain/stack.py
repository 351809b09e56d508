from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from best_ball_rosters.domain.player import EnrichedPlayer


@dataclass(frozen=True)
class Stack:
    """A same-team player subset and how often it was drafted together.

    Identity is ``team`` plus the sorted ``player_names``.
    """

    team: str
    players: tuple[EnrichedPlayer, ...]
    player_names: tuple[str, ...]
    size: int
    frequency: int
    percentage: float
    average_adp: float

    @property
    def key(self) -> str:
        return stack_key(self.team, self.player_names)


@dataclass(frozen=True)
class StackAnalysis:
    stacks: tuple[Stack, ...]
    total_rosters: int


def stack_key(team: str, player_names: tuple[str, ...] | list[str]) -> str:
    return f"{team}:{','.join(sorted(player_names))}"
