from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from best_ball_rosters.domain.player import EnrichedPlayer


@dataclass(frozen=True)
class PlayerAssociation:
    """How often ``player`` shares a roster with the searched player.

    ``shared_percentage`` is relative to the searched player's rosters.
    """

    player: EnrichedPlayer
    shared_rosters: int
    shared_percentage: float
    average_adp: float


@dataclass(frozen=True)
class PlayerAssociationsAnalysis:
    searched_player: EnrichedPlayer
    searched_player_rosters: int
    associations: tuple[PlayerAssociation, ...]


@dataclass(frozen=True)
class PlayerOccurrence:
    name: str
    player: EnrichedPlayer
    count: int
