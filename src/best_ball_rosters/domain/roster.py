from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from best_ball_rosters.domain.player import EnrichedPlayer, Player


@dataclass(frozen=True)
class Roster:
    """One drafted best ball entry, with players in draft-slot order."""

    lineup_id: int
    name: str
    players: tuple[Player, ...]
    display_name: str = ""
    contest_draft_group_id: int | None = None
    entry_count: int = 1
    last_modified: str = ""


@dataclass(frozen=True)
class EnrichedRoster:
    """A roster whose players carry ADP and true position/team.

    Attributes:
        roster: The source roster, unchanged.
        players: Enriched players in the same order as ``roster.players``.
        total_adp: Sum of ADP over players that have one.
        average_adp: Mean ADP over the same players, 0 when none have ADP.
        players_by_position: Players grouped by roster-slot position.
        players_by_actual_position: Players grouped by true position.
    """

    roster: Roster
    players: tuple[EnrichedPlayer, ...]
    total_adp: float
    average_adp: float
    players_by_position: dict[str, tuple[EnrichedPlayer, ...]]
    players_by_actual_position: dict[str, tuple[EnrichedPlayer, ...]]

    @property
    def lineup_id(self) -> int:
        return self.roster.lineup_id

    @property
    def name(self) -> str:
        return self.roster.name

    @property
    def display_name(self) -> str:
        return self.roster.display_name
