from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from best_ball_rosters.repos._unwrap import unwrap_or_raise

if TYPE_CHECKING:
    from best_ball_rosters.data.protocol import RosterSource
    from best_ball_rosters.domain.roster import Roster

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RosterPlayerSummary:
    name: str
    position: str
    team: str


class RosterRepository:
    """Caches the raw roster snapshot and answers lookups over it."""

    def __init__(self, source: RosterSource) -> None:
        self._source = source
        self._rosters: list[Roster] | None = None

    def load(self) -> list[Roster]:
        """Return the roster snapshot, fetching it on first use.

        Raises:
            DataSourceError: If the roster source fails.
        """
        if self._rosters is not None:
            logger.debug("Roster cache hit (%d rosters)", len(self._rosters))
            return self._rosters
        self._rosters = unwrap_or_raise(self._source(), "rosters")
        return self._rosters

    def clear_cache(self) -> None:
        self._rosters = None

    def by_lineup_id(self, lineup_id: int) -> Roster | None:
        return next((r for r in self._rosters or [] if r.lineup_id == lineup_id), None)

    def by_player_name(self, player_name: str) -> list[Roster]:
        needle = player_name.lower()
        return [r for r in self._rosters or [] if any(needle in p.full_name.lower() for p in r.players)]

    def by_team(self, team: str) -> list[Roster]:
        """Rosters with a player whose own or opponent team abbreviation is ``team``."""
        return [r for r in self._rosters or [] if any(team in (p.team, p.opponent) for p in r.players)]

    def all_teams(self) -> list[str]:
        teams: set[str] = set()
        for roster in self._rosters or []:
            for player in roster.players:
                teams.add(player.team)
                teams.add(player.opponent)
        teams.discard("")
        return sorted(teams)

    def all_players(self) -> list[RosterPlayerSummary]:
        """One entry per player id (first occurrence wins), sorted by name."""
        players: dict[int, RosterPlayerSummary] = {}
        for roster in self._rosters or []:
            for player in roster.players:
                if player.player_id not in players:
                    players[player.player_id] = RosterPlayerSummary(
                        name=player.full_name,
                        position=player.position,
                        team=player.team,
                    )
        return sorted(players.values(), key=lambda p: p.name)
