"""Co-occurrence analysis around a single searched player."""

import logging
from collections.abc import Iterable, Sequence

from best_ball_rosters.domain.adp import MISSING_ADP
from best_ball_rosters.domain.association import PlayerAssociation, PlayerAssociationsAnalysis, PlayerOccurrence
from best_ball_rosters.domain.filters import AnalysisSortField, SortDirection
from best_ball_rosters.domain.player import EnrichedPlayer, is_same_player
from best_ball_rosters.domain.roster import EnrichedRoster
from best_ball_rosters.names import matches_query
from best_ball_rosters.services.filters import filter_by_teams, sort_by

logger = logging.getLogger(__name__)


def _adp_or_missing(player: EnrichedPlayer) -> float:
    return player.adp if player.has_adp and player.adp is not None else MISSING_ADP


def find_player(rosters: Iterable[EnrichedRoster], query: str) -> EnrichedPlayer | None:
    """First player in roster order whose name contains ``query``; no ranking."""
    if not query.strip():
        return None
    for roster in rosters:
        for player in roster.players:
            if matches_query(player.full_name, query):
                return player
    return None


def all_players(rosters: Iterable[EnrichedRoster]) -> list[PlayerOccurrence]:
    """Every distinct player (by lowercase full name) with its occurrence count, most common first."""
    first_seen: dict[str, EnrichedPlayer] = {}
    counts: dict[str, int] = {}
    for roster in rosters:
        for player in roster.players:
            key = player.full_name.lower()
            first_seen.setdefault(key, player)
            counts[key] = counts.get(key, 0) + 1

    occurrences = [
        PlayerOccurrence(name=player.full_name, player=player, count=counts[key]) for key, player in first_seen.items()
    ]
    return sorted(occurrences, key=lambda o: o.count, reverse=True)


def analyze_associations(
    rosters: Sequence[EnrichedRoster], searched_player: EnrichedPlayer
) -> PlayerAssociationsAnalysis | None:
    """Count how often every other player shares a roster with ``searched_player``.

    Rosters and the searched player are matched by id or exact full name, so
    two different players with the same name are counted as one.

    Returns:
        None when no roster contains the searched player.
    """
    containing = [r for r in rosters if any(is_same_player(p, searched_player) for p in r.players)]
    if not containing:
        logger.debug("No rosters contain %s", searched_player.full_name)
        return None

    first_seen: dict[str, EnrichedPlayer] = {}
    counts: dict[str, int] = {}
    for roster in containing:
        for player in roster.players:
            if is_same_player(player, searched_player):
                continue
            key = player.full_name.lower()
            first_seen.setdefault(key, player)
            counts[key] = counts.get(key, 0) + 1

    shared_total = len(containing)
    associations = tuple(
        PlayerAssociation(
            player=player,
            shared_rosters=counts[key],
            shared_percentage=counts[key] / shared_total * 100,
            average_adp=_adp_or_missing(player),
        )
        for key, player in first_seen.items()
    )
    return PlayerAssociationsAnalysis(
        searched_player=searched_player,
        searched_player_rosters=shared_total,
        associations=associations,
    )


def available_teams(analysis: PlayerAssociationsAnalysis) -> list[str]:
    return sorted({a.player.actual_team for a in analysis.associations})


def filter_and_sort_associations(
    analysis: PlayerAssociationsAnalysis,
    teams: Iterable[str] = (),
    sort_field: AnalysisSortField = AnalysisSortField.FREQUENCY,
    direction: SortDirection = SortDirection.DESC,
) -> list[PlayerAssociation]:
    associations = filter_by_teams(analysis.associations, lambda a: a.player.actual_team, tuple(teams))
    if sort_field == AnalysisSortField.AVERAGE_ADP:
        return sort_by(associations, lambda a: a.average_adp, direction)
    return sort_by(associations, lambda a: a.shared_rosters, direction)
