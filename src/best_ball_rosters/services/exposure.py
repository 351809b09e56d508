import logging
from collections.abc import Iterable, Sequence

from best_ball_rosters.domain.adp import MISSING_ADP
from best_ball_rosters.domain.exposure import PlayerExposure, PlayerExposureAnalysis
from best_ball_rosters.domain.filters import AnalysisSortField, PlayerSearchResult, SortDirection
from best_ball_rosters.domain.player import EnrichedPlayer
from best_ball_rosters.domain.roster import EnrichedRoster
from best_ball_rosters.names import matches_query
from best_ball_rosters.services.filters import (
    MIN_QUERY_LENGTH,
    SEARCH_LIMIT,
    filter_by_teams,
    rank_player_matches,
    sort_by,
)

logger = logging.getLogger(__name__)


def analyze_exposure(rosters: Sequence[EnrichedRoster]) -> PlayerExposureAnalysis:
    """Share of the roster pool that drafted each player.

    Players are keyed by lowercase full name. Every occurrence counts, so a
    roster listing the same player twice counts twice.
    """
    first_seen: dict[str, EnrichedPlayer] = {}
    counts: dict[str, int] = {}
    for roster in rosters:
        for player in roster.players:
            key = player.full_name.lower()
            first_seen.setdefault(key, player)
            counts[key] = counts.get(key, 0) + 1

    total = len(rosters)
    exposures = tuple(
        PlayerExposure(
            player=player,
            roster_count=counts[key],
            exposure_percentage=counts[key] / total * 100,
            average_adp=player.adp if player.has_adp and player.adp is not None else MISSING_ADP,
        )
        for key, player in first_seen.items()
    )
    logger.debug("Computed exposure for %d players across %d rosters", len(exposures), total)
    return PlayerExposureAnalysis(exposures=exposures, total_rosters=total)


def available_teams(analysis: PlayerExposureAnalysis) -> list[str]:
    return sorted({e.player.actual_team for e in analysis.exposures})


def filter_and_sort_exposures(
    analysis: PlayerExposureAnalysis,
    teams: Iterable[str] = (),
    player_query: str = "",
    sort_field: AnalysisSortField = AnalysisSortField.FREQUENCY,
    direction: SortDirection = SortDirection.DESC,
) -> list[PlayerExposure]:
    exposures = filter_by_teams(analysis.exposures, lambda e: e.player.actual_team, tuple(teams))
    if player_query.strip():
        exposures = [e for e in exposures if matches_query(e.player.full_name, player_query)]
    if sort_field == AnalysisSortField.AVERAGE_ADP:
        return sort_by(exposures, lambda e: e.average_adp, direction)
    return sort_by(exposures, lambda e: e.roster_count, direction)


def search_exposures(
    analysis: PlayerExposureAnalysis,
    query: str,
    limit: int = SEARCH_LIMIT,
    min_query_length: int = MIN_QUERY_LENGTH,
) -> list[PlayerSearchResult]:
    """Autocomplete over an exposure analysis; ``count`` is the player's roster count."""
    candidates = ((e.player, e.roster_count) for e in analysis.exposures)
    return rank_player_matches(candidates, query, limit, min_query_length)
