"""Filtering, sorting and search over rosters and analysis results.

Every function returns a new list and leaves its input untouched, so
filters can be composed and reapplied freely.
"""

from __future__ import annotations

from collections import Counter, defaultdict
from typing import TYPE_CHECKING, TypeVar

from best_ball_rosters.domain.filters import (
    FilterOptions,
    FilterValues,
    PlayerSearchResult,
    RosterSortField,
    SortDirection,
    SortOptions,
    TeamGroup,
)
from best_ball_rosters.names import matches_query

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence

    from best_ball_rosters.domain.player import EnrichedPlayer
    from best_ball_rosters.domain.roster import EnrichedRoster

T = TypeVar("T")

SEARCH_LIMIT = 20
MIN_QUERY_LENGTH = 2


def sort_by(items: Iterable[T], key: Callable[[T], float], direction: SortDirection) -> list[T]:
    """Numeric sort; equal keys keep their input order in either direction."""
    return sorted(items, key=key, reverse=direction == SortDirection.DESC)


def filter_by_teams(items: Iterable[T], team_of: Callable[[T], str], teams: Sequence[str]) -> list[T]:
    """Keep items whose team is one of ``teams``; an empty selection keeps everything."""
    if not teams:
        return list(items)
    selected = set(teams)
    return [item for item in items if team_of(item) in selected]


def roster_teams(roster: EnrichedRoster) -> set[str]:
    return {p.actual_team for p in roster.players}


def position_counts(players: Iterable[EnrichedPlayer]) -> Counter[str]:
    """Number of players at each true position."""
    return Counter(p.actual_position for p in players)


def find_team_groups(players: Iterable[EnrichedPlayer], min_size: int = 2) -> list[TeamGroup]:
    """Maximal same-team groups with at least ``min_size`` players, largest first."""
    by_team: dict[str, list[EnrichedPlayer]] = defaultdict(list)
    for player in players:
        by_team[player.actual_team].append(player)
    groups = [TeamGroup(team=team, players=tuple(group)) for team, group in by_team.items() if len(group) >= min_size]
    return sorted(groups, key=lambda g: g.size, reverse=True)


def largest_stack_size(roster: EnrichedRoster) -> int:
    """Size of the roster's largest same-team group, 0 if no team has two players."""
    return max((g.size for g in find_team_groups(roster.players)), default=0)


def _has_all_players(roster: EnrichedRoster, queries: Sequence[str]) -> bool:
    return all(any(matches_query(p.full_name, query) for p in roster.players) for query in queries)


def _matches(roster: EnrichedRoster, filters: FilterOptions) -> bool:
    if filters.teams and not set(filters.teams) <= roster_teams(roster):
        return False

    if filters.players and not _has_all_players(roster, filters.players):
        return False

    if filters.positions and not set(filters.positions) <= {p.position for p in roster.players}:
        return False

    if filters.stack_size is not None and not filters.stack_size.is_open:
        if not filters.stack_size.contains(largest_stack_size(roster)):
            return False

    if filters.position_counts:
        counts = position_counts(roster.players)
        for position, bounds in filters.position_counts.items():
            if not bounds.contains(counts.get(position, 0)):
                return False

    return True


def apply_filters(rosters: Iterable[EnrichedRoster], filters: FilterOptions) -> list[EnrichedRoster]:
    """Rosters satisfying every active filter.

    Teams, players and positions all use AND semantics: a roster must cover
    every selected value, not just one of them.
    """
    return [roster for roster in rosters if _matches(roster, filters)]


def sort_rosters(rosters: Iterable[EnrichedRoster], sort: SortOptions) -> list[EnrichedRoster]:
    if sort.field == RosterSortField.AVERAGE_ADP:
        return sort_by(rosters, lambda r: r.average_adp, sort.direction)
    return sort_by(rosters, lambda r: r.lineup_id, sort.direction)


def available_filter_values(rosters: Iterable[EnrichedRoster]) -> FilterValues:
    teams: set[str] = set()
    positions: set[str] = set()
    players: dict[str, PlayerSearchResult] = {}
    stack_sizes: set[int] = set()

    for roster in rosters:
        for player in roster.players:
            teams.add(player.actual_team)
            positions.add(player.actual_position)
            if player.full_name not in players:
                players[player.full_name] = PlayerSearchResult(
                    name=player.full_name,
                    position=player.actual_position,
                    team=player.actual_team,
                    count=0,
                )
        stack_sizes.update(g.size for g in find_team_groups(roster.players))

    return FilterValues(
        teams=tuple(sorted(teams)),
        players=tuple(sorted(players.values(), key=lambda p: p.name)),
        positions=tuple(sorted(positions)),
        stack_sizes=tuple(sorted(stack_sizes)),
    )


def rank_player_matches(
    candidates: Iterable[tuple[EnrichedPlayer, int]],
    query: str,
    limit: int = SEARCH_LIMIT,
    min_query_length: int = MIN_QUERY_LENGTH,
) -> list[PlayerSearchResult]:
    """Dedupe matching players by full name, sum their counts, most frequent first.

    ``candidates`` pairs each player with the count it contributes. Queries
    shorter than ``min_query_length`` (after trimming) match nothing.
    """
    if len(query.strip()) < min_query_length:
        return []

    results: dict[str, PlayerSearchResult] = {}
    for player, count in candidates:
        name = player.full_name
        if not matches_query(name, query):
            continue
        existing = results.get(name)
        if existing is None:
            results[name] = PlayerSearchResult(
                name=name,
                position=player.actual_position,
                team=player.actual_team,
                count=count,
            )
        else:
            results[name] = PlayerSearchResult(
                name=name,
                position=existing.position,
                team=existing.team,
                count=existing.count + count,
            )

    return sorted(results.values(), key=lambda r: r.count, reverse=True)[:limit]


def search_players(
    rosters: Iterable[EnrichedRoster],
    query: str,
    limit: int = SEARCH_LIMIT,
    min_query_length: int = MIN_QUERY_LENGTH,
) -> list[PlayerSearchResult]:
    """Autocomplete over a roster pool; ``count`` is the number of occurrences."""
    candidates = ((player, 1) for roster in rosters for player in roster.players)
    return rank_player_matches(candidates, query, limit, min_query_length)
