import logging
from collections import defaultdict
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from itertools import combinations

from best_ball_rosters.domain.filters import AnalysisSortField, CountRange, SortDirection
from best_ball_rosters.domain.player import EnrichedPlayer, average_adp
from best_ball_rosters.domain.roster import EnrichedRoster
from best_ball_rosters.domain.stack import Stack, StackAnalysis, stack_key
from best_ball_rosters.services.filters import filter_by_teams, sort_by

logger = logging.getLogger(__name__)

DEFAULT_MIN_SIZE = 2
DEFAULT_MAX_SIZE = 20


@dataclass
class _StackTally:
    team: str
    players: tuple[EnrichedPlayer, ...]
    frequency: int = 0


def _team_groups(roster: EnrichedRoster) -> dict[str, list[EnrichedPlayer]]:
    groups: dict[str, list[EnrichedPlayer]] = defaultdict(list)
    for player in roster.players:
        groups[player.actual_team].append(player)
    return groups


def analyze_stacks(
    rosters: Sequence[EnrichedRoster],
    min_size: int = DEFAULT_MIN_SIZE,
    max_size: int = DEFAULT_MAX_SIZE,
) -> StackAnalysis:
    """Count every same-team player subset across the roster pool.

    A team with ``n`` players in one roster contributes each of its subsets of
    size ``min_size`` through ``min(max_size, n)``, so three stacked players
    yield three pairs and one trio.
    """
    if min_size < 2:
        raise ValueError(f"Stacks need at least 2 players, got min_size={min_size}")
    if max_size < min_size:
        raise ValueError(f"max_size {max_size} is smaller than min_size {min_size}")

    tallies: dict[str, _StackTally] = {}
    for roster in rosters:
        for team, players in _team_groups(roster).items():
            if len(players) < min_size:
                continue
            for size in range(min_size, min(max_size, len(players)) + 1):
                for subset in combinations(players, size):
                    key = stack_key(team, [p.full_name for p in subset])
                    tally = tallies.get(key)
                    if tally is None:
                        tally = tallies[key] = _StackTally(team=team, players=subset)
                    tally.frequency += 1

    total = len(rosters)
    stacks = tuple(
        Stack(
            team=tally.team,
            players=tally.players,
            player_names=tuple(sorted(p.full_name for p in tally.players)),
            size=len(tally.players),
            frequency=tally.frequency,
            percentage=tally.frequency / total * 100 if total else 0.0,
            average_adp=average_adp(tally.players),
        )
        for tally in tallies.values()
    )
    logger.debug("Found %d distinct stacks across %d rosters", len(stacks), total)
    return StackAnalysis(stacks=stacks, total_rosters=total)


def available_stack_sizes(analysis: StackAnalysis) -> list[int]:
    return sorted({s.size for s in analysis.stacks})


def available_teams(analysis: StackAnalysis) -> list[str]:
    return sorted({s.team for s in analysis.stacks})


def filter_and_sort_stacks(
    analysis: StackAnalysis,
    size_range: CountRange | None = None,
    teams: Iterable[str] = (),
    sort_field: AnalysisSortField = AnalysisSortField.FREQUENCY,
    direction: SortDirection = SortDirection.DESC,
) -> list[Stack]:
    stacks: list[Stack] = list(analysis.stacks)
    if size_range is not None:
        stacks = [s for s in stacks if size_range.contains(s.size)]
    stacks = filter_by_teams(stacks, lambda s: s.team, tuple(teams))
    if sort_field == AnalysisSortField.AVERAGE_ADP:
        return sort_by(stacks, lambda s: s.average_adp, direction)
    return sort_by(stacks, lambda s: s.frequency, direction)
