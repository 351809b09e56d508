from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from best_ball_rosters.domain.player import EnrichedPlayer

# Positions that accept roster-count constraints
COUNTED_POSITIONS: tuple[str, ...] = ("QB", "RB", "WR", "TE")


class SortDirection(StrEnum):
    ASC = "asc"
    DESC = "desc"


class RosterSortField(StrEnum):
    AVERAGE_ADP = "average_adp"
    LINEUP_ID = "lineup_id"


class AnalysisSortField(StrEnum):
    """Sort keys for stacks, associations and exposures.

    FREQUENCY maps to ``frequency``, ``shared_rosters`` or ``roster_count``.
    """

    FREQUENCY = "frequency"
    AVERAGE_ADP = "average_adp"


@dataclass(frozen=True)
class CountRange:
    """Inclusive ``[min, max]`` bound; ``None`` leaves that side open."""

    min: int | None = None
    max: int | None = None

    def __post_init__(self) -> None:
        if self.min is not None and self.min < 0:
            raise ValueError(f"Range minimum must be non-negative, got {self.min}")
        if self.max is not None and self.max < 0:
            raise ValueError(f"Range maximum must be non-negative, got {self.max}")
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError(f"Range minimum {self.min} exceeds maximum {self.max}")

    @property
    def is_open(self) -> bool:
        return self.min is None and self.max is None

    def contains(self, value: int) -> bool:
        if self.min is not None and value < self.min:
            return False
        return not (self.max is not None and value > self.max)


@dataclass(frozen=True)
class FilterOptions:
    """Roster-view filter state.

    Attributes:
        teams: Roster must include a player from every team listed.
        players: Roster must include every player listed (substring match).
        positions: Roster must include a player at every roster-slot position listed.
        stack_size: Bound on the roster's largest same-team group.
        position_counts: Per-position bounds on the number of players at that true position.
    """

    teams: tuple[str, ...] = ()
    players: tuple[str, ...] = ()
    positions: tuple[str, ...] = ()
    stack_size: CountRange | None = None
    position_counts: dict[str, CountRange] = field(default_factory=dict)

    def __post_init__(self) -> None:
        unknown = sorted(set(self.position_counts) - set(COUNTED_POSITIONS))
        if unknown:
            raise ValueError(f"Position count constraints only apply to {COUNTED_POSITIONS}, got {unknown}")


@dataclass(frozen=True)
class SortOptions:
    field: RosterSortField = RosterSortField.LINEUP_ID
    direction: SortDirection = SortDirection.ASC


@dataclass(frozen=True)
class PlayerSearchResult:
    name: str
    position: str
    team: str
    count: int


@dataclass(frozen=True)
class TeamGroup:
    """All players in one roster who share a true team."""

    team: str
    players: tuple[EnrichedPlayer, ...]

    @property
    def size(self) -> int:
        return len(self.players)


@dataclass(frozen=True)
class FilterValues:
    """Values present in a roster pool, for populating filter choices."""

    teams: tuple[str, ...]
    players: tuple[PlayerSearchResult, ...]
    positions: tuple[str, ...]
    stack_sizes: tuple[int, ...]
