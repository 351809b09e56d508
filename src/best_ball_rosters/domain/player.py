from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from best_ball_rosters.domain.adp import MISSING_ADP

if TYPE_CHECKING:
    from collections.abc import Iterable

    from best_ball_rosters.domain.draftable import DraftablePlayer


@dataclass(frozen=True)
class Player:
    """A drafted player as it appears in a roster export.

    Attributes:
        player_id: Player identity shared with the draftables table.
        name_first: First name.
        name_last: Last name.
        position: Roster-slot position (may be FLEX or BN rather than the true position).
        team: The player's own team abbreviation.
        opponent: Opponent team abbreviation.
        image_url: Profile image URL.
        stats: Statistical fields carried through untouched.
    """

    player_id: int
    name_first: str
    name_last: str
    position: str
    team: str
    opponent: str = ""
    image_url: str = ""
    stats: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @property
    def full_name(self) -> str:
        return f"{self.name_first} {self.name_last}"


def resolve_position(player: Player, draftable: DraftablePlayer | None) -> str:
    """True position: the draftable record's position, else the roster-slot position."""
    if draftable is not None and draftable.position:
        return draftable.position
    return player.position


def resolve_team(player: Player, draftable: DraftablePlayer | None) -> str:
    """True team: the draftable record's team, else the player's own team."""
    if draftable is not None and draftable.team:
        return draftable.team
    return player.team


@dataclass(frozen=True)
class EnrichedPlayer:
    """A roster player joined with ADP and draftable metadata.

    ``actual_position`` and ``actual_team`` are always resolved; ``adp`` is
    ``None`` when no ADP entry matched.
    """

    player: Player
    actual_position: str
    actual_team: str
    image_url: str
    adp: float | None = None
    adp_rank: int | None = None
    bye_week: str | None = None

    @property
    def player_id(self) -> int:
        return self.player.player_id

    @property
    def name_first(self) -> str:
        return self.player.name_first

    @property
    def name_last(self) -> str:
        return self.player.name_last

    @property
    def full_name(self) -> str:
        return self.player.full_name

    @property
    def position(self) -> str:
        return self.player.position

    @property
    def team(self) -> str:
        return self.player.team

    @property
    def has_adp(self) -> bool:
        return self.adp is not None and self.adp > 0


def is_same_player(a: EnrichedPlayer, b: EnrichedPlayer) -> bool:
    """Identity-or-name match.

    Two distinct players sharing a full name are treated as the same player.
    """
    return a.player_id == b.player_id or a.full_name == b.full_name


def average_adp(players: Iterable[EnrichedPlayer]) -> float:
    """Mean ADP over players with a positive ADP, ``MISSING_ADP`` when there are none."""
    values = [p.adp for p in players if p.adp is not None and p.adp > 0]
    if not values:
        return MISSING_ADP
    return sum(values) / len(values)
