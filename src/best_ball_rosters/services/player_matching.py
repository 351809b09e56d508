import logging
import math
from collections import defaultdict
from collections.abc import Iterable, Sequence

from best_ball_rosters.domain.adp import ADPEntry
from best_ball_rosters.domain.draftable import DraftablePlayer
from best_ball_rosters.domain.player import EnrichedPlayer, Player, resolve_position, resolve_team
from best_ball_rosters.domain.roster import EnrichedRoster, Roster
from best_ball_rosters.repos.side_tables import SideTableRepository

logger = logging.getLogger(__name__)

# Rough upper bound of a draftable ADP; value scores count down from here
_MAX_ADP = 300


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _group(players: Iterable[EnrichedPlayer], key: str) -> dict[str, tuple[EnrichedPlayer, ...]]:
    groups: dict[str, list[EnrichedPlayer]] = defaultdict(list)
    for player in players:
        groups[getattr(player, key)].append(player)
    return {k: tuple(v) for k, v in groups.items()}


def build_enriched_roster(roster: Roster, players: Sequence[EnrichedPlayer]) -> EnrichedRoster:
    """Attach position groupings and ADP aggregates to already-enriched players."""
    adp_values = [p.adp for p in players if p.adp is not None]
    total_adp = sum(adp_values)
    return EnrichedRoster(
        roster=roster,
        players=tuple(players),
        total_adp=total_adp,
        average_adp=total_adp / len(adp_values) if adp_values else 0.0,
        players_by_position=_group(players, "position"),
        players_by_actual_position=_group(players, "actual_position"),
    )


class PlayerMatchingService:
    """Joins roster players against the ADP and draftables side tables."""

    def __init__(self, side_tables: SideTableRepository) -> None:
        self._side_tables = side_tables

    def match_adp(self, first_name: str, last_name: str) -> ADPEntry | None:
        return self._side_tables.match_adp(first_name, last_name)

    def match_draftable(self, player_id: int) -> DraftablePlayer | None:
        return self._side_tables.match_draftable(player_id)

    def enrich_player(self, player: Player) -> EnrichedPlayer:
        adp_entry = self.match_adp(player.name_first, player.name_last)
        draftable = self.match_draftable(player.player_id)
        return EnrichedPlayer(
            player=player,
            adp=adp_entry.adp if adp_entry is not None else None,
            adp_rank=_round_half_up(adp_entry.adp) if adp_entry is not None else None,
            actual_position=resolve_position(player, draftable),
            actual_team=resolve_team(player, draftable),
            bye_week=draftable.bye_week if draftable is not None else None,
            image_url=(draftable.image_url if draftable is not None else "") or player.image_url,
        )

    def enrich_roster(self, roster: Roster) -> EnrichedRoster:
        """Enrich every player, keeping roster order.

        Raises:
            DataSourceError: If a side table has not been loaded and fails to load.
        """
        self._side_tables.load_all()
        return build_enriched_roster(roster, [self.enrich_player(p) for p in roster.players])

    def enrich_rosters(self, rosters: Sequence[Roster]) -> list[EnrichedRoster]:
        self._side_tables.load_all()
        enriched = [build_enriched_roster(r, [self.enrich_player(p) for p in r.players]) for r in rosters]
        matched = sum(1 for r in enriched for p in r.players if p.adp is not None)
        total = sum(len(r.players) for r in enriched)
        logger.info("Enriched %d rosters (%d/%d players matched to ADP)", len(enriched), matched, total)
        return enriched


def player_value(player: EnrichedPlayer) -> float:
    """Higher is better; 0 when the player has no ADP."""
    if player.adp is None or player.adp <= 0:
        return 0.0
    return _MAX_ADP - player.adp


def value_picks(players: Iterable[EnrichedPlayer], threshold: float = 100) -> list[EnrichedPlayer]:
    """Players drafted later than ``threshold`` ADP, latest first."""
    late = [p for p in players if p.adp is not None and p.adp > threshold]
    return sorted(late, key=lambda p: p.adp or 0.0, reverse=True)


def value_rankings(rosters: Iterable[EnrichedRoster]) -> list[EnrichedRoster]:
    """Rosters with ADP data, lowest total ADP first."""
    return sorted((r for r in rosters if r.total_adp > 0), key=lambda r: r.total_adp)


def top_value_rosters(rosters: Iterable[EnrichedRoster], count: int = 10) -> list[EnrichedRoster]:
    return value_rankings(rosters)[:count]
