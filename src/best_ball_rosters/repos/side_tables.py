"""Process-wide cache of the ADP and draftables side tables.

One ``SideTableRepository`` is created per process and injected into every
component that needs lookups. Lifecycle: empty, populated on first load,
emptied by ``clear_cache()``, re-populated on the next load.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import TYPE_CHECKING

from best_ball_rosters.names import full_name, normalize_adp_name
from best_ball_rosters.repos._unwrap import unwrap_or_raise

if TYPE_CHECKING:
    from best_ball_rosters.data.protocol import ADPSource, DraftablesSource
    from best_ball_rosters.domain.adp import ADPEntry
    from best_ball_rosters.domain.draftable import DraftablePlayer

logger = logging.getLogger(__name__)

_SEARCH_LIMIT = 20


@dataclass(frozen=True)
class PositionADPSummary:
    position: str
    count: int
    average_adp: float
    top_player: ADPEntry


@dataclass(frozen=True)
class ADPSummary:
    total_players: int
    average_adp: float
    positions: tuple[PositionADPSummary, ...]


class SideTableRepository:
    """Loads, caches and indexes the ADP and draftables tables."""

    def __init__(self, adp_source: ADPSource, draftables_source: DraftablesSource) -> None:
        self._adp_source = adp_source
        self._draftables_source = draftables_source
        self._adp: list[ADPEntry] | None = None
        self._adp_by_name: dict[str, ADPEntry] = {}
        self._draftables: list[DraftablePlayer] | None = None
        self._draftables_by_id: dict[int, DraftablePlayer] = {}

    @property
    def is_loaded(self) -> bool:
        return self._adp is not None and self._draftables is not None

    def load_adp(self) -> list[ADPEntry]:
        """Return the ADP table, fetching it on first use.

        Raises:
            DataSourceError: If the ADP source fails.
        """
        if self._adp is not None:
            logger.debug("ADP cache hit (%d entries)", len(self._adp))
            return self._adp

        entries = unwrap_or_raise(self._adp_source(), "ADP data")
        by_name: dict[str, ADPEntry] = {}
        for entry in entries:
            by_name[entry.name.lower()] = entry
            by_name[normalize_adp_name(entry.name)] = entry
        self._adp_by_name = by_name
        self._adp = entries
        return entries

    def load_draftables(self) -> list[DraftablePlayer]:
        """Return the draftables table, fetching it on first use.

        Raises:
            DataSourceError: If the draftables source fails.
        """
        if self._draftables is not None:
            logger.debug("Draftables cache hit (%d players)", len(self._draftables))
            return self._draftables

        draftables = unwrap_or_raise(self._draftables_source(), "draftables data")
        by_id: dict[int, DraftablePlayer] = {}
        for draftable in draftables:
            by_id.setdefault(draftable.player_id, draftable)
        self._draftables_by_id = by_id
        self._draftables = draftables
        return draftables

    def load_all(self) -> tuple[list[ADPEntry], list[DraftablePlayer]]:
        """Load both tables, fetching uncached ones concurrently."""
        if self.is_loaded:
            return self.load_adp(), self.load_draftables()
        with ThreadPoolExecutor(max_workers=2) as pool:
            adp_future = pool.submit(self.load_adp)
            draftables_future = pool.submit(self.load_draftables)
            return adp_future.result(), draftables_future.result()

    def clear_cache(self) -> None:
        self._adp = None
        self._adp_by_name = {}
        self._draftables = None
        self._draftables_by_id = {}
        logger.debug("Cleared ADP and draftables caches")

    # ADP lookups

    def match_adp(self, first_name: str, last_name: str) -> ADPEntry | None:
        """Exact lookup on the suffix-stripped name, then the lowercase name."""
        name = full_name(first_name, last_name)
        for key in (normalize_adp_name(name), name.lower()):
            entry = self._adp_by_name.get(key)
            if entry is not None:
                return entry
        return None

    def adp_by_id(self, adp_id: str) -> ADPEntry | None:
        return next((e for e in self._adp or [] if e.id == adp_id), None)

    def adp_positions(self) -> list[str]:
        return sorted({e.position for e in self._adp or []})

    def adp_by_position(self, position: str) -> list[ADPEntry]:
        return [e for e in self._adp or [] if e.position == position]

    def top_adp_by_position(self, position: str, count: int = 10) -> list[ADPEntry]:
        return sorted(self.adp_by_position(position), key=lambda e: e.adp)[:count]

    def adp_overall_rank(self, adp_id: str) -> int | None:
        """1 + the number of entries with strictly lower ADP."""
        entry = self.adp_by_id(adp_id)
        if entry is None:
            return None
        return 1 + sum(1 for e in self._adp or [] if e.adp < entry.adp)

    def adp_position_rank(self, adp_id: str) -> int | None:
        entry = self.adp_by_id(adp_id)
        if entry is None:
            return None
        return 1 + sum(1 for e in self.adp_by_position(entry.position) if e.adp < entry.adp)

    def search_adp(self, query: str, limit: int = _SEARCH_LIMIT) -> list[ADPEntry]:
        """Entries whose name or team contains ``query``, lowest ADP first."""
        needle = query.lower()
        matches = [e for e in self._adp or [] if needle in e.name.lower() or needle in e.team.lower()]
        return sorted(matches, key=lambda e: e.adp)[:limit]

    def adp_summary(self) -> ADPSummary | None:
        entries = self._adp or []
        if not entries:
            return None

        by_position: dict[str, list[ADPEntry]] = defaultdict(list)
        for entry in entries:
            by_position[entry.position].append(entry)

        positions = tuple(
            PositionADPSummary(
                position=position,
                count=len(group),
                average_adp=round(sum(e.adp for e in group) / len(group), 1),
                top_player=min(group, key=lambda e: e.adp),
            )
            for position, group in sorted(by_position.items())
        )
        return ADPSummary(
            total_players=len(entries),
            average_adp=round(sum(e.adp for e in entries) / len(entries), 1),
            positions=positions,
        )

    # Draftable lookups

    def match_draftable(self, player_id: int) -> DraftablePlayer | None:
        return self._draftables_by_id.get(player_id)

    def bye_week(self, player_id: int) -> str | None:
        draftable = self.match_draftable(player_id)
        return draftable.bye_week if draftable is not None else None

    def draftables_by_position(self, position: str) -> list[DraftablePlayer]:
        return [d for d in self._draftables or [] if d.position == position]

    def draftable_positions(self) -> list[str]:
        return sorted({d.position for d in self._draftables or []})
