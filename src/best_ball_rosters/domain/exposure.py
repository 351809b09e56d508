from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from best_ball_rosters.domain.player import EnrichedPlayer


@dataclass(frozen=True)
class PlayerExposure:
    player: EnrichedPlayer
    roster_count: int
    exposure_percentage: float
    average_adp: float


@dataclass(frozen=True)
class PlayerExposureAnalysis:
    exposures: tuple[PlayerExposure, ...]
    total_rosters: int
