"""Draftables JSON parser and data source."""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from best_ball_rosters.data._fetch import default_client, read_text
from best_ball_rosters.data.protocol import DataSourceError
from best_ball_rosters.domain.draftable import DraftablePlayer, PlayerAttribute
from best_ball_rosters.result import Err, Ok

logger = logging.getLogger(__name__)


def _parse_attributes(raw: list[dict[str, Any]] | None) -> tuple[PlayerAttribute, ...]:
    return tuple(PlayerAttribute(name=str(a.get("name", "")), value=str(a.get("value", ""))) for a in raw or [])


def parse_draftable(row: dict[str, Any]) -> DraftablePlayer:
    """Map a DraftKings draftable record onto ``DraftablePlayer``.

    Raises:
        KeyError: If ``playerId`` is missing.
        ValueError: If the record is not an object.
    """
    if not isinstance(row, dict):
        raise ValueError(f"Expected a draftable object, got {type(row).__name__}")
    return DraftablePlayer(
        player_id=int(row["playerId"]),
        draftable_id=int(row.get("draftableId", 0)),
        name_first=row.get("firstName", ""),
        name_last=row.get("lastName", ""),
        display_name=row.get("displayName", ""),
        position=row.get("position", "") or "",
        team=row.get("teamAbbreviation", "") or "",
        image_url=row.get("playerImage50", "") or "",
        attributes=_parse_attributes(row.get("playerAttributes")),
    )


def parse_draftables(payload: Any) -> list[DraftablePlayer]:
    """Parse a ``{"draftables": [...]}`` document."""
    if not isinstance(payload, dict) or not isinstance(payload.get("draftables"), list):
        raise ValueError("Expected an object with a 'draftables' list")
    return [parse_draftable(row) for row in payload["draftables"]]


class DraftablesJsonSource:
    """BatchDataSource[DraftablePlayer] reading a draftables JSON document."""

    def __init__(self, location: str, client: httpx.Client | None = None) -> None:
        self._location = location
        self._client = client or default_client()

    def __call__(self) -> Ok[list[DraftablePlayer]] | Err[DataSourceError]:
        try:
            payload = json.loads(read_text(self._location, self._client))
            draftables = parse_draftables(payload)
        except (httpx.HTTPError, OSError, ValueError, KeyError, TypeError) as e:
            return Err(DataSourceError(f"Failed to load draftables data from {self._location}", cause=e))

        logger.info("Loaded %d draftable players from %s", len(draftables), self._location)
        return Ok(draftables)
