"""Roster export JSON parser and data source."""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from best_ball_rosters.data._fetch import default_client, read_text
from best_ball_rosters.data.protocol import DataSourceError
from best_ball_rosters.domain.player import Player
from best_ball_rosters.domain.roster import Roster
from best_ball_rosters.result import Err, Ok

logger = logging.getLogger(__name__)

_PLAYER_FIELDS = {"pid", "fn", "ln", "pn", "atabbr", "htabbr", "i"}


def parse_player(row: dict[str, Any]) -> Player:
    """Map a roster player record onto ``Player``; unknown keys land in ``stats``."""
    if not isinstance(row, dict):
        raise ValueError(f"Expected a player object, got {type(row).__name__}")
    return Player(
        player_id=int(row["pid"]),
        name_first=row.get("fn", "") or "",
        name_last=row.get("ln", "") or "",
        position=row.get("pn", "") or "",
        team=row.get("atabbr", "") or "",
        opponent=row.get("htabbr", "") or "",
        image_url=row.get("i", "") or "",
        stats={k: v for k, v in row.items() if k not in _PLAYER_FIELDS},
    )


def parse_roster(row: dict[str, Any]) -> Roster:
    if not isinstance(row, dict):
        raise ValueError(f"Expected a roster object, got {type(row).__name__}")
    group_id = row.get("ContestDraftGroupId")
    return Roster(
        lineup_id=int(row["LineupId"]),
        name=row.get("Name", "") or "",
        display_name=row.get("DisplayName", "") or "",
        contest_draft_group_id=int(group_id) if group_id is not None else None,
        entry_count=int(row.get("EntryCount", 1) or 1),
        last_modified=row.get("LastModified", "") or "",
        players=tuple(parse_player(p) for p in row.get("Players", [])),
    )


class RosterJsonSource:
    """BatchDataSource[Roster] reading a roster export.

    When ``contest_draft_group_id`` is set, only rosters from that draft
    group are returned.
    """

    def __init__(
        self,
        location: str,
        contest_draft_group_id: int | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._location = location
        self._contest_draft_group_id = contest_draft_group_id
        self._client = client or default_client()

    def __call__(self) -> Ok[list[Roster]] | Err[DataSourceError]:
        try:
            payload = json.loads(read_text(self._location, self._client))
            if not isinstance(payload, list):
                raise ValueError("Expected a list of rosters")
            rosters = [parse_roster(row) for row in payload]
        except (httpx.HTTPError, OSError, ValueError, KeyError, TypeError) as e:
            return Err(DataSourceError(f"Failed to load rosters from {self._location}", cause=e))

        if self._contest_draft_group_id is not None:
            rosters = [r for r in rosters if r.contest_draft_group_id == self._contest_draft_group_id]
        logger.info("Loaded %d rosters from %s", len(rosters), self._location)
        return Ok(rosters)
