"""ADP CSV parser and data source."""

from __future__ import annotations

import csv
import io
import logging
from typing import TYPE_CHECKING

import httpx

from best_ball_rosters.data._fetch import default_client, read_text
from best_ball_rosters.data.protocol import DataSourceError
from best_ball_rosters.domain.adp import MISSING_ADP, ADPEntry
from best_ball_rosters.result import Err, Ok

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)


def _normalize_headers(fieldnames: Sequence[str]) -> dict[str, str]:
    """Build a mapping from original header names to lowercase versions."""
    return {name: name.strip().lower() for name in fieldnames}


class ADPCsvParser:
    """Parses ADP CSV exports.

    Expected columns: ID, Name, Position, ADP, Team. A missing or
    non-numeric ADP is kept with ``MISSING_ADP`` so the player still resolves
    by name.
    """

    def parse(self, text: str) -> list[ADPEntry]:
        reader = csv.DictReader(io.StringIO(text))
        if reader.fieldnames is None:
            return []

        header_map = _normalize_headers(reader.fieldnames)
        entries: list[ADPEntry] = []
        for row in reader:
            normalized = {header_map[k]: v for k, v in row.items() if k in header_map}
            entry = self._parse_row(normalized)
            if entry is not None:
                entries.append(entry)
        return entries

    def _parse_row(self, row: dict[str, str | None]) -> ADPEntry | None:
        name = (row.get("name") or "").strip()
        if not name:
            if any((v or "").strip() for v in row.values()):
                logger.warning("Skipping ADP row without a name: %s", row)
            return None

        adp_str = (row.get("adp") or "").strip()
        try:
            adp = float(adp_str) if adp_str else MISSING_ADP
        except ValueError:
            logger.warning("Non-numeric ADP '%s' for %s, using %s", adp_str, name, MISSING_ADP)
            adp = MISSING_ADP

        return ADPEntry(
            id=(row.get("id") or "").strip(),
            name=name,
            position=(row.get("position") or "").strip(),
            adp=adp,
            team=(row.get("team") or "").strip(),
        )


class ADPCsvSource:
    """BatchDataSource[ADPEntry] reading an ADP CSV from a path or URL."""

    def __init__(self, location: str, client: httpx.Client | None = None) -> None:
        self._location = location
        self._client = client or default_client()
        self._parser = ADPCsvParser()

    def __call__(self) -> Ok[list[ADPEntry]] | Err[DataSourceError]:
        try:
            text = read_text(self._location, self._client)
            entries = self._parser.parse(text)
        except (httpx.HTTPError, OSError, ValueError, csv.Error) as e:
            return Err(DataSourceError(f"Failed to load ADP data from {self._location}", cause=e))

        logger.info("Loaded %d ADP entries from %s", len(entries), self._location)
        return Ok(entries)
