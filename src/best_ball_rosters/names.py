"""Player name normalization utilities for cross-source matching."""

from __future__ import annotations

import re

_NON_ALNUM_RE = re.compile(r"[^a-z0-9\s]")
_WHITESPACE_RE = re.compile(r"\s+")
_ADP_PUNCTUATION_RE = re.compile(r"[.']")
_ADP_SUFFIX_RE = re.compile(r"\b(?:jr|sr|iii|ii)\b")


def normalize_name(name: str) -> str:
    """Normalize a player name for search, filter and association lookups.

    - Converts to lowercase
    - Removes everything outside ``[a-z0-9]`` and whitespace
    - Collapses whitespace runs to one space and trims

    Args:
        name: Display name from any data source.

    Returns:
        Canonical name; normalizing it again returns the same string.
    """
    normalized = _NON_ALNUM_RE.sub("", name.lower())
    return _WHITESPACE_RE.sub(" ", normalized).strip()


def normalize_adp_name(name: str) -> str:
    """Looser normalization used only to match roster players to ADP entries.

    Strips periods, apostrophes and the generational suffixes Jr, Sr, II and
    III, so ``"Marvin Harrison Jr."`` and ``"Marvin Harrison"`` share a key.
    """
    stripped = _ADP_PUNCTUATION_RE.sub("", name.lower())
    stripped = _ADP_SUFFIX_RE.sub("", stripped)
    return _WHITESPACE_RE.sub(" ", stripped).strip()


def full_name(first: str, last: str) -> str:
    return f"{first} {last}"


def matches_query(name: str, query: str) -> bool:
    """Case-insensitive substring match on the raw or normalized name."""
    return query.lower() in name.lower() or normalize_name(query) in normalize_name(name)
