from __future__ import annotations

import logging
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from best_ball_rosters.data.protocol import DataSourceError
    from best_ball_rosters.result import Err, Ok

logger = logging.getLogger(__name__)

T = TypeVar("T")


def unwrap_or_raise(result: Ok[list[T]] | Err[DataSourceError], label: str) -> list[T]:
    """Return the loaded records or raise the source's ``DataSourceError``."""
    if result.is_err():
        error = result.unwrap_err()
        logger.error("Loading %s failed: %s", label, error)
        raise error
    return result.unwrap()
