"""Data source protocol for the loaded snapshot.

Every source is a zero-argument callable returning the full record list:

    result = adp_source()
    if result.is_ok():
        entries = result.unwrap()

Sources never raise for load failures; they return ``Err(DataSourceError)``
and leave the decision to the caller.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, TypeVar

if TYPE_CHECKING:
    from best_ball_rosters.domain.adp import ADPEntry
    from best_ball_rosters.domain.draftable import DraftablePlayer
    from best_ball_rosters.domain.roster import Roster
    from best_ball_rosters.result import Err, Ok

T_co = TypeVar("T_co", covariant=True)


class DataSourceError(Exception):
    """Base error for data source failures.

    Attributes:
        message: Human-readable error description.
        cause: Optional underlying exception that caused this error.
    """

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message


class BatchDataSource(Protocol[T_co]):
    """Protocol for sources that only return the whole dataset."""

    def __call__(self) -> Ok[list[T_co]] | Err[DataSourceError]: ...


if TYPE_CHECKING:
    RosterSource = BatchDataSource[Roster]
    ADPSource = BatchDataSource[ADPEntry]
    DraftablesSource = BatchDataSource[DraftablePlayer]
