"""Result type for explicit error handling at the data-loading boundary.

Data sources return ``Ok`` with the parsed records or ``Err`` wrapping a
``DataSourceError``; repositories decide whether to raise.

Usage:
    result = adp_source()
    if result.is_ok():
        entries = result.unwrap()
    else:
        error = result.unwrap_err()
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, TypeVar, cast, final

if TYPE_CHECKING:
    from collections.abc import Callable

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E", bound=Exception)
_T = TypeVar("_T")
_U = TypeVar("_U")


class UnwrapError(Exception):
    """Raised when unwrap() is called on an Err or unwrap_err() on an Ok."""


@final
@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """A successful result holding a value."""

    _value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self._value

    def unwrap_or(self, default: T) -> T:
        return self._value

    def unwrap_err(self) -> Exception:
        raise UnwrapError("Called unwrap_err on Ok value")

    def map(self, fn: Callable[[T], U]) -> Result[U, E]:
        """Applies fn to the contained value, returning Ok(fn(value))."""
        return Ok(fn(self._value))


@final
@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """A failed result holding the error that caused it."""

    _error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> _T:  # noqa: UP049 # pyright: ignore[reportInvalidTypeVarUse]
        raise UnwrapError(f"Called unwrap on Err value: {self._error}")

    def unwrap_or(self, default: _T) -> _T:  # noqa: UP049
        return default

    def unwrap_err(self) -> E:
        return self._error

    def map(  # noqa: UP049
        self, fn: Callable[[_T], _U]  # pyright: ignore[reportInvalidTypeVarUse]
    ) -> Result[_U, E]:
        """Returns self unchanged since this is Err."""
        return cast("Result[_U, E]", self)


Result = Ok[T] | Err[E]
