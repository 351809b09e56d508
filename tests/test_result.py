"""Tests for the result module."""

import pytest

from best_ball_rosters.data.protocol import DataSourceError
from best_ball_rosters.result import Err, Ok, UnwrapError


class TestOk:
    def test_is_ok(self) -> None:
        assert Ok([1]).is_ok() is True
        assert Ok([1]).is_err() is False

    def test_unwrap(self) -> None:
        assert Ok([1, 2]).unwrap() == [1, 2]

    def test_unwrap_or_ignores_default(self) -> None:
        assert Ok(3).unwrap_or(0) == 3

    def test_unwrap_err_raises(self) -> None:
        with pytest.raises(UnwrapError, match="Called unwrap_err on Ok value"):
            Ok(3).unwrap_err()

    def test_map(self) -> None:
        assert Ok([1, 2, 3]).map(len).unwrap() == 3


class TestErr:
    def test_is_err(self) -> None:
        result = Err(DataSourceError("down"))
        assert result.is_err() is True
        assert result.is_ok() is False

    def test_unwrap_raises(self) -> None:
        with pytest.raises(UnwrapError, match="down"):
            Err(DataSourceError("down")).unwrap()

    def test_unwrap_or_returns_default(self) -> None:
        assert Err(DataSourceError("down")).unwrap_or([]) == []

    def test_unwrap_err_returns_error(self) -> None:
        error = DataSourceError("down")
        assert Err(error).unwrap_err() is error

    def test_map_returns_self(self) -> None:
        result = Err(DataSourceError("down"))
        assert result.map(len) is result


class TestDataSourceError:
    def test_str_includes_cause(self) -> None:
        error = DataSourceError("Failed to load", cause=OSError("missing"))
        assert str(error) == "Failed to load: missing"
        assert error.message == "Failed to load"

    def test_str_without_cause(self) -> None:
        assert str(DataSourceError("Failed to load")) == "Failed to load"
