import pytest

from lineparse.errors import (
    ConfigError,
    LineparseError,
    RowValidationError,
    SchemaLoadError,
    SourceUnavailableError,
)
from lineparse.results import RowFailure


def test_all_errors_are_subclasses_of_lineparse_error() -> None:
    assert issubclass(ConfigError, LineparseError)
    assert issubclass(SchemaLoadError, LineparseError)
    assert issubclass(SourceUnavailableError, LineparseError)
    assert issubclass(RowValidationError, LineparseError)


def test_error_message_is_preserved() -> None:
    msg = "boom"
    err = ConfigError(msg)
    assert str(err) == msg


def test_source_unavailable_carries_path_and_reason() -> None:
    err = SourceUnavailableError("data/x.csv", "no such file")
    assert err.path == "data/x.csv"
    assert err.reason == "no such file"
    assert str(err) == "cannot read data/x.csv: no such file"


def test_row_validation_error_describes_row() -> None:
    failure = RowFailure(line_number=3, row_index=1, row=["Bob", "x"], reason="age: bad")
    err = RowValidationError(failure)
    assert err.failure is failure
    assert "line 3" in str(err)
    assert "['Bob', 'x']" in str(err)
    assert "age: bad" in str(err)


def test_can_catch_any_lineparse_error() -> None:
    def raise_one() -> None:
        raise SchemaLoadError("nope")

    with pytest.raises(LineparseError):
        raise_one()
