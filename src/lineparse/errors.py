"""lineparse exception hierarchy.

Keep this module small: it is imported by every other module and by tests.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from lineparse.results import RowFailure


class LineparseError(Exception):
    """Base exception for all lineparse errors."""


class ConfigError(LineparseError):
    """Raised for an invalid lineparse.toml."""


class SchemaLoadError(LineparseError):
    """Raised when a MODULE:ATTR schema target cannot be imported or used."""


class SourceUnavailableError(LineparseError):
    """Raised when the line source cannot be opened or read."""

    def __init__(self, path: object, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"cannot read {path}: {reason}")


class RowValidationError(LineparseError):
    """Raised when the schema rejects a row; carries the first failing row."""

    def __init__(self, failure: RowFailure) -> None:
        self.failure = failure
        super().__init__(
            f"row validation failed at line {failure.line_number} "
            f"{failure.row!r}: {failure.reason}"
        )
