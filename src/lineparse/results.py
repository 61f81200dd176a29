"""Tagged parse results.

A parse produces either raw rows or typed records; the `kind` tag tells them
apart without inspecting the payload.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, Literal, TypeVar, Union

T = TypeVar("T")

Row = list[str]


@dataclass(frozen=True, slots=True)
class RowsResult:
    rows: list[Row]
    kind: Literal["rows"] = "rows"

    def __len__(self) -> int:
        return len(self.rows)


@dataclass(frozen=True, slots=True)
class RecordsResult(Generic[T]):
    records: list[T]
    kind: Literal["records"] = "records"

    def __len__(self) -> int:
        return len(self.records)


@dataclass(frozen=True, slots=True)
class RowFailure:
    """The first row a schema rejected.

    `line_number` is the 1-based physical line (blank lines included);
    `row_index` is the 0-based position among non-blank rows.
    """

    line_number: int
    row_index: int
    row: Row
    reason: str
    errors: list[dict[str, Any]] = field(default_factory=list)


ParseResult = Union[RowsResult, RecordsResult[T]]
