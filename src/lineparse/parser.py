"""Line-oriented record parser.

Each non-blank line is split on "," and every field is trimmed. There is no
quote handling: `"Alice, A.",23` becomes three fields.

Two modes share one loop shape:
- rows: every non-blank line becomes a list of strings, whatever its width.
- records: every row goes through a schema; the first rejected row stops the
  parse and nothing accumulated so far is returned.
"""

from __future__ import annotations

import logging
import os
from collections.abc import AsyncIterable, Iterable
from typing import Any, TypeVar, overload

from lineparse.errors import RowValidationError
from lineparse.results import ParseResult, RecordsResult, Row, RowFailure, RowsResult
from lineparse.schema import Invalid, Schema, Valid, resolve_schema
from lineparse.sources import open_line_source, read_lines

logger = logging.getLogger(__name__)

T = TypeVar("T")

DELIMITER = ","

LineSource = AsyncIterable[str] | Iterable[str]


def split_row(line: str) -> Row | None:
    """Split one line into trimmed fields, or return None for a blank line."""

    if line.strip() == "":
        return None
    return [field.strip() for field in line.split(DELIMITER)]


async def parse_rows(lines: LineSource) -> RowsResult:
    """Parse every non-blank line into a row. Never fails on malformed rows."""

    rows: list[Row] = []
    skipped = 0
    async with open_line_source(lines) as it:
        async for line in it:
            row = split_row(line)
            if row is None:
                skipped += 1
                continue
            rows.append(row)

    logger.debug("parsed %d row(s), skipped %d blank line(s)", len(rows), skipped)
    return RowsResult(rows)


async def collect_records(lines: LineSource, schema: Schema[T]) -> RecordsResult[T] | RowFailure:
    """Validate rows in order, stopping at the first one the schema rejects.

    The rejection is returned as a `RowFailure` value; no further lines are
    read after it.
    """

    records: list[T] = []
    line_number = 0
    async with open_line_source(lines) as it:
        async for line in it:
            line_number += 1
            row = split_row(line)
            if row is None:
                continue

            outcome = schema.validate(row)
            if isinstance(outcome, Invalid):
                logger.debug("line %d rejected by %r: %s", line_number, schema, outcome.reason)
                return RowFailure(
                    line_number=line_number,
                    row_index=len(records),
                    row=row,
                    reason=outcome.reason,
                    errors=list(outcome.errors),
                )
            if not isinstance(outcome, Valid):
                raise TypeError(
                    f"{schema!r}.validate() must return Valid or Invalid, "
                    f"got {type(outcome).__name__}"
                )
            records.append(outcome.value)

    logger.debug("parsed %d record(s) with %r", len(records), schema)
    return RecordsResult(records)


async def parse_records(lines: LineSource, schema: Schema[T]) -> RecordsResult[T]:
    """Like `collect_records`, but raise RowValidationError on rejection."""

    result = await collect_records(lines, schema)
    if isinstance(result, RowFailure):
        raise RowValidationError(result)
    return result


@overload
async def parse(
    source: str | os.PathLike[str] | LineSource,
    schema: None = None,
    *,
    encoding: str = ...,
) -> RowsResult: ...


@overload
async def parse(
    source: str | os.PathLike[str] | LineSource,
    schema: Schema[T],
    *,
    encoding: str = ...,
) -> RecordsResult[T]: ...


@overload
async def parse(
    source: str | os.PathLike[str] | LineSource,
    schema: Any,
    *,
    encoding: str = ...,
) -> ParseResult[Any]: ...


async def parse(
    source: str | os.PathLike[str] | LineSource,
    schema: Any = None,
    *,
    encoding: str = "utf-8",
) -> ParseResult[Any]:
    """Parse a file (or any line source) into rows, or into records if `schema` is given.

    `source` is a path, or an iterable / async iterable of lines. `schema` is
    anything `resolve_schema` accepts.

    Raises:
        SourceUnavailableError: the file cannot be opened or read.
        RowValidationError: the schema rejected a row.
    """

    if isinstance(source, (str, os.PathLike)):
        lines: LineSource = read_lines(source, encoding=encoding)
    else:
        lines = source

    if schema is None:
        return await parse_rows(lines)
    return await parse_records(lines, resolve_schema(schema))
