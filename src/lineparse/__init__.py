from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from lineparse.errors import (
    ConfigError,
    LineparseError,
    RowValidationError,
    SchemaLoadError,
    SourceUnavailableError,
)
from lineparse.parser import collect_records, parse, parse_records, parse_rows, split_row
from lineparse.results import ParseResult, RecordsResult, RowFailure, RowsResult
from lineparse.schema import (
    AdapterSchema,
    FunctionSchema,
    Invalid,
    ModelSchema,
    Schema,
    Valid,
    load_schema,
    resolve_schema,
)
from lineparse.sources import iter_lines, lines_from_text, read_lines


def _package_version() -> str:
    try:
        return version("lineparse")
    except PackageNotFoundError:
        # Running from a source checkout, or otherwise not installed.
        return "0.0.0"


__version__ = _package_version()

__all__ = [
    "AdapterSchema",
    "ConfigError",
    "FunctionSchema",
    "Invalid",
    "LineparseError",
    "ModelSchema",
    "ParseResult",
    "RecordsResult",
    "RowFailure",
    "RowValidationError",
    "RowsResult",
    "Schema",
    "SchemaLoadError",
    "SourceUnavailableError",
    "Valid",
    "__version__",
    "collect_records",
    "iter_lines",
    "lines_from_text",
    "load_schema",
    "parse",
    "parse_records",
    "parse_rows",
    "read_lines",
    "resolve_schema",
    "split_row",
]
