"""Error formatting and actionable hints for CLI output.

Only depends on the error hierarchy so the CLI can import it cheaply.
"""

from __future__ import annotations

from lineparse.errors import (
    ConfigError,
    RowValidationError,
    SchemaLoadError,
    SourceUnavailableError,
)


def format_row_failure(exc: RowValidationError) -> str:
    """Multi-line description of a rejected row, including per-field errors."""

    failure = exc.failure
    lines = [
        f"line {failure.line_number} (row {failure.row_index}): {failure.row!r}",
        f"  {failure.reason}",
    ]
    for err in failure.errors:
        loc = ".".join(str(x) for x in err.get("loc", ())) or "<row>"
        lines.append(f"    - {loc}: {err.get('msg', '')} (input={err.get('input')!r})")
    return "\n".join(lines)


def format_hint(exc: BaseException) -> str | None:
    """Return an actionable hint for a known error, or None."""
    msg = str(exc)

    if isinstance(exc, SourceUnavailableError):
        if exc.reason == "no such file":
            return "check the path; it is resolved relative to the current directory"
        if "text" in exc.reason:
            return "pass --encoding or set input.encoding in lineparse.toml"
        return None

    if isinstance(exc, SchemaLoadError):
        if "Cannot import" in msg:
            return "make sure the schema module is importable (installed or on PYTHONPATH)"
        return "point --schema at a pydantic model, an object with validate(), or a callable"

    if isinstance(exc, ConfigError):
        return "fix lineparse.toml or pass --config to use a different file"

    if isinstance(exc, RowValidationError):
        return "rows are split on every comma; quoted fields are not supported"

    return None


def format_error_with_hint(exc: BaseException) -> str:
    """Format error message + optional hint for stderr output."""
    if isinstance(exc, RowValidationError):
        msg = "row validation failed at " + format_row_failure(exc)
    else:
        msg = (str(exc) or repr(exc)).strip()

    result = f"error: {msg}"
    hint = format_hint(exc)
    if hint:
        result += f"\nhint: {hint}"
    return result
