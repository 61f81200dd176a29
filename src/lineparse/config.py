"""Project configuration loading for lineparse.

Reads an optional `lineparse.toml` and performs light validation. A missing
file is not an error: every setting has a default.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from lineparse.errors import ConfigError

CONFIG_FILENAME = "lineparse.toml"

OUTPUT_FORMATS = ("json", "jsonl")


@dataclass(frozen=True)
class InputConfig:
    encoding: str


@dataclass(frozen=True)
class OutputConfig:
    format: str
    indent: int


@dataclass(frozen=True)
class SchemaConfig:
    target: str


@dataclass(frozen=True)
class LineparseConfig:
    version: int
    input: InputConfig
    output: OutputConfig
    schema: SchemaConfig


def default_config() -> LineparseConfig:
    return LineparseConfig(
        version=1,
        input=InputConfig(encoding="utf-8"),
        output=OutputConfig(format="json", indent=2),
        schema=SchemaConfig(target=""),
    )


def find_config(start: Path) -> Path | None:
    """Walk upward from `start` (file or directory) looking for `lineparse.toml`."""

    cur = start
    try:
        if cur.is_file():
            cur = cur.parent
    except OSError:
        cur = cur.parent

    cur = cur.resolve()
    while True:
        candidate = cur / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        if cur.parent == cur:
            return None
        cur = cur.parent


def _as_table(value: Any, *, name: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"Expected [{name}] to be a table.")
    return value


def _as_int(value: Any, *, name: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise ConfigError(f"Expected {name} to be an integer.")
    return value


def _as_str(value: Any, *, name: str) -> str:
    if not isinstance(value, str):
        raise ConfigError(f"Expected {name} to be a string.")
    return value


def load_config(*, root: Path | None = None, config_path: Path | None = None) -> LineparseConfig:
    """Load and validate `lineparse.toml`.

    With an explicit `config_path` the file must exist. Otherwise the file is
    looked up from `root` (or the current directory) upward, and defaults are
    returned when none is found.
    """

    if config_path is None:
        config_path = find_config(root if root is not None else Path.cwd())
        if config_path is None:
            return default_config()

    try:
        raw = config_path.read_bytes()
    except FileNotFoundError as e:
        raise ConfigError(f"Missing {CONFIG_FILENAME} at: {config_path}") from e
    except OSError as e:
        raise ConfigError(f"Failed reading config file: {config_path}") from e

    try:
        data = tomllib.loads(raw.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise ConfigError(f"Config is not valid UTF-8: {config_path}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {config_path}: {e}") from e

    version = data.get("version", None)
    if version is None:
        raise ConfigError(f"Missing required `version = 1` in {CONFIG_FILENAME}.")
    version_i = _as_int(version, name="version")
    if version_i != 1:
        raise ConfigError(f"Unsupported config version: {version_i} (expected 1).")

    input_tbl = _as_table(data.get("input"), name="input")
    output_tbl = _as_table(data.get("output"), name="output")
    schema_tbl = _as_table(data.get("schema"), name="schema")

    defaults = default_config()

    if "encoding" in input_tbl:
        encoding = _as_str(input_tbl["encoding"], name="input.encoding")
    else:
        encoding = defaults.input.encoding

    if "format" in output_tbl:
        fmt = _as_str(output_tbl["format"], name="output.format")
    else:
        fmt = defaults.output.format

    if "indent" in output_tbl:
        indent = _as_int(output_tbl["indent"], name="output.indent")
    else:
        indent = defaults.output.indent

    if "target" in schema_tbl:
        target = _as_str(schema_tbl["target"], name="schema.target").strip()
    else:
        target = defaults.schema.target

    # Validation
    if not encoding.strip():
        raise ConfigError("Invalid config: input.encoding must not be empty.")

    if fmt not in OUTPUT_FORMATS:
        raise ConfigError(
            f"Invalid config: output.format must be one of {', '.join(OUTPUT_FORMATS)} "
            f"(got {fmt!r})."
        )

    if indent < 0:
        raise ConfigError("Invalid config: output.indent must be >= 0.")

    if target and ":" not in target:
        raise ConfigError("Invalid config: schema.target must look like MODULE:ATTR.")

    return LineparseConfig(
        version=version_i,
        input=InputConfig(encoding=encoding),
        output=OutputConfig(format=fmt, indent=indent),
        schema=SchemaConfig(target=target),
    )
