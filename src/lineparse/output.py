"""Render parse results as JSON or JSON Lines."""

from __future__ import annotations

import dataclasses
import json
from typing import Any

import pydantic

from lineparse.results import ParseResult, RowsResult


def to_jsonable(item: Any) -> Any:
    if isinstance(item, pydantic.BaseModel):
        return item.model_dump(mode="json")
    if dataclasses.is_dataclass(item) and not isinstance(item, type):
        return dataclasses.asdict(item)
    if isinstance(item, tuple):
        return list(item)
    return item


def result_items(result: ParseResult[Any]) -> list[Any]:
    if isinstance(result, RowsResult):
        return result.rows
    return [to_jsonable(r) for r in result.records]


def render(result: ParseResult[Any], *, fmt: str = "json", indent: int = 2) -> str:
    """Render `result`; the returned text ends with a newline unless empty JSON Lines."""

    items = result_items(result)
    if fmt == "jsonl":
        return "".join(json.dumps(item, default=str) + "\n" for item in items)
    if fmt == "json":
        return json.dumps(items, indent=indent, default=str) + "\n"
    raise ValueError(f"Unknown output format: {fmt!r}")
