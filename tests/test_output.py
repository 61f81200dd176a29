from __future__ import annotations

import dataclasses
import json

import pydantic
import pytest

from lineparse.output import render, to_jsonable
from lineparse.results import RecordsResult, RowsResult


class Person(pydantic.BaseModel):
    name: str
    age: int


@dataclasses.dataclass
class Point:
    x: int
    y: int


def test_to_jsonable_handles_models_dataclasses_and_tuples() -> None:
    assert to_jsonable(Person(name="A", age=1)) == {"name": "A", "age": 1}
    assert to_jsonable(Point(1, 2)) == {"x": 1, "y": 2}
    assert to_jsonable(("a", 1)) == ["a", 1]
    assert to_jsonable({"k": "v"}) == {"k": "v"}


def test_render_rows_as_json() -> None:
    text = render(RowsResult([["a", "b"], ["c"]]))
    assert text.endswith("\n")
    assert json.loads(text) == [["a", "b"], ["c"]]


def test_render_zero_indent_puts_items_on_own_lines() -> None:
    assert render(RowsResult([["a"]]), indent=0) == '[\n[\n"a"\n]\n]\n'


def test_render_records_as_jsonl() -> None:
    result = RecordsResult([Person(name="Alice", age=23), Person(name="Nim", age=22)])
    lines = render(result, fmt="jsonl").splitlines()
    assert [json.loads(line) for line in lines] == [
        {"name": "Alice", "age": 23},
        {"name": "Nim", "age": 22},
    ]


def test_render_empty_results() -> None:
    assert render(RowsResult([]), fmt="jsonl") == ""
    assert render(RowsResult([])) == "[]\n"


def test_render_unknown_format() -> None:
    with pytest.raises(ValueError):
        render(RowsResult([]), fmt="xml")
