from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from lineparse.errors import SourceUnavailableError
from lineparse.sources import (
    as_line_source,
    iter_lines,
    lines_from_text,
    open_line_source,
    read_lines,
)


async def _collect(it) -> list[str]:
    return [line async for line in it]


def test_read_lines_strips_terminators(tmp_path: Path) -> None:
    p = tmp_path / "a.csv"
    p.write_bytes(b"a,b\r\nc\n\nd")
    assert asyncio.run(_collect(read_lines(p))) == ["a,b", "c", "", "d"]


def test_read_lines_restarts_on_each_call(tmp_path: Path) -> None:
    p = tmp_path / "a.csv"
    p.write_text("x\ny\n", encoding="utf-8")
    assert asyncio.run(_collect(read_lines(p))) == ["x", "y"]
    assert asyncio.run(_collect(read_lines(p))) == ["x", "y"]


def test_read_lines_missing_file(tmp_path: Path) -> None:
    with pytest.raises(SourceUnavailableError) as excinfo:
        asyncio.run(_collect(read_lines(tmp_path / "missing.csv")))
    err = excinfo.value
    assert err.reason == "no such file"
    assert err.path == tmp_path / "missing.csv"
    assert isinstance(err.__cause__, FileNotFoundError)


def test_read_lines_directory(tmp_path: Path) -> None:
    with pytest.raises(SourceUnavailableError):
        asyncio.run(_collect(read_lines(tmp_path)))


def test_read_lines_undecodable_bytes(tmp_path: Path) -> None:
    p = tmp_path / "latin.csv"
    p.write_bytes("name\ncafé\n".encode("latin-1"))
    with pytest.raises(SourceUnavailableError) as excinfo:
        asyncio.run(_collect(read_lines(p)))
    assert "utf-8" in excinfo.value.reason

    assert asyncio.run(_collect(read_lines(p, encoding="latin-1"))) == ["name", "café"]


def test_read_lines_unknown_encoding(tmp_path: Path) -> None:
    p = tmp_path / "a.csv"
    p.write_text("x\n", encoding="utf-8")
    with pytest.raises(SourceUnavailableError):
        asyncio.run(_collect(read_lines(p, encoding="no-such-codec")))


def test_iter_lines_adapts_plain_iterables() -> None:
    assert asyncio.run(_collect(iter_lines(["a\n", "b\r\n", "c"]))) == ["a", "b", "c"]
    assert asyncio.run(_collect(iter_lines(x for x in ["1", "2"]))) == ["1", "2"]


def test_lines_from_text_handles_mixed_endings() -> None:
    assert lines_from_text("a\r\nb\nc\rd") == ["a", "b", "c", "d"]
    assert lines_from_text("") == []


def test_as_line_source_rejects_bare_strings() -> None:
    with pytest.raises(TypeError):
        as_line_source("a,b\nc")
    with pytest.raises(TypeError):
        as_line_source(b"a,b")
    with pytest.raises(TypeError):
        as_line_source(123)  # type: ignore[arg-type]


def test_open_line_source_closes_early_exit() -> None:
    closed: list[bool] = []

    async def gen():
        try:
            yield "first"
            yield "second"
        finally:
            closed.append(True)

    async def run() -> str:
        async with open_line_source(gen()) as it:
            async for line in it:
                return line
        return ""

    assert asyncio.run(run()) == "first"
    assert closed == [True]
