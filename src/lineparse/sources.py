"""Line sources.

The parser consumes an async iterator of lines. These helpers produce one from a
file on disk (read lazily with aiofiles) or from in-memory data.
"""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import AsyncIterable, AsyncIterator, Iterable
from contextlib import asynccontextmanager

import aiofiles

from lineparse.errors import SourceUnavailableError

logger = logging.getLogger(__name__)


def _strip_terminator(line: str) -> str:
    return line.rstrip("\r\n")


async def read_lines(
    path: str | os.PathLike[str], *, encoding: str = "utf-8"
) -> AsyncIterator[str]:
    """Yield the lines of a text file without their terminators.

    Each call opens the file again, so a second call starts from the top.
    """

    try:
        fh = await aiofiles.open(path, mode="r", encoding=encoding)
    except (OSError, LookupError) as e:
        # LookupError: unknown encoding name.
        raise SourceUnavailableError(path, _describe(e)) from e

    logger.debug("opened %s (encoding=%s)", path, encoding)
    try:
        while True:
            try:
                line = await fh.readline()
            except (OSError, UnicodeDecodeError) as e:
                raise SourceUnavailableError(path, _describe(e)) from e
            if not line:
                break
            yield _strip_terminator(line)
    finally:
        await fh.close()


def _describe(err: BaseException) -> str:
    if isinstance(err, FileNotFoundError):
        return "no such file"
    if isinstance(err, IsADirectoryError):
        return "is a directory"
    if isinstance(err, PermissionError):
        return "permission denied"
    if isinstance(err, UnicodeDecodeError):
        return f"not valid {err.encoding} text"
    msg = getattr(err, "strerror", None) or str(err) or type(err).__name__
    return msg


async def iter_lines(lines: Iterable[str]) -> AsyncIterator[str]:
    """Adapt a plain iterable of lines, yielding to the event loop between lines."""

    for line in lines:
        yield _strip_terminator(line)
        await asyncio.sleep(0)


def lines_from_text(text: str) -> list[str]:
    """Split in-memory text on any common line ending."""

    return text.splitlines()


def as_line_source(obj: AsyncIterable[str] | Iterable[str]) -> AsyncIterator[str]:
    """Return an async iterator of lines for `obj`.

    A bare string is rejected: it would be iterated character by character, and
    is more likely a path meant for `read_lines`.
    """

    if isinstance(obj, (str, bytes)):
        raise TypeError("Pass a path to read_lines() or a list of lines, not a bare string.")
    if isinstance(obj, AsyncIterable):
        return aiter(obj)
    if isinstance(obj, Iterable):
        return iter_lines(obj)
    raise TypeError(f"Not a line source: {obj!r}")


@asynccontextmanager
async def open_line_source(
    obj: AsyncIterable[str] | Iterable[str],
) -> AsyncIterator[AsyncIterator[str]]:
    """Context manager around `as_line_source` that closes the stream on exit.

    Leaving early (first rejected row) releases the file handle right away
    instead of waiting for garbage collection.
    """

    it = as_line_source(obj)
    try:
        yield it
    finally:
        aclose = getattr(it, "aclose", None)
        if aclose is not None:
            await aclose()
