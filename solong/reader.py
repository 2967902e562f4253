"""Reading raw map text from a stream and splitting it into rows."""

from __future__ import annotations

from collections.abc import Iterator
from typing import IO, AnyStr

from .errors import EmptyMapError

BUFFER_SIZE = 42


def read_lines(stream: IO[AnyStr]) -> Iterator[AnyStr]:
    """Yield the lines of *stream*, each keeping its trailing newline.

    Lines are split on ``\\n`` only; a final line without a newline is
    yielded as it is. Works with text and binary streams alike.
    """
    pending = None
    newline = None
    while True:
        chunk = stream.read(BUFFER_SIZE)
        if pending is None:
            if not chunk:
                return
            pending = chunk[:0]
            newline = b"\n" if isinstance(chunk, bytes) else "\n"
        if not chunk:
            break
        pending += chunk
        while True:
            cut = pending.find(newline)
            if cut < 0:
                break
            yield pending[: cut + 1]
            pending = pending[cut + 1 :]
    if pending:
        yield pending


def read_map(stream: IO[AnyStr]) -> AnyStr:
    """Return the whole content of *stream*.

    Raises :class:`EmptyMapError` when the stream holds nothing.
    """
    lines = list(read_lines(stream))
    if not lines:
        raise EmptyMapError()
    return lines[0][:0].join(lines)


def split_rows(text: str) -> list[str]:
    """Split map text on newlines, dropping empty pieces."""
    return [row for row in text.split("\n") if row]