"""Checking that every open tile of a map can be reached by the player."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .errors import InvalidMapError

PLAYER = "P"
EXIT = "E"
HOSTILE = "H"
OPEN_TILES = frozenset("0CEP")
OPEN_TILES_WITH_HOSTILES = OPEN_TILES | {HOSTILE}

Position = tuple[int, int]


def find_player(rows: Sequence[str]) -> Position:
    """Return the ``(x, y)`` position of the player.

    When several players are present the last one in reading order wins.
    Raises :class:`InvalidMapError` if there is no player at all.
    """
    found: Position | None = None
    for y, row in enumerate(rows):
        for x, cell in enumerate(row):
            if cell == PLAYER:
                found = (x, y)
    if found is None:
        raise InvalidMapError("The map has no player")
    return found


def _cell(rows: Sequence[str], x: int, y: int) -> str | None:
    if y < 0 or x < 0 or y >= len(rows) or x >= len(rows[y]):
        return None
    return rows[y][x]


def flood(rows: Sequence[str], start: Position, passable: Iterable[str]) -> set[Position]:
    """Return every position reachable from *start* through *passable* tiles.

    Movement is orthogonal. An exit tile is reached but never walked
    through, so the fill does not continue past it. *rows* is not changed.
    """
    allowed = frozenset(passable)
    reached: set[Position] = set()
    pending = [start]
    while pending:
        x, y = pending.pop()
        if (x, y) in reached:
            continue
        cell = _cell(rows, x, y)
        if cell is None or cell not in allowed:
            continue
        reached.add((x, y))
        if cell == EXIT:
            continue
        pending.extend(((x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1)))
    return reached


def path_is_valid(rows: Sequence[str], with_hostiles: bool) -> bool:
    """Tell whether every open tile can be reached from the player.

    Open tiles are floor, collectibles, the exit and the player; with
    *with_hostiles* set, hostile tiles count as open too.
    """
    passable = OPEN_TILES_WITH_HOSTILES if with_hostiles else OPEN_TILES
    reached = flood(rows, find_player(rows), passable)
    return all(
        (x, y) in reached
        for y, row in enumerate(rows)
        for x, cell in enumerate(row)
        if cell in passable
    )