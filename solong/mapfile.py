"""Loading a ``.ber`` map file and checking that it is playable."""

from __future__ import annotations

import os
from collections import Counter
from dataclasses import dataclass
from enum import Enum

from .errors import EmptyMapError, InvalidMapError, InvalidSuffixError, MapNotFoundError
from .pathcheck import find_player, path_is_valid
from .reader import read_map, split_rows

SUFFIX = ".ber"
WALL = "1"


class Variant(Enum):
    """Which rule set a map is checked against."""

    MANDATORY = "mandatory"
    BONUS = "bonus"


_ALLOWED = {
    Variant.MANDATORY: frozenset("PEC10\n"),
    Variant.BONUS: frozenset("PHEC10\n"),
}


@dataclass
class GameMap:
    """A map that passed every check."""

    text: str
    rows: list[str]
    width: int
    height: int
    player: tuple[int, int]
    collectibles: int
    exits: int
    players: int
    hostiles: int = 0


def has_ber_suffix(path: str | os.PathLike[str]) -> bool:
    """Tell whether *path* is accepted as a map file name.

    A name starting with a dot is refused, and everything from the first
    dot on must be exactly ``.ber``.
    """
    name = os.fspath(path)
    if name.startswith("."):
        return False
    dot = name.find(".")
    if dot < 0:
        return False
    return name[dot:] == SUFFIX


def dimensions(text: str) -> tuple[int, int]:
    """Return ``(width, height)``: the first line's length and the line count."""
    first, _, _ = text.partition("\n")
    return len(first), text.count("\n") + 1


def check_walls(rows: list[str], width: int, height: int) -> None:
    """Raise :class:`InvalidMapError` unless the map is closed by walls.

    The first row and the row at ``height - 1`` must be all walls; every
    other row must start with a wall and have one at column ``width - 1``.
    """
    for index, row in enumerate(rows):
        if index == 0 or index == height - 1:
            if any(cell != WALL for cell in row):
                raise InvalidMapError("Horizontal walls are not closed")
        else:
            right = row[width - 1] if 0 < width <= len(row) else None
            if not row or row[0] != WALL or right != WALL:
                raise InvalidMapError("Vertical walls are not closed")


def check_content(text: str, variant: Variant) -> Counter[str]:
    """Check the tiles of *text* and return how often each one occurs.

    Raises :class:`InvalidMapError` on empty lines, a trailing newline,
    unknown tiles, or wrong numbers of players, exits, collectibles and,
    for the bonus rules, hostiles.
    """
    if "\n\n" in text or text.endswith("\n"):
        raise InvalidMapError("The map has an empty line")
    unknown = set(text) - _ALLOWED[variant]
    if unknown:
        raise InvalidMapError(f"The map holds unknown tiles: {''.join(sorted(unknown))}")
    counts = Counter(text)
    if counts["P"] != 1:
        raise InvalidMapError("The map must hold exactly one player")
    if counts["E"] != 1:
        raise InvalidMapError("The map must hold exactly one exit")
    if counts["C"] < 1:
        raise InvalidMapError("The map must hold at least one collectible")
    if variant is Variant.BONUS and counts["H"] < 1:
        raise InvalidMapError("The map must hold at least one hostile")
    return counts


def parse_map_text(text: str, variant: Variant) -> GameMap:
    """Validate map *text* and return the resulting :class:`GameMap`."""
    if not text:
        raise EmptyMapError()
    width, height = dimensions(text)
    rows = split_rows(text)
    check_walls(rows, width, height)
    counts = check_content(text, variant)
    if not path_is_valid(rows, with_hostiles=variant is Variant.BONUS):
        raise InvalidMapError("Not every tile of the map can be reached")
    return GameMap(
        text=text,
        rows=rows,
        width=width,
        height=height,
        player=find_player(rows),
        collectibles=counts["C"],
        exits=counts["E"],
        players=counts["P"],
        hostiles=counts["H"],
    )


def parse_map_file(path: str | os.PathLike[str], variant: Variant) -> GameMap:
    """Read and validate the map stored at *path*."""
    if not has_ber_suffix(path):
        raise InvalidSuffixError()
    try:
        with open(path, encoding="latin-1", newline="") as stream:
            text = read_map(stream)
    except OSError as exc:
        raise MapNotFoundError() from exc
    return parse_map_text(text, variant)