"""Exceptions raised while loading and validating a map."""

from __future__ import annotations


class MapError(Exception):
    """Base class for every problem with a map file or its contents."""

    default_message = "The map is not valid"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class InvalidSuffixError(MapError):
    """The map path does not end in ``.ber``."""

    default_message = "Please provide a [.ber] file"


class MapNotFoundError(MapError):
    """The map file could not be opened."""

    default_message = "The map file was not found"


class EmptyMapError(MapError):
    """The map file holds no data."""

    default_message = "The map is empty"


class InvalidMapError(MapError):
    """The map was read but breaks one of the layout rules."""

    default_message = "The map is not valid"