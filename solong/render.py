"""Drawing the map onto a pygame surface, tile by tile."""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from pathlib import Path

import pygame

from .game import Game
from .mapfile import Variant

TILE_SIZE = 64
WINDOW_TITLE = "Escape From Cobson 2D"
FAREWELL = "Thank you for playing"

_MANDATORY_SPRITES = ("soyjak", "cobson", "soylent", "wall", "exit", "ground")
_BONUS_SPRITES = (
    "soyjak",
    "cobson",
    "soylent_1",
    "soylent_2",
    "soylent_3",
    "wall",
    "exit",
    "ground",
)

_TILE_SPRITES = {
    "0": "ground",
    "1": "wall",
    "P": "soyjak",
    "E": "exit",
}

Loader = Callable[[Path], pygame.Surface]


def asset_paths(variant: Variant, base: str | os.PathLike[str] = ".") -> dict[str, Path]:
    """Return the sprite files of *variant*, keyed by sprite name.

    The files live in ``<base>/<variant>/assets`` and are listed in the
    order in which the game checks them.
    """
    names = _BONUS_SPRITES if variant is Variant.BONUS else _MANDATORY_SPRITES
    root = Path(base) / variant.value / "assets"
    return {name: root / f"{name}.xpm" for name in names}


def tile_position(x: int, y: int) -> tuple[int, int]:
    """Return the pixel position of the top-left corner of tile ``(x, y)``."""
    return x * TILE_SIZE, y * TILE_SIZE


def _load_image(path: Path) -> pygame.Surface:
    return pygame.image.load(os.fspath(path))


class Renderer:
    """Draws a :class:`Game` onto a surface with sprites loaded from files."""

    def __init__(
        self,
        game: Game,
        surface: pygame.Surface,
        paths: Mapping[str, Path],
        loader: Loader | None = None,
    ) -> None:
        self.game = game
        self.surface = surface
        self.paths = dict(paths)
        self.sprites: dict[str, pygame.Surface] = {}
        self.closed = False
        self._loader = loader if loader is not None else _load_image

    def load_sprites(self) -> dict[str, pygame.Surface]:
        """Load every sprite file; raise :class:`OSError` if one cannot be read."""
        if self.closed:
            raise RuntimeError("The renderer is closed")
        loaded: dict[str, pygame.Surface] = {}
        for name, path in self.paths.items():
            try:
                loaded[name] = self._loader(path)
            except (pygame.error, OSError) as exc:
                raise OSError(f"Unable to load sprite {path}") from exc
        self.sprites = loaded
        return loaded

    def _sprite_for(self, cell: str) -> pygame.Surface | None:
        bonus = self.game.variant is Variant.BONUS
        if cell == "C":
            name = f"soylent_{self.game.frame + 1}" if bonus else "soylent"
        elif cell == "H":
            if not bonus:
                return None
            name = "cobson"
        else:
            name = _TILE_SPRITES.get(cell)
            if name is None:
                return None
        return self.sprites.get(name)

    def draw(self) -> None:
        """Draw the whole map, loading the sprites first if needed."""
        if self.closed:
            raise RuntimeError("The renderer is closed")
        if not self.sprites:
            self.load_sprites()
        for y, row in enumerate(self.game.rows):
            for x, cell in enumerate(row):
                sprite = self._sprite_for(cell)
                if sprite is not None:
                    self.surface.blit(sprite, tile_position(x, y))

    def close(self) -> None:
        """Release the sprites; the renderer cannot draw afterwards."""
        self.sprites.clear()
        self.closed = True