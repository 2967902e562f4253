"""Command line entry point: validate a map, then play it in a window."""

from __future__ import annotations

import os
import sys
from collections.abc import Iterable, Sequence

import pygame

from .errors import MapError
from .game import CAUGHT_MESSAGE, Game, Outcome, key_direction
from .mapfile import GameMap, Variant, parse_map_file
from .render import FAREWELL, TILE_SIZE, WINDOW_TITLE, Renderer, asset_paths

USAGE = "Usage: ./so_long /path/to/map.ber"
ASSETS_MISSING = "Unable to open asset files"
MAP_INVALID = "The map is not valid"
MAP_VALID = "The map is valid"
BONUS_FLAG = "--bonus"
_IDLE_WAIT_MS = 10


def check_assets(paths: Iterable[str | os.PathLike[str]]) -> bool:
    """Tell whether every file in *paths* can be opened for reading."""
    for path in paths:
        try:
            with open(path, "rb"):
                pass
        except OSError:
            return False
    return True


def _play(game: Game, renderer: Renderer) -> None:
    """Run the event loop until the game ends or the window is closed."""
    while game.result is None:
        dirty = False
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return
            if event.type != pygame.KEYDOWN:
                continue
            if event.key == pygame.K_ESCAPE:
                return
            direction = key_direction(pygame.key.name(event.key))
            if direction is None:
                continue
            outcome = game.move(direction)
            if outcome is Outcome.MOVED:
                print(f"Move = {game.moves}")
                dirty = True
            elif outcome is Outcome.CAUGHT:
                print(CAUGHT_MESSAGE)
                return
            elif outcome is Outcome.WON:
                return
        before = (game.frame, game.enemy)
        if game.tick() is Outcome.CAUGHT:
            print(CAUGHT_MESSAGE)
            return
        if dirty or (game.frame, game.enemy) != before:
            renderer.draw()
            pygame.display.flip()
        if game.variant is not Variant.BONUS:
            pygame.time.wait(_IDLE_WAIT_MS)


def run_game(
    game_map: GameMap,
    variant: Variant = Variant.MANDATORY,
    asset_base: str | os.PathLike[str] = ".",
) -> Game:
    """Open a window for *game_map* and play until the game is over.

    Returns the game in its final state. If the sprites cannot be loaded
    the window is closed at once. Raises :class:`pygame.error` when the
    window cannot be created.
    """
    game = Game(game_map.rows, variant)
    pygame.init()
    renderer: Renderer | None = None
    try:
        surface = pygame.display.set_mode(
            (game_map.width * TILE_SIZE, game_map.height * TILE_SIZE)
        )
        pygame.display.set_caption(WINDOW_TITLE)
        renderer = Renderer(game, surface, asset_paths(variant, asset_base))
        try:
            renderer.draw()
        except OSError:
            return game
        pygame.display.flip()
        _play(game, renderer)
    finally:
        if renderer is not None:
            renderer.close()
        pygame.quit()
    return game


def main(argv: Sequence[str] | None = None) -> int:
    """Validate the map named on the command line and play it."""
    args = list(sys.argv[1:] if argv is None else argv)
    variant = Variant.MANDATORY
    if BONUS_FLAG in args:
        args.remove(BONUS_FLAG)
        variant = Variant.BONUS
    if len(args) != 1:
        print(USAGE)
        return 1
    if not check_assets(asset_paths(variant).values()):
        print(ASSETS_MISSING)
        return 1
    try:
        game_map = parse_map_file(args[0], variant)
    except MapError as exc:
        if str(exc) != MAP_INVALID:
            print(exc)
        print(MAP_INVALID)
        return 1
    print(f"{MAP_VALID}\n")
    try:
        run_game(game_map, variant)
    except pygame.error:
        for row in game_map.rows:
            print(row)
        return 0
    print(FAREWELL)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())