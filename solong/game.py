"""Game state: player moves, the wandering enemy and the collectible animation."""

from __future__ import annotations

import random
from collections.abc import Sequence
from enum import Enum

from .mapfile import Variant
from .pathcheck import find_player

PLAYER = "P"
EXIT = "E"
COLLECTIBLE = "C"
FLOOR = "0"
WALL = "1"
HOSTILE = "H"

ANIMATION_DELAY = 8500
ENEMY_DELAY = 4000
ANIMATION_FRAMES = 3
_RAND_LIMIT = 2**31

CAUGHT_MESSAGE = "You have crossed the enemy's path"


class Direction(Enum):
    """A step on the grid as ``(dx, dy)``."""

    UP = (0, -1)
    DOWN = (0, 1)
    RIGHT = (1, 0)
    LEFT = (-1, 0)


class Outcome(Enum):
    """What a move, an enemy step or a tick led to."""

    NONE = "none"
    BLOCKED = "blocked"
    MOVED = "moved"
    WON = "won"
    CAUGHT = "caught"

    @property
    def finished(self) -> bool:
        """True when this outcome ends the game."""
        return self in (Outcome.WON, Outcome.CAUGHT)


_KEYS = {
    "up": Direction.UP,
    "w": Direction.UP,
    "down": Direction.DOWN,
    "s": Direction.DOWN,
    "right": Direction.RIGHT,
    "d": Direction.RIGHT,
    "left": Direction.LEFT,
    "a": Direction.LEFT,
}


def key_direction(key: str) -> Direction | None:
    """Return the direction bound to the key called *key*, or ``None``.

    Arrow keys and ``w``, ``a``, ``s``, ``d`` are bound.
    """
    return _KEYS.get(key)


class Game:
    """The mutable state of one running game."""

    def __init__(
        self,
        rows: Sequence[str],
        variant: Variant = Variant.MANDATORY,
        rng: random.Random | None = None,
    ) -> None:
        self._grid = [list(row) for row in rows]
        self.variant = variant
        self.player = find_player(rows)
        self.moves = 0
        self.frame = 0
        self.result: Outcome | None = None
        self.enemy: tuple[int, int] | None = (
            self._find_enemy() if variant is Variant.BONUS else None
        )
        self.enemy_direction = 1
        self._rng = rng if rng is not None else random.Random()
        self._anim_index = 0
        self._anim_step = 0
        self._anim_delay = 0
        self._enemy_delay = 0
        self._enemy_turn = 0

    @property
    def rows(self) -> list[str]:
        """The current map, one string per row."""
        return ["".join(row) for row in self._grid]

    def _find_enemy(self) -> tuple[int, int] | None:
        for y, row in enumerate(self._grid):
            for x, cell in enumerate(row):
                if cell == HOSTILE:
                    return (x, y)
        return None

    def _cell(self, x: int, y: int) -> str | None:
        if y < 0 or x < 0 or y >= len(self._grid) or x >= len(self._grid[y]):
            return None
        return self._grid[y][x]

    def collectibles_left(self) -> int:
        """Count the collectibles still on the map."""
        return sum(row.count(COLLECTIBLE) for row in self._grid)

    def move(self, direction: Direction) -> Outcome:
        """Try to move the player one tile in *direction*."""
        if self.result is not None:
            return self.result
        dx, dy = direction.value
        x, y = self.player
        tx, ty = x + dx, y + dy
        target = self._cell(tx, ty)
        passable = {EXIT, COLLECTIBLE, FLOOR}
        if self.variant is Variant.BONUS:
            passable.add(HOSTILE)
        if target not in passable:
            return Outcome.BLOCKED
        if target == HOSTILE:
            self.result = Outcome.CAUGHT
            return self.result
        if target == EXIT:
            if self.collectibles_left() == 0:
                self.result = Outcome.WON
                return self.result
            return Outcome.BLOCKED
        self._grid[y][x] = FLOOR
        self._grid[ty][tx] = PLAYER
        self.player = (tx, ty)
        self.moves += 1
        return Outcome.MOVED

    def animate(self) -> int:
        """Advance the collectible animation and return the frame to show.

        Frames bounce back and forth: 0, 1, 2, 1, 0, 1, ...
        """
        self.frame = self._anim_index % ANIMATION_FRAMES
        if self._anim_index == ANIMATION_FRAMES - 1:
            self._anim_step = -1
        if self._anim_index == 0:
            self._anim_step = 1
        self._anim_index += self._anim_step
        return self.frame

    def step_enemy(self) -> Outcome:
        """Move the enemy one tile along a randomly chosen axis.

        The enemy turns around at walls and at the exit, tramples whatever
        else it walks over, and ends the game when it walks into the player.
        """
        if self.result is not None:
            return self.result
        if self.enemy is None:
            return Outcome.NONE
        ex, ey = self.enemy
        step = self.enemy_direction
        if self._enemy_turn % 2 == 0:
            nx, ny = ex + step, ey
        else:
            nx, ny = ex, ey + step
        target = self._cell(nx, ny)
        if target == PLAYER:
            self.result = Outcome.CAUGHT
            return self.result
        if target is not None and target not in (WALL, EXIT):
            self._grid[ey][ex] = FLOOR
            self._grid[ny][nx] = HOSTILE
            self.enemy = (nx, ny)
            outcome = Outcome.MOVED
        else:
            self.enemy_direction = -step
            outcome = Outcome.BLOCKED
        self._enemy_turn += self._rng.randrange(_RAND_LIMIT)
        return outcome

    def tick(self) -> Outcome:
        """Advance time by one loop iteration of the bonus game.

        The animation runs every ``ANIMATION_DELAY + 1`` ticks and the enemy
        steps every ``ENEMY_DELAY + 1`` ticks. The mandatory game has no
        timed events.
        """
        if self.result is not None:
            return self.result
        if self.variant is not Variant.BONUS:
            return Outcome.NONE
        if self._anim_delay < ANIMATION_DELAY:
            self._anim_delay += 1
        else:
            self._anim_delay = 0
            self.animate()
        if self._enemy_delay < ENEMY_DELAY:
            self._enemy_delay += 1
        else:
            self._enemy_delay = 0
            if self.step_enemy() is Outcome.CAUGHT:
                return Outcome.CAUGHT
        return Outcome.NONE