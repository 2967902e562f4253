# solong

A small tile-based escape game. You walk a character through a walled map,
pick up every collectible, then reach the exit. The bonus variant adds a
wandering enemy and animated collectibles.

## Installing

    pip install .

## Playing

    solong path/to/map.ber
    solong --bonus path/to/map.ber

The map must be a `.ber` file. Controls: `W`/`A`/`S`/`D` or the arrow keys
to move, `Esc` or closing the window to quit. Every successful step prints
`Move = <n>`. Walking onto the exit ends the game once no collectible is
left; in the bonus variant, touching the enemy ends it too.

The command exits with status 1 when it is called with the wrong number of
arguments, when a sprite file cannot be opened, or when the map is
rejected (the reason is printed, followed by `The map is not valid`).

### Sprites

The game loads its sprites from the current directory:

- `mandatory/assets/`: `soyjak.xpm`, `cobson.xpm`, `soylent.xpm`,
  `wall.xpm`, `exit.xpm`, `ground.xpm`;
- `bonus/assets/`: `soyjak.xpm`, `cobson.xpm`, `soylent_1.xpm`,
  `soylent_2.xpm`, `soylent_3.xpm`, `wall.xpm`, `exit.xpm`, `ground.xpm`.

Each sprite is drawn on a 64×64 pixel tile.

## Map format

A map is a rectangle of characters, one row per line:

| Char | Meaning                      |
|------|------------------------------|
| `1`  | wall                         |
| `0`  | floor                        |
| `P`  | player (exactly 1)           |
| `E`  | exit (exactly 1)             |
| `C`  | collectible (at least 1)     |
| `H`  | enemy (bonus only, at least 1) |

The map is rejected when:

- the file name does not end in `.ber`, or starts with a dot;
- the file cannot be opened or is empty;
- the outer border is not made of walls;
- it holds an unknown character, an empty line or a trailing newline;
- the counts of players, exits, collectibles or (bonus) enemies are wrong;
- some open tile cannot be reached from the player.

Example:

    1111111
    1P0C0E1
    1111111

## Using the library

    from solong.mapfile import Variant, parse_map_file
    from solong.game import Direction, Game, Outcome

    game_map = parse_map_file("maps/level.ber", Variant.MANDATORY)
    game = Game(game_map.rows, Variant.MANDATORY)
    outcome = game.move(Direction.RIGHT)   # Outcome.MOVED, BLOCKED, WON or CAUGHT

- `solong.mapfile`: `parse_map_file`, `parse_map_text`, the `GameMap`
  dataclass and the `Variant` enum (`MANDATORY`, `BONUS`), plus the single
  checks `has_ber_suffix`, `dimensions`, `check_walls` and `check_content`.
- `solong.pathcheck`: `find_player`, `flood` and `path_is_valid`.
- `solong.reader`: `read_lines`, `read_map` and `split_rows`.
- `solong.game`: `Game` with `move`, `collectibles_left`, `animate`,
  `step_enemy` and `tick`; `key_direction` maps key names to a `Direction`.
- `solong.render`: `Renderer` draws a game onto a pygame surface;
  `asset_paths` and `tile_position` give sprite files and pixel positions.
- `solong.cli`: `main`, `run_game` and `check_assets`.

`parse_map_file` raises a `solong.errors.MapError` subclass
(`InvalidSuffixError`, `MapNotFoundError`, `EmptyMapError`,
`InvalidMapError`) when the file cannot be used.

## What it does not include

The package ships no maps and no sprite files; both must be supplied
before the game can be played.

## Running the tests

    pip install .[test]
    pytest