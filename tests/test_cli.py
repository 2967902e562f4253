from __future__ import annotations

from pathlib import Path
from unittest import mock

import pygame
import pytest

from solong.cli import check_assets, main, run_game
from solong.mapfile import Variant, parse_map_text
from solong.render import asset_paths

MANDATORY_MAP = "1111111\n1P0C0E1\n1111111"
BONUS_MAP = "11111111\n1P0C0HE1\n11111111"


@pytest.fixture(autouse=True)
def headless(monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    monkeypatch.setenv("SDL_AUDIODRIVER", "dummy")


def _make_assets(base: Path, variant: Variant) -> dict[str, Path]:
    paths = asset_paths(variant, base)
    for path in paths.values():
        path.parent.mkdir(parents=True, exist_ok=True)
        bmp = path.with_suffix(".bmp")
        pygame.image.save(pygame.Surface((64, 64)), str(bmp))
        bmp.rename(path)
    return paths


def _events(*batches):
    queue = list(batches)

    def get(*args, **kwargs):
        if queue:
            return queue.pop(0)
        return [pygame.event.Event(pygame.QUIT)]

    return get


def test_check_assets_all_present(tmp_path):
    paths = _make_assets(tmp_path, Variant.MANDATORY)
    assert check_assets(paths.values()) is True


def test_check_assets_one_missing(tmp_path):
    paths = _make_assets(tmp_path, Variant.MANDATORY)
    paths["wall"].unlink()
    assert check_assets(paths.values()) is False


def test_check_assets_empty_is_true():
    assert check_assets([]) is True


def test_main_usage(capsys):
    assert main([]) == 1
    assert "Usage: ./so_long /path/to/map.ber" in capsys.readouterr().out


def test_main_too_many_arguments(capsys):
    assert main(["a.ber", "b.ber"]) == 1
    assert "Usage: ./so_long /path/to/map.ber" in capsys.readouterr().out


def test_main_missing_assets(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "map.ber").write_text(MANDATORY_MAP)
    assert main(["map.ber"]) == 1
    assert "Unable to open asset files" in capsys.readouterr().out


def test_main_bad_suffix(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    _make_assets(Path("."), Variant.MANDATORY)
    assert main(["map.txt"]) == 1
    out = capsys.readouterr().out
    assert "Please provide a [.ber] file" in out
    assert "The map is not valid" in out


def test_main_map_not_found(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    _make_assets(Path("."), Variant.MANDATORY)
    assert main(["missing.ber"]) == 1
    out = capsys.readouterr().out
    assert "The map file was not found" in out
    assert "The map is not valid" in out


def test_main_open_walls(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    _make_assets(Path("."), Variant.MANDATORY)
    (tmp_path / "map.ber").write_text("1111111\n1P0C0E0\n1111111")
    assert main(["map.ber"]) == 1
    out = capsys.readouterr().out
    assert "Vertical walls are not closed" in out
    assert "The map is not valid" in out


def test_main_mandatory_rejects_hostile(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    _make_assets(Path("."), Variant.MANDATORY)
    (tmp_path / "map.ber").write_text(BONUS_MAP)
    assert main(["map.ber"]) == 1
    assert "The map is not valid" in capsys.readouterr().out


def test_main_valid_map_then_quit(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    _make_assets(Path("."), Variant.MANDATORY)
    (tmp_path / "map.ber").write_text(MANDATORY_MAP)
    with mock.patch("pygame.event.get", side_effect=_events()):
        assert main(["map.ber"]) == 0
    out = capsys.readouterr().out
    assert "The map is valid" in out
    assert "Thank you for playing" in out


def test_main_bonus_valid_map_then_quit(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    _make_assets(Path("."), Variant.BONUS)
    (tmp_path / "map.ber").write_text(BONUS_MAP)
    with mock.patch("pygame.event.get", side_effect=_events()):
        assert main(["--bonus", "map.ber"]) == 0
    assert "Thank you for playing" in capsys.readouterr().out


def test_run_game_without_sprites_leaves_map_unchanged(tmp_path):
    game_map = parse_map_text(MANDATORY_MAP, Variant.MANDATORY)
    game = run_game(game_map, Variant.MANDATORY, tmp_path)
    assert game.rows == MANDATORY_MAP.split("\n")
    assert game.result is None
    assert game.moves == 0


def test_run_game_moves_player(tmp_path, capsys):
    _make_assets(tmp_path, Variant.MANDATORY)
    game_map = parse_map_text(MANDATORY_MAP, Variant.MANDATORY)
    right = pygame.event.Event(pygame.KEYDOWN, key=pygame.K_RIGHT)
    with mock.patch("pygame.event.get", side_effect=_events([right])):
        game = run_game(game_map, Variant.MANDATORY, tmp_path)
    assert game.player == (2, 1)
    assert game.moves == 1
    assert game.rows[1] == "10PC0E1"
    assert "Move = 1" in capsys.readouterr().out


def test_run_game_wall_blocks(tmp_path, capsys):
    _make_assets(tmp_path, Variant.MANDATORY)
    game_map = parse_map_text(MANDATORY_MAP, Variant.MANDATORY)
    up = pygame.event.Event(pygame.KEYDOWN, key=pygame.K_w)
    with mock.patch("pygame.event.get", side_effect=_events([up])):
        game = run_game(game_map, Variant.MANDATORY, tmp_path)
    assert game.player == (1, 1)
    assert game.moves == 0
    assert "Move =" not in capsys.readouterr().out


def test_run_game_escape_stops(tmp_path):
    _make_assets(tmp_path, Variant.MANDATORY)
    game_map = parse_map_text(MANDATORY_MAP, Variant.MANDATORY)
    escape = pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE)
    right = pygame.event.Event(pygame.KEYDOWN, key=pygame.K_RIGHT)
    with mock.patch("pygame.event.get", side_effect=_events([escape], [right])):
        game = run_game(game_map, Variant.MANDATORY, tmp_path)
    assert game.player == (1, 1)
    assert game.result is None


def test_run_game_wins_after_collecting(tmp_path):
    _make_assets(tmp_path, Variant.MANDATORY)
    game_map = parse_map_text(MANDATORY_MAP, Variant.MANDATORY)
    steps = [pygame.event.Event(pygame.KEYDOWN, key=pygame.K_d)] * 4
    with mock.patch("pygame.event.get", side_effect=_events(steps)):
        game = run_game(game_map, Variant.MANDATORY, tmp_path)
    assert game.result is not None
    assert game.result.finished
    assert game.collectibles_left() == 0