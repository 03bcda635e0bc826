# tests/test_progression.py
import os

import pytest

from citylines.config import Difficulty
from citylines.errors import GenerationExhaustedError
from citylines.levels import progression
from citylines.levels.progression import LevelManager, difficulty_for_level, seed_for_level

LEVELS = os.path.join(os.path.dirname(__file__), "..", "data", "levels")


def test_difficulty_bands():
    assert difficulty_for_level(1) == difficulty_for_level(5)
    easy = difficulty_for_level(4)
    assert (easy.grid_size, easy.destination_count, easy.difficulty) == (4, 2, Difficulty.EASY)
    assert (easy.min_path_length, easy.detour_probability) == (3, 0.1)

    medium = difficulty_for_level(6)
    assert (medium.grid_size, medium.destination_count, medium.difficulty) == (5, 3, Difficulty.MEDIUM)
    assert difficulty_for_level(8) == medium

    hard = difficulty_for_level(9)
    assert (hard.grid_size, hard.min_path_length, hard.detour_probability) == (6, 5, 0.5)
    assert hard.difficulty is Difficulty.HARD
    assert difficulty_for_level(40) == hard


def test_seed_for_level():
    assert seed_for_level(1) == 12345
    assert seed_for_level(4) == 49380


def test_first_levels_are_hand_authored():
    mgr = LevelManager(levels_dir=LEVELS)
    for n in (1, 2, 3):
        level = mgr.load_level(n)
        assert level.seed is None
    assert mgr.load_level(1).grid_size == (4, 4)
    assert mgr.load_level(3).grid_size == (5, 5)


def test_later_levels_are_generated_deterministically():
    a = LevelManager(levels_dir=LEVELS).load_level(4)
    b = LevelManager(levels_dir=LEVELS).load_level(4)
    assert a == b
    assert 49380 <= a.seed < 49390
    assert a.grid_size == (4, 4)


def test_exhausted_generation_falls_back_to_hand_authored(monkeypatch, caplog):
    def give_up(params, seed, bad_seeds=None, limits=None):
        raise GenerationExhaustedError(range(seed, seed + 10))

    monkeypatch.setattr(progression, "generate", give_up)
    mgr = LevelManager(levels_dir=LEVELS)
    level = mgr.load_level(5)  # (5 - 1) % 3 + 1 == 2
    assert level == mgr.load_level(2)
    assert "hand-authored level 2" in caplog.text


def test_level_numbers_start_at_one():
    with pytest.raises(ValueError):
        LevelManager(levels_dir=LEVELS).load_level(0)
