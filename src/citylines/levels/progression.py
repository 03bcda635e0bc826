# src/citylines/levels/progression.py
# Level numbers -> puzzles. The first few levels are hand-authored; everything
# after is generated from a seed derived from the level number.

import logging
from dataclasses import dataclass, field
from typing import Set

from ..config import LIMITS, Difficulty, DifficultyParams, GeneratorLimits
from ..errors import GenerationExhaustedError
from ..level import GeneratedLevel
from ..mapgen.generator import generate
from .loader import LEVELS_DIR, load_level

logger = logging.getLogger(__name__)

SEED_STRIDE = 12345
HAND_AUTHORED = 3


def difficulty_for_level(number: int) -> DifficultyParams:
    if number <= 5:
        return DifficultyParams(4, 2, Difficulty.EASY, 3, 0.1)
    if number <= 8:
        return DifficultyParams(5, 3, Difficulty.MEDIUM, 4, 0.3)
    return DifficultyParams(6, 3, Difficulty.HARD, 5, 0.5)


def seed_for_level(number: int) -> int:
    return number * SEED_STRIDE


@dataclass
class LevelManager:
    levels_dir: str = LEVELS_DIR
    hand_authored: int = HAND_AUTHORED
    limits: GeneratorLimits = LIMITS
    # seeds that failed in this session; shared by every generate() call
    bad_seeds: Set[int] = field(default_factory=set)

    def load_level(self, number: int) -> GeneratedLevel:
        if number < 1:
            raise ValueError(f"level numbers start at 1, got {number}")
        if number <= self.hand_authored:
            return load_level(number, self.levels_dir)

        params = difficulty_for_level(number)
        try:
            return generate(params, seed_for_level(number), self.bad_seeds, self.limits)
        except GenerationExhaustedError as e:
            fallback = (number - 1) % self.hand_authored + 1
            logger.error("level %d: %s; using hand-authored level %d", number, e, fallback)
            return load_level(fallback, self.levels_dir)
