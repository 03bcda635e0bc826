from dataclasses import dataclass
from enum import Enum


class Difficulty(Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


@dataclass(frozen=True)
class GeneratorLimits:
    # Seeds tried by one generate() call: seed, seed+1, ... seed+max_attempts-1.
    max_attempts: int = 10
    # Random samples per destination before the attempt is abandoned.
    placement_attempts: int = 200
    # Random walks per destination before the attempt is abandoned.
    path_retries: int = 30
    walk_steps_factor: int = 4
    max_decorations: int = 2
    # Easy goal offset radius is grid_size // this (at least 1).
    easy_radius_divisor: int = 4

    def max_walk_steps(self, rows: int, cols: int) -> int:
        return rows * cols * self.walk_steps_factor


LIMITS = GeneratorLimits()


@dataclass(frozen=True)
class DifficultyParams:
    grid_size: int
    destination_count: int
    difficulty: Difficulty
    min_path_length: int
    detour_probability: float

    def __post_init__(self) -> None:
        # Accept the plain tier names used by level files and the CLI.
        if not isinstance(self.difficulty, Difficulty):
            object.__setattr__(self, "difficulty", Difficulty(self.difficulty))
        if self.grid_size < 3:
            raise ValueError(f"grid_size must be at least 3, got {self.grid_size}")
        if self.destination_count < 0:
            raise ValueError("destination_count must be >= 0")
        if self.min_path_length < 0:
            raise ValueError("min_path_length must be >= 0")
        if not 0.0 <= self.detour_probability <= 1.0:
            raise ValueError("detour_probability must be within [0, 1]")
