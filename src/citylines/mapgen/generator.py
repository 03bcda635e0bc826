# src/citylines/mapgen/generator.py
# Level generation: one LevelGenerator session per seed, and the retry loop
# that walks seed, seed+1, ... until a session succeeds.

import logging
from typing import List, Optional, Set

from ..config import LIMITS, DifficultyParams, GeneratorLimits
from ..errors import GenerationError, GenerationExhaustedError
from ..grid import Grid
from ..level import GeneratedLevel, GridSize
from ..rng import XORShift32
from .assign import assign_tiles, check_no_four_way, scramble_rotations, verify_solvable
from .carve import carve_roads
from .placement import place_decorations, place_destinations, place_goal

logger = logging.getLogger(__name__)


class LevelGenerator:
    """
    A single generation attempt. Owns its grid and PRNG; build a fresh one per
    seed. Phases, in order:

      1) goal (turnpike), placed by difficulty
      2) destinations (landmarks), spaced from the goal and each other
      3) roads, random-walked from each destination, sharing earlier road
      4) tile kinds and solution rotations from the carved links
      5) four-way check and a solvability pass over the solved layout
      6) scramble rotatable road tiles
      7) decorations on whatever is still empty

    run() raises a GenerationError subclass on any failure; nothing partial
    escapes.
    """

    def __init__(self, params: DifficultyParams, seed: int, limits: GeneratorLimits = LIMITS):
        self.params = params
        self.seed = seed
        self.limits = limits
        self.rng = XORShift32(seed)
        self.grid = Grid(params.grid_size, params.grid_size)

    def run(self) -> GeneratedLevel:
        p = self.params
        goal = place_goal(self.grid, self.rng, p.difficulty, self.limits)
        destinations = place_destinations(
            self.grid, self.rng, goal, p.destination_count, self.limits
        )
        net, paths = carve_roads(self.grid, self.rng, goal, destinations, p, self.limits)
        roads = assign_tiles(self.grid, net, destinations)

        check_no_four_way(paths)
        verify_solvable(self.grid, goal, destinations, roads)

        scramble_rotations(self.grid, self.rng)
        decorations = place_decorations(self.grid, self.rng, self.limits)

        return GeneratedLevel(
            grid_size=GridSize(self.grid.rows, self.grid.cols),
            goal=goal,
            destinations=destinations,
            roads=roads,
            decorations=decorations,
            solution_paths=paths,
            seed=self.seed,
        )


def generate(
    params: DifficultyParams,
    seed: int,
    bad_seeds: Optional[Set[int]] = None,
    limits: GeneratorLimits = LIMITS,
) -> GeneratedLevel:
    """
    Try seed, seed+1, ... for limits.max_attempts seeds.

    `bad_seeds` remembers seeds that failed, across calls. A remembered seed is
    skipped but still spends its slot, so the result for a given seed is the
    same whether or not the set is warm. Failed seeds are added to it.
    """
    if bad_seeds is None:
        bad_seeds = set()

    tried: List[int] = []
    for attempt in range(limits.max_attempts):
        s = seed + attempt
        tried.append(s)
        if s in bad_seeds:
            logger.debug("seed %d known bad, skipping", s)
            continue
        try:
            level = LevelGenerator(params, s, limits).run()
        except GenerationError as e:
            logger.warning("attempt %d (seed %d) failed: %s", attempt + 1, s, e)
            bad_seeds.add(s)
            continue
        logger.info(
            "generated %dx%d level from seed %d: %d destinations, %d road tiles",
            level.grid_size.rows, level.grid_size.cols, s,
            len(level.destinations), len(level.roads),
        )
        return level

    raise GenerationExhaustedError(tried)
