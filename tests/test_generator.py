# tests/test_generator.py
import pytest

from citylines.config import DifficultyParams
from citylines.engine.connectivity import (
    build_connection_graph, find_path, validate_all_tiles_on_some_path,
)
from citylines.errors import GenerationExhaustedError, PlacementError
from citylines.mapgen import generator
from citylines.mapgen.generator import LevelGenerator, generate
from citylines.tiles import RoadTypeTier

EASY = DifficultyParams(4, 2, "easy", 3, 0.1)
MEDIUM = DifficultyParams(5, 3, "medium", 4, 0.3)
HARD = DifficultyParams(6, 3, "hard", 5, 0.5)


def check_level(level, params):
    rows, cols = level.grid_size
    assert rows == cols == params.grid_size
    assert len(level.destinations) == params.destination_count
    assert level.roads

    positions = [t.position for t in level.tiles()]
    assert len(positions) == len(set(positions)), "two tiles in one cell"

    solved = level.to_grid(solved=True)
    graph = build_connection_graph(solved.as_matrix())
    for dest in level.destinations:
        assert find_path(dest.position, level.goal.position, graph).exists
    orphans = validate_all_tiles_on_some_path(
        [solved.get(r.position) for r in level.roads], level.destinations, [level.goal], graph
    )
    assert orphans.all_connected, orphans.orphans

    for road in level.roads:
        assert road.rotatable and road.tier is RoadTypeTier.LOCAL_ROAD
        assert len(road.openings) <= 3
    for fixed in [level.goal, *level.destinations, *level.decorations]:
        assert not fixed.rotatable
        assert fixed.rotation == fixed.solution_rotation
    assert len(level.decorations) <= 2

    assert len(level.solution_paths) == len(level.destinations)
    for dest, path in zip(level.destinations, level.solution_paths):
        assert path[0] == dest.position and path[-1] == level.goal.position
        assert len(path) - 2 >= params.min_path_length


def test_easy_level_from_seed_12345():
    level = generate(EASY, 12345)
    assert level.grid_size == (4, 4)
    assert 12345 <= level.seed < 12355
    check_level(level, EASY)


def test_same_seed_same_level():
    assert generate(EASY, 12345) == generate(EASY, 12345)
    assert generate(MEDIUM, 99) == generate(MEDIUM, 99)
    assert generate(EASY, 12345) != generate(EASY, 54321)


@pytest.mark.parametrize("params", [EASY, MEDIUM, HARD])
def test_generated_levels_are_solvable(params):
    made = 0
    for seed in range(1000, 1200, 20):
        try:
            level = generate(params, seed)
        except GenerationExhaustedError:
            continue
        check_level(level, params)
        made += 1
    assert made > 0


def test_exhaustion_reports_every_seed():
    crowded = DifficultyParams(4, 20, "easy", 3, 0.1)
    bad = set()
    with pytest.raises(GenerationExhaustedError) as ei:
        generate(crowded, 500, bad)
    assert ei.value.seeds == list(range(500, 510))
    assert bad == set(range(500, 510))
    assert "500" in str(ei.value)


def test_single_session_raises_instead_of_returning_partial_level():
    crowded = DifficultyParams(4, 20, "easy", 3, 0.1)
    gen = LevelGenerator(crowded, 1)
    with pytest.raises(PlacementError):
        gen.run()
    assert gen.grid.rows == gen.grid.cols == 4


def test_known_bad_seeds_are_not_retried(monkeypatch):
    calls = []

    def failing_run(self):
        calls.append(self.seed)
        raise PlacementError("no room")

    monkeypatch.setattr(generator.LevelGenerator, "run", failing_run)
    bad = {3, 4}
    with pytest.raises(GenerationExhaustedError) as ei:
        generate(EASY, 1, bad)
    # skipped seeds still spend their slot
    assert ei.value.seeds == list(range(1, 11))
    assert calls == [1, 2, 5, 6, 7, 8, 9, 10]
    assert bad == set(range(1, 11))


def test_warm_bad_seed_set_gives_same_level():
    bad = set()
    cold = generate(MEDIUM, 4321, bad)
    warm = generate(MEDIUM, 4321, bad)
    assert cold == warm
    assert all(s < cold.seed for s in bad)


def test_skipping_the_winning_seed_moves_on():
    level = generate(EASY, 12345)
    other = generate(EASY, 12345, {level.seed})
    assert other.seed > level.seed
