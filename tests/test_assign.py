# tests/test_assign.py
import pytest

from citylines.errors import FourWayIntersectionError, UnsolvableLayoutError
from citylines.grid import Grid
from citylines.mapgen.assign import (
    assign_tiles, check_no_four_way, kind_for_links, scramble_rotations, verify_solvable,
)
from citylines.mapgen.carve import RoadNetwork
from citylines.rng import XORShift32
from citylines.tiles import Direction, RoadTypeTier, TileConfig, TileKind, TilePosition

P = TilePosition
N, E, S, W = Direction.NORTH, Direction.EAST, Direction.SOUTH, Direction.WEST


def carved():
    # dest (0,1) -> (0,0) -> (1,0) -> goal (2,0)
    goal = TileConfig(P(2, 0), TileKind.TURNPIKE, RoadTypeTier.TURNPIKE)
    dest = TileConfig(P(0, 1), TileKind.LANDMARK, RoadTypeTier.LANDMARK)
    grid = Grid.from_tiles(3, 3, [goal, dest])
    net = RoadNetwork(goal)
    net.commit([P(0, 1), P(0, 0), P(1, 0), P(2, 0)])
    return grid, net, goal, dest


def test_kind_for_links():
    assert kind_for_links({N, S}) is TileKind.STRAIGHT
    assert kind_for_links({E, W}) is TileKind.STRAIGHT
    assert kind_for_links({S, W}) is TileKind.CORNER
    assert kind_for_links({N, E, S}) is TileKind.T_JUNCTION
    assert kind_for_links({N}) is None
    assert kind_for_links({N, E, S, W}) is None


def test_assign_kinds_and_rotations():
    grid, net, goal, dest = carved()
    roads = assign_tiles(grid, net, [dest])
    corner, straight = roads
    assert corner.position == P(0, 0) and corner.kind is TileKind.CORNER
    assert corner.rotation == corner.solution_rotation == 90  # east + south
    assert straight.kind is TileKind.STRAIGHT and straight.solution_rotation == 0
    for t in roads:
        assert t.rotatable and t.tier is RoadTypeTier.LOCAL_ROAD
        assert grid.get(t.position) is t
    assert dest.solution_rotation == 270  # faces west, toward its road
    verify_solvable(grid, goal, [dest], roads)


def test_unexpected_link_count_falls_back_to_straight(caplog):
    goal = TileConfig(P(2, 0), TileKind.TURNPIKE, RoadTypeTier.TURNPIKE)
    net = RoadNetwork(goal)
    net.links[P(1, 1)] = {N}
    net.toward_goal[P(1, 1)] = goal.position
    roads = assign_tiles(Grid(3, 3), net, [])
    assert roads[0].kind is TileKind.STRAIGHT and roads[0].solution_rotation == 0
    assert "falling back" in caplog.text


def test_four_way_cell_rejected():
    arms = [[P(0, 1), P(1, 1)], [P(1, 0), P(1, 1)], [P(1, 2), P(1, 1)]]
    check_no_four_way(arms)
    with pytest.raises(FourWayIntersectionError):
        check_no_four_way(arms + [[P(2, 1), P(1, 1)]])
    with pytest.raises(FourWayIntersectionError):
        check_no_four_way([[P(0, 0), P(2, 2)]])


def test_verify_catches_broken_layout():
    grid, net, goal, dest = carved()
    roads = assign_tiles(grid, net, [dest])
    roads[1].solution_rotation = 90
    with pytest.raises(UnsolvableLayoutError):
        verify_solvable(grid, goal, [dest], roads)


def test_scramble_keeps_solutions():
    grid, net, goal, dest = carved()
    roads = assign_tiles(grid, net, [dest])
    wanted = [t.solution_rotation for t in roads]
    assert scramble_rotations(grid, XORShift32(8)) == 2
    assert [t.solution_rotation for t in roads] == wanted
    assert goal.rotation == 0 and dest.rotation == 270
    verify_solvable(grid, goal, [dest], roads)


def test_scramble_skips_fixed_road(caplog):
    grid, net, goal, dest = carved()
    roads = assign_tiles(grid, net, [dest])
    roads[0].rotatable = False
    assert scramble_rotations(grid, XORShift32(8)) == 1
    assert roads[0].rotation == roads[0].solution_rotation
    assert "not rotatable" in caplog.text
