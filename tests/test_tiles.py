from citylines.grid import Grid
from citylines.tiles import (
    CONNECTION_RULES, BASE_OPENINGS, Direction, RoadTypeTier, TileConfig, TileKind, TilePosition,
    opposite, rotate_cw, rotate_openings, rotation_for_openings, tiers_compatible,
)

N, E, S, W = Direction.NORTH, Direction.EAST, Direction.SOUTH, Direction.WEST


def road(r, c, kind, rotation=0, solution=None, rotatable=True):
    return TileConfig(
        position=TilePosition(r, c),
        kind=kind,
        tier=RoadTypeTier.LOCAL_ROAD,
        rotation=rotation,
        solution_rotation=rotation if solution is None else solution,
        rotatable=rotatable,
    )


def test_direction_group():
    assert rotate_cw(N) == E
    assert rotate_cw(W) == N
    assert rotate_cw(S, 3) == E
    assert opposite(E) == W


def test_rotated_openings():
    assert rotate_openings(BASE_OPENINGS[TileKind.CORNER], 90) == {E, S}
    assert rotate_openings(BASE_OPENINGS[TileKind.T_JUNCTION], 180) == {S, W, E}
    assert rotate_openings(BASE_OPENINGS[TileKind.LANDMARK], 270) == {W}
    assert rotate_openings(BASE_OPENINGS[TileKind.STRAIGHT], 360) == {N, S}
    assert BASE_OPENINGS[TileKind.DECORATION] == frozenset()


def test_rotation_for_openings():
    assert rotation_for_openings(TileKind.STRAIGHT, {E, W}) == 90
    assert rotation_for_openings(TileKind.CORNER, {W, N}) == 270
    assert rotation_for_openings(TileKind.T_JUNCTION, {N, E, S}) == 90  # closed to the west
    assert rotation_for_openings(TileKind.LANDMARK, {S}) == 180
    assert rotation_for_openings(TileKind.STRAIGHT, {N, E}) is None


def test_tier_table_is_symmetric():
    for a, allowed in CONNECTION_RULES.items():
        for b in allowed:
            assert a in CONNECTION_RULES[b], (a, b)


def test_tier_compatibility():
    assert tiers_compatible(RoadTypeTier.LOCAL_ROAD, RoadTypeTier.LANDMARK)
    assert tiers_compatible(RoadTypeTier.TURNPIKE, RoadTypeTier.LOCAL_ROAD)
    assert not tiers_compatible(RoadTypeTier.HOUSE, RoadTypeTier.TURNPIKE)
    assert not tiers_compatible(RoadTypeTier.ARTERIAL_ROAD, RoadTypeTier.LANDMARK)
    assert not tiers_compatible(RoadTypeTier.SCENERY, RoadTypeTier.LOCAL_ROAD)


def test_rotate_only_rotatable():
    t = road(0, 0, TileKind.CORNER, rotation=270)
    assert t.rotate() and t.rotation == 0
    fixed = road(0, 0, TileKind.CORNER, rotation=90, rotatable=False)
    assert not fixed.rotate() and fixed.rotation == 90


def test_straight_solved_either_way_round():
    t = road(1, 1, TileKind.STRAIGHT, rotation=180, solution=0)
    assert t.is_solved
    t.rotate()
    assert not t.is_solved
    assert t.solved().rotation == 0 and t.rotation == 270


def test_positions():
    p = TilePosition(2, 3)
    assert p.key == "2,3"
    assert TilePosition.from_key("2,3") == p
    assert p.step(N) == TilePosition(1, 3)
    assert p.direction_to(TilePosition(2, 2)) == W
    assert p.direction_to(TilePosition(3, 4)) is None
    assert p.manhattan(TilePosition(0, 0)) == 5
    assert {p: 1}[TilePosition(2, 3)] == 1


def test_grid_basics():
    g = Grid(2, 3)
    t = road(1, 2, TileKind.STRAIGHT)
    g.place(t)
    assert g.get(TilePosition(1, 2)) is t
    assert len(g.empty_positions()) == 5
    assert [d for d, _ in g.neighbors(TilePosition(0, 0))] == [E, S]
    assert g.as_matrix()[1][2] is t
    assert not g.in_bounds(TilePosition(2, 0))
