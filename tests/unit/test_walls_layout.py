from hypothesis import given, settings
from hypothesis import strategies as st

from voxlayout.gen.walls import WallsLayout
from voxlayout.sim.grid import BoundingBox, VoxelCoords, VoxelGrid
from voxlayout.sim.rng import Sequencer

# length, width, height (room draws), num_walls, length, first wall x, first wall height,
# second wall height, second wall x, height, num objects
TWO_WALLS = [10, 9, 3, 2, 20, 5, 3, 3, 8, 4, 9]


def test_scripted_two_walls(scripted):
    seq = scripted(TWO_WALLS)
    gen = WallsLayout(2, seq)
    gen.init()
    assert seq.remaining == 0

    assert gen.walls == [(5, 3), (8, 3)]
    assert (gen.length, gen.height, gen.width) == (20, 7, 9)
    assert gen.first_wall_x == 5
    assert gen.max_wall_x == 8

    grid = VoxelGrid()
    agents = gen.starting_positions(grid)
    objects = gen.object_spawn_positions(grid)
    assert agents == [VoxelCoords(1, 1, 1), VoxelCoords(1, 1, 2)]
    assert len(objects) == 9
    assert objects[0] == VoxelCoords(1, 1, 3)
    assert not set(agents) & set(objects)


def test_scripted_wall_slabs(scripted):
    gen = WallsLayout(2, scripted(TWO_WALLS))
    gen.init()
    grid = VoxelGrid()
    gen.generate(grid)

    for wall_x in (5, 8):
        for y in range(1, 4):
            for z in range(1, 8):
                assert grid.is_solid((wall_x, y, z))
        assert not grid.is_solid((wall_x, 4, 4))
    assert not grid.is_solid((6, 1, 4))


def test_scripted_exit_beyond_last_wall(scripted):
    gen = WallsLayout(2, scripted(TWO_WALLS + [15, 2]))
    gen.init()
    assert gen.level_exit(VoxelGrid()) == BoundingBox(VoxelCoords(15, 1, 2), VoxelCoords(16, 2, 4))


def test_scripted_no_walls(scripted):
    seq = scripted([10, 9, 3, 0, 12, 4, 2])
    gen = WallsLayout(2, seq)
    gen.init()
    assert seq.remaining == 0
    assert gen.walls == []
    assert gen.first_wall_x == 3
    assert (gen.length, gen.height) == (12, 4)

    grid = VoxelGrid()
    assert all(p.x < 3 for p in gen.starting_positions(grid))
    assert len(gen.object_spawn_positions(grid)) == 2


@settings(deadline=1000, max_examples=30)
@given(seed=st.integers(min_value=0, max_value=2**31 - 1))
def test_prop_wall_placement(seed):
    gen = WallsLayout(3, Sequencer(seed))
    gen.init()

    xs = [x for x, _ in gen.walls]
    assert xs == sorted(set(xs))
    assert len(gen.walls) <= 4
    for x, h in gen.walls:
        assert gen.first_wall_x <= x < gen.length - 1
        assert 1 <= h <= 4
    if gen.walls:
        assert xs[0] == gen.first_wall_x
        assert gen.max_wall_x == xs[-1]
        assert gen.height >= 3 + max(h for _, h in gen.walls)

    grid = VoxelGrid()
    gen.generate(grid)

    agents = gen.starting_positions(grid)
    objects = gen.object_spawn_positions(grid)
    assert len(agents) <= 3
    assert not set(agents) & set(objects)
    for p in agents + objects:
        assert 1 <= p.x < gen.first_wall_x
        assert p.y == 1
        assert 1 <= p.z < gen.width - 1
        assert not grid.is_solid(p)

    min_objects = sum((h - 1) * 2 for _, h in gen.walls)
    assert len(objects) <= min_objects + 4

    pad = gen.level_exit(grid)
    assert gen.max_wall_x < pad.min.x < gen.length - 1
    assert pad.max.z <= gen.width - 1
