from hypothesis import given, settings
from hypothesis import strategies as st

from voxlayout.config import LayoutType
from voxlayout.gen.layout import GridLayout
from voxlayout.sim.grid import VoxelGrid
from voxlayout.sim.rng import Sequencer


def _build(layout_type: LayoutType, seed: int, num_agents: int):
    layout = GridLayout(Sequencer(seed))
    layout.init(num_agents, layout_type)
    grid = VoxelGrid()
    layout.generate(grid)
    return layout, grid


@settings(deadline=3000, max_examples=20)
@given(
    seed=st.integers(min_value=0, max_value=2**31 - 1),
    layout_type=st.sampled_from(list(LayoutType)),
    num_agents=st.integers(min_value=1, max_value=3),
)
def test_prop_primitives_partition_every_archetype(seed, layout_type, num_agents, check_partition):
    layout, grid = _build(layout_type, seed, num_agents)
    check_partition(grid, layout.extract_primitives(grid))


@settings(deadline=3000, max_examples=15)
@given(
    seed=st.integers(min_value=0, max_value=2**31 - 1),
    layout_type=st.sampled_from(list(LayoutType)),
)
def test_prop_generation_is_deterministic(seed, layout_type):
    a, grid_a = _build(layout_type, seed, 2)
    b, grid_b = _build(layout_type, seed, 2)

    assert a.size == b.size
    assert dict(grid_a.items()) == dict(grid_b.items())
    assert a.extract_primitives(grid_a) == b.extract_primitives(grid_b)
    assert a.starting_positions(grid_a) == b.starting_positions(grid_b)
    assert a.object_spawn_positions(grid_a) == b.object_spawn_positions(grid_b)
    assert a.level_exit(grid_a) == b.level_exit(grid_b)
    assert a.building_zone(grid_a) == b.building_zone(grid_b)


@settings(deadline=3000, max_examples=20)
@given(
    seed=st.integers(min_value=0, max_value=2**31 - 1),
    layout_type=st.sampled_from(list(LayoutType)),
)
def test_prop_floor_and_perimeter_are_solid(seed, layout_type):
    layout, grid = _build(layout_type, seed, 2)
    length, height, width = layout.size
    for x in range(length):
        for z in range(width):
            assert grid.is_solid((x, 0, z))
    for y in range(height):
        for x in range(length):
            assert grid.is_solid((x, y, 0))
            assert grid.is_solid((x, y, width - 1))
        for z in range(width):
            assert grid.is_solid((0, y, z))
            assert grid.is_solid((length - 1, y, z))
