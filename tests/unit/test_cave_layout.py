import logging

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from voxlayout.config import LayoutConfig
from voxlayout.gen.cave import FALLBACK_EXIT, CaveLayout, standable_voxels
from voxlayout.sim.grid import BoundingBox, VoxelCoords, VoxelGrid
from voxlayout.sim.rng import Sequencer


def _generated(seed: int, num_agents: int = 2) -> tuple[CaveLayout, VoxelGrid]:
    gen = CaveLayout(num_agents, Sequencer(seed))
    gen.init()
    grid = VoxelGrid()
    gen.generate(grid)
    return gen, grid


def test_scripted_cave_without_growth(scripted):
    # length, width, height, cave height, height; then two seeds on the same cell.
    # Every growth draw is 1.0, so nothing beyond the seed is accepted.
    seq = scripted([10, 9, 3, 2, 3, 4, 4, 4, 4])
    gen = CaveLayout(2, seq)
    gen.init()
    assert (gen.length, gen.height, gen.width, gen.cave_height) == (10, 5, 9, 2)

    grid = VoxelGrid()
    gen.generate(grid)
    assert seq.remaining == 0
    assert gen.cave == {VoxelCoords(4, 2, 4)}

    # Ceiling with a single opening, floored by a cavity wall.
    assert not grid.is_solid((4, 2, 4))
    assert grid.is_solid((4, 1, 4))
    assert grid.is_solid((3, 2, 4))
    assert grid.is_solid((8, 2, 7))

    assert len(gen.free_voxels) == 8 * 7
    assert VoxelCoords(4, 2, 4) in gen.free_voxels
    assert VoxelCoords(4, 3, 4) not in gen.free_voxels
    assert gen.starting_positions(grid) == [VoxelCoords(1, 3, 1), VoxelCoords(1, 3, 2)]

    # The last free voxel hits the z wall, the one before it fits.
    assert gen.level_exit(grid) == BoundingBox(VoxelCoords(8, 3, 6), VoxelCoords(9, 4, 8))


def test_growth_draws_decay(scripted):
    # Each accepted cell multiplies the acceptance probability by 0.995.
    floats = [0.0] * 6 + [0.799]
    seq = scripted([10, 9, 3, 2, 3, 4, 4, 4, 4], floats=floats)
    gen = CaveLayout(2, seq)
    gen.init()
    gen.generate(VoxelGrid())
    # 0.799 > 0.8 * 0.995**k once k >= 1, so the 7th candidate is rejected.
    assert VoxelCoords(4, 1, 4) in gen.cave
    assert len(gen.cave) <= 6


@settings(deadline=2000, max_examples=25)
@given(seed=st.integers(min_value=0, max_value=2**31 - 1))
def test_prop_free_voxels_stand_on_solid_ground(seed):
    gen, grid = _generated(seed)

    assert gen.free_voxels
    for v in gen.free_voxels:
        assert grid.is_solid((v.x, v.y - 1, v.z))
        assert not grid.is_solid(v)
        assert 1 <= v.x < gen.length - 1
        assert 1 <= v.z < gen.width - 1
        assert 1 <= v.y <= gen.cave_height + 1

    for c in gen.cave:
        assert 1 <= c.y <= gen.cave_height
        assert 2 <= c.x < gen.length - 2
        assert 1 <= c.z <= gen.width - 1
        if c.z < gen.width - 1:
            assert not grid.is_solid(c)


@pytest.mark.parametrize("seed", [0, 1, 2, 42])
def test_starting_positions_are_first_free_voxels(seed):
    gen, grid = _generated(seed, num_agents=3)
    assert gen.starting_positions(grid) == gen.free_voxels[:3]


@pytest.mark.parametrize("seed", [0, 8, 21])
def test_level_exit_on_free_cells(seed):
    gen, grid = _generated(seed, num_agents=3)
    pad = gen.level_exit(grid)
    assert pad.min in gen.free_voxels
    assert pad.extent == (1, 1, 3)
    for z in range(pad.min.z, pad.max.z):
        assert not grid.is_solid((pad.min.x, pad.min.y, z))


def test_level_exit_fallback_when_nothing_fits(caplog):
    gen = CaveLayout(2, Sequencer(3))
    gen.init()
    gen.free_voxels = []
    with caplog.at_level(logging.WARNING):
        pad = gen.level_exit(VoxelGrid())
    assert pad == BoundingBox(VoxelCoords(*FALLBACK_EXIT[0]), VoxelCoords(*FALLBACK_EXIT[1]))
    assert "fallback" in caplog.text


def test_level_exit_too_narrow_is_fatal():
    gen = CaveLayout(4, Sequencer(0), LayoutConfig(room_width=(4, 5)))
    gen.init()
    with pytest.raises(ValueError, match="exit pad"):
        gen.level_exit(VoxelGrid())


def test_standable_voxels_on_flat_floor():
    from voxlayout.gen.base import fill_room_shell

    grid = VoxelGrid()
    fill_room_shell(grid, 5, 3, 4)
    out = standable_voxels(grid, 5, 4, 2)
    assert sorted(out) == [VoxelCoords(x, 1, z) for x in range(1, 4) for z in range(1, 3)]
