import pytest

from voxlayout.sim.grid import BoundingBox, VoxelGrid


class ScriptedSequencer:
    """Stands in for Sequencer and replays fixed draws; shuffle keeps the order."""

    def __init__(self, ints, floats=(), default_float=1.0):
        self._ints = list(ints)
        self._floats = list(floats)
        self._default_float = default_float

    def seed(self, value):
        pass

    def rand_range(self, lo, hi):
        assert self._ints, f"script exhausted at rand_range({lo}, {hi})"
        v = self._ints.pop(0)
        assert lo <= v < hi, f"scripted value {v} outside [{lo}, {hi})"
        return v

    def unit_float(self):
        if self._floats:
            return self._floats.pop(0)
        return self._default_float

    def shuffle(self, items):
        pass

    def next_seed(self, seed_range=10000):
        return self.rand_range(0, seed_range)

    @property
    def remaining(self):
        return len(self._ints)


@pytest.fixture
def scripted():
    def _make(ints, floats=(), default_float=1.0):
        return ScriptedSequencer(ints, floats, default_float)

    return _make


@pytest.fixture(scope="session")
def check_partition():
    def _check(grid: VoxelGrid, boxes: list[BoundingBox]) -> None:
        solids = grid.solid_coords()
        covered = set()
        for box in boxes:
            for c in box.coords():
                assert c not in covered, f"{c} covered by more than one box"
                assert c in solids, f"{c} in box {box} is not solid"
                covered.add(c)
        assert covered == solids

    return _check
