from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, NamedTuple

import numpy as np


class VoxelCoords(NamedTuple):
    x: int
    y: int
    z: int

    def offset(self, dx: int, dy: int, dz: int) -> VoxelCoords:
        return VoxelCoords(self.x + dx, self.y + dy, self.z + dz)


# Face-adjacent unit steps, in the order growth and merging try them.
FACE_DIRECTIONS: tuple[tuple[int, int, int], ...] = (
    (1, 0, 0),
    (-1, 0, 0),
    (0, 1, 0),
    (0, -1, 0),
    (0, 0, 1),
    (0, 0, -1),
)


def neighbors(coords: VoxelCoords) -> Iterator[VoxelCoords]:
    for dx, dy, dz in FACE_DIRECTIONS:
        yield coords.offset(dx, dy, dz)


@dataclass(frozen=True)
class VoxelState:
    solid: bool = False
    # Opaque handle of a movable object owned by the render/physics side.
    object_id: int | None = None


class VoxelGrid:
    """
    Sparse voxel storage keyed by integer coordinates.

    Only cells that were explicitly set are stored. `get` on an untouched
    coordinate returns None, which is distinct from a stored non-solid state.
    Iteration follows insertion order.
    """

    def __init__(self) -> None:
        self._cells: dict[VoxelCoords, VoxelState] = {}

    def set(self, coords: Iterable[int], state: VoxelState) -> None:
        self._cells[VoxelCoords(*coords)] = state

    def get(self, coords: Iterable[int]) -> VoxelState | None:
        return self._cells.get(VoxelCoords(*coords))

    def is_solid(self, coords: Iterable[int]) -> bool:
        v = self.get(coords)
        return v is not None and v.solid

    def clear(self) -> None:
        self._cells.clear()

    def items(self) -> Iterator[tuple[VoxelCoords, VoxelState]]:
        return iter(self._cells.items())

    def __iter__(self) -> Iterator[VoxelCoords]:
        return iter(self._cells)

    def __len__(self) -> int:
        return len(self._cells)

    def __contains__(self, coords: object) -> bool:
        return coords in self._cells

    def solid_coords(self) -> set[VoxelCoords]:
        return {c for c, v in self._cells.items() if v.solid}

    def bounds(self) -> BoundingBox | None:
        box: BoundingBox | None = None
        for c in self._cells:
            if box is None:
                box = BoundingBox.from_point(c)
            else:
                box.add_point(c)
        return box

    def solid_mask(self) -> np.ndarray:
        """Dense bool[x, y, z] solid mask spanning (0, 0, 0) to the grid's max corner."""
        box = self.bounds()
        if box is None:
            return np.zeros((0, 0, 0), dtype=np.bool_)
        if min(box.min) < 0:
            raise ValueError(f"solid_mask needs non-negative coordinates, grid min is {tuple(box.min)}")
        mask = np.zeros((box.max.x + 1, box.max.y + 1, box.max.z + 1), dtype=np.bool_)
        for c, v in self._cells.items():
            if v.solid:
                mask[c.x, c.y, c.z] = True
        return mask


@dataclass
class BoundingBox:
    min: VoxelCoords
    max: VoxelCoords

    def __post_init__(self) -> None:
        self.min = VoxelCoords(*self.min)
        self.max = VoxelCoords(*self.max)
        if any(lo > hi for lo, hi in zip(self.min, self.max)):
            raise ValueError(f"BoundingBox min {tuple(self.min)} exceeds max {tuple(self.max)}")

    @classmethod
    def from_point(cls, coords: Iterable[int]) -> BoundingBox:
        c = VoxelCoords(*coords)
        return cls(c, c)

    def add_point(self, coords: Iterable[int]) -> None:
        c = VoxelCoords(*coords)
        self.min = VoxelCoords(min(self.min.x, c.x), min(self.min.y, c.y), min(self.min.z, c.z))
        self.max = VoxelCoords(max(self.max.x, c.x), max(self.max.y, c.y), max(self.max.z, c.z))

    @property
    def extent(self) -> tuple[int, int, int]:
        return (self.max.x - self.min.x, self.max.y - self.min.y, self.max.z - self.min.z)

    @property
    def has_footprint(self) -> bool:
        # Regions with no x or z extent mean "feature absent".
        dx, _, dz = self.extent
        return dx > 0 and dz > 0

    @property
    def volume(self) -> int:
        """Number of voxels covered, treating both corners as inclusive."""
        dx, dy, dz = self.extent
        return (dx + 1) * (dy + 1) * (dz + 1)

    def contains(self, coords: Iterable[int]) -> bool:
        c = VoxelCoords(*coords)
        return all(lo <= v <= hi for lo, v, hi in zip(self.min, c, self.max))

    def overlaps(self, other: BoundingBox) -> bool:
        return all(
            a_lo <= b_hi and b_lo <= a_hi
            for a_lo, a_hi, b_lo, b_hi in zip(self.min, self.max, other.min, other.max)
        )

    def coords(self) -> Iterator[VoxelCoords]:
        for x in range(self.min.x, self.max.x + 1):
            for y in range(self.min.y, self.max.y + 1):
                for z in range(self.min.z, self.max.z + 1):
                    yield VoxelCoords(x, y, z)

    def to_list(self) -> list[list[int]]:
        return [list(self.min), list(self.max)]
