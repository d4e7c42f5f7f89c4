from __future__ import annotations

import numpy as np

from ..sim.grid import FACE_DIRECTIONS, BoundingBox, VoxelCoords, VoxelGrid


def _layer_range(lo: int, hi: int, step: int) -> range:
    # The slab just outside the box along one axis, or the box's own span if the axis is not growing.
    if step == 1:
        return range(hi + 1, hi + 2)
    if step == -1:
        return range(lo - 1, lo)
    return range(lo, hi + 1)


def _grow_layer(
    grid: VoxelGrid, box: BoundingBox, direction: tuple[int, int, int], visited: set[VoxelCoords]
) -> list[VoxelCoords] | None:
    dx, dy, dz = direction
    layer: list[VoxelCoords] = []
    for x in _layer_range(box.min.x, box.max.x, dx):
        for y in _layer_range(box.min.y, box.max.y, dy):
            for z in _layer_range(box.min.z, box.max.z, dz):
                c = VoxelCoords(x, y, z)
                v = grid.get(c)
                if v is None or not v.solid or c in visited:
                    return None
                layer.append(c)
    return layer


def extract_primitives(grid: VoxelGrid) -> list[BoundingBox]:
    """
    Greedily merge solid voxels into axis-aligned boxes.

    Each unvisited solid voxel seeds a 1x1x1 box that is grown one layer at a
    time in each face direction until the next layer is not fully solid and
    unvisited. The result partitions the solid voxels (no overlap, no gaps)
    but depends on grid iteration order and is not a minimum cover.
    """
    visited: set[VoxelCoords] = set()
    boxes: list[BoundingBox] = []

    for coords, voxel in grid.items():
        if not voxel.solid or coords in visited:
            continue

        visited.add(coords)
        box = BoundingBox.from_point(coords)

        for direction in FACE_DIRECTIONS:
            while True:
                layer = _grow_layer(grid, box, direction, visited)
                if layer is None:
                    break
                for c in layer:
                    visited.add(c)
                    box.add_point(c)

        boxes.append(box)

    return boxes


def box_shape(box: BoundingBox) -> tuple[np.ndarray, np.ndarray]:
    """Center and half extents of an inclusive voxel box, in voxel units."""
    lo = np.asarray(box.min, dtype=np.float32)
    hi = np.asarray(box.max, dtype=np.float32)
    half = (hi - lo + 1.0) * 0.5
    center = (lo + hi) * 0.5 + 0.5
    return center, half
