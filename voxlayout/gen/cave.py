from __future__ import annotations

import logging
from collections import deque

from ..config import LayoutConfig
from ..sim.grid import BoundingBox, VoxelCoords, VoxelGrid, neighbors
from ..sim.rng import Sequencer
from .base import (
    SOLID,
    draw_room_footprint,
    empty_region,
    exit_pad_width,
    fill_room_shell,
    require_exit_pad_fits,
)
from .primitives import extract_primitives

logger = logging.getLogger(__name__)

# Used when no free voxel can hold the exit pad.
FALLBACK_EXIT = ((1, 1, 1), (2, 2, 2))


def standable_voxels(grid: VoxelGrid, length: int, width: int, start_y: int) -> list[VoxelCoords]:
    """
    Per interior column, the empty cell right above the highest solid voxel below `start_y`.
    """
    out: list[VoxelCoords] = []
    for x in range(1, length - 1):
        for z in range(1, width - 1):
            for y in range(start_y, 0, -1):
                if grid.is_solid((x, y - 1, z)):
                    out.append(VoxelCoords(x, y, z))
                    break
    return out


class CaveLayout:
    """
    Room whose lower part is solid rock except for a randomly grown cavity.

    The cavity is a probabilistic flood fill from a few seeds on the ceiling
    plane. The acceptance probability decays on every accepted cell, which
    bounds how large the cave can get.
    """

    def __init__(self, num_agents: int, seq: Sequencer, config: LayoutConfig | None = None) -> None:
        self.num_agents = int(num_agents)
        self.seq = seq
        self.config = config or LayoutConfig()
        self.length = 0
        self.height = 0
        self.width = 0
        self.cave_height = 0
        self.cave: set[VoxelCoords] = set()
        self.free_voxels: list[VoxelCoords] = []

    def init(self) -> None:
        self.length, self.width = draw_room_footprint(self.seq, self.config)
        self.height = self.seq.rand_range(*self.config.room_height)

        self.cave_height = self.seq.rand_range(*self.config.cave_height)
        self.height = self.seq.rand_range(*self.config.room_height) + self.cave_height

    def _in_cave_bounds(self, c: VoxelCoords) -> bool:
        return 1 <= c.y <= self.cave_height and 2 <= c.x < self.length - 2 and 1 <= c.z <= self.width - 1

    def _grow_cave(self) -> set[VoxelCoords]:
        seq = self.seq
        growth_prob = self.config.cave_growth_prob

        cave: set[VoxelCoords] = set()
        q: deque[VoxelCoords] = deque()

        num_seeds = max(1, max(self.length, self.width) // self.config.cave_seed_spacing + 1)
        for _ in range(num_seeds):
            seed_x = seq.rand_range(2, self.length - 2)
            seed_z = seq.rand_range(2, self.width - 2)
            seed = VoxelCoords(seed_x, self.cave_height, seed_z)
            cave.add(seed)
            q.append(seed)

        while q:
            curr = q.popleft()
            for c in neighbors(curr):
                # One draw per candidate, accepted or not.
                if seq.unit_float() > growth_prob:
                    continue
                if c in cave or not self._in_cave_bounds(c):
                    continue
                q.append(c)
                cave.add(c)
                growth_prob *= self.config.cave_growth_decay

        return cave

    def generate(self, grid: VoxelGrid) -> None:
        fill_room_shell(grid, self.length, self.height, self.width)

        self.cave = self._grow_cave()
        cave = self.cave

        # Ceiling plane with an opening wherever the cave reaches it.
        for x in range(1, self.length):
            for z in range(1, self.width):
                c = VoxelCoords(x, self.cave_height, z)
                if c not in cave:
                    grid.set(c, SOLID)

        # Walls of the cavity.
        for coords in cave:
            for adjacent in neighbors(coords):
                if adjacent.y > self.cave_height or adjacent in cave:
                    continue
                grid.set(adjacent, SOLID)

        self.free_voxels = standable_voxels(grid, self.length, self.width, self.cave_height + 1)
        self.seq.shuffle(self.free_voxels)

    def extract_primitives(self, grid: VoxelGrid) -> list[BoundingBox]:
        return extract_primitives(grid)

    def level_exit(self, grid: VoxelGrid) -> BoundingBox:
        pad = exit_pad_width(self.num_agents, self.config)
        require_exit_pad_fits(self.width, pad)

        for v in reversed(self.free_voxels):
            if any(grid.is_solid((v.x, v.y, z)) for z in range(v.z, v.z + pad)):
                continue
            return BoundingBox(v, VoxelCoords(v.x + 1, v.y + 1, v.z + pad))

        # TODO: the fallback pad can land inside the rock; pick a reachable cell instead.
        logger.warning(f"No free voxel fits an exit pad of width {pad}, using the fallback box")
        return BoundingBox(VoxelCoords(*FALLBACK_EXIT[0]), VoxelCoords(*FALLBACK_EXIT[1]))

    def building_zone(self, grid: VoxelGrid) -> BoundingBox:
        return empty_region()

    def starting_positions(self, grid: VoxelGrid) -> list[VoxelCoords]:
        positions = self.free_voxels[: self.num_agents]
        if len(positions) < self.num_agents:
            logger.warning(f"Only {len(positions)} standable cells for {self.num_agents} agents")
        return positions

    def object_spawn_positions(self, grid: VoxelGrid) -> list[VoxelCoords]:
        return []
