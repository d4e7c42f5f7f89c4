from __future__ import annotations

import logging

from ..config import LayoutConfig
from ..sim.grid import BoundingBox, VoxelCoords, VoxelGrid
from ..sim.rng import Sequencer
from .base import empty_region, fill_room_shell, interior_cells
from .primitives import extract_primitives

logger = logging.getLogger(__name__)


class TowerLayout:
    """
    Building arena: an open room with a building zone and a pile of movable blocks.

    The two footprints are placed independently and may overlap.
    """

    def __init__(self, num_agents: int, seq: Sequencer, config: LayoutConfig | None = None) -> None:
        self.num_agents = int(num_agents)
        self.seq = seq
        self.config = config or LayoutConfig()
        self.length = 0
        self.height = 0
        self.width = 0

        self.build_zone_length = 0
        self.build_zone_width = 0
        self.build_zone_x = 0
        self.build_zone_z = 0
        self.materials_length = 0
        self.materials_width = 0
        self.materials_x = 0
        self.materials_z = 0

        self._agent_spawns: list[VoxelCoords] = []
        self._object_spawns: list[VoxelCoords] = []

    def init(self) -> None:
        cfg = self.config
        seq = self.seq

        self.height = seq.rand_range(*cfg.tower_height)
        self.length = seq.rand_range(*cfg.tower_length)
        self.width = seq.rand_range(*cfg.tower_width)

        self.build_zone_length = seq.rand_range(*cfg.build_zone_size)
        self.build_zone_width = seq.rand_range(*cfg.build_zone_size)
        self.materials_length = seq.rand_range(*cfg.materials_size)
        self.materials_width = seq.rand_range(*cfg.materials_size)

        self.length = max(self.build_zone_length + self.materials_length + 3, self.length)
        self.width = max(self.build_zone_width + self.materials_width + 3, self.width)

        self.build_zone_x = seq.rand_range(1, self.length - self.build_zone_length - 1)
        self.build_zone_z = seq.rand_range(1, self.width - self.build_zone_width - 1)
        self.materials_x = seq.rand_range(1, self.length - self.materials_length - 1)
        self.materials_z = seq.rand_range(1, self.width - self.materials_width - 1)

        candidates = interior_cells(self.length - 1, self.width, 2)
        seq.shuffle(candidates)

        self._agent_spawns = candidates[: min(self.num_agents, len(candidates))]
        spawn_idx = len(self._agent_spawns)

        max_random_objects = min(len(candidates) - self.num_agents, cfg.max_random_objects)
        num_objects = seq.rand_range(0, max(1, max_random_objects))

        objects: list[VoxelCoords] = []
        for c in candidates[spawn_idx : spawn_idx + num_objects]:
            if self._in_materials(c):
                objects.append(c)
            else:
                # Scattered blocks rest on the floor, the ones over the pile stay on top of it.
                objects.append(VoxelCoords(c.x, c.y - 1, c.z))

        for x in range(self.materials_x, self.materials_x + self.materials_length):
            for z in range(self.materials_z, self.materials_z + self.materials_width):
                objects.append(VoxelCoords(x, 1, z))
        self._object_spawns = objects

        if self._agent_spawns and len(self._agent_spawns) < self.num_agents:
            logger.warning(f"{len(candidates)} spawn cells for {self.num_agents} agents, repeating the first one")
        while self._agent_spawns and len(self._agent_spawns) < self.num_agents:
            self._agent_spawns.append(self._agent_spawns[0])

    def _in_materials(self, c: VoxelCoords) -> bool:
        return (
            self.materials_x <= c.x < self.materials_x + self.materials_length
            and self.materials_z <= c.z < self.materials_z + self.materials_width
        )

    def materials_zone(self) -> BoundingBox:
        return BoundingBox(
            VoxelCoords(self.materials_x, 1, self.materials_z),
            VoxelCoords(self.materials_x + self.materials_length, 1, self.materials_z + self.materials_width),
        )

    def generate(self, grid: VoxelGrid) -> None:
        fill_room_shell(grid, self.length, self.height, self.width)

    def extract_primitives(self, grid: VoxelGrid) -> list[BoundingBox]:
        return extract_primitives(grid)

    def level_exit(self, grid: VoxelGrid) -> BoundingBox:
        return empty_region()

    def building_zone(self, grid: VoxelGrid) -> BoundingBox:
        return BoundingBox(
            VoxelCoords(self.build_zone_x, 1, self.build_zone_z),
            VoxelCoords(self.build_zone_x + self.build_zone_length, 1, self.build_zone_z + self.build_zone_width),
        )

    def starting_positions(self, grid: VoxelGrid) -> list[VoxelCoords]:
        return list(self._agent_spawns)

    def object_spawn_positions(self, grid: VoxelGrid) -> list[VoxelCoords]:
        return list(self._object_spawns)
