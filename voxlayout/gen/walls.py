from __future__ import annotations

import logging

from ..config import LayoutConfig
from ..sim.grid import BoundingBox, VoxelCoords, VoxelGrid
from ..sim.rng import Sequencer
from .base import (
    SOLID,
    draw_room_footprint,
    empty_region,
    exit_pad_width,
    fill_room_shell,
    interior_cells,
    require_exit_pad_fits,
)
from .primitives import extract_primitives

logger = logging.getLogger(__name__)


class WallsLayout:
    """
    Room split by up to `max_walls` full-width walls of random height.

    Agents and movable objects start in the strip before the first wall;
    the exit pad sits beyond the last one. Taller walls get more objects so
    there is enough material to climb them.
    """

    def __init__(self, num_agents: int, seq: Sequencer, config: LayoutConfig | None = None) -> None:
        self.num_agents = int(num_agents)
        self.seq = seq
        self.config = config or LayoutConfig()
        self.length = 0
        self.height = 0
        self.width = 0

        self.walls: list[tuple[int, int]] = []  # (x, height)
        self.first_wall_x = self.config.default_first_wall_x
        self.max_wall_x = 0
        self.max_wall_height = 0
        self.requested_walls = 0
        self._agent_spawns: list[VoxelCoords] = []
        self._object_spawns: list[VoxelCoords] = []

    def init(self) -> None:
        cfg = self.config
        seq = self.seq

        # Same draws as the open room, then the length is redrawn to fit the walls.
        self.length, self.width = draw_room_footprint(seq, cfg)
        self.height = seq.rand_range(*cfg.room_height)

        num_walls = seq.rand_range(0, cfg.max_walls + 1)
        self.requested_walls = num_walls
        # At least 2 voxels per wall plus room on either end.
        min_length = num_walls * 2 + cfg.first_wall_offset + 3
        self.length = seq.rand_range(min_length, cfg.walls_max_length)

        self.walls = []
        self.first_wall_x = cfg.default_first_wall_x
        self.max_wall_x = 0
        self.max_wall_height = 0

        if num_walls > 0:
            offset = cfg.first_wall_offset
            self.first_wall_x = seq.rand_range(offset, offset + 1 + self.length - min_length)
            first_height = seq.rand_range(1, cfg.tallest_wall + 1)
            self._add_wall(self.first_wall_x, first_height)

            prev_x = self.first_wall_x
            for i in range(1, num_walls):
                wall_height = seq.rand_range(1, cfg.tallest_wall + 1)
                remaining_space = 3 + (num_walls - i - 1) * 2

                if prev_x + 1 >= self.length - remaining_space:
                    logger.warning(f"Could not generate wall {i}, not enough space ({len(self.walls)}/{num_walls})")
                    break

                wall_x = seq.rand_range(prev_x + 1, self.length - remaining_space)
                prev_x = wall_x
                self._add_wall(wall_x, wall_height)

        self.height = seq.rand_range(*cfg.room_height) + self.max_wall_height

        candidates = interior_cells(self.first_wall_x, self.width, 1)
        seq.shuffle(candidates)

        self._agent_spawns = candidates[: self.num_agents]
        if len(self._agent_spawns) < self.num_agents:
            logger.warning(
                f"Only {len(self._agent_spawns)} spawn cells before the first wall for {self.num_agents} agents"
            )
        spawn_idx = len(self._agent_spawns)

        min_objects = sum((h - 1) * 2 for _, h in self.walls)
        num_objects = seq.rand_range(min_objects, min_objects + cfg.extra_objects)
        num_objects = max(0, min(num_objects, len(candidates) - spawn_idx))
        self._object_spawns = candidates[spawn_idx : spawn_idx + num_objects]

    def _add_wall(self, x: int, height: int) -> None:
        self.walls.append((x, height))
        self.max_wall_x = max(self.max_wall_x, x)
        self.max_wall_height = max(self.max_wall_height, height)

    def generate(self, grid: VoxelGrid) -> None:
        fill_room_shell(grid, self.length, self.height, self.width)

        for wall_x, wall_height in self.walls:
            for y in range(1, 1 + wall_height):
                for z in range(1, self.width - 1):
                    grid.set((wall_x, y, z), SOLID)

    def extract_primitives(self, grid: VoxelGrid) -> list[BoundingBox]:
        return extract_primitives(grid)

    def level_exit(self, grid: VoxelGrid) -> BoundingBox:
        pad = exit_pad_width(self.num_agents, self.config)
        require_exit_pad_fits(self.width, pad)

        x = self.seq.rand_range(self.max_wall_x + 1, self.length - 1)
        z = self.seq.rand_range(1, self.width - 1 - pad)
        return BoundingBox(VoxelCoords(x, 1, z), VoxelCoords(x + 1, 2, z + pad))

    def building_zone(self, grid: VoxelGrid) -> BoundingBox:
        return empty_region()

    def starting_positions(self, grid: VoxelGrid) -> list[VoxelCoords]:
        return list(self._agent_spawns)

    def object_spawn_positions(self, grid: VoxelGrid) -> list[VoxelCoords]:
        return list(self._object_spawns)
