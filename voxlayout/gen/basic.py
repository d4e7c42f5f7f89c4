from __future__ import annotations

from ..config import LayoutConfig
from ..sim.grid import BoundingBox, VoxelCoords, VoxelGrid
from ..sim.rng import Sequencer
from .base import (
    draw_room_footprint,
    empty_region,
    exit_pad_width,
    fill_room_shell,
    require_exit_pad_fits,
    sample_starting_positions,
)
from .primitives import extract_primitives


class BasicLayout:
    """Open room: floor plus perimeter walls, nothing inside."""

    def __init__(self, num_agents: int, seq: Sequencer, config: LayoutConfig | None = None) -> None:
        self.num_agents = int(num_agents)
        self.seq = seq
        self.config = config or LayoutConfig()
        self.length = 0
        self.height = 0
        self.width = 0

    def init(self) -> None:
        self.length, self.width = draw_room_footprint(self.seq, self.config)
        self.height = self.seq.rand_range(*self.config.room_height)

    def generate(self, grid: VoxelGrid) -> None:
        fill_room_shell(grid, self.length, self.height, self.width)

    def extract_primitives(self, grid: VoxelGrid) -> list[BoundingBox]:
        return extract_primitives(grid)

    def level_exit(self, grid: VoxelGrid) -> BoundingBox:
        pad = exit_pad_width(self.num_agents, self.config)
        require_exit_pad_fits(self.width, pad)

        # Against the far x wall; z keeps the whole pad inside [1, width - 1).
        x = self.seq.rand_range(self.length - 2, self.length - 1)
        z = self.seq.rand_range(1, self.width - pad)
        return BoundingBox(VoxelCoords(x, 1, z), VoxelCoords(x + 1, 2, z + pad))

    def building_zone(self, grid: VoxelGrid) -> BoundingBox:
        return empty_region()

    def starting_positions(self, grid: VoxelGrid) -> list[VoxelCoords]:
        return sample_starting_positions(
            self.seq, self.num_agents, self.length, self.width, self.config.start_attempts
        )

    def object_spawn_positions(self, grid: VoxelGrid) -> list[VoxelCoords]:
        return []
