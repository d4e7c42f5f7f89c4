from __future__ import annotations

from typing import Protocol

from ..config import LayoutConfig
from ..sim.grid import BoundingBox, VoxelCoords, VoxelGrid, VoxelState
from ..sim.rng import Sequencer

SOLID = VoxelState(solid=True)


class LayoutGenerator(Protocol):
    num_agents: int
    # length = x, height = y, width = z
    length: int
    height: int
    width: int

    def init(self) -> None: ...

    def generate(self, grid: VoxelGrid) -> None: ...

    def extract_primitives(self, grid: VoxelGrid) -> list[BoundingBox]: ...

    def level_exit(self, grid: VoxelGrid) -> BoundingBox: ...

    def building_zone(self, grid: VoxelGrid) -> BoundingBox: ...

    def starting_positions(self, grid: VoxelGrid) -> list[VoxelCoords]: ...

    def object_spawn_positions(self, grid: VoxelGrid) -> list[VoxelCoords]: ...


def draw_room_footprint(seq: Sequencer, config: LayoutConfig) -> tuple[int, int]:
    length = seq.rand_range(*config.room_length)
    width = seq.rand_range(*config.room_width)
    return length, width


def fill_room_shell(grid: VoxelGrid, length: int, height: int, width: int) -> None:
    """Solid floor at y=0 plus the four full-height perimeter walls."""
    for x in range(length):
        for z in range(width):
            grid.set((x, 0, z), SOLID)

    for x in (0, length - 1):
        for y in range(height):
            for z in range(width):
                grid.set((x, y, z), SOLID)

    for x in range(length):
        for y in range(height):
            for z in (0, width - 1):
                grid.set((x, y, z), SOLID)


def empty_region() -> BoundingBox:
    return BoundingBox(VoxelCoords(0, 0, 0), VoxelCoords(0, 0, 0))


def exit_pad_width(num_agents: int, config: LayoutConfig) -> int:
    return min(config.max_exit_pad_width, num_agents)


def require_exit_pad_fits(width: int, pad_width: int) -> None:
    if width - 2 < pad_width:
        raise ValueError(f"exit pad of width {pad_width} does not fit a level of width {width}")


def sample_starting_positions(
    seq: Sequencer, num_agents: int, length: int, width: int, attempts: int
) -> list[VoxelCoords]:
    # Rejection sampling; an agent whose attempts all collide gets no slot.
    positions: list[VoxelCoords] = []
    for _ in range(num_agents):
        for _attempt in range(attempts):
            pos = VoxelCoords(seq.rand_range(1, length - 1), 1, seq.rand_range(1, width - 1))
            if pos not in positions:
                positions.append(pos)
                break
    return positions


def interior_cells(x_end: int, width: int, y: int) -> list[VoxelCoords]:
    return [VoxelCoords(x, y, z) for x in range(1, x_end) for z in range(1, width - 1)]
