from __future__ import annotations

import logging
from typing import Callable

from ..config import LayoutConfig, LayoutType
from ..sim.grid import BoundingBox, VoxelCoords, VoxelGrid
from ..sim.rng import Sequencer
from .base import LayoutGenerator
from .basic import BasicLayout
from .cave import CaveLayout
from .tower import TowerLayout
from .walls import WallsLayout

logger = logging.getLogger(__name__)

GeneratorFactory = Callable[[int, Sequencer, LayoutConfig], LayoutGenerator]

CATALOG: dict[LayoutType, GeneratorFactory] = {
    LayoutType.BASIC: BasicLayout,
    LayoutType.WALLS: WallsLayout,
    LayoutType.CAVE: CaveLayout,
    LayoutType.TOWER: TowerLayout,
}


class GridLayout:
    """
    Owns the active layout generator and forwards every query to it.

    `init` swaps in a fresh generator for the requested archetype; nothing
    carries over from the previous level.
    """

    def __init__(self, seq: Sequencer, config: LayoutConfig | None = None) -> None:
        self.seq = seq
        self.config = config or LayoutConfig()
        self.generator: LayoutGenerator | None = None
        self.layout_type: LayoutType | None = None

    def init(self, num_agents: int, layout_type: LayoutType | str) -> None:
        self.generator = None
        self.layout_type = None

        try:
            kind = LayoutType(layout_type)
        except ValueError:
            logger.error(f"Layout type not supported: {layout_type!r}")
            return

        factory = CATALOG.get(kind)
        if factory is None:
            logger.error(f"Layout type not supported: {kind.value!r}")
            return

        self.generator = factory(num_agents, self.seq, self.config)
        self.layout_type = kind
        self.generator.init()

    def _active(self) -> LayoutGenerator:
        if self.generator is None:
            raise RuntimeError("no active layout generator")
        return self.generator

    @property
    def size(self) -> tuple[int, int, int]:
        """(length, height, width) of the current level."""
        gen = self._active()
        return (gen.length, gen.height, gen.width)

    def generate(self, grid: VoxelGrid) -> None:
        self._active().generate(grid)

    def extract_primitives(self, grid: VoxelGrid) -> list[BoundingBox]:
        return self._active().extract_primitives(grid)

    def level_exit(self, grid: VoxelGrid) -> BoundingBox:
        return self._active().level_exit(grid)

    def building_zone(self, grid: VoxelGrid) -> BoundingBox:
        return self._active().building_zone(grid)

    def starting_positions(self, grid: VoxelGrid) -> list[VoxelCoords]:
        return self._active().starting_positions(grid)

    def object_spawn_positions(self, grid: VoxelGrid) -> list[VoxelCoords]:
        return self._active().object_spawn_positions(grid)
