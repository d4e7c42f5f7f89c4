from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from ..config import EnvConfig, LayoutType
from ..gen.layout import GridLayout
from ..gen.primitives import box_shape
from ..gen.recipe import build_recipe
from ..sim.grid import BoundingBox, VoxelCoords, VoxelGrid, VoxelState
from ..sim.rng import Sequencer

logger = logging.getLogger(__name__)


@dataclass
class Level:
    seed: int
    layout_type: LayoutType
    size: tuple[int, int, int]  # (length, height, width)
    primitives: list[BoundingBox]
    exit_pad: BoundingBox
    building_zone: BoundingBox
    starting_positions: list[VoxelCoords]
    object_positions: list[VoxelCoords]
    meta: dict[str, Any] = field(default_factory=dict)

    def primitive_shapes(self) -> list[tuple[np.ndarray, np.ndarray]]:
        return [box_shape(b) for b in self.primitives]


class LayoutEnv:
    """
    Level reset driver.

    Holds the grid, the random stream and the layout component for one
    simulation instance. Each `reset` draws a working seed from the current
    stream, reseeds with it, and rebuilds the level from scratch, so a fixed
    top-level seed reproduces every episode of a run.
    """

    def __init__(self, config: EnvConfig | None = None) -> None:
        self.config = config or EnvConfig()
        self.num_agents = int(self.config.num_agents)
        self.seq = Sequencer(self.config.seed)
        self.grid = VoxelGrid()
        self.layout = GridLayout(self.seq, self.config.layout)
        self.level: Level | None = None
        self._last_reset_seed: int | None = None

    def seed(self, value: int) -> None:
        self.seq.seed(value)

    def reset(self, layout_type: LayoutType | str | None = None) -> Level:
        episode_seed = self.seq.next_seed(self.config.episode_seed_range)
        self.seq.seed(episode_seed)
        logger.info(f"Using seed {episode_seed}")
        self._last_reset_seed = episode_seed

        # Delete the previous layout.
        self.grid.clear()
        self.level = None

        kind = layout_type if layout_type is not None else self.config.layout_type
        self.layout.init(self.num_agents, kind)
        self.layout.generate(self.grid)

        primitives = self.layout.extract_primitives(self.grid)
        logger.info(f"Env has {len(primitives)} layout primitives")

        objects = self.layout.object_spawn_positions(self.grid)
        for i, pos in enumerate(objects):
            self.grid.set(pos, VoxelState(solid=False, object_id=i))

        exit_pad = self.layout.level_exit(self.grid)
        building_zone = self.layout.building_zone(self.grid)
        starting_positions = self.layout.starting_positions(self.grid)

        if len(starting_positions) < self.num_agents:
            logger.warning(f"Placed {len(starting_positions)} of {self.num_agents} agents")

        assert self.layout.layout_type is not None
        self.level = Level(
            seed=episode_seed,
            layout_type=self.layout.layout_type,
            size=self.layout.size,
            primitives=primitives,
            exit_pad=exit_pad,
            building_zone=building_zone,
            starting_positions=starting_positions,
            object_positions=objects,
            meta={"solid_voxels": len(self.grid.solid_coords())},
        )
        return self.level

    def recipe(self) -> dict[str, Any]:
        if self.level is None:
            raise RuntimeError("reset() must be called before recipe()")
        level = self.level
        return build_recipe(
            layout_type=level.layout_type,
            seed=level.seed,
            layout_config=self.config.layout,
            size=level.size,
            exit_pad=level.exit_pad,
            building_zone=level.building_zone,
            starting_positions=level.starting_positions,
            object_positions=level.object_positions,
            primitives=level.primitives,
            grid=self.grid,
        )
