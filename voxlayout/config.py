from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class LayoutType(str, Enum):
    BASIC = "basic"
    WALLS = "walls"
    CAVE = "cave"
    TOWER = "tower"


@dataclass(frozen=True)
class LayoutConfig:
    # Room footprint/height draws are half-open: [lo, hi).
    room_length: tuple[int, int] = (8, 30)
    room_width: tuple[int, int] = (7, 25)
    room_height: tuple[int, int] = (3, 5)
    max_exit_pad_width: int = 3
    start_attempts: int = 10

    # Walls archetype
    max_walls: int = 4
    tallest_wall: int = 4
    first_wall_offset: int = 4
    walls_max_length: int = 35
    default_first_wall_x: int = 3
    extra_objects: int = 4

    # Cave archetype
    cave_height: tuple[int, int] = (2, 5)
    cave_growth_prob: float = 0.8
    cave_growth_decay: float = 0.995  # applied on every accepted cell
    cave_seed_spacing: int = 7

    # Tower archetype
    tower_height: tuple[int, int] = (5, 7)
    tower_length: tuple[int, int] = (12, 30)
    tower_width: tuple[int, int] = (12, 25)
    build_zone_size: tuple[int, int] = (3, 9)
    materials_size: tuple[int, int] = (2, 8)
    max_random_objects: int = 25


@dataclass(frozen=True)
class EnvConfig:
    num_agents: int = 2
    layout_type: LayoutType = LayoutType.BASIC
    seed: int | None = None
    # Each reset draws its working seed from [0, episode_seed_range) of the current stream.
    episode_seed_range: int = 10000
    layout: LayoutConfig = field(default_factory=LayoutConfig)
