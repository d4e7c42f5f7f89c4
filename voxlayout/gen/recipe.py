from __future__ import annotations

import copy
import dataclasses
import hashlib
import json
from typing import Any

import numpy as np

from ..config import LayoutConfig, LayoutType
from ..sim.grid import BoundingBox, VoxelCoords, VoxelGrid

GENERATOR_ID = "voxel_grid_layout"
GENERATOR_VERSION = "1"


def canonical_json_bytes(obj: Any) -> bytes:
    return json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def hash_solids(solids_xyz: np.ndarray) -> str:
    arr = np.asarray(solids_xyz, dtype=np.uint8)
    # Shape goes into the hash so differently sized empty regions do not collide.
    header = np.asarray(arr.shape, dtype=np.int64).tobytes()
    packed = np.packbits(arr.ravel(order="C"))
    return sha256_hex(header + packed.tobytes())


def build_recipe(
    *,
    layout_type: LayoutType,
    seed: int | None,
    layout_config: LayoutConfig,
    size: tuple[int, int, int],
    exit_pad: BoundingBox,
    building_zone: BoundingBox,
    starting_positions: list[VoxelCoords],
    object_positions: list[VoxelCoords],
    primitives: list[BoundingBox],
    grid: VoxelGrid,
) -> dict[str, Any]:
    solids = grid.solid_mask()
    length, height, width = size

    recipe: dict[str, Any] = {
        "schema_version": 1,
        "generator": {
            "id": GENERATOR_ID,
            "version": GENERATOR_VERSION,
            "layout": LayoutType(layout_type).value,
            "config": dataclasses.asdict(layout_config),
        },
        "seed": int(seed) if seed is not None else None,
        "size": {"length": int(length), "height": int(height), "width": int(width)},
        "regions": {
            "exit_pad": exit_pad.to_list(),
            "building_zone": building_zone.to_list(),
            "starting_positions": [list(p) for p in starting_positions],
            "objects": [list(p) for p in object_positions],
        },
        "stats": {
            "solid_voxels": int(np.count_nonzero(solids)),
            "primitives": len(primitives),
            "starting_positions": len(starting_positions),
            "objects": len(object_positions),
        },
        "hashes": {},
    }

    # Avoid hashing the hash fields themselves.
    recipe_for_hash = copy.deepcopy(recipe)
    recipe_for_hash.pop("hashes", None)
    recipe["hashes"] = {
        "recipe": sha256_hex(canonical_json_bytes(recipe_for_hash)),
        "solid": hash_solids(solids),
    }
    return recipe
