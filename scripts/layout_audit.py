# ruff: noqa: E402
from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from dataclasses import asdict
from pathlib import Path

import numpy as np

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from voxlayout.config import EnvConfig, LayoutConfig, LayoutType
from voxlayout.env.env import LayoutEnv, Level
from voxlayout.gen.cave import FALLBACK_EXIT


def audit_level(level: Level, num_agents: int) -> dict:
    solid = int(level.meta.get("solid_voxels", 0))
    prims = len(level.primitives)
    entry = {
        "seed": int(level.seed),
        "layout": level.layout_type.value,
        "size": list(level.size),
        "solid_voxels": solid,
        "primitives": prims,
        "compression": float(solid / max(1, prims)),
        "agents_placed": len(level.starting_positions),
        "agents_missing": max(0, num_agents - len(level.starting_positions)),
        "agents_shared": len(level.starting_positions) - len(set(level.starting_positions)),
        "objects": len(level.object_positions),
        "exit_pad": level.exit_pad.to_list(),
        "building_zone": level.building_zone.to_list(),
    }
    entry["exit_fallback"] = level.layout_type is LayoutType.CAVE and entry["exit_pad"] == [
        list(FALLBACK_EXIT[0]),
        list(FALLBACK_EXIT[1]),
    ]
    return entry


def badness_score(entry: dict) -> float:
    # Higher is worse.
    score = 0.0
    score += float(entry.get("agents_missing", 0)) * 100.0
    score += float(entry.get("agents_shared", 0)) * 50.0
    if entry.get("exit_fallback"):
        score += 1_000.0
    # Poorly merged levels cost more to hand to the physics engine.
    score += max(0.0, 4.0 - float(entry.get("compression", 0.0))) * 10.0
    return score


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--layouts", type=str, default=",".join(t.value for t in LayoutType))
    parser.add_argument("--num-agents", type=int, default=2)
    parser.add_argument("--seeds", type=int, default=200)
    parser.add_argument("--seed-start", type=int, default=0)
    parser.add_argument("--out", type=str, default="runs/layout_audit.json")
    parser.add_argument("--topk", type=int, default=20)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        layouts = [LayoutType(s.strip()) for s in args.layouts.split(",") if s.strip()]
    except ValueError as e:
        raise SystemExit(str(e)) from e

    entries: list[dict] = []
    t0 = time.time()
    for layout_type in layouts:
        for i in range(args.seeds):
            seed = args.seed_start + i
            env = LayoutEnv(EnvConfig(num_agents=args.num_agents, layout_type=layout_type, seed=seed))
            entry = audit_level(env.reset(), args.num_agents)
            entry["top_seed"] = int(seed)
            entry["hashes"] = env.recipe()["hashes"]
            entry["badness"] = badness_score(entry)
            entries.append(entry)

    elapsed = time.time() - t0
    entries_sorted = sorted(entries, key=lambda e: float(e.get("badness", 0.0)), reverse=True)
    worst = entries_sorted[: max(1, int(args.topk))]

    per_layout: dict[str, dict] = {}
    for layout_type in layouts:
        rows = [e for e in entries if e["layout"] == layout_type.value]
        if not rows:
            continue
        per_layout[layout_type.value] = {
            "count": len(rows),
            "primitives_mean": float(np.mean([e["primitives"] for e in rows])),
            "compression_mean": float(np.mean([e["compression"] for e in rows])),
            "compression_p05": float(np.percentile([e["compression"] for e in rows], 5)),
            "agents_missing_total": int(sum(e["agents_missing"] for e in rows)),
            "exit_fallbacks": int(sum(1 for e in rows if e["exit_fallback"])),
            "objects_mean": float(np.mean([e["objects"] for e in rows])),
        }

    summary = {
        "layout_config": asdict(LayoutConfig()),
        "num_agents": int(args.num_agents),
        "count": int(len(entries)),
        "elapsed_s": float(elapsed),
        "badness_max": float(worst[0]["badness"]) if worst else 0.0,
        "badness_p95": float(np.percentile([e["badness"] for e in entries], 95)) if entries else 0.0,
        "layouts": per_layout,
    }

    out = {"summary": summary, "worst": worst}
    out_path = Path(args.out)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(json.dumps(out, indent=2), encoding="utf-8")

    print(json.dumps(summary, indent=2))
    print(f"wrote {out_path} (worst={len(worst)})")


if __name__ == "__main__":
    main()
