# ruff: noqa: E402
from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from voxlayout.config import EnvConfig, LayoutConfig, LayoutType
from voxlayout.env.env import LayoutEnv
from voxlayout.gen.recipe import GENERATOR_ID, GENERATOR_VERSION


def generate_hashes(seed: int, layout_type: LayoutType, *, num_agents: int, resets: int) -> dict:
    env = LayoutEnv(EnvConfig(num_agents=num_agents, layout_type=layout_type, seed=seed))
    episodes = []
    for _ in range(max(1, resets)):
        level = env.reset()
        recipe = env.recipe()
        episodes.append({"episode_seed": int(level.seed), "hashes": dict(recipe["hashes"])})
    return {"seed": int(seed), "layout": layout_type.value, "episodes": episodes}


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--golden", type=str, default="runs/layout_golden.json")
    parser.add_argument(
        "--write", action="store_true", help="Write/update the golden file instead of checking it"
    )
    parser.add_argument("--seeds", type=str, default="1,2,3,12345,99991")
    parser.add_argument("--layouts", type=str, default=",".join(t.value for t in LayoutType))
    parser.add_argument("--num-agents", type=int, default=2)
    parser.add_argument("--resets", type=int, default=3, help="Consecutive resets hashed per seed")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )

    seeds = [int(s.strip()) for s in args.seeds.split(",") if s.strip()]
    if not seeds:
        raise SystemExit("No seeds provided")
    try:
        layouts = [LayoutType(s.strip()) for s in args.layouts.split(",") if s.strip()]
    except ValueError as e:
        raise SystemExit(str(e)) from e

    out_path = Path(args.golden)
    if not args.write and not out_path.exists():
        raise SystemExit(f"Golden file not found: {out_path} (run with --write to create)")

    generated = [
        generate_hashes(s, t, num_agents=args.num_agents, resets=args.resets) for t in layouts for s in seeds
    ]

    payload = {
        "generator": {"id": GENERATOR_ID, "version": GENERATOR_VERSION},
        "layout_config": asdict(LayoutConfig()),
        "num_agents": int(args.num_agents),
        "entries": generated,
    }

    if args.write:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        print(f"wrote {out_path}")
        return

    golden = json.loads(out_path.read_text(encoding="utf-8"))
    golden_entries = {(e["layout"], int(e["seed"])): e for e in golden.get("entries", [])}

    ok = True
    for e in generated:
        key = (e["layout"], int(e["seed"]))
        g = golden_entries.get(key)
        if g is None:
            ok = False
            print(f"missing entry in golden: layout={key[0]} seed={key[1]}")
            continue

        for i, (exp_ep, got_ep) in enumerate(zip(g.get("episodes", []), e["episodes"])):
            exp = exp_ep.get("hashes") or {}
            got = got_ep.get("hashes") or {}
            for name in ("solid", "recipe"):
                if exp.get(name) != got.get(name):
                    ok = False
                    print(
                        f"{key[0]} seed {key[1]} reset {i}: {name} hash mismatch "
                        f"expected={exp.get(name)} got={got.get(name)}"
                    )
        if len(g.get("episodes", [])) != len(e["episodes"]):
            ok = False
            print(f"{key[0]} seed {key[1]}: golden has {len(g.get('episodes', []))} resets, got {len(e['episodes'])}")

    if ok:
        print("ok: all golden hashes match")
        return
    raise SystemExit(1)


if __name__ == "__main__":
    main()
