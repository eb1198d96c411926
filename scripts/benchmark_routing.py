#!/usr/bin/env python3
"""
Benchmark orthogonal connector routing on random shape pairs.

Every route has to finish inside a single input-handling frame, so this
reports latency percentiles rather than totals.

Usage:
    python scripts/benchmark_routing.py [--pairs N] [--obstacles K] [--seed S]

Examples:
    python scripts/benchmark_routing.py
    python scripts/benchmark_routing.py --pairs 2000 --obstacles 5
    python scripts/benchmark_routing.py --json results.json
"""

from __future__ import annotations

import argparse
import json
import random
import time
from pathlib import Path
from typing import Any

import numpy as np

from connector_routing import AnchorSide, Rect, compute_ortho_route, route_quality_summary

SIDES = list(AnchorSide)


def random_case(rng: random.Random, n_obstacles: int) -> dict[str, Any]:
    """A start shape at the origin region, an end shape somewhere else, plus obstacles."""
    w1, h1 = rng.choice([60, 90, 120]), rng.choice([60, 90])
    w2, h2 = rng.choice([60, 90, 120]), rng.choice([60, 90])
    x2, y2 = rng.uniform(-600, 600), rng.uniform(-400, 400)
    start_side, end_side = rng.choice(SIDES), rng.choice(SIDES)

    start_body = Rect(0, 0, w1, h1)
    end_body = Rect(x2, y2, w2, h2)
    sx, sy = _side_midpoint(start_body, start_side)
    ex, ey = _side_midpoint(end_body, end_side)

    obstacles = [
        Rect(rng.uniform(-600, 600) - sx, rng.uniform(-400, 400) - sy, 80, 60)
        for _ in range(n_obstacles)
    ]
    return {
        "dx": ex - sx,
        "dy": ey - sy,
        "start_side": start_side,
        "end_side": end_side,
        "start_rect": start_body.translate(-sx, -sy),
        "end_rect": end_body.translate(-sx, -sy),
        "obstacles": obstacles,
    }


def _side_midpoint(rect: Rect, side: AnchorSide) -> tuple[float, float]:
    if side == AnchorSide.TOP:
        return (rect.x + rect.w / 2, rect.top)
    if side == AnchorSide.BOTTOM:
        return (rect.x + rect.w / 2, rect.bottom)
    if side == AnchorSide.LEFT:
        return (rect.left, rect.y + rect.h / 2)
    return (rect.right, rect.y + rect.h / 2)


def benchmark(pairs: int, n_obstacles: int, seed: int) -> dict[str, Any]:
    """
    Route ``pairs`` random cases.

    Returns:
        Dict with latency percentiles (ms) and route quality summary
    """
    rng = random.Random(seed)
    cases = [random_case(rng, n_obstacles) for _ in range(pairs)]

    timings: list[float] = []
    routes = []
    for case in cases:
        start = time.perf_counter()
        route = compute_ortho_route(**case)
        timings.append((time.perf_counter() - start) * 1000.0)
        routes.append(route)

    ms = np.asarray(timings)
    quality = route_quality_summary(
        routes,
        [[c["start_rect"], c["end_rect"], *c["obstacles"]] for c in cases],
    )
    return {
        "pairs": pairs,
        "obstacles": n_obstacles,
        "p50_ms": float(np.percentile(ms, 50)),
        "p95_ms": float(np.percentile(ms, 95)),
        "p99_ms": float(np.percentile(ms, 99)),
        "max_ms": float(ms.max()),
        "quality": quality,
    }


def main() -> None:
    parser = argparse.ArgumentParser(description="Benchmark orthogonal connector routing")
    parser.add_argument("--pairs", type=int, default=500, help="Number of routes")
    parser.add_argument("--obstacles", type=int, default=0, help="Extra obstacles per route")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    parser.add_argument("--json", type=Path, default=None, help="Write results to this file")
    args = parser.parse_args()

    result = benchmark(args.pairs, args.obstacles, args.seed)

    print(f"Routes:      {result['pairs']} ({result['obstacles']} extra obstacles each)")
    print(f"p50 / p95:   {result['p50_ms']:.3f} / {result['p95_ms']:.3f} ms")
    print(f"p99 / max:   {result['p99_ms']:.3f} / {result['max_ms']:.3f} ms")
    q = result["quality"]
    print(f"Mean bends:  {q['mean_bends']:.2f} (max {q['max_bends']})")
    print(f"Orthogonal:  {q['orthogonal_fraction'] * 100:.1f}%")
    print(f"Crossings:   {q['crossings']}")

    if args.json is not None:
        with open(args.json, "w") as f:
            json.dump(result, f, indent=2)
        print(f"Results written to {args.json}")


if __name__ == "__main__":
    main()
