#!/usr/bin/env python3
"""
Compositing and persistence benchmark for Planet Builder.

Times layer derivation, corner classification for every tile, and a
save/load round trip on random biome maps of increasing size.

Run from the repository root:
    python -m performance.benchmarks.compositing --sizes 30,60,100
"""
from __future__ import annotations

import argparse
import tempfile
from pathlib import Path
from typing import Dict

import numpy as np

from game_state.persistence import load_planet, save_planet
from game_state.planet import Planet
from performance.benchmarks.utils import Samples, print_report, timed
from render.compositing import biome_pieces, build_layered_tex_map
from utils import rect_iter
from world.assets import default_asset_attributes
from world.terrain import Biome


def random_planet(size: int, rng: np.random.Generator) -> Planet:
    """A ``size`` x ``size`` planet with uniformly random biomes."""
    planet = Planet.new(size, size)
    planet.biome_grid[:] = rng.integers(0, len(Biome), size=(size, size), dtype=np.uint8)
    return planet


def bench_size(size: int, iterations: int, rng: np.random.Generator, workdir: Path) -> Samples:
    biome_attrs = default_asset_attributes().biomes
    samples: Samples = {}
    path = workdir / f"bench_{size}.npz"

    for _ in range(iterations):
        planet = random_planet(size, rng)

        with timed(samples, "layers"):
            ltm = build_layered_tex_map(planet, biome_attrs)

        with timed(samples, "corners"):
            for pos in rect_iter((0, 0), (size - 1, size - 1)):
                biome_pieces(ltm, pos, biome_attrs)

        with timed(samples, "save"):
            save_planet(planet, path)

        with timed(samples, "load"):
            load_planet(path)

    return samples


def main():
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Benchmark compositing and persistence for Planet Builder")
    parser.add_argument("--sizes", type=str, default="30,60,100",
                        help="Comma-separated square map sizes (default: 30,60,100)")
    parser.add_argument("--iterations", type=int, default=5,
                        help="Runs per size (default: 5)")
    parser.add_argument("--seed", type=int, default=0, help="Random seed (default: 0)")
    args = parser.parse_args()

    sizes = [int(s) for s in args.sizes.split(",") if s.strip()]
    rng = np.random.default_rng(args.seed)

    rows: Dict[str, Samples] = {}
    with tempfile.TemporaryDirectory() as tmp:
        for size in sizes:
            rows[f"{size}x{size}"] = bench_size(size, args.iterations, rng, Path(tmp))

    print_report("COMPOSITING BENCHMARK (median of %d runs)" % args.iterations,
                 ("layers", "corners", "save", "load"), rows)


if __name__ == "__main__":
    main()
