"""CLI entry point for diamond-square heightfield generation."""

from __future__ import annotations

import argparse
from datetime import datetime, timezone
import platform
import sys
import time

import numpy as np

from heightfield.config import (
    DEFAULT_ROUGHNESS,
    DEFAULT_SEED_HEIGHT,
    DEFAULT_SIZE,
    DEFAULT_VARIANCE,
    DEFAULT_WRAP_SIZE,
    STORAGE_DTYPES,
    GeneratorConfig,
)
from heightfield.derive import float_preview_u8, quantize_u8, tile
from heightfield.io import write_height_npy, write_json, write_pgm_plain, write_png_u8
from heightfield.metrics import wrap_seam_ratio
from heightfield.pipeline import generate_heightfield
from heightfield.rng import RngStream, clock_seed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Diamond-square heightfield generator")
    parser.add_argument(
        "--size",
        type=int,
        default=None,
        help=f"Grid edge in cells: 2**n + 1 (default {DEFAULT_SIZE}), or 2**n with --wrap (default {DEFAULT_WRAP_SIZE})",
    )
    parser.add_argument("--seed", type=int, default=None, help="Integer seed (default: taken from the clock)")
    parser.add_argument("--wrap", action="store_true", help="Generate a tileable heightfield")
    parser.add_argument("--variance", type=float, default=DEFAULT_VARIANCE, help="Displacement bound at level 0")
    parser.add_argument(
        "--roughness",
        type=float,
        default=DEFAULT_ROUGHNESS,
        help="Per-level variance multiplier in (0, 1]",
    )
    parser.add_argument("--seed-height", type=float, default=DEFAULT_SEED_HEIGHT, help="Initial corner height")
    parser.add_argument("--out", default="-", help="Plain PGM output path ('-' for stdout)")
    parser.add_argument("--png", default=None, help="Optional 8-bit PNG output path")
    parser.add_argument(
        "--dtype",
        choices=STORAGE_DTYPES,
        default="float32",
        help="Grid storage type; uint8 truncates every write to 8 bits",
    )
    parser.add_argument("--preview", default=None, help="Optional contrast-stretched 8-bit PNG output path")
    parser.add_argument("--tile", default=None, help="Optional 2x2 tiled 8-bit PNG output path (requires --wrap)")
    parser.add_argument("--npy", default=None, help="Optional float32 .npy output path")
    parser.add_argument("--meta", default=None, help="Optional metadata JSON output path")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    config = GeneratorConfig(
        size=_resolve_size(args.size, wrap=args.wrap),
        wrap=args.wrap,
        seed_height=args.seed_height,
        base_variance=args.variance,
        roughness=args.roughness,
        dtype=args.dtype,
    )
    try:
        config.validate()
    except ValueError as exc:
        parser.error(str(exc))
    if args.tile and not config.wrap:
        parser.error("--tile requires --wrap")

    seed = clock_seed() if args.seed is None else args.seed
    rng = RngStream(seed)

    generation_start = time.perf_counter()
    result = generate_heightfield(rng, config=config)
    generation_seconds = time.perf_counter() - generation_start

    raster = quantize_u8(result.height)
    if args.out == "-":
        write_pgm_plain(sys.stdout, raster)
    else:
        write_pgm_plain(args.out, raster)
    if args.png:
        write_png_u8(args.png, raster)
    if args.preview:
        write_png_u8(args.preview, float_preview_u8(result.height))
    if args.tile:
        write_png_u8(args.tile, tile(raster))
    if args.npy:
        write_height_npy(args.npy, result.height)

    seam_ratio = wrap_seam_ratio(result.height)
    if args.meta:
        write_json(
            args.meta,
            {
                "seed": rng.seed,
                "config": config.to_dict(),
                "levels": result.levels,
                "variances": list(result.variances),
                "random_calls": result.random_calls,
                "stats": {
                    "min": result.stats.minimum,
                    "max": result.stats.maximum,
                    "mean": result.stats.mean,
                    "std": result.stats.std,
                    "wrap_seam_ratio": seam_ratio,
                },
                "generated_at_utc": datetime.now(timezone.utc).isoformat(),
                "generation_seconds": generation_seconds,
                "python_version": platform.python_version(),
                "numpy_version": np.__version__,
            },
        )

    mode = "wrapping" if config.wrap else "non-wrapping"
    print(f"Generated {mode} heightfield: {config.size}x{config.size}, seed {rng.seed}", file=sys.stderr)
    print(
        "Heights: "
        f"min={result.stats.minimum:.2f}, "
        f"max={result.stats.maximum:.2f}, "
        f"mean={result.stats.mean:.2f}, "
        f"std={result.stats.std:.2f}, "
        f"seam ratio={seam_ratio:.3f}",
        file=sys.stderr,
    )
    print(
        f"Generation time: {generation_seconds:.3f} s ({result.levels} levels, {result.random_calls} draws)",
        file=sys.stderr,
    )
    return 0


def _resolve_size(size: int | None, *, wrap: bool) -> int:
    if size is not None:
        return size
    return DEFAULT_WRAP_SIZE if wrap else DEFAULT_SIZE


if __name__ == "__main__":
    raise SystemExit(main())
