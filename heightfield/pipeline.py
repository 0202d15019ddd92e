"""Seed, generate and summarize one heightfield."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from heightfield.config import GeneratorConfig
from heightfield.diamond_square import diamond_square_no_wrap, diamond_square_wrap, level_count
from heightfield.grid import ArrayAccessor, allocate_grid, seed_corners, seed_origin
from heightfield.metrics import HeightStats, height_stats
from heightfield.rng import CountingSource, RngStream, uniform_source
from heightfield.variance import halving_variance, variance_table


@dataclass(frozen=True)
class HeightfieldResult:
    """Generated grid plus what it took to produce it."""

    height: np.ndarray
    wrap: bool
    levels: int
    variances: tuple[float, ...]
    random_calls: int
    stats: HeightStats


def generate_heightfield(rng: RngStream, *, config: GeneratorConfig | None = None) -> HeightfieldResult:
    """Generate a deterministic heightfield for ``rng`` and ``config``."""

    cfg = config or GeneratorConfig()
    cfg.validate()

    height = allocate_grid(cfg.size, cfg.dtype)
    schedule = halving_variance(cfg.base_variance, cfg.roughness)
    source = CountingSource(uniform_source(rng.fork("displacement").generator()))
    accessor = ArrayAccessor(height)

    if cfg.wrap:
        seed_origin(height, cfg.seed_height)
        diamond_square_wrap(cfg.size, source, schedule, accessor)
    else:
        seed_corners(height, cfg.seed_height)
        diamond_square_no_wrap(cfg.size, source, schedule, accessor)

    levels = level_count(cfg.edge)
    return HeightfieldResult(
        height=height,
        wrap=cfg.wrap,
        levels=levels,
        variances=variance_table(schedule, levels),
        random_calls=source.calls,
        stats=height_stats(height),
    )
