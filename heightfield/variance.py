"""Per-level displacement schedules."""

from __future__ import annotations

from heightfield.diamond_square import VarianceSchedule


def halving_variance(base: float, roughness: float = 0.5) -> VarianceSchedule:
    """Return ``variance(level) = base * roughness**level``.

    A roughness of 0.5 halves the displacement each level, which is the
    classical fractal setting; larger values give rougher terrain.
    """

    if base < 0:
        raise ValueError("base variance must be non-negative")
    if not 0.0 < roughness <= 1.0:
        raise ValueError("roughness must be in (0, 1]")

    def variance(level: int) -> float:
        return base * roughness**level

    return variance


def variance_table(schedule: VarianceSchedule, levels: int) -> tuple[float, ...]:
    """Evaluate ``schedule`` for levels ``0 .. levels - 1``."""

    return tuple(float(schedule(level)) for level in range(levels))
