"""Summary statistics for generated heightfields."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class HeightStats:
    """Value range and spread of a heightfield."""

    minimum: float
    maximum: float
    mean: float
    std: float


def height_stats(height: np.ndarray) -> HeightStats:
    if height.ndim != 2:
        raise ValueError("height must be 2D")

    values = height.astype(np.float64, copy=False)
    return HeightStats(
        minimum=float(values.min()),
        maximum=float(values.max()),
        mean=float(values.mean()),
        std=float(values.std()),
    )


def wrap_seam_ratio(height: np.ndarray) -> float:
    """Compare the step across the wrapped edges with interior steps.

    Returns the mean absolute difference between the last and first
    column/row divided by the mean absolute difference between interior
    neighbours. Tileable output sits close to 1; output generated without
    wrapping usually sits well above it.
    """

    if height.ndim != 2:
        raise ValueError("height must be 2D")
    if min(height.shape) < 2:
        raise ValueError("height must be at least 2x2")

    values = height.astype(np.float64, copy=False)
    seam = np.concatenate(
        (
            np.abs(values[:, -1] - values[:, 0]),
            np.abs(values[-1, :] - values[0, :]),
        )
    )
    interior = np.concatenate(
        (
            np.abs(np.diff(values, axis=1)).ravel(),
            np.abs(np.diff(values, axis=0)).ravel(),
        )
    )
    baseline = float(interior.mean())
    if baseline == 0.0:
        return 1.0 if float(seam.mean()) == 0.0 else float("inf")
    return float(seam.mean()) / baseline
