"""Derived rasters for writing heightfields out as images."""

from __future__ import annotations

import numpy as np


def quantize_u8(values: np.ndarray) -> np.ndarray:
    """Truncate heights to integers and saturate them to 8-bit samples."""

    truncated = np.trunc(values.astype(np.float64))
    return np.clip(truncated, 0.0, 255.0).astype(np.uint8)


def float_preview_u8(values: np.ndarray, *, robust_percentiles: tuple[float, float] = (0.5, 99.5)) -> np.ndarray:
    """Stretch heights between two percentiles onto the full 8-bit range.

    A flat grid has no spread to stretch and maps to mid grey.
    """

    heights = values.astype(np.float64, copy=False)
    lo, hi = np.percentile(heights, robust_percentiles)
    if hi <= lo:
        return np.full(heights.shape, 128, dtype=np.uint8)
    norm = np.clip((heights - lo) / (hi - lo), 0.0, 1.0)
    return np.round(norm * 255.0).astype(np.uint8)


def tile(values: np.ndarray, repeats: int = 2) -> np.ndarray:
    """Lay ``repeats`` x ``repeats`` copies of a tileable raster side by side."""

    if repeats < 1:
        raise ValueError("repeats must be >= 1")
    return np.tile(values, (repeats, repeats))
