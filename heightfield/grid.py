"""numpy-backed storage for the generators."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class ArrayAccessor:
    """Accessor over a 2-D array addressed as ``array[y, x]``."""

    array: np.ndarray

    def __post_init__(self) -> None:
        if self.array.ndim != 2 or self.array.shape[0] != self.array.shape[1]:
            raise ValueError("array must be a square 2D array")

    def get(self, x: int, y: int) -> float:
        # Python floats keep integer storage from overflowing while averaging.
        return float(self.array[y, x])

    def set(self, x: int, y: int, value: float) -> None:
        self.array[y, x] = value


def allocate_grid(size: int, dtype: np.dtype | str = np.float32) -> np.ndarray:
    if size <= 0:
        raise ValueError("size must be positive")
    return np.zeros((size, size), dtype=dtype)


def seed_corners(array: np.ndarray, value: float) -> None:
    """Seed the four corners read by the non-wrapping generator."""

    edge = array.shape[0] - 1
    array[0, 0] = array[0, edge] = array[edge, 0] = array[edge, edge] = value


def seed_origin(array: np.ndarray, value: float) -> None:
    """Seed the single point read by the wrapping generator."""

    array[0, 0] = value
