from __future__ import annotations

import numpy as np
import pytest

from heightfield.diamond_square import InvalidSizeError, diamond_square_wrap, is_wrap_size
from heightfield.grid import ArrayAccessor, seed_origin


class TorusGrid:
    """Accessor that records which cells each write was computed from."""

    def __init__(self, size: int, origin: float = 50.0) -> None:
        self.size = size
        self.values = {(0, 0): origin}
        self.reads: list[tuple[int, int]] = []
        self.sources: dict[tuple[int, int], list[tuple[int, int]]] = {}

    def get(self, x: int, y: int) -> float:
        assert 0 <= x < self.size and 0 <= y < self.size
        assert (x, y) in self.values, f"read of unfinalized cell {(x, y)}"
        self.reads.append((x, y))
        return self.values[(x, y)]

    def set(self, x: int, y: int, value: float) -> None:
        assert 0 <= x < self.size and 0 <= y < self.size
        assert (x, y) not in self.values, f"cell {(x, y)} written twice"
        self.values[(x, y)] = value
        self.sources[(x, y)] = self.reads
        self.reads = []


def test_size_four_is_valid_for_wrap_only() -> None:
    grid = np.zeros((4, 4), dtype=np.float64)
    seed_origin(grid, 7.0)

    diamond_square_wrap(4, lambda limit: 0.0, lambda level: 0.0, ArrayAccessor(grid))

    assert np.all(grid == 7.0)


@pytest.mark.parametrize("size", [4, 8, 16, 64])
def test_every_cell_but_origin_written_once_in_bounds(size: int) -> None:
    grid = TorusGrid(size)

    diamond_square_wrap(size, lambda limit: limit / 4.0, lambda level: 2.0, grid)

    assert len(grid.sources) == size * size - 1
    assert (0, 0) not in grid.sources
    assert grid.values[(0, 0)] == 50.0
    assert all(len(reads) == 4 for reads in grid.sources.values())


@pytest.mark.parametrize("size", [4, 8, 32, 256])
def test_random_called_once_per_unseeded_cell(size: int) -> None:
    calls = 0

    def random(limit: float) -> float:
        nonlocal calls
        calls += 1
        return 0.0

    grid = np.zeros((size, size), dtype=np.float32)
    diamond_square_wrap(size, random, lambda level: 1.0, ArrayAccessor(grid))

    assert calls == size * size - 1


@pytest.mark.parametrize("size,levels", [(4, 2), (8, 3), (64, 6)])
def test_variance_called_once_per_level(size: int, levels: int) -> None:
    seen: list[int] = []

    def variance(level: int) -> float:
        seen.append(level)
        return 1.0

    diamond_square_wrap(size, lambda limit: 0.0, variance, TorusGrid(size))

    assert seen == list(range(levels))


def test_edge_diamonds_use_wrapped_neighbours() -> None:
    grid = TorusGrid(4)

    diamond_square_wrap(4, lambda limit: 0.0, lambda level: 1.0, grid)

    assert sorted(grid.sources[(0, 1)]) == sorted([(3, 1), (1, 1), (0, 0), (0, 2)])
    assert sorted(grid.sources[(1, 0)]) == sorted([(0, 0), (2, 0), (1, 3), (1, 1)])
    # The first center sees the seed through all four wrapped corners.
    assert grid.sources[(2, 2)] == [(0, 0)] * 4


def test_level_zero_values_follow_from_origin() -> None:
    grid = np.zeros((8, 8), dtype=np.float64)
    seed_origin(grid, 40.0)

    diamond_square_wrap(8, lambda limit: limit, lambda level: 2.0 if level == 0 else 0.0, ArrayAccessor(grid))

    assert grid[4, 4] == pytest.approx(42.0)
    # (4, 0) averages the origin twice and the center twice.
    assert grid[0, 4] == pytest.approx(43.0)
    assert grid[4, 0] == pytest.approx(43.0)


@pytest.mark.parametrize("size", [2, 1, 0, 3, 5, 6, 9, 513, 8.0, False])
def test_invalid_size_fails_before_any_callback(size: object) -> None:
    def fail(*args: object) -> float:
        pytest.fail("callback invoked for an invalid size")

    with pytest.raises(InvalidSizeError):
        diamond_square_wrap(size, fail, fail, TorusGrid(4))


def test_size_validation() -> None:
    assert is_wrap_size(4)
    assert is_wrap_size(512)
    assert not is_wrap_size(2)
    assert not is_wrap_size(5)
    assert not is_wrap_size(513)
