"""Diamond-square midpoint displacement over caller-owned storage.

Two variants are provided. ``diamond_square_no_wrap`` fills a
``(2**n + 1)``-square grid whose edges are independent, so diamond points on
the border are averaged over the three neighbours that exist.
``diamond_square_wrap`` fills a ``2**n``-square grid as a torus, so the
result tiles seamlessly and every diamond point has four neighbours.

Neither function allocates or clamps. Randomness, the per-level variance and
the storage are all supplied by the caller:

``random(limit)``
    Returns a value uniformly distributed in ``[0, limit)``.
``variance(level)``
    Returns the displacement bound for ``level``; called once per level.
``at``
    An accessor with ``get(x, y)`` and ``set(x, y, value)``.

Traversal order is fixed so that a seeded ``random`` reproduces a grid
exactly: square passes visit sub-squares row by row, diamond passes visit the
rows ``0, half, 2 * half, ...`` with ``x`` ascending inside each row.
"""

from __future__ import annotations

import operator
from typing import Callable, Iterator, Protocol

RandomSource = Callable[[float], float]
VarianceSchedule = Callable[[int], float]

NO_WRAP_MIN_SIZE = 5
WRAP_MIN_SIZE = 4


class InvalidSizeError(ValueError):
    """Raised when a grid size does not have the form a variant requires."""


class HeightAccessor(Protocol):
    """Read/write capability over one square heightfield."""

    def get(self, x: int, y: int) -> float:
        ...

    def set(self, x: int, y: int, value: float) -> None:
        ...


def _is_power_of_two(value: int) -> bool:
    return value > 0 and value & (value - 1) == 0


def _as_size(size: object) -> int:
    if isinstance(size, bool):
        raise InvalidSizeError(f"size must be an integer, got {size!r}")
    try:
        return operator.index(size)
    except TypeError:
        raise InvalidSizeError(f"size must be an integer, got {size!r}") from None


def is_no_wrap_size(size: int) -> bool:
    """Return True if ``size`` is ``2**n + 1`` with ``n >= 2``."""

    return size >= NO_WRAP_MIN_SIZE and _is_power_of_two(size - 1)


def is_wrap_size(size: int) -> bool:
    """Return True if ``size`` is ``2**n`` with ``n >= 2``."""

    return size >= WRAP_MIN_SIZE and _is_power_of_two(size)


def validate_no_wrap_size(size: object) -> int:
    value = _as_size(size)
    if not is_no_wrap_size(value):
        raise InvalidSizeError(
            f"non-wrapping size must be 2**n + 1 and at least {NO_WRAP_MIN_SIZE}, got {value}"
        )
    return value


def validate_wrap_size(size: object) -> int:
    value = _as_size(size)
    if not is_wrap_size(value):
        raise InvalidSizeError(f"wrapping size must be 2**n and at least {WRAP_MIN_SIZE}, got {value}")
    return value


def level_count(edge: int) -> int:
    """Number of refinement levels for a power-of-two edge length."""

    return edge.bit_length() - 1


def _levels(edge: int) -> Iterator[tuple[int, int]]:
    step = edge
    level = 0
    while step > 1:
        yield level, step
        step //= 2
        level += 1


def _offset(random: RandomSource, variance: float) -> float:
    return random(2 * variance) - variance


def diamond_square_no_wrap(
    size: int,
    random: RandomSource,
    variance: VarianceSchedule,
    at: HeightAccessor,
) -> None:
    """Fill a non-tileable ``size``-square heightfield.

    The four corners must be seeded by the caller and are never written.
    """

    size = validate_no_wrap_size(size)
    edge = size - 1

    for level, step in _levels(edge):
        spread = variance(level)
        _square_no_wrap(edge, step, random, spread, at)
        _diamond_no_wrap(edge, step, random, spread, at)


def _square_no_wrap(edge: int, step: int, random: RandomSource, spread: float, at: HeightAccessor) -> None:
    half = step // 2
    for y in range(half, edge, step):
        for x in range(half, edge, step):
            total = (
                at.get(x - half, y - half)
                + at.get(x + half, y - half)
                + at.get(x - half, y + half)
                + at.get(x + half, y + half)
            )
            at.set(x, y, total / 4 + _offset(random, spread))


def _diamond_no_wrap(edge: int, step: int, random: RandomSource, spread: float, at: HeightAccessor) -> None:
    half = step // 2
    for row, y in enumerate(range(0, edge + 1, half)):
        start = half if row % 2 == 0 else 0
        for x in range(start, edge + 1, step):
            total = 0.0
            count = 0
            if x >= half:
                total += at.get(x - half, y)
                count += 1
            if x + half <= edge:
                total += at.get(x + half, y)
                count += 1
            if y >= half:
                total += at.get(x, y - half)
                count += 1
            if y + half <= edge:
                total += at.get(x, y + half)
                count += 1
            # Border points have exactly three neighbours on the grid.
            at.set(x, y, total / count + _offset(random, spread))


def diamond_square_wrap(
    size: int,
    random: RandomSource,
    variance: VarianceSchedule,
    at: HeightAccessor,
) -> None:
    """Fill a tileable ``size``-square heightfield.

    Only ``(0, 0)`` must be seeded by the caller; it is never written.
    """

    size = validate_wrap_size(size)

    for level, step in _levels(size):
        spread = variance(level)
        _square_wrap(size, step, random, spread, at)
        _diamond_wrap(size, step, random, spread, at)


def _square_wrap(size: int, step: int, random: RandomSource, spread: float, at: HeightAccessor) -> None:
    half = step // 2
    for y in range(half, size, step):
        top = y - half
        bottom = (y + half) % size
        for x in range(half, size, step):
            left = x - half
            right = (x + half) % size
            total = at.get(left, top) + at.get(right, top) + at.get(left, bottom) + at.get(right, bottom)
            at.set(x, y, total / 4 + _offset(random, spread))


def _diamond_wrap(size: int, step: int, random: RandomSource, spread: float, at: HeightAccessor) -> None:
    half = step // 2
    for row, y in enumerate(range(0, size, half)):
        start = half if row % 2 == 0 else 0
        up = (y - half) % size
        down = (y + half) % size
        for x in range(start, size, step):
            total = (
                at.get((x - half) % size, y)
                + at.get((x + half) % size, y)
                + at.get(x, up)
                + at.get(x, down)
            )
            at.set(x, y, total / 4 + _offset(random, spread))
