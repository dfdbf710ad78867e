"""
Creep spread: add an amount to every cell in a footprint around an origin.

Footprint for radius r, half = r // 2: a filled square of half-width `half`
plus single-cell tips at distance r on the four cardinal axes. Each rule an
offset satisfies is one hit, so offsets matching several rules (the origin
when r is 0) receive the amount several times.

    r = 1        r = 2          r = 3
    . x .      . . x . .     . . . x . . .
    x x x      . x x x .     . . . . . . .
    . x .      x x x x x     . . x x x . .
               . x x x .     x . x x x . x
               . . x . .     . . x x x . .
                             . . . . . . .
                             . . . x . . .
"""

import logging

import numpy as np

from world.errors import InvalidArgumentError
from world.grid import Grid

logger = logging.getLogger(__name__)


def _check_radius(radius: int) -> None:
    if radius < 0:
        raise InvalidArgumentError(f"radius must be >= 0, got {radius}")


def _check_origin(shape: tuple[int, int], origin_x: int, origin_z: int) -> None:
    nx, nz = shape
    if not 0 <= origin_x < nx:
        raise InvalidArgumentError(f"origin_x {origin_x} outside [0, {nx})")
    if not 0 <= origin_z < nz:
        raise InvalidArgumentError(f"origin_z {origin_z} outside [0, {nz})")


def _offsets(radius: int, dx_range: range, dz_range: range):
    """Yield footprint offsets inside the given dx/dz ranges, z-major, once per matching rule."""
    half = radius // 2
    for dz in dz_range:
        for dx in dx_range:
            if abs(dx) == radius and dz == 0:
                yield dx, dz
            if abs(dz) == radius and dx == 0:
                yield dx, dz
            if abs(dx) <= half and abs(dz) <= half:
                yield dx, dz


def _window(radius: int, origin: int, size: int) -> range:
    """Offsets along one axis that land inside [0, size)."""
    return range(max(-radius, -origin), min(radius, size - 1 - origin) + 1)


def footprint(radius: int) -> list[tuple[int, int]]:
    """Offsets (dx, dz) hit by one spread, z-major, one entry per matching rule."""
    _check_radius(radius)
    full = range(-radius, radius + 1)
    return list(_offsets(radius, full, full))


def footprint_weights(radius: int) -> np.ndarray:
    """Hit count per offset, shape (2r+1, 2r+1), indexed [dx + r, dz + r]."""
    _check_radius(radius)
    size = 2 * radius + 1
    weights = np.zeros((size, size), dtype=np.int64)
    for dx, dz in footprint(radius):
        weights[dx + radius, dz + radius] += 1
    return weights


def spread_from(grid: Grid, origin_x: int, origin_z: int, radius: int, amount: float) -> list[tuple[int, int]]:
    """
    Add `amount` to each in-bounds footprint cell, once per hit. Only offsets
    inside the grid are enumerated, so the cost is bounded by the grid size
    rather than by radius². Hits on one cell accumulate with plain float
    addition and the sum is written once, so clamping happens only in the
    cell's setter. Returns the touched coordinates in enumeration order.
    """
    _check_origin(grid.shape, origin_x, origin_z)
    _check_radius(radius)
    nx, nz = grid.shape
    dx_range = _window(radius, origin_x, nx)
    dz_range = _window(radius, origin_z, nz)
    hits: dict[tuple[int, int], int] = {}
    for dx, dz in _offsets(radius, dx_range, dz_range):
        key = (origin_x + dx, origin_z + dz)
        hits[key] = hits.get(key, 0) + 1
    for (x, z), count in hits.items():
        cell = grid[x, z]
        level = cell.fill_level
        for _ in range(count):
            level += amount
        cell.fill_level = level
    logger.debug(
        "spread origin=(%d, %d) radius=%d amount=%.3f touched=%d",
        origin_x, origin_z, radius, amount, len(hits),
    )
    return list(hits)


def spread_array(levels: np.ndarray, origin_x: int, origin_z: int, radius: int, amount: float) -> np.ndarray:
    """Same footprint on a bare (nx, nz) fill array. Returns a new array clipped to [0, 1]."""
    _check_origin(levels.shape, origin_x, origin_z)
    _check_radius(radius)
    nx, nz = levels.shape
    out = levels.astype(np.float64, copy=True)
    hits = np.zeros_like(out)
    for dx, dz in _offsets(radius, _window(radius, origin_x, nx), _window(radius, origin_z, nz)):
        hits[origin_x + dx, origin_z + dz] += 1
    out += hits * amount
    return np.clip(out, 0.0, 1.0)
