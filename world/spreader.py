"""
Spreader: owns a grid of creep cells and feeds it one random spread per tick.
Also runs smooth fills, which walk one cell toward a target a little each tick.
"""

import logging
from typing import Iterator, NamedTuple

from world.cell import CreepCell
from world.constants import DEFAULT_AMOUNT_RANGE, DEFAULT_NX, DEFAULT_NZ, DEFAULT_RADIUS_RANGE
from world.errors import InvalidArgumentError
from world.fillable import clamp_fill
from world.grid import Grid
from world.seed_util import SpreadParams, make_rng, pick_spread_params
from world.spread import spread_from

logger = logging.getLogger(__name__)


class SpreadEvent(NamedTuple):
    params: SpreadParams
    touched: list[tuple[int, int]]


def move_towards(current: float, target: float, max_delta: float) -> float:
    """Step current toward target by at most max_delta; lands exactly on target."""
    if abs(target - current) <= max_delta:
        return target
    return current + max_delta if target > current else current - max_delta


def smoothly_fill(cell: CreepCell, target: float, max_delta: float) -> Iterator[float]:
    """Each next() moves the cell one step and yields its new level."""
    if max_delta <= 0:
        raise InvalidArgumentError(f"max_delta must be > 0, got {max_delta}")
    target = clamp_fill(target)

    def steps() -> Iterator[float]:
        while cell.fill_level != target:
            cell.fill_level = move_towards(cell.fill_level, target, max_delta)
            yield cell.fill_level

    return steps()


class CreepSpreader:
    """Tick-driven owner of the grid. Random parameters come from one seeded rng."""

    def __init__(
        self,
        nx: int = DEFAULT_NX,
        nz: int = DEFAULT_NZ,
        seed: int = -1,
        radius_range: tuple[int, int] = DEFAULT_RADIUS_RANGE,
        amount_range: tuple[float, float] = DEFAULT_AMOUNT_RANGE,
        normalize_normals: bool = False,
    ) -> None:
        self.grid = Grid.build(nx, nz, lambda x, z: CreepCell(normalize_normals=normalize_normals))
        self.rng, self.seed_used = make_rng(seed)
        self.radius_range = radius_range
        self.amount_range = amount_range
        self.tick_count = 0
        self._fills: dict[tuple[int, int], Iterator[float]] = {}
        logger.info("spreader %dx%d seed=%d", nx, nz, self.seed_used)

    @property
    def shape(self) -> tuple[int, int]:
        return self.grid.shape

    def cell(self, x: int, z: int) -> CreepCell:
        return self.grid[x, z]

    def spread(self, x: int, z: int, radius: int, amount: float) -> list[tuple[int, int]]:
        return spread_from(self.grid, x, z, radius, amount)

    def tick(self) -> SpreadEvent:
        """One random spread, then one step of every pending smooth fill."""
        nx, nz = self.grid.shape
        params = pick_spread_params(self.rng, nx, nz, self.radius_range, self.amount_range)
        touched = self.spread(params.x, params.z, params.radius, params.amount)
        self._advance_fills()
        self.tick_count += 1
        return SpreadEvent(params, touched)

    def fill_towards(self, x: int, z: int, target: float, max_delta: float = 0.1) -> None:
        """Queue a smooth fill; replaces any pending one on the same cell."""
        self._fills[(x, z)] = smoothly_fill(self.grid[x, z], target, max_delta)

    @property
    def pending_fills(self) -> int:
        return len(self._fills)

    def _advance_fills(self) -> None:
        for key, fill in list(self._fills.items()):
            if next(fill, None) is None:
                del self._fills[key]

    def set_fill(self, x: int, z: int, value: float) -> None:
        """Direct write, as an inspector would. Cancels a pending smooth fill."""
        self._fills.pop((x, z), None)
        self.grid[x, z].fill_level = value

    def regenerate(self, x: int, z: int) -> None:
        self.grid[x, z].regenerate()
