"""2D grid of Fillable cells, indexed [x, z]. Size fixed at construction."""

from typing import Callable, Iterator, Sequence

import numpy as np

from world.constants import DEFAULT_NX, DEFAULT_NZ
from world.errors import InvalidArgumentError
from world.fillable import Fillable


class Grid:
    """Owns the cells; spread mutates them in place through their fill_level."""

    __slots__ = ("shape", "cells")

    def __init__(self, x_size: int, z_size: int, cells: Sequence[Sequence[Fillable]]) -> None:
        if x_size <= 0 or z_size <= 0:
            raise InvalidArgumentError(f"grid size must be positive, got {x_size}x{z_size}")
        if len(cells) != x_size:
            raise InvalidArgumentError(f"expected {x_size} columns, got {len(cells)}")
        self.shape = (x_size, z_size)
        self.cells = np.empty(self.shape, dtype=object)
        for x in range(x_size):
            column = cells[x]
            if len(column) != z_size:
                raise InvalidArgumentError(f"column {x}: expected {z_size} cells, got {len(column)}")
            for z in range(z_size):
                cell = column[z]
                if cell is None or not isinstance(cell, Fillable):
                    raise InvalidArgumentError(f"cell ({x}, {z}) is not fillable: {cell!r}")
                self.cells[x, z] = cell

    @classmethod
    def build(
        cls,
        x_size: int = DEFAULT_NX,
        z_size: int = DEFAULT_NZ,
        factory: Callable[[int, int], Fillable] | None = None,
    ) -> "Grid":
        """Populate every cell with factory(x, z)."""
        if factory is None:
            raise InvalidArgumentError("a cell factory is required")
        return cls(x_size, z_size, [[factory(x, z) for z in range(z_size)] for x in range(x_size)])

    @property
    def x_size(self) -> int:
        return self.shape[0]

    @property
    def z_size(self) -> int:
        return self.shape[1]

    def in_bounds(self, x: int, z: int) -> bool:
        return 0 <= x < self.shape[0] and 0 <= z < self.shape[1]

    def __getitem__(self, key: tuple[int, int]) -> Fillable:
        x, z = key
        if not self.in_bounds(x, z):
            raise IndexError(f"cell ({x}, {z}) outside grid {self.shape}")
        return self.cells[x, z]

    def __iter__(self) -> Iterator[tuple[int, int, Fillable]]:
        nx, nz = self.shape
        for x in range(nx):
            for z in range(nz):
                yield x, z, self.cells[x, z]

    def fill_levels(self) -> np.ndarray:
        """Snapshot of every fill level, shape (nx, nz)."""
        nx, nz = self.shape
        out = np.zeros(self.shape, dtype=np.float64)
        for x in range(nx):
            for z in range(nz):
                out[x, z] = self.cells[x, z].fill_level
        return out

    def total_fill(self) -> float:
        return float(np.sum(self.fill_levels()))
