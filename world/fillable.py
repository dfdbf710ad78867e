"""Fillable capability: anything with a clamped fill_level can live in a Grid."""

from typing import Protocol, runtime_checkable

from world.constants import EMPTY, FULL


def clamp_fill(value: float) -> float:
    """Clamp to [0, 1]. Out-of-range is policy, not an error."""
    return max(EMPTY, min(FULL, float(value)))


@runtime_checkable
class Fillable(Protocol):
    @property
    def fill_level(self) -> float: ...

    @fill_level.setter
    def fill_level(self, value: float) -> None: ...


class BareCell:
    """Fill level only, no geometry. Used for simulation-only grids."""

    __slots__ = ("_fill_level",)

    def __init__(self, fill_level: float = EMPTY) -> None:
        self._fill_level = clamp_fill(fill_level)

    @property
    def fill_level(self) -> float:
        return self._fill_level

    @fill_level.setter
    def fill_level(self, value: float) -> None:
        self._fill_level = clamp_fill(value)

    def __repr__(self) -> str:
        return f"BareCell({self._fill_level!r})"
