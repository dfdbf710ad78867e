"""World: grid of creep cells, spread operator and per-cell meshes."""

from world.grid import Grid
from world.cell import CreepCell
from world.fillable import BareCell, Fillable, clamp_fill
from world.geometry import CellMesh, Point, build_cell_mesh, top_inset
from world.spread import footprint, spread_array, spread_from
from world.spreader import CreepSpreader
from world.errors import CreepError, InvalidArgumentError, UndefinedPointError
from world.constants import DEFAULT_NX, DEFAULT_NZ

__all__ = [
    "Grid", "CreepCell", "BareCell", "Fillable", "clamp_fill",
    "CellMesh", "Point", "build_cell_mesh", "top_inset",
    "footprint", "spread_array", "spread_from", "CreepSpreader",
    "CreepError", "InvalidArgumentError", "UndefinedPointError",
    "DEFAULT_NX", "DEFAULT_NZ",
]
