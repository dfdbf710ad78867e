"""Creep cell: a fill level plus the mesh derived from it."""

import numpy as np

from world.constants import EMPTY
from world.fillable import clamp_fill
from world.geometry import CellMesh, build_cell_mesh


class CreepCell:
    """
    Fillable cell that owns its mesh. A write that changes the clamped fill
    rebuilds the mesh at once; a write that leaves it bit-equal does nothing.
    `revision` counts rebuilds so renderers know when to re-upload.
    """

    __slots__ = ("_fill_level", "_mesh", "normalize_normals", "revision")

    def __init__(self, fill_level: float = EMPTY, normalize_normals: bool = False) -> None:
        self._fill_level = clamp_fill(fill_level)
        self.normalize_normals = normalize_normals
        self.revision = 0
        self._mesh = build_cell_mesh(self._fill_level, normalize_normals)

    @property
    def fill_level(self) -> float:
        return self._fill_level

    @fill_level.setter
    def fill_level(self, value: float) -> None:
        value = clamp_fill(value)
        if value == self._fill_level:
            return
        self._fill_level = value
        self.regenerate()

    @property
    def mesh(self) -> CellMesh:
        return self._mesh

    def regenerate(self) -> CellMesh:
        """Rebuild the whole mesh from the current fill level."""
        self._mesh = build_cell_mesh(self._fill_level, self.normalize_normals)
        self.revision += 1
        return self._mesh

    def buffers(self) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
        """(vertices, normals, uvs, triangles) for upload."""
        m = self._mesh
        return m.vertices, m.normals, m.uvs, m.triangles

    def __repr__(self) -> str:
        return f"CreepCell(fill_level={self._fill_level!r}, revision={self.revision})"
