"""
Procedural mesh for one creep cell: a unit cube whose top sits at the fill
level and pinches toward the vertical axis while the cell is part-full.

Axes: x = right, y = up, z = forward. Corner names read Up/Down, Forward/Back,
Left/Right:

        UBL--------UBR
        /|   B     /|
       / |  U     / |
     UFL--------UFR |
      |L DBL.....|R.DBR
      | /   D    | /
      |/    F    |/
     DFL--------DFR

Bottom corners never move. Top corners sit at y = fill and move inward on x
and z by sin(fill * pi) / 3, so the top is square when empty or full and most
rounded at half fill. Every face is a fan of 4 triangles around a middle
vertex: 8 corners + 6 middles = 14 vertices, 24 outward triangles.
"""

import math
import numbers
from dataclasses import dataclass
from enum import IntEnum

import numpy as np

from world.constants import FRONT_TRIANGLE_COUNT, MAX_TOP_INSET, VERTEX_COUNT
from world.errors import UndefinedPointError
from world.fillable import clamp_fill


class Point(IntEnum):
    """Logical mesh points. The value is the vertex index in the buffers."""

    UP_FORWARD_LEFT = 0
    UP_FORWARD_RIGHT = 1
    UP_BACK_LEFT = 2
    UP_BACK_RIGHT = 3
    DOWN_FORWARD_LEFT = 4
    DOWN_FORWARD_RIGHT = 5
    DOWN_BACK_LEFT = 6
    DOWN_BACK_RIGHT = 7
    UP_MIDDLE = 8
    FORWARD_MIDDLE = 9
    DOWN_MIDDLE = 10
    LEFT_MIDDLE = 11
    RIGHT_MIDDLE = 12
    BACK_MIDDLE = 13


P = Point

# Corner -> (right, up, forward) as 0/1.
_CORNER_SIDES = {
    P.UP_FORWARD_LEFT: (0, 1, 1),
    P.UP_FORWARD_RIGHT: (1, 1, 1),
    P.UP_BACK_LEFT: (0, 1, 0),
    P.UP_BACK_RIGHT: (1, 1, 0),
    P.DOWN_FORWARD_LEFT: (0, 0, 1),
    P.DOWN_FORWARD_RIGHT: (1, 0, 1),
    P.DOWN_BACK_LEFT: (0, 0, 0),
    P.DOWN_BACK_RIGHT: (1, 0, 0),
}

# Middle -> position as a function of fill. Side middles split the wall height.
_MIDDLE_POSITIONS = {
    P.UP_MIDDLE: lambda f: (0.5, f, 0.5),
    P.FORWARD_MIDDLE: lambda f: (0.5, f / 2, 1.0),
    P.DOWN_MIDDLE: lambda f: (0.5, 0.0, 0.5),
    P.LEFT_MIDDLE: lambda f: (0.0, f / 2, 0.5),
    P.RIGHT_MIDDLE: lambda f: (1.0, f / 2, 0.5),
    P.BACK_MIDDLE: lambda f: (0.5, f / 2, 0.0),
}

# (middle, outward normal, ring). Fan triangles are (ring[i], ring[i+1], middle);
# ring order makes cross(b - a, c - a) point along the normal.
FACES = (
    (P.UP_MIDDLE, (0, 1, 0), (P.UP_FORWARD_LEFT, P.UP_FORWARD_RIGHT, P.UP_BACK_RIGHT, P.UP_BACK_LEFT)),
    (P.FORWARD_MIDDLE, (0, 0, 1), (P.UP_FORWARD_LEFT, P.DOWN_FORWARD_LEFT, P.DOWN_FORWARD_RIGHT, P.UP_FORWARD_RIGHT)),
    (P.DOWN_MIDDLE, (0, -1, 0), (P.DOWN_FORWARD_LEFT, P.DOWN_BACK_LEFT, P.DOWN_BACK_RIGHT, P.DOWN_FORWARD_RIGHT)),
    (P.LEFT_MIDDLE, (-1, 0, 0), (P.UP_FORWARD_LEFT, P.UP_BACK_LEFT, P.DOWN_BACK_LEFT, P.DOWN_FORWARD_LEFT)),
    (P.RIGHT_MIDDLE, (1, 0, 0), (P.UP_FORWARD_RIGHT, P.DOWN_FORWARD_RIGHT, P.DOWN_BACK_RIGHT, P.UP_BACK_RIGHT)),
    (P.BACK_MIDDLE, (0, 0, -1), (P.UP_BACK_LEFT, P.UP_BACK_RIGHT, P.DOWN_BACK_RIGHT, P.DOWN_BACK_LEFT)),
)

_FACE_NORMALS = {middle: normal for middle, normal, _ring in FACES}
TOP_RING = FACES[0][2]


def _as_point(point: object) -> Point:
    # Integer ids only: 1.0 and True are rejected like 1.5.
    if isinstance(point, bool) or not isinstance(point, numbers.Integral):
        raise UndefinedPointError(point)
    try:
        return Point(point)
    except (ValueError, TypeError):
        raise UndefinedPointError(point) from None


def top_inset(fill: float) -> float:
    """
    Horizontal pull of each top corner toward the cell axis, sin(fill * pi) / 3.

    Evaluated as sin(pi * min(fill, 1 - fill)) / 3, which is the same curve
    mirrored about 0.5. It is exactly 0.0 at both ends and exactly symmetric,
    but can differ from a direct sin(fill * pi) / 3 in the last bit above 0.5.
    """
    fill = clamp_fill(fill)
    return math.sin(math.pi * min(fill, 1.0 - fill)) * MAX_TOP_INSET


def point_position(point: Point, fill: float) -> tuple[float, float, float]:
    point = _as_point(point)
    fill = clamp_fill(fill)
    sides = _CORNER_SIDES.get(point)
    if sides is not None:
        right, up, forward = sides
        if not up:
            return (float(right), 0.0, float(forward))
        inset = top_inset(fill)
        x = 1.0 - inset if right else inset
        z = 1.0 - inset if forward else inset
        return (x, fill, z)
    middle = _MIDDLE_POSITIONS.get(point)
    if middle is None:
        raise UndefinedPointError(point)
    return middle(fill)


def point_normal(point: Point) -> tuple[int, int, int]:
    """Face normal for middles; octant diagonal for corners (not unit length)."""
    point = _as_point(point)
    sides = _CORNER_SIDES.get(point)
    if sides is not None:
        return tuple(2 * s - 1 for s in sides)
    normal = _FACE_NORMALS.get(point)
    if normal is None:
        raise UndefinedPointError(point)
    return normal


def _front_triangles() -> np.ndarray:
    out = []
    for middle, _normal, ring in FACES:
        for i in range(len(ring)):
            out.extend((ring[i], ring[(i + 1) % len(ring)], middle))
    return np.array(out, dtype=np.int32)


FRONT_TRIANGLES = _front_triangles()
# Reversed twins follow the outward set so the cell also reads from inside.
TRIANGLES = np.concatenate([FRONT_TRIANGLES, FRONT_TRIANGLES.reshape(-1, 3)[:, ::-1].reshape(-1)])
NORMALS = np.array([point_normal(p) for p in Point], dtype=np.float64)
UNIT_NORMALS = NORMALS / np.linalg.norm(NORMALS, axis=1, keepdims=True)
for _arr in (FRONT_TRIANGLES, TRIANGLES, NORMALS, UNIT_NORMALS):
    _arr.setflags(write=False)
del _arr


@dataclass(frozen=True)
class CellMesh:
    """Buffers for one cell, ready for upload. UVs are unused and always zero."""

    vertices: np.ndarray  # (14, 3)
    normals: np.ndarray  # (14, 3)
    uvs: np.ndarray  # (14, 2)
    triangles: np.ndarray  # (144,)

    @property
    def front_triangles(self) -> np.ndarray:
        """The 24 outward triangles, shape (24, 3)."""
        return self.triangles[: FRONT_TRIANGLE_COUNT * 3].reshape(-1, 3)

    def position(self, point: Point) -> np.ndarray:
        return self.vertices[_as_point(point)]


def build_cell_mesh(fill: float, normalize_normals: bool = False) -> CellMesh:
    """Whole mesh for one fill level. Same input, bit-identical output."""
    fill = clamp_fill(fill)
    vertices = np.array([point_position(p, fill) for p in Point], dtype=np.float64)
    normals = (UNIT_NORMALS if normalize_normals else NORMALS).copy()
    return CellMesh(
        vertices=vertices,
        normals=normals,
        uvs=np.zeros((VERTEX_COUNT, 2), dtype=np.float64),
        triangles=TRIANGLES.copy(),
    )


def top_outline(mesh: CellMesh) -> np.ndarray:
    """x/z of the top corners in ring order, shape (4, 2). For top-down drawing."""
    return mesh.vertices[[int(p) for p in TOP_RING]][:, [0, 2]]
