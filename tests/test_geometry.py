"""Tests for the per-cell mesh: layout, inset animation, winding and normals."""

import math

import numpy as np
import pytest

from world.constants import FRONT_TRIANGLE_COUNT, INDEX_COUNT, VERTEX_COUNT
from world.errors import UndefinedPointError
from world.geometry import (
    FACES,
    Point,
    build_cell_mesh,
    point_normal,
    point_position,
    top_inset,
    top_outline,
)

TOP = [Point.UP_FORWARD_LEFT, Point.UP_FORWARD_RIGHT, Point.UP_BACK_LEFT, Point.UP_BACK_RIGHT]
BOTTOM = [Point.DOWN_FORWARD_LEFT, Point.DOWN_FORWARD_RIGHT, Point.DOWN_BACK_LEFT, Point.DOWN_BACK_RIGHT]
SWEEP = np.linspace(0.0, 1.0, 101)


class TestCounts:
    """Buffer sizes never depend on the fill level."""

    @pytest.mark.parametrize("fill", [0.0, 0.1, 0.5, 0.93, 1.0])
    def test_buffer_sizes(self, fill):
        mesh = build_cell_mesh(fill)
        assert mesh.vertices.shape == (14, 3)
        assert mesh.normals.shape == (14, 3)
        assert mesh.uvs.shape == (14, 2)
        assert not np.any(mesh.uvs)
        assert mesh.triangles.shape == (144,)
        assert mesh.front_triangles.shape == (24, 3)
        assert (VERTEX_COUNT, FRONT_TRIANGLE_COUNT, INDEX_COUNT) == (14, 24, 144)

    def test_every_vertex_used(self):
        mesh = build_cell_mesh(0.5)
        assert set(mesh.triangles.tolist()) == set(range(14))

    def test_back_half_mirrors_front(self):
        tris = build_cell_mesh(0.5).triangles.reshape(-1, 3)
        np.testing.assert_array_equal(tris[24:], tris[:24, ::-1])

    def test_each_face_fans_around_its_middle(self):
        front = build_cell_mesh(0.5).front_triangles
        for i, (middle, _normal, _ring) in enumerate(FACES):
            face = front[4 * i : 4 * i + 4]
            assert np.all(face[:, 2] == middle)


class TestInset:
    """The top pinches mid-fill and relaxes at both ends."""

    def test_zero_at_ends(self):
        assert top_inset(0.0) == 0.0
        assert top_inset(1.0) == 0.0

    def test_peak_at_half(self):
        assert top_inset(0.5) == pytest.approx(1.0 / 3.0)
        insets = [top_inset(f) for f in SWEEP]
        assert max(insets) == top_inset(0.5)

    def test_positive_and_symmetric_inside(self):
        for f in SWEEP[1:-1]:
            assert top_inset(f) > 0.0
            assert top_inset(f) == pytest.approx(top_inset(1.0 - f))

    def test_matches_sine(self):
        for f in SWEEP:
            assert top_inset(f) == pytest.approx(math.sin(f * math.pi) / 3.0, abs=1e-12)

    def test_continuous_sweep(self):
        meshes = [build_cell_mesh(f) for f in SWEEP]
        steps = [np.max(np.abs(b.vertices - a.vertices)) for a, b in zip(meshes, meshes[1:])]
        assert max(steps) < 0.02


class TestPositions:
    """Corner and middle placement."""

    @pytest.mark.parametrize("fill", SWEEP[::10])
    def test_corner_heights(self, fill):
        mesh = build_cell_mesh(fill)
        assert all(mesh.position(p)[1] == fill for p in TOP)
        assert all(mesh.position(p)[1] == 0.0 for p in BOTTOM)

    @pytest.mark.parametrize("fill", SWEEP[::10])
    def test_bottom_fixed(self, fill):
        mesh = build_cell_mesh(fill)
        expected = {
            Point.DOWN_FORWARD_LEFT: (0, 0, 1),
            Point.DOWN_FORWARD_RIGHT: (1, 0, 1),
            Point.DOWN_BACK_LEFT: (0, 0, 0),
            Point.DOWN_BACK_RIGHT: (1, 0, 0),
            Point.DOWN_MIDDLE: (0.5, 0, 0.5),
        }
        for point, pos in expected.items():
            np.testing.assert_array_equal(mesh.position(point), pos)

    def test_top_at_fill_and_inset(self):
        mesh = build_cell_mesh(0.5)
        i = top_inset(0.5)
        np.testing.assert_allclose(mesh.position(Point.UP_FORWARD_LEFT), (i, 0.5, 1 - i))
        np.testing.assert_allclose(mesh.position(Point.UP_FORWARD_RIGHT), (1 - i, 0.5, 1 - i))
        np.testing.assert_allclose(mesh.position(Point.UP_BACK_LEFT), (i, 0.5, i))
        np.testing.assert_allclose(mesh.position(Point.UP_BACK_RIGHT), (1 - i, 0.5, i))

    def test_full_cell_is_unit_cube(self):
        mesh = build_cell_mesh(1.0)
        corners = mesh.vertices[:8]
        assert set(map(tuple, corners.tolist())) == {
            (x, y, z) for x in (0.0, 1.0) for y in (0.0, 1.0) for z in (0.0, 1.0)
        }

    def test_middles(self):
        mesh = build_cell_mesh(0.8)
        np.testing.assert_allclose(mesh.position(Point.UP_MIDDLE), (0.5, 0.8, 0.5))
        np.testing.assert_allclose(mesh.position(Point.FORWARD_MIDDLE), (0.5, 0.4, 1.0))
        np.testing.assert_allclose(mesh.position(Point.BACK_MIDDLE), (0.5, 0.4, 0.0))
        np.testing.assert_allclose(mesh.position(Point.LEFT_MIDDLE), (0.0, 0.4, 0.5))
        np.testing.assert_allclose(mesh.position(Point.RIGHT_MIDDLE), (1.0, 0.4, 0.5))

    def test_out_of_range_fill_clamped(self):
        np.testing.assert_array_equal(build_cell_mesh(2.0).vertices, build_cell_mesh(1.0).vertices)
        np.testing.assert_array_equal(build_cell_mesh(-1.0).vertices, build_cell_mesh(0.0).vertices)

    def test_top_outline(self):
        outline = top_outline(build_cell_mesh(1.0))
        np.testing.assert_array_equal(outline, [[0, 1], [1, 1], [1, 0], [0, 0]])


class TestDeterminism:
    def test_bit_identical(self):
        for f in (0.0, 0.123456789, 0.5, 0.999):
            a, b = build_cell_mesh(f), build_cell_mesh(f)
            assert a.vertices.tobytes() == b.vertices.tobytes()
            assert a.normals.tobytes() == b.normals.tobytes()
            assert a.triangles.tobytes() == b.triangles.tobytes()


class TestWinding:
    """Outward triangles face away from the cell."""

    @pytest.mark.parametrize("fill", [0.05, 0.3, 0.5, 0.77, 1.0])
    def test_front_triangles_face_outward(self, fill):
        mesh = build_cell_mesh(fill)
        front = mesh.front_triangles
        for i, (_middle, normal, _ring) in enumerate(FACES):
            for a, b, c in front[4 * i : 4 * i + 4]:
                pa, pb, pc = mesh.vertices[a], mesh.vertices[b], mesh.vertices[c]
                n = np.cross(pb - pa, pc - pa)
                assert np.dot(n, normal) > 0


class TestNormals:
    def test_corner_diagonals(self):
        assert point_normal(Point.UP_FORWARD_LEFT) == (-1, 1, 1)
        assert point_normal(Point.DOWN_BACK_RIGHT) == (1, -1, -1)

    def test_face_axes(self):
        mesh = build_cell_mesh(0.5)
        np.testing.assert_array_equal(mesh.normals[Point.UP_MIDDLE], (0, 1, 0))
        np.testing.assert_array_equal(mesh.normals[Point.DOWN_MIDDLE], (0, -1, 0))
        np.testing.assert_array_equal(mesh.normals[Point.LEFT_MIDDLE], (-1, 0, 0))
        np.testing.assert_array_equal(mesh.normals[Point.RIGHT_MIDDLE], (1, 0, 0))
        np.testing.assert_array_equal(mesh.normals[Point.FORWARD_MIDDLE], (0, 0, 1))
        np.testing.assert_array_equal(mesh.normals[Point.BACK_MIDDLE], (0, 0, -1))

    def test_unnormalized_by_default(self):
        norms = np.linalg.norm(build_cell_mesh(0.5).normals[:8], axis=1)
        np.testing.assert_allclose(norms, math.sqrt(3))

    def test_normalized_option(self):
        mesh = build_cell_mesh(0.5, normalize_normals=True)
        np.testing.assert_allclose(np.linalg.norm(mesh.normals, axis=1), 1.0)


class TestUndefinedPoint:
    @pytest.mark.parametrize("bad", [14, -1, "UP", None, 1.5, 1.0, 8.0, True])
    def test_position_fails_fast(self, bad):
        with pytest.raises(UndefinedPointError):
            point_position(bad, 0.5)

    def test_normal_fails_fast(self):
        with pytest.raises(UndefinedPointError):
            point_normal(99)

    def test_is_lookup_error(self):
        with pytest.raises(LookupError):
            build_cell_mesh(0.5).position(42)

    def test_integer_ids_accepted(self):
        assert point_position(8, 0.5) == (0.5, 0.5, 0.5)
        assert point_position(np.int64(8), 0.5) == (0.5, 0.5, 0.5)
