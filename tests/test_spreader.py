"""Tests for the tick driver, random parameters and smooth fills."""

import random

import pytest

from world.cell import CreepCell
from world.errors import InvalidArgumentError
from world.seed_util import make_rng, pick_spread_params
from world.spreader import CreepSpreader, move_towards, smoothly_fill


class TestSeedUtil:
    def test_fixed_seed_is_kept(self):
        _rng, seed_used = make_rng(1234)
        assert seed_used == 1234

    def test_random_seed_chosen(self):
        _rng, seed_used = make_rng(-1)
        assert 0 <= seed_used < 2**31

    def test_params_in_range(self):
        rng = random.Random(7)
        for _ in range(200):
            p = pick_spread_params(rng, 10, 6)
            assert 0 <= p.x < 10 and 0 <= p.z < 6
            assert 1 <= p.radius < 5
            assert 0.1 <= p.amount <= 0.3

    def test_degenerate_radius_range(self):
        p = pick_spread_params(random.Random(0), 3, 3, radius_range=(2, 2))
        assert p.radius == 2


class TestMoveTowards:
    @pytest.mark.parametrize(
        "current, target, delta, expected",
        [(0.0, 1.0, 0.25, 0.25), (1.0, 0.0, 0.25, 0.75), (0.9, 1.0, 0.25, 1.0), (0.5, 0.5, 0.1, 0.5)],
    )
    def test_steps(self, current, target, delta, expected):
        assert move_towards(current, target, delta) == pytest.approx(expected)


class TestSmoothFill:
    def test_reaches_target(self):
        cell = CreepCell(0.0)
        levels = list(smoothly_fill(cell, 0.5, 0.2))
        assert levels == pytest.approx([0.2, 0.4, 0.5])
        assert cell.fill_level == 0.5
        assert cell.revision == 3

    def test_target_clamped(self):
        cell = CreepCell(0.9)
        list(smoothly_fill(cell, 4.0, 0.5))
        assert cell.fill_level == 1.0

    def test_bad_delta_rejected_immediately(self):
        with pytest.raises(InvalidArgumentError):
            smoothly_fill(CreepCell(), 1.0, 0.0)


class TestCreepSpreader:
    def test_grid_of_creep_cells(self):
        spreader = CreepSpreader(5, 4, seed=1)
        assert spreader.shape == (5, 4)
        assert isinstance(spreader.cell(4, 3), CreepCell)
        assert spreader.grid.total_fill() == 0.0

    def test_same_seed_same_run(self):
        a, b = CreepSpreader(8, 8, seed=42), CreepSpreader(8, 8, seed=42)
        for _ in range(25):
            assert a.tick() == b.tick()
        assert (a.grid.fill_levels() == b.grid.fill_levels()).all()
        assert a.tick_count == 25

    def test_tick_touches_only_reported_cells(self):
        spreader = CreepSpreader(10, 10, seed=3)
        event = spreader.tick()
        levels = spreader.grid.fill_levels()
        touched = set(event.touched)
        for x in range(10):
            for z in range(10):
                if (x, z) in touched:
                    assert levels[x, z] > 0.0
                else:
                    assert levels[x, z] == 0.0

    def test_fill_towards_advances_per_tick(self):
        spreader = CreepSpreader(3, 3, seed=0, amount_range=(0.0, 0.0))
        spreader.fill_towards(1, 1, 0.3, max_delta=0.1)
        assert spreader.pending_fills == 1
        for _ in range(3):
            spreader.tick()
        assert spreader.cell(1, 1).fill_level == pytest.approx(0.3)
        spreader.tick()
        assert spreader.pending_fills == 0

    def test_set_fill_cancels_pending(self):
        spreader = CreepSpreader(3, 3, seed=0, amount_range=(0.0, 0.0))
        spreader.fill_towards(0, 0, 1.0)
        spreader.set_fill(0, 0, 0.25)
        assert spreader.pending_fills == 0
        assert spreader.cell(0, 0).fill_level == 0.25

    def test_regenerate_bumps_revision(self):
        spreader = CreepSpreader(2, 2, seed=0)
        spreader.regenerate(1, 0)
        assert spreader.cell(1, 0).revision == 1
        assert spreader.cell(0, 0).revision == 0

    def test_normalize_normals_passed_to_cells(self):
        spreader = CreepSpreader(2, 2, seed=0, normalize_normals=True)
        assert spreader.cell(0, 1).normalize_normals
