"""Reproducible random spread parameters from a seed. Seed -1 = new random each call."""

import random
from typing import NamedTuple, Tuple

from world.constants import DEFAULT_AMOUNT_RANGE, DEFAULT_RADIUS_RANGE


class SpreadParams(NamedTuple):
    x: int
    z: int
    radius: int
    amount: float


def make_rng(seed: int) -> Tuple[random.Random, int]:
    """Return (rng, seed_used). If seed == -1, choose a new random seed."""
    if seed == -1:
        seed_used = random.randint(0, 2**31 - 1)
    else:
        seed_used = seed
    return random.Random(seed_used), seed_used


def pick_spread_params(
    rng: random.Random,
    nx: int,
    nz: int,
    radius_range: Tuple[int, int] = DEFAULT_RADIUS_RANGE,
    amount_range: Tuple[float, float] = DEFAULT_AMOUNT_RANGE,
) -> SpreadParams:
    """
    Origin uniform over the grid, radius integer in [lo, hi), amount uniform in
    [lo, hi]. A degenerate radius range (hi <= lo) always yields lo.
    """
    x = rng.randrange(nx)
    z = rng.randrange(nz)
    r_lo, r_hi = radius_range
    radius = rng.randrange(r_lo, r_hi) if r_hi > r_lo else r_lo
    a_lo, a_hi = amount_range
    amount = rng.uniform(a_lo, a_hi)
    return SpreadParams(x, z, radius, amount)
